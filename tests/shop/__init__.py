"""Two modules declaring a record with the same simple name."""
