"""
Java bean generator module.

Generates mutable Java bean classes for Java records.
"""

from .generator import JavaGenerator

__all__ = ["JavaGenerator"]
