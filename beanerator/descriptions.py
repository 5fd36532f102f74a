"""
Loading of JSON record description documents.

A document comes from a local file or an HTTP(S) URL and holds either
``{"records": [...]}`` or a bare list of record descriptions. Loading checks
that shape and hands back the entries, or a HostSource over them, ready for
the generation driver. Individual entries are validated later, per record.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, List
from urllib.parse import urlparse

import requests

from .codegen.core.schema import ExtractionError, marked_record_names
from .codegen.driver import HostSource
from .codegen.sources import description_entries, description_source
from .logging_config import get_logger

logger = get_logger(__name__)


class DescriptionLoadError(Exception):
    """Raised when a description document cannot be loaded."""

    pass


def is_url(location: str) -> bool:
    """Check whether ``location`` looks like an HTTP(S) URL."""
    parsed = urlparse(str(location))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_description_location(location: str) -> bool:
    """Check whether a SOURCE argument names a description document, not a module."""
    return is_url(location) or location.lower().endswith(".json") or Path(location).is_file()


def _read_file(path: Path) -> Any:
    if not path.is_file():
        logger.error("Description file not found: %s", path)
        raise DescriptionLoadError(f"File not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning("Description file does not have .json extension: %s", path)

    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in description file %s: %s", path, e)
        raise DescriptionLoadError(f"Invalid JSON in file {path}: {e}") from e
    except OSError as e:
        logger.error("Error reading description file %s: %s", path, e)
        raise DescriptionLoadError(f"Error reading file {path}: {e}") from e


def _fetch(url: str, timeout: int) -> Any:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        return response.json()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise DescriptionLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise DescriptionLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise DescriptionLoadError(f"HTTP error {status} for URL: {url}") from e
    # requests' JSONDecodeError is also a RequestException
    except (requests.exceptions.JSONDecodeError, json.JSONDecodeError) as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise DescriptionLoadError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise DescriptionLoadError(f"Request error for URL {url}: {e}") from e


def load_descriptions(location: str | Path, timeout: int = 30) -> List[Any]:
    """
    Load the record descriptions of one document.

    Args:
        location: Path of a JSON file or an HTTP(S) URL
        timeout: Request timeout in seconds (only used for URLs)

    Returns:
        Description entries in document order

    Raises:
        DescriptionLoadError: If the document cannot be read, is not JSON, or
            is neither a ``records`` object nor a list
    """
    location = str(location)
    if is_url(location):
        logger.debug("Loading descriptions from URL: %s", location)
        document = _fetch(location, timeout)
    else:
        logger.debug("Loading descriptions from file: %s", location)
        document = _read_file(Path(location))

    try:
        entries = description_entries(document)
    except ExtractionError as e:
        raise DescriptionLoadError(f"{location}: {e}") from e

    names = Counter(
        entry["name"]
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("name"), str)
    )
    for name, count in names.items():
        if count > 1:
            logger.warning("Record %s is described %d times in %s", name, count, location)

    logger.info(
        "Loaded %d record description(s) from %s, %d marked",
        len(entries),
        location,
        len(marked_record_names(entries)),
    )
    return entries


def load_description_source(location: str | Path, timeout: int = 30) -> HostSource:
    """Load a description document as a host source for the driver."""
    return description_source(load_descriptions(location, timeout))
