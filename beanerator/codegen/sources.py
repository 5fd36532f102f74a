"""
Host sources for the generation driver.

A source pairs a batch of hosts with the functions deciding eligibility,
extracting a RecordSchema and naming a host in diagnostics.
"""

from functools import partial
from typing import Any, Iterable, List, Mapping

from .core.schema import (
    ExtractionError,
    extract_description,
    extract_record,
    is_beanerated,
    is_eligible_description,
    marked_record_names,
)
from .driver import HostSource


def describe_class(cls: Any) -> str:
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return repr(cls)


def describe_entry(entry: Any) -> str:
    if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
        return entry["name"]
    return "<unnamed record>"


def class_source(types: Iterable[Any]) -> HostSource:
    """Source over Python classes; only ``@beanerate`` records are eligible."""
    return HostSource(
        hosts=list(types),
        extract=extract_record,
        eligible=is_beanerated,
        describe=describe_class,
    )


def description_entries(document: Any) -> List[Any]:
    """
    Get the record descriptions of a JSON document.

    Args:
        document: Either ``{"records": [...]}`` or a bare list of descriptions

    Raises:
        ExtractionError: If the document has neither shape
    """
    if isinstance(document, Mapping):
        records = document.get("records")
        if isinstance(records, list):
            return records
        raise ExtractionError("Description document has no 'records' list")
    if isinstance(document, list):
        return document
    raise ExtractionError(
        f"Description document must be an object or a list, got {type(document).__name__}"
    )


def description_source(document: Any) -> HostSource:
    """Source over the record descriptions of one JSON document."""
    entries = description_entries(document)
    return HostSource(
        hosts=entries,
        extract=partial(extract_description, marked=marked_record_names(entries)),
        eligible=is_eligible_description,
        describe=describe_entry,
    )
