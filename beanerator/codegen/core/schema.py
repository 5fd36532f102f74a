"""
Core schema representation for bean generation.

Converts host record types (Python classes or JSON record descriptions)
into a normalized, immutable description that every target generator
consumes in the same way.
"""

import dataclasses
import sys
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from ...marker import get_options, is_marked
from .naming import bean_class_name, cap_name, split_qualified
from .types import TypeRef, TypeSpellingError, type_ref_for


class ExtractionError(Exception):
    """Raised when a host type is not a valid record for generation."""

    pass


class Visibility(Enum):
    """Declared visibility of a record, carried over to its bean."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE_PRIVATE = "package-private"

    @property
    def keyword(self) -> str:
        """Java modifier keyword; package-private has none."""
        return "" if self is Visibility.PACKAGE_PRIVATE else self.value


@dataclass(frozen=True)
class FieldSchema:
    """A single record component."""

    name: str
    type: TypeRef
    # True iff the type is itself a record marked for generation
    nested: bool = False

    @property
    def cap_name(self) -> str:
        return cap_name(self.name)

    @property
    def bean_type(self) -> str:
        """Storage type of this field inside the bean."""
        return bean_class_name(self.type.name) if self.nested else self.type.name


@dataclass(frozen=True)
class RecordSchema:
    """Represents the structure of one record type."""

    qualified_name: str
    simple_name: str
    package_name: str
    fields: Tuple[FieldSchema, ...] = ()
    visibility: Visibility = Visibility.PACKAGE_PRIVATE
    # Module defining the record (Python import path)
    module_name: str = ""
    annotations: Tuple[str, ...] = ()
    interfaces: Tuple[str, ...] = ()

    @property
    def bean_name(self) -> str:
        return bean_class_name(self.simple_name)

    @property
    def nested_fields(self) -> List[FieldSchema]:
        return [f for f in self.fields if f.nested]


# Python hosts


def is_record_type(cls: Any) -> bool:
    """Check whether ``cls`` is a frozen dataclass or a NamedTuple class."""
    if not isinstance(cls, type):
        return False
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.frozen
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def is_beanerated(cls: Any) -> bool:
    """Check whether ``cls`` is a record type carrying the generation marker."""
    return is_record_type(cls) and is_marked(cls)


def _component_names(cls: type) -> List[str]:
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if f.init]
    return list(cls._fields)


def _find_visibility(cls: type) -> Visibility:
    if cls.__name__.startswith("_"):
        return Visibility.PRIVATE
    if "." in cls.__qualname__:
        return Visibility.PROTECTED

    module = sys.modules.get(cls.__module__)
    exported = getattr(module, "__all__", None)
    if exported is not None and cls.__name__ not in exported:
        return Visibility.PACKAGE_PRIVATE
    return Visibility.PUBLIC


def extract_record(cls: type) -> RecordSchema:
    """
    Extract a RecordSchema from a marked Python record type.

    Args:
        cls: Frozen dataclass or NamedTuple class

    Returns:
        RecordSchema with fields in declaration order

    Raises:
        ExtractionError: If ``cls`` is not a usable record type
    """
    if not is_record_type(cls):
        raise ExtractionError(
            f"{getattr(cls, '__qualname__', cls)!s} is not a frozen dataclass or NamedTuple"
        )

    module_name = cls.__module__
    if "<locals>" in cls.__qualname__ or module_name == "__main__":
        raise ExtractionError(
            f"{module_name}.{cls.__qualname__} cannot be imported by generated code"
        )

    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise ExtractionError(
            f"Cannot resolve field types of {cls.__qualname__}: {e}"
        ) from e

    fields = []
    for name in _component_names(cls):
        if name not in hints:
            raise ExtractionError(f"Field {cls.__qualname__}.{name} has no type")
        annotation = hints[name]
        try:
            type_ref = type_ref_for(annotation)
        except TypeSpellingError as e:
            raise ExtractionError(f"Field {cls.__qualname__}.{name}: {e}") from e
        fields.append(
            FieldSchema(name=name, type=type_ref, nested=is_beanerated(annotation))
        )

    options = get_options(cls)
    return RecordSchema(
        qualified_name=f"{module_name}.{cls.__qualname__}",
        simple_name=cls.__name__,
        package_name=module_name.rpartition(".")[0],
        fields=tuple(fields),
        visibility=_find_visibility(cls),
        module_name=module_name,
        annotations=options.annotations if options else (),
        interfaces=options.interfaces if options else (),
    )


# JSON record descriptions


def _marker_payload(entry: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    marker = entry.get("beanerate")
    if marker is True:
        return {}
    if isinstance(marker, Mapping):
        return marker
    return None


def is_eligible_description(entry: Any) -> bool:
    """A description is eligible when it is a marked record."""
    return (
        isinstance(entry, Mapping)
        and entry.get("kind", "record") == "record"
        and _marker_payload(entry) is not None
    )


def marked_record_names(entries: Iterable[Any]) -> Set[str]:
    """Qualified names of every eligible description in a document."""
    return {
        entry["name"]
        for entry in entries
        if is_eligible_description(entry) and isinstance(entry.get("name"), str)
    }


def _string_list(value: Any, what: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ExtractionError(f"{what} must be a list of strings")
    return tuple(value)


def extract_description(
    entry: Mapping[str, Any], marked: Optional[Set[str]] = None
) -> RecordSchema:
    """
    Extract a RecordSchema from a JSON record description.

    Args:
        entry: Description with ``name``, ``fields`` and a ``beanerate`` marker
        marked: Qualified names of marked records in the same document

    Returns:
        RecordSchema for the description

    Raises:
        ExtractionError: If the description is malformed
    """
    marked = marked or set()

    if not isinstance(entry, Mapping):
        raise ExtractionError(f"Record description must be an object, got {entry!r}")

    qualified_name = entry.get("name")
    if not isinstance(qualified_name, str) or not qualified_name:
        raise ExtractionError("Record description has no name")

    package_name, simple_name = split_qualified(qualified_name)
    if not simple_name.isidentifier():
        raise ExtractionError(f"Invalid record name: {qualified_name}")

    try:
        visibility = Visibility(entry.get("visibility", "package-private"))
    except ValueError:
        raise ExtractionError(
            f"Invalid visibility for {qualified_name}: {entry.get('visibility')}"
        )

    raw_fields = entry.get("fields")
    if not isinstance(raw_fields, list):
        raise ExtractionError(f"Record {qualified_name} has no field list")

    fields = []
    for position, raw in enumerate(raw_fields):
        if not isinstance(raw, Mapping):
            raise ExtractionError(
                f"Field #{position} of {qualified_name} must be an object"
            )
        name = raw.get("name")
        type_name = raw.get("type")
        if not isinstance(name, str) or not name.isidentifier():
            raise ExtractionError(
                f"Field #{position} of {qualified_name} has an invalid name: {name!r}"
            )
        if not isinstance(type_name, str) or not type_name:
            raise ExtractionError(f"Field {qualified_name}.{name} has no type")

        nested = type_name in marked
        fields.append(
            FieldSchema(
                name=name,
                type=TypeRef(
                    name=type_name,
                    package=split_qualified(type_name)[0] if nested else "",
                ),
                nested=nested,
            )
        )

    payload = _marker_payload(entry) or {}
    return RecordSchema(
        qualified_name=qualified_name,
        simple_name=simple_name,
        package_name=package_name,
        fields=tuple(fields),
        visibility=visibility,
        module_name=entry.get("module") or package_name,
        annotations=_string_list(payload.get("annotations"), "annotations"),
        interfaces=_string_list(payload.get("interfaces"), "interfaces"),
    )


def dependency_order(schemas: Iterable[RecordSchema]) -> List[RecordSchema]:
    """
    Order schemas so that nested records come before records using them.

    Cycles are broken by skipping the back edge; every schema still appears
    exactly once. Relative input order is kept where no dependency applies.
    """
    schemas = list(schemas)
    by_qualified: Dict[str, RecordSchema] = {}
    by_location: Dict[Tuple[str, str], RecordSchema] = {}
    for schema in schemas:
        by_qualified.setdefault(schema.qualified_name, schema)
        by_location.setdefault((schema.package_name, schema.simple_name), schema)

    def find(nested: FieldSchema) -> Optional[RecordSchema]:
        return by_qualified.get(nested.type.name) or by_location.get(
            (nested.type.package, nested.type.simple_name)
        )

    visited: Set[int] = set()
    visiting: Set[int] = set()
    ordered: List[RecordSchema] = []

    def visit(schema: RecordSchema):
        key = id(schema)
        if key in visited or key in visiting:
            return  # Done, or a cycle

        visiting.add(key)
        for nested in schema.nested_fields:
            dependency = find(nested)
            if dependency is not None:
                visit(dependency)
        visiting.remove(key)
        visited.add(key)
        ordered.append(schema)

    for schema in schemas:
        visit(schema)
    return ordered
