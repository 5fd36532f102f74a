"""
Type references used by the schema model.

A ``TypeRef`` is the spelling of a field type in generated code, together
with the imports the Python target needs to resolve that spelling.
"""

import types
import typing
from dataclasses import dataclass
from typing import Any, Set, Tuple

Import = Tuple[str, str]  # (module, symbol)


class TypeSpellingError(ValueError):
    """Raised when a type cannot be referenced from generated code."""

    pass


@dataclass(frozen=True)
class TypeRef:
    """How a declared type is written in generated source."""

    name: str
    # Package owning a record type; empty for everything else
    package: str = ""
    imports: Tuple[Import, ...] = ()

    @property
    def simple_name(self) -> str:
        """Last dotted segment of the type name."""
        return self.name.rpartition(".")[2]

    def __str__(self) -> str:
        return self.name


def type_ref_for(annotation: Any) -> TypeRef:
    """
    Build a TypeRef from a resolved Python annotation.

    Classes are spelled by their qualified name and imported through their
    outermost enclosing class, so ``Coffee.Variety`` imports ``Coffee``.

    Args:
        annotation: A resolved annotation from ``typing.get_type_hints``

    Returns:
        TypeRef for the annotation

    Raises:
        TypeSpellingError: If a referenced class is not importable by name
    """
    imports: Set[Import] = set()
    name = _spell(annotation, imports)

    package = ""
    if isinstance(annotation, type) and typing.get_origin(annotation) is None:
        package = annotation.__module__.rpartition(".")[0]

    return TypeRef(name=name, package=package, imports=tuple(sorted(imports)))


def _spell(annotation: Any, imports: Set[Import]) -> str:
    """Recursively spell an annotation, collecting imports."""
    if annotation is None or annotation is type(None):
        return "None"

    if annotation is Ellipsis:
        return "..."

    if annotation is Any:
        imports.add(("typing", "Any"))
        return "Any"

    if isinstance(annotation, typing.TypeVar):
        return annotation.__name__

    if isinstance(annotation, list):
        # Callable parameter lists
        return "[" + ", ".join(_spell(arg, imports) for arg in annotation) + "]"

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Union or origin is types.UnionType:
        return " | ".join(_spell(arg, imports) for arg in args)

    if origin is typing.Literal:
        imports.add(("typing", "Literal"))
        return "Literal[" + ", ".join(repr(arg) for arg in args) + "]"

    if origin is not None:
        base = _spell(origin, imports)
        if not args:
            return base
        return f"{base}[" + ", ".join(_spell(arg, imports) for arg in args) + "]"

    if isinstance(annotation, type):
        return _spell_class(annotation, imports)

    # Special forms such as typing.LiteralString
    text = repr(annotation)
    if text.startswith("typing."):
        symbol = text.split(".", 1)[1]
        imports.add(("typing", symbol.split("[", 1)[0]))
        return symbol
    raise TypeSpellingError(f"Unsupported annotation: {annotation!r}")


def _spell_class(cls: type, imports: Set[Import]) -> str:
    module = cls.__module__
    qualname = cls.__qualname__

    if module == "builtins":
        return qualname

    if "<locals>" in qualname or module == "__main__":
        raise TypeSpellingError(
            f"Type {module}.{qualname} cannot be imported by generated code"
        )

    imports.add((module, qualname.split(".", 1)[0]))
    return qualname
