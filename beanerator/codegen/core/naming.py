"""
Naming utilities for bean generation.

All names derived here are deterministic: the same record always yields the
same bean class, accessor and module names. No sanitizing or conflict
resolution happens; hosts guarantee unique field names.
"""

import keyword
import re
from typing import Set

BEAN_SUFFIX = "Bean"

# Java reserved words, including literals that cannot be identifiers
JAVA_RESERVED_WORDS = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
    "_",
}

# ``self`` is the receiver of every generated method
PYTHON_RESERVED_WORDS = set(keyword.kwlist) | {"self"}


def cap_name(name: str) -> str:
    """
    Capitalize a field name for accessor names.

    The first character is uppercased and the remainder is lowercased, so
    ``isBeanerated`` becomes ``Isbeanerated`` (not ``IsBeanerated``).

    Args:
        name: Field name

    Returns:
        Capitalized name used in ``get<Name>``/``set<Name>``
    """
    return name[:1].upper() + name[1:].lower()


def bean_class_name(simple_name: str) -> str:
    """Return the companion class name for a record's simple name."""
    return f"{simple_name}{BEAN_SUFFIX}"


def snake_case(name: str) -> str:
    """Convert ``CoffeeBean`` style names to ``coffee_bean``."""
    name = name.replace("-", "_")
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    # A leading underscore marks a private bean and is kept
    return name.rstrip("_")


def bean_module_name(package: str, class_name: str) -> str:
    """
    Return the dotted Python module name holding a generated bean.

    Beans live next to their record's module, in the same package:
    ``("beanerator.demo", "CoffeeBean")`` gives ``beanerator.demo.coffee_bean``.
    """
    module = snake_case(class_name)
    return f"{package}.{module}" if package else module


def split_qualified(name: str) -> tuple[str, str]:
    """Split ``a.b.C`` into ``("a.b", "C")``."""
    package, _, simple = name.rpartition(".")
    return package, simple


def reserved_words(language: str) -> Set[str]:
    """Get the reserved words of a target language."""
    if language == "java":
        return JAVA_RESERVED_WORDS
    if language == "python":
        return PYTHON_RESERVED_WORDS
    return set()
