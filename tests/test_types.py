"""
Tests for codegen/core/types.py

Validates:
- annotations are spelled the way generated code refers to them
- imports needed by the spelling are collected
- types that cannot be imported by name are rejected
"""

from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional

import pytest

from beanerator.codegen.core.types import TypeRef, TypeSpellingError, type_ref_for
from beanerator.demo.coffee import Coffee

COFFEE_IMPORT = ("beanerator.demo.coffee", "Coffee")


def test_builtin_types_need_no_import():
    ref = type_ref_for(int)
    assert ref.name == "int"
    assert ref.imports == ()


def test_generic_builtins():
    assert type_ref_for(list[int]).name == "list[int]"
    assert type_ref_for(tuple[str, ...]).name == "tuple[str, ...]"
    assert type_ref_for(dict[str, list[float]]).name == "dict[str, list[float]]"


def test_optional_is_spelled_as_union():
    assert type_ref_for(Optional[int]).name == "int | None"
    assert type_ref_for(int | None).name == "int | None"


def test_nested_class_imports_outermost_class():
    ref = type_ref_for(Coffee.Variety)
    assert ref.name == "Coffee.Variety"
    assert ref.imports == (COFFEE_IMPORT,)
    assert ref.simple_name == "Variety"


def test_record_class_carries_its_package():
    ref = type_ref_for(Coffee)
    assert ref.name == "Coffee"
    assert ref.package == "beanerator.demo"
    assert ref.imports == (COFFEE_IMPORT,)


def test_generic_arguments_collect_imports():
    ref = type_ref_for(dict[str, Coffee])
    assert ref.name == "dict[str, Coffee]"
    assert ref.imports == (COFFEE_IMPORT,)
    assert ref.package == ""


def test_typing_forms():
    assert type_ref_for(Any).imports == (("typing", "Any"),)
    assert type_ref_for(Literal["a", 1]).name == "Literal['a', 1]"

    ref = type_ref_for(Callable[[int], str])
    assert ref.name == "Callable[[int], str]"
    assert ("collections.abc", "Callable") in ref.imports


def test_local_class_is_rejected():
    @dataclass(frozen=True)
    class Local:
        value: int

    with pytest.raises(TypeSpellingError):
        type_ref_for(Local)


def test_type_ref_str_is_its_name():
    assert str(TypeRef("red.enspi.demo.Taste")) == "red.enspi.demo.Taste"
    assert TypeRef("red.enspi.demo.Taste").simple_name == "Taste"
