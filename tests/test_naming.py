"""
Tests for codegen/core/naming.py

Validates:
- cap_name uppercases the first character and lowercases the rest
- bean class and module names are derived deterministically
- reserved words per target language
"""

import pytest

from beanerator.codegen.core.naming import (
    bean_class_name,
    bean_module_name,
    cap_name,
    reserved_words,
    snake_case,
    split_qualified,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("flavor", "Flavor"),
        ("isBeanerated", "Isbeanerated"),
        ("x", "X"),
        ("URL", "Url"),
        ("", ""),
    ],
)
def test_cap_name(name, expected):
    assert cap_name(name) == expected


def test_bean_class_name_appends_suffix():
    assert bean_class_name("Coffee") == "CoffeeBean"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("CoffeeBean", "coffee_bean"),
        ("HTTPServerBean", "http_server_bean"),
        ("_HiddenBean", "_hidden_bean"),
        ("PointBean", "point_bean"),
    ],
)
def test_snake_case(name, expected):
    assert snake_case(name) == expected


def test_bean_module_name_sits_next_to_record_package():
    assert bean_module_name("beanerator.demo", "CoffeeBean") == "beanerator.demo.coffee_bean"
    assert bean_module_name("", "PointBean") == "point_bean"


def test_split_qualified():
    assert split_qualified("red.enspi.demo.Coffee") == ("red.enspi.demo", "Coffee")
    assert split_qualified("Coffee") == ("", "Coffee")


def test_reserved_words_per_language():
    assert "default" in reserved_words("java")
    assert "default" not in reserved_words("python")
    assert "class" in reserved_words("python")
    assert "self" in reserved_words("python")
    assert reserved_words("cobol") == set()
