"""
Tests for marker.py

Validates:
- @beanerate works bare and with options
- the marker is read from the class itself, never inherited
"""

from dataclasses import dataclass

from beanerator import BeanerateOptions, beanerate, get_options, is_marked
from tests.records import Point, Tagged, Unmarked


def test_bare_marker_has_empty_options():
    assert is_marked(Point)
    assert get_options(Point) == BeanerateOptions()


def test_marker_options_are_kept_in_order():
    options = get_options(Tagged)
    assert options.annotations == ("typing.final",)
    assert options.interfaces == ("tests.records.Describable",)


def test_unmarked_class():
    assert not is_marked(Unmarked)
    assert get_options(Unmarked) is None


def test_marker_is_not_inherited():
    @dataclass(frozen=True)
    class Child(Point):
        z: int = 0

    assert not is_marked(Child)


def test_marker_returns_the_class_unchanged():
    @dataclass(frozen=True)
    class Plain:
        value: int

    assert beanerate(Plain) is Plain
    assert beanerate(annotations=["x"])(Plain) is Plain
    assert not is_marked(42)
