"""
Python bean generator module.

Generates mutable Python bean classes for frozen dataclasses and NamedTuples.
"""

from .generator import PythonGenerator

__all__ = ["PythonGenerator"]
