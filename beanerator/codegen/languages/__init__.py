"""
Target language generators.

Each subpackage provides a CodeGenerator subclass and its templates.
"""

from .java import JavaGenerator
from .python import PythonGenerator

__all__ = ["JavaGenerator", "PythonGenerator"]
