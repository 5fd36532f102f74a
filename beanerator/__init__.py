"""
Beanerator - mutable bean companions for immutable records.

Mark a frozen dataclass or ``NamedTuple`` with ``@beanerate`` and generate
its ``<Record>Bean`` class with ``generate_beans`` or the ``beanerator``
command.
"""

__version__ = "0.1.0"

from .marker import BeanerateOptions, beanerate, get_options, is_marked
from .codegen import generate_beans

__all__ = [
    "__version__",
    "BeanerateOptions",
    "beanerate",
    "get_options",
    "is_marked",
    "generate_beans",
]
