"""
The ``@beanerate`` marker.

Marking a frozen dataclass or ``NamedTuple`` requests a companion bean for
it. The marker only records its payload on the class; discovery and
generation happen elsewhere.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

MARKER_ATTRIBUTE = "__beanerate__"


@dataclass(frozen=True)
class BeanerateOptions:
    """Configuration payload carried by the marker."""

    annotations: Tuple[str, ...] = ()
    interfaces: Tuple[str, ...] = ()


def beanerate(
    cls: Optional[type] = None,
    *,
    annotations: Sequence[str] = (),
    interfaces: Sequence[str] = (),
):
    """
    Mark a record type for bean generation.

    Usable bare (``@beanerate``) or with options
    (``@beanerate(annotations=["typing.final"])``). Annotations become
    decorators (Python) or annotations (Java) on the bean; interfaces become
    base classes (Python) or implemented interfaces (Java). Both are passed
    through verbatim, in order.
    """
    options = BeanerateOptions(tuple(annotations), tuple(interfaces))

    def mark(target: type) -> type:
        setattr(target, MARKER_ATTRIBUTE, options)
        return target

    if cls is not None:
        return mark(cls)
    return mark


def get_options(cls: type) -> Optional[BeanerateOptions]:
    """Return the marker payload declared directly on ``cls``, if any."""
    options = vars(cls).get(MARKER_ATTRIBUTE)
    return options if isinstance(options, BeanerateOptions) else None


def is_marked(cls: object) -> bool:
    """Check whether ``cls`` itself (not a base class) carries the marker."""
    return isinstance(cls, type) and get_options(cls) is not None
