"""Discovery of ``@beanerate`` records in importable modules."""

import importlib
import inspect
from types import ModuleType
from typing import Iterable, List

from .logging_config import get_logger
from .marker import is_marked

logger = get_logger(__name__)


class DiscoveryError(Exception):
    """Raised when a module to scan cannot be imported."""

    pass


def _nested_classes(cls: type) -> List[type]:
    found = []
    for value in vars(cls).values():
        if inspect.isclass(value) and value.__qualname__.startswith(f"{cls.__qualname__}."):
            found.append(value)
            found.extend(_nested_classes(value))
    return found


def marked_classes(module: ModuleType) -> List[type]:
    """
    Collect classes carrying the marker defined in ``module``.

    Classes nested in other classes are included; classes merely imported
    into the module are not. Definition order is kept. Whether a class is
    an eligible record is left to the driver.
    """
    candidates = []
    for value in vars(module).values():
        if inspect.isclass(value) and value.__module__ == module.__name__:
            candidates.append(value)
            candidates.extend(_nested_classes(value))

    classes = []
    for cls in candidates:
        if is_marked(cls) and cls not in classes:
            classes.append(cls)
    return classes


def discover_modules(module_names: Iterable[str]) -> List[type]:
    """
    Import modules by name and collect their marked record classes.

    Args:
        module_names: Dotted module names

    Returns:
        Marked classes, module by module

    Raises:
        DiscoveryError: If a module cannot be imported
    """
    classes: List[type] = []
    for name in module_names:
        try:
            module = importlib.import_module(name)
        except ImportError as e:
            raise DiscoveryError(f"Cannot import module {name}: {e}") from e

        found = marked_classes(module)
        logger.debug("Found %d marked record(s) in %s", len(found), name)
        classes.extend(cls for cls in found if cls not in classes)
    return classes
