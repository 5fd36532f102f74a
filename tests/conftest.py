"""
Shared fixtures.

``load_beans`` generates Python beans in memory and executes each generated
module into ``sys.modules`` under its real dotted name, so beans can import
one another exactly as they would from files on disk.
"""

import sys
import types
from types import SimpleNamespace

import pytest

from beanerator.codegen import (
    CollectingDiagnostics,
    GenerationDriver,
    MemoryWriter,
    class_source,
    get_generator,
)
from beanerator.codegen.core.naming import bean_module_name


def _describe(schema_name: str, fields, **extra):
    """Build a marked JSON record description."""
    return {
        "name": schema_name,
        "beanerate": extra.pop("beanerate", True),
        "fields": [{"name": name, "type": type_name} for name, type_name in fields],
        **extra,
    }


@pytest.fixture
def diagnostics():
    return CollectingDiagnostics()


@pytest.fixture
def memory_writer():
    return MemoryWriter()


@pytest.fixture
def load_beans(monkeypatch):
    """Generate and import beans for the given record classes."""

    def load(*classes, config=None):
        writer = MemoryWriter()
        sink = CollectingDiagnostics()
        generator = get_generator("python", config)
        GenerationDriver(generator, writer, sink).run(class_source(classes))
        assert not sink.errors, [d.message for d in sink.errors]

        beans = {}
        for (package, class_name), source in writer.sources.items():
            module_name = bean_module_name(package, class_name)
            module = types.ModuleType(module_name)
            module.__file__ = f"<generated {module_name}>"
            monkeypatch.setitem(sys.modules, module_name, module)
            exec(compile(source, module.__file__, "exec"), module.__dict__)
            beans[class_name] = getattr(module, class_name)

        return SimpleNamespace(sources=writer.sources, **beans)

    return load


@pytest.fixture
def describe():
    """Factory of marked JSON record descriptions."""
    return _describe
