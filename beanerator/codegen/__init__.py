"""
Beanerator code generation module.

Generates mutable bean companions for immutable records in every registered
target language.
"""

from typing import Any, Iterable, List, Optional

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.generator import (
    CodeGenerator,
    EmissionError,
    GenerationResult,
    GeneratorError,
    RenderError,
)
from .core.schema import ExtractionError, FieldSchema, RecordSchema, Visibility
from .driver import (
    CollectingDiagnostics,
    Diagnostic,
    Diagnostics,
    GenerationDriver,
    HostSource,
    LoggingDiagnostics,
    Severity,
)
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_supported_languages,
)
from .sources import class_source, description_source
from .writers import ConsoleWriter, FileWriter, MemoryWriter, SourceWriter


def generate_beans(
    hosts: Iterable[Any] | HostSource,
    language: str = "python",
    writer: Optional[SourceWriter] = None,
    diagnostics: Optional[Diagnostics] = None,
    config=None,
) -> List[GenerationResult]:
    """
    Generate beans for Python record classes or a prepared host source.

    Args:
        hosts: Record classes, or a HostSource such as ``description_source(doc)``
        language: Target language name or alias
        writer: Destination of generated sources (in memory by default)
        diagnostics: Diagnostics sink (logging only by default)
        config: Generator configuration as GeneratorConfig, dict or file path

    Returns:
        One GenerationResult per eligible host
    """
    source = hosts if isinstance(hosts, HostSource) else class_source(hosts)
    generator = get_generator(language, config)
    driver = GenerationDriver(generator, writer or MemoryWriter(), diagnostics)
    return driver.run(source)


__all__ = [
    "CodeGenerator",
    "GeneratorError",
    "RenderError",
    "EmissionError",
    "ExtractionError",
    "GenerationResult",
    "FieldSchema",
    "RecordSchema",
    "Visibility",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "GeneratorRegistry",
    "RegistryError",
    "get_registry",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
    "GenerationDriver",
    "HostSource",
    "Severity",
    "Diagnostic",
    "Diagnostics",
    "LoggingDiagnostics",
    "CollectingDiagnostics",
    "class_source",
    "description_source",
    "SourceWriter",
    "FileWriter",
    "MemoryWriter",
    "ConsoleWriter",
    "generate_beans",
]
