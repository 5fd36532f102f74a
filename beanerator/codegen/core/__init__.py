"""
Core code generation components.

Provides the schema model, base generator and utilities shared by all
target generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .generator import (
    FRAGMENTS,
    CodeGenerator,
    EmissionError,
    GenerationResult,
    GeneratorError,
    RenderError,
)
from .naming import bean_class_name, bean_module_name, cap_name, snake_case
from .schema import (
    ExtractionError,
    FieldSchema,
    RecordSchema,
    Visibility,
    dependency_order,
    extract_description,
    extract_record,
    is_beanerated,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import TypeRef, TypeSpellingError, type_ref_for

__all__ = [
    # Base generator interface
    "FRAGMENTS",
    "CodeGenerator",
    "GeneratorError",
    "RenderError",
    "EmissionError",
    "GenerationResult",
    # Schema system
    "ExtractionError",
    "FieldSchema",
    "RecordSchema",
    "Visibility",
    "TypeRef",
    "TypeSpellingError",
    "type_ref_for",
    "extract_record",
    "extract_description",
    "is_beanerated",
    "dependency_order",
    # Naming utilities
    "cap_name",
    "bean_class_name",
    "bean_module_name",
    "snake_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
