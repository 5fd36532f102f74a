"""
Base generator interface for all bean generation targets.

A target supplies six fragment generators and a renderer that assembles
them into one unit of source text. Fragment generators are independent and
only read the schema, so they may run in any order or concurrently.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .naming import reserved_words
from .schema import RecordSchema
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)

# Order in which fragments appear in the bean body
FRAGMENTS = (
    "from_record",
    "constructors",
    "equality",
    "to_record",
    "to_string",
    "accessors",
)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class RenderError(GeneratorError):
    """Raised when a bean cannot be assembled from its schema."""

    pass


class EmissionError(GeneratorError):
    """Raised when a writer fails to persist generated source."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all bean generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig(target=self.language_name)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python', 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py')."""
        pass

    def file_name(self, class_name: str) -> str:
        """Return the file name a bean class is written to."""
        return f"{class_name}{self.file_extension}"

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing templates for this generator."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    # Fragment generators

    @abstractmethod
    def generate_from_record(self, schema: RecordSchema) -> str:
        """Static factory building a bean from a record."""
        pass

    @abstractmethod
    def generate_constructors(self, schema: RecordSchema) -> str:
        """Null and canonical constructors."""
        pass

    @abstractmethod
    def generate_accessors(self, schema: RecordSchema) -> str:
        """Per-field storage, getters and fluent setters."""
        pass

    @abstractmethod
    def generate_equality(self, schema: RecordSchema) -> str:
        """``equals`` and ``hashCode``."""
        pass

    @abstractmethod
    def generate_to_record(self, schema: RecordSchema) -> str:
        """Conversion of a bean back into its record."""
        pass

    @abstractmethod
    def generate_to_string(self, schema: RecordSchema) -> str:
        """``toString`` in the ``Name[field=value, ...]`` format."""
        pass

    def generate_fragments(self, schema: RecordSchema) -> Dict[str, str]:
        """Run every fragment generator for a schema."""
        return {
            name: getattr(self, f"generate_{name}")(schema) for name in FRAGMENTS
        }

    @abstractmethod
    def render(self, schema: RecordSchema, fragments: Dict[str, str]) -> str:
        """
        Assemble fragments and boilerplate into a complete source unit.

        Args:
            schema: Schema the fragments were generated from
            fragments: Fragment text keyed by the names in FRAGMENTS

        Returns:
            Complete source text
        """
        pass

    def generate_single_schema(self, schema: RecordSchema) -> str:
        """
        Generate the bean source for a single schema.

        Raises:
            RenderError: If the schema cannot be rendered for this target
        """
        self._check_names(schema)
        try:
            fragments = self.generate_fragments(schema)
            source = self.render(schema, fragments)
        except TemplateError as e:
            raise RenderError(str(e)) from e
        return self.format_code(source)

    def _check_names(self, schema: RecordSchema):
        reserved = reserved_words(self.language_name)
        for field in schema.fields:
            if field.name in reserved:
                raise RenderError(
                    f"Field {schema.simple_name}.{field.name} is a reserved word "
                    f"in {self.language_name}"
                )

    def validate_schema(self, schema: RecordSchema) -> List[str]:
        """
        Validate a schema for basic structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        if not schema.fields:
            warnings.append(f"Record '{schema.qualified_name}' has no fields")
        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, allows at most two consecutive blank
        lines and applies the configured line ending.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        line_ending = self.config.line_ending
        return line_ending.join(formatted_lines) + line_ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with the common context added."""
        full_context = {
            "add_comments": self.config.add_comments,
            "header_comment": self.config.header_comment,
            **context,
        }
        return self.template_engine.render_template(template_name, full_context)


class GenerationResult:
    """Container for the outcome of generating one bean."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @property
    def host(self) -> Optional[str]:
        return self.metadata.get("host")

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        metadata: Dict[str, Any] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="", metadata=metadata)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def __repr__(self) -> str:
        status = "ok" if self.success else f"failed: {self.error_message}"
        return f"GenerationResult({self.host!r}, {status})"
