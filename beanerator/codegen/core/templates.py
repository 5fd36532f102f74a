"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with the filters
bean templates rely on. Every template is rendered in a single pass from a
structured context, so generated text handed to a template as a value is
never substituted a second time.
"""

from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ...logging_config import get_logger
from .naming import cap_name

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            # Source code, never markup
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        self._env.filters["cap_name"] = cap_name

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            logger.debug("Template %s failed: %s", template_name, e)
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine loading templates from ``template_dir``."""
    return TemplateEngine(template_dir)
