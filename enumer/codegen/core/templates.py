"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from pathlib import Path
from typing import Any, Callable, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound


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
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def add_filter(self, name: str, func: Callable[..., Any]):
        """Register a language-specific filter."""
        self._env.filters[name] = func

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
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}")

    def template_exists(self, template_name: str) -> bool:
        """Check whether the loader can find a template."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine backed by a template directory."""
    return TemplateEngine(template_dir)
