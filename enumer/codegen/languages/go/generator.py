"""
Go code generator implementation.

Renders String, parse, Valid and optional bitmask, JSON, YAML and SQL
helpers for Go enum types from Jinja2 templates.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ....logging_config import get_logger
from ...core.config import EnumerConfig
from ...core.errors import EmissionError
from ...core.generator import CodeGenerator
from ...core.model import EnumSet, GenerationJob, MethodGroup
from ...core.templates import TemplateError
from .formatter import write_and_format
from .naming import go_string_literal, is_go_identifier, validate_go_package_name

logger = get_logger(__name__)

GROUP_TEMPLATES = {
    MethodGroup.BASE: "base.go.j2",
    MethodGroup.BITMASK: "bitmask.go.j2",
    MethodGroup.JSON: "json.go.j2",
    MethodGroup.YAML: "yaml.go.j2",
    MethodGroup.SQL: "sql.go.j2",
}

# Import block order of the generated file
IMPORT_ORDER: Tuple[Tuple[Optional[MethodGroup], str], ...] = (
    (MethodGroup.SQL, "database/sql/driver"),
    (None, "fmt"),
    (MethodGroup.JSON, "encoding/json"),
    (MethodGroup.YAML, "gopkg.in/yaml.v3"),
)


class GoGenerator(CodeGenerator):
    """Code generator for Go enum helper methods."""

    def __init__(self, config: Optional[EnumerConfig] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)
        self.template_engine.add_filter("go_string", go_string_literal)

    def get_template_directory(self) -> Path:
        """Return the Go templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def generate(self, job: GenerationJob) -> str:
        """Generate the complete Go file, one type after another."""
        self._check_job(job)

        parts = [self._render("header.go.j2", self._header_context(job))]

        for type_name in job.type_names:
            logger.debug("Emitting %s", type_name)
            parts.append(
                self.generate_single_type(job.enum_sets[type_name], job.enabled_groups)
            )

        return "\n".join(parts)

    def generate_single_type(
        self, enum_set: EnumSet, groups: Tuple[MethodGroup, ...]
    ) -> str:
        """Generate lookup tables, then each enabled method group, for one type."""
        context = self._type_context(enum_set)

        parts = [self._render("tables.go.j2", context)]
        for group in groups:
            parts.append(self._render(GROUP_TEMPLATES[group], context))

        return "\n".join(parts)

    def get_import_statements(self, groups: Tuple[MethodGroup, ...]) -> List[str]:
        """Import paths needed by the enabled method groups."""
        return [
            path for group, path in IMPORT_ORDER if group is None or group in groups
        ]

    def _header_context(self, job: GenerationJob) -> Dict[str, Any]:
        return {
            "command": job.command,
            "package_name": job.package_name,
            "imports": self.get_import_statements(job.enabled_groups),
        }

    def _type_context(self, enum_set: EnumSet) -> Dict[str, Any]:
        """Template variables for one type, taken from its lookup tables."""
        return {
            "type_name": enum_set.type_name,
            "value_entries": [
                {"owner": enum_set.value_owner[value], "display": display}
                for value, display in enum_set.value_to_string.items()
            ],
            "element_names": [element.declared_name for element in enum_set.elements],
            "string_entries": [
                {"owner": enum_set.string_owner[display], "display": display}
                for display in enum_set.string_to_value
            ],
        }

    def _render(self, template_name: str, context: Dict[str, Any]) -> str:
        if not self.template_exists(template_name):
            raise EmissionError(f"{template_name} template not found")
        try:
            return self.render_template(template_name, context)
        except TemplateError as e:
            raise EmissionError(str(e)) from e

    def _check_job(self, job: GenerationJob):
        """Reject jobs that cannot produce valid Go source."""
        errors = validate_go_package_name(job.package_name)

        if not job.type_names:
            errors.append("No type names to generate")

        for type_name in job.type_names:
            if not is_go_identifier(type_name):
                errors.append(f"'{type_name}' is not a valid Go type name")
            if type_name not in job.enum_sets:
                errors.append(f"Type {type_name} was not resolved")

        for enum_set in job.enum_sets.values():
            for element in enum_set.elements:
                if not is_go_identifier(element.declared_name):
                    errors.append(
                        f"'{element.declared_name}' is not a valid Go constant name"
                    )

        if errors:
            for error in errors:
                logger.error(error)
            raise EmissionError("; ".join(errors))

    def validate_job(self, job: GenerationJob) -> List[str]:
        """Validate a job for Go generation."""
        warnings = super().validate_job(job)

        for type_name, enum_set in job.enum_sets.items():
            if MethodGroup.BITMASK in job.enabled_groups:
                if any(element.exact_value < 0 for element in enum_set.elements):
                    warnings.append(
                        f"Type {type_name} has negative values - bitmask helpers may misbehave"
                    )

        return warnings

    def write_source(self, code: str, path: Path) -> Path:
        """Write the file, then format it in place with gofmt."""
        return write_and_format(code, path, format_in_place=self.config.format_output)


def create_go_generator(config: Optional[EnumerConfig] = None) -> GoGenerator:
    """Create a Go generator with default configuration."""
    return GoGenerator(config or EnumerConfig())
