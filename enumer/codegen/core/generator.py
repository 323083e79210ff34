"""
Base generator interface for all code generation targets.

Defines the resolve, tabulate, select and emit pipeline shared by every
host language, and the contract each language generator implements.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...logging_config import get_logger
from .config import EnumerConfig
from .errors import GeneratorError
from .model import EnumSet, GenerationJob, MethodGroup, TypeRequest
from .resolver import resolve
from .selector import select_method_groups
from .symbols import SymbolTable
from .tables import build_enum_set
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[EnumerConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or EnumerConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the host language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

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

    def type_request(self, type_name: str, groups: Tuple[MethodGroup, ...]) -> TypeRequest:
        """Build the request for one configured type."""
        return TypeRequest(
            name=type_name,
            trim_prefix=self.config.trim_prefix,
            use_line_comment=self.config.line_comment,
            enabled_groups=groups,
        )

    def build_job(self, table: SymbolTable) -> GenerationJob:
        """
        Resolve every configured type and assemble the generation job.

        Every type is resolved before anything is rendered; the first
        resolution failure aborts the whole run.
        """
        groups = select_method_groups(self.config)
        type_names = self.config.sorted_type_names
        enum_sets: Dict[str, EnumSet] = {}

        for type_name in type_names:
            if type_name in enum_sets:
                continue
            elements = resolve(table, self.type_request(type_name, groups))
            enum_sets[type_name] = build_enum_set(type_name, elements)
            logger.debug(
                "Type %s: %d elements, %d distinct values",
                type_name,
                len(elements),
                len(enum_sets[type_name].value_to_string),
            )

        return GenerationJob(
            package_name=table.package_name,
            type_names=type_names,
            enum_sets=enum_sets,
            enabled_groups=groups,
            command=self.config.command_line(),
        )

    @abstractmethod
    def generate(self, job: GenerationJob) -> str:
        """
        Generate the complete source file for a job.

        Args:
            job: Resolved types, tables and enabled method groups

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def generate_single_type(
        self, enum_set: EnumSet, groups: Tuple[MethodGroup, ...]
    ) -> str:
        """
        Generate the tables and methods for a single type.

        Args:
            enum_set: Tables for this type
            groups: Method groups to render

        Returns:
            Generated code for this type only
        """
        pass

    def validate_job(self, job: GenerationJob) -> List[str]:
        """
        Validate a job for issues that do not stop generation.

        Language generators should override this to add language-specific checks.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        seen = set()
        for type_name in job.type_names:
            if type_name in seen:
                warnings.append(
                    f"Type {type_name} requested more than once - definitions will be duplicated"
                )
            seen.add(type_name)

        for type_name, enum_set in job.enum_sets.items():
            for element in enum_set.shadowed_elements():
                warnings.append(
                    f"{type_name}.{element.declared_name} does not round-trip: "
                    f"{element.display_string!r} is claimed by a later declaration"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply in-process cleanup to generated code.

        Args:
            code: Raw generated code

        Returns:
            Cleaned code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def write_source(self, code: str, path: Path) -> Path:
        """
        Write generated code to disk.

        Language generators override this to run their external formatter.
        """
        path.write_text(code, encoding="utf-8")
        return path

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
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

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, table: SymbolTable) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        table: Symbol table of the package holding the target types

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        job = generator.build_job(table)

        warnings = generator.validate_job(job)

        code = generator.generate(job)

        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "package": job.package_name,
            "type_count": len(job.type_names),
            "element_count": sum(
                len(enum_set.elements) for enum_set in job.enum_sets.values()
            ),
            "method_groups": [group.value for group in job.enabled_groups],
            "command": job.command,
        }

        return GenerationResult(formatted_code, warnings, metadata)

    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
