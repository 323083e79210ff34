"""
Core code generation components.

Provides the language-agnostic resolve, tabulate, select and emit pipeline
used by every host language generator.
"""

from .config import ConfigError, ConfigManager, EnumerConfig, load_config
from .display import derive_display
from .errors import (
    EmissionError,
    EmptyEnumError,
    FormattingError,
    GeneratorError,
    NotFoundError,
    ResolutionError,
    ValueRenderError,
)
from .generator import CodeGenerator, GenerationResult, generate_code
from .model import Element, EnumSet, GenerationJob, MethodGroup, TypeRequest
from .resolver import resolve, resolve_constants
from .selector import select_method_groups
from .symbols import (
    ConstantRecord,
    SymbolTable,
    TypeHandle,
    parse_exact_value,
    symbol_table_from_dict,
)
from .tables import build_enum_set
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Error taxonomy
    "GeneratorError",
    "ResolutionError",
    "NotFoundError",
    "EmptyEnumError",
    "ValueRenderError",
    "EmissionError",
    "FormattingError",
    # Data model
    "Element",
    "EnumSet",
    "GenerationJob",
    "MethodGroup",
    "TypeRequest",
    # Symbol table
    "ConstantRecord",
    "SymbolTable",
    "TypeHandle",
    "parse_exact_value",
    "symbol_table_from_dict",
    # Pipeline stages
    "resolve",
    "resolve_constants",
    "derive_display",
    "build_enum_set",
    "select_method_groups",
    # Configuration system
    "EnumerConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
