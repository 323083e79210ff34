"""
Enum Code Generation Module

Resolves enum constants from a package symbol table and renders helper
methods for them.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .core.config import ConfigError, EnumerConfig, load_config
from .core.errors import GeneratorError
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.model import Element, EnumSet, GenerationJob, MethodGroup
from .core.symbols import SymbolTable, symbol_table_from_dict
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_languages,
)


def generate_from_table(
    table: SymbolTable,
    config: Optional[Union[EnumerConfig, Dict[str, Any]]] = None,
    language: str = "go",
) -> GenerationResult:
    """
    Generate code for a symbol table that is already loaded.

    Args:
        table: Package symbol table
        config: EnumerConfig or dict of overrides
        language: Host language name

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, table)


def generate_from_directory(
    directory: Union[str, Path],
    config: Optional[Union[EnumerConfig, Dict[str, Any]]] = None,
    language: str = "go",
) -> GenerationResult:
    """
    Load a package directory and generate code for it.

    Load failures are reported as a failed GenerationResult.
    """
    loader = get_registry().get_loader(language)
    try:
        table = loader(directory)
    except GeneratorError as e:
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
    return generate_from_table(table, config, language)


def quick_generate(source: str, types: str, **options) -> str:
    """
    Quick code generation from Go source text.

    Args:
        source: Contents of one Go file
        types: Comma separated type names
        **options: EnumerConfig fields (bitmask, json, trim_prefix, ...)

    Returns:
        Generated code string
    """
    from .languages.go import GoPackageLoader

    table = GoPackageLoader().load_sources({"source.go": source})
    result = generate_from_table(table, {"type_names": types, **options})

    if result.success:
        return result.code
    else:
        raise GeneratorError(result.error_message)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "ConfigError",
    "Element",
    "EnumSet",
    "GenerationJob",
    "MethodGroup",
    "SymbolTable",
    "EnumerConfig",
    "load_config",
    "symbol_table_from_dict",
    "generate_code",
    "generate_from_table",
    "generate_from_directory",
    "quick_generate",
    "get_generator",
    "get_registry",
    "list_supported_languages",
]
