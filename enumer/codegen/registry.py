"""
Generator registry system for managing available code generators.

Maps host language names to generator classes and source loaders.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, Union

from .core.config import EnumerConfig, load_config
from .core.generator import CodeGenerator
from .core.symbols import SymbolTable

SourceLoader = Callable[[Union[str, Path]], SymbolTable]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._loaders: Dict[str, SourceLoader] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        loader: SourceLoader,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator and its source loader for a language.

        Args:
            language: Primary language name (e.g., 'go')
            generator_class: Generator class implementing CodeGenerator
            loader: Callable building a SymbolTable from a package directory
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            return

        self._generators[language_key] = generator_class
        self._loaders[language_key] = loader

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue
            if not replace and alias_key in self._generators:
                raise RegistryError(
                    f"Alias '{alias}' conflicts with existing primary language"
                )
            self._aliases[alias_key] = language_key

    def _resolve_key(self, language: str) -> str:
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        """Get generator class for language or alias."""
        return self._generators[self._resolve_key(language)]

    def get_loader(self, language: str) -> SourceLoader:
        """Get the package loader for language or alias."""
        return self._loaders[self._resolve_key(language)]

    def create_generator(
        self,
        language: str,
        config: Optional[Union[EnumerConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for language.

        Args:
            language: Language name
            config: Configuration as EnumerConfig, dict, or JSON file path

        Returns:
            Configured generator instance
        """
        generator_class = self.get_generator_class(language)

        if isinstance(config, EnumerConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config)

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._generators.keys())

    def is_supported(self, language: str) -> bool:
        """Check if language or alias is registered."""
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases


_registry = None


def get_registry() -> GeneratorRegistry:
    """Get the global registry with built-in languages registered."""
    global _registry
    if _registry is None:
        from .languages.go import GoGenerator, load_go_package

        _registry = GeneratorRegistry()
        _registry.register("go", GoGenerator, load_go_package, aliases=["golang"])
    return _registry


def get_generator(language: str = "go", config=None) -> CodeGenerator:
    """Create a configured generator for a language."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    """Names of every registered host language."""
    return get_registry().list_languages()
