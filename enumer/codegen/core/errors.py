"""
Generator-time error taxonomy.

Every failure raised while resolving, rendering or formatting derives from
GeneratorError so callers can abort a run with one descriptive message.
"""


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ResolutionError(GeneratorError):
    """Raised when the constants of a requested type cannot be resolved."""

    pass


class NotFoundError(ResolutionError):
    """Raised when a requested type does not exist in the symbol table."""

    def __init__(self, type_name: str, package_name: str = ""):
        self.type_name = type_name
        self.package_name = package_name
        where = f" in package {package_name}" if package_name else ""
        super().__init__(f"type {type_name} not found{where}")


class EmptyEnumError(ResolutionError):
    """Raised when a type exists but no constant of that type is declared."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"no constants found for type {type_name}")


class ValueRenderError(GeneratorError):
    """Raised when a constant value cannot be rendered as an exact integer literal."""

    pass


class EmissionError(GeneratorError):
    """Raised when templates cannot be rendered for the given job."""

    pass


class FormattingError(GeneratorError):
    """Raised when the external source formatter is missing or fails."""

    pass
