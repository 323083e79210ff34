"""
Go code generator module.

Loads Go packages with tree-sitter and generates enum helper methods.
"""

from .buildtags import BuildContext
from .formatter import run_gofmt, write_and_format
from .generator import GoGenerator, create_go_generator
from .naming import go_string_literal, is_go_identifier, validate_go_package_name
from .source import GoPackageLoader, load_go_package

__all__ = [
    "BuildContext",
    "GoGenerator",
    "GoPackageLoader",
    "create_go_generator",
    "load_go_package",
    "go_string_literal",
    "is_go_identifier",
    "validate_go_package_name",
    "run_gofmt",
    "write_and_format",
]
