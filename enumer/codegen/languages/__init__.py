"""
Host language generators.

Each host language provides a package loader that builds a SymbolTable
and a generator that renders helper methods for it.
"""

from .go import GoGenerator, GoPackageLoader, create_go_generator, load_go_package

__all__ = [
    "GoGenerator",
    "GoPackageLoader",
    "create_go_generator",
    "load_go_package",
]
