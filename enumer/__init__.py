"""
enumer - helper method generator for Go enumerated constants.

Resolves the constants of named Go types and renders String, parse,
validation and optional bitmask / JSON / YAML / SQL helpers for them.
"""

__version__ = "0.1.0"
