"""
Constant resolver.

Enumerates the constants whose static type is identical to a target named
type, in deterministic declaration order, with exact integer values.
"""

from typing import List

from ...logging_config import get_logger
from .display import derive_display
from .errors import EmptyEnumError, ResolutionError
from .model import Element, TypeRequest
from .symbols import ConstantRecord, SymbolTable, parse_exact_value

logger = get_logger(__name__)


def resolve_constants(table: SymbolTable, type_name: str) -> List[ConstantRecord]:
    """
    Find every constant declared with exactly the given named type.

    Untyped constants and constants of distinct defined types with the same
    underlying representation are excluded.

    Raises:
        NotFoundError: If the type is not declared in the package.
        EmptyEnumError: If no constant of that type exists.
    """
    table.lookup_type(type_name)
    target = table.canonical_type(type_name)

    matches = [
        record
        for record in table.iter_constants()
        if record.owner_type is not None
        and table.canonical_type(record.owner_type) == target
    ]

    if not matches:
        logger.error("No constants found for type %s", type_name)
        raise EmptyEnumError(type_name)

    logger.debug("Resolved %d constants for type %s", len(matches), type_name)
    return matches


def resolve(table: SymbolTable, request: TypeRequest) -> List[Element]:
    """Resolve a type request into ordered Elements with display strings."""
    elements = []
    seen_names = set()

    for record in resolve_constants(table, request.name):
        if record.declared_name in seen_names:
            raise ResolutionError(
                f"constant {record.declared_name} declared twice for type {request.name}"
            )
        seen_names.add(record.declared_name)

        elements.append(
            Element(
                declared_name=record.declared_name,
                exact_value=parse_exact_value(record.exact_value, record.declared_name),
                display_string=derive_display(
                    record.declared_name,
                    request.trim_prefix,
                    record.trailing_comment,
                    request.use_line_comment,
                ),
            )
        )

    return elements
