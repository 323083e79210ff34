"""
Symbol table handed to the resolver.

A SymbolTable is the frozen, already type-checked view of one package: the
named types it declares and every constant declaration with its exact value.
Language loaders build it from source; it can also be loaded from JSON.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .errors import NotFoundError, ResolutionError, ValueRenderError


@dataclass(frozen=True)
class TypeHandle:
    """A named type; alias_of is set for `type X = Y` declarations."""

    name: str
    alias_of: Optional[str] = None


@dataclass(frozen=True)
class ConstantRecord:
    """One constant declaration as reported by the type checker."""

    declared_name: str
    owner_type: Optional[str]  # None for untyped constants
    exact_value: Any
    source_unit: str
    source_order: int
    trailing_comment: Optional[str] = None


@dataclass(frozen=True)
class SymbolTable:
    """Immutable view of one package's types and constants."""

    package_name: str
    types: Tuple[TypeHandle, ...] = ()
    constants: Tuple[ConstantRecord, ...] = ()
    _index: Dict[str, TypeHandle] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        for handle in self.types:
            self._index[handle.name] = handle

    def lookup_type(self, name: str) -> TypeHandle:
        """Find a named type, raising NotFoundError when it is not declared."""
        handle = self._index.get(name)
        if handle is None:
            raise NotFoundError(name, self.package_name)
        return handle

    def canonical_type(self, name: Optional[str]) -> Optional[str]:
        """Follow alias declarations down to the defined type they name."""
        seen = set()
        while name is not None and name in self._index:
            handle = self._index[name]
            if handle.alias_of is None or name in seen:
                break
            seen.add(name)
            name = handle.alias_of
        return name

    def iter_constants(self) -> Iterator[ConstantRecord]:
        """Yield constants in source unit order, then declaration order."""
        yield from sorted(
            self.constants, key=lambda record: (record.source_unit, record.source_order)
        )


def parse_exact_value(raw: Union[int, str, bool, float, None], name: str = "") -> int:
    """
    Convert a serialized constant value into an exact integer.

    Integers pass through; strings are parsed with Python's literal rules so
    hex, octal, binary and underscore-separated forms keep full precision.
    """
    if isinstance(raw, bool) or raw is None:
        raise ValueRenderError(f"constant {name} has non-integer value {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text, 0)
        except ValueError:
            pass
        # Go allows leading zeros for octal, Python does not
        if text.lstrip("+-").startswith("0") and text.lstrip("+-").isdigit():
            return int(text, 8)
    raise ValueRenderError(
        f"constant {name} value {raw!r} cannot be rendered as an exact integer literal"
    )


def symbol_table_from_dict(data: Dict[str, Any]) -> SymbolTable:
    """
    Build a SymbolTable from its JSON form.

    Expected shape::

        {
          "package": "testpkg",
          "types": ["Status", {"name": "Alias", "alias_of": "Status"}],
          "constants": [
            {"name": "Pending", "type": "Status", "value": 0,
             "unit": "types.go", "order": 0, "comment": null}
          ]
        }
    """
    if not isinstance(data, dict):
        raise ResolutionError("symbol table must be a JSON object")

    package_name = data.get("package")
    if not package_name:
        raise ResolutionError("symbol table has no package name")

    types: List[TypeHandle] = []
    for entry in data.get("types", []):
        if isinstance(entry, str):
            types.append(TypeHandle(entry))
        elif isinstance(entry, dict) and entry.get("name"):
            types.append(TypeHandle(entry["name"], entry.get("alias_of")))
        else:
            raise ResolutionError(f"invalid type entry in symbol table: {entry!r}")

    constants: List[ConstantRecord] = []
    for position, entry in enumerate(data.get("constants", [])):
        try:
            name = entry["name"]
        except (KeyError, TypeError):
            raise ResolutionError(f"invalid constant entry in symbol table: {entry!r}")

        constants.append(
            ConstantRecord(
                declared_name=name,
                owner_type=entry.get("type"),
                exact_value=entry.get("value"),
                source_unit=entry.get("unit", ""),
                source_order=entry.get("order", position),
                trailing_comment=entry.get("comment"),
            )
        )

    return SymbolTable(package_name, tuple(types), tuple(constants))
