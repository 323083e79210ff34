"""
Data model shared by every stage of the generation pipeline.

The resolver produces Elements, the table builder turns them into an
EnumSet, and one GenerationJob carries every EnumSet to the emitter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


class MethodGroup(Enum):
    """Groups of helper methods the emitter can render, in emission order."""

    BASE = "base"
    BITMASK = "bitmask"
    JSON = "json"
    YAML = "yaml"
    SQL = "sql"


@dataclass(frozen=True)
class TypeRequest:
    """What the caller asked for one target type."""

    name: str
    trim_prefix: str = ""
    use_line_comment: bool = False
    enabled_groups: Tuple[MethodGroup, ...] = (MethodGroup.BASE,)


@dataclass(frozen=True)
class Element:
    """A single resolved constant of the target type."""

    declared_name: str
    exact_value: int
    display_string: str


@dataclass
class EnumSet:
    """
    Resolved constants of one type plus the lookup tables built from them.

    value_to_string and string_to_value follow the "last declaration wins"
    rule; elements keeps every declaration including duplicate values.
    """

    type_name: str
    elements: List[Element] = field(default_factory=list)
    value_to_string: Dict[int, str] = field(default_factory=dict)
    string_to_value: Dict[str, int] = field(default_factory=dict)
    # Declared name that owns each table entry, used when emitting literals
    value_owner: Dict[int, str] = field(default_factory=dict)
    string_owner: Dict[str, str] = field(default_factory=dict)

    @property
    def values(self) -> List[int]:
        """Ordered value sequence, duplicates preserved."""
        return [element.exact_value for element in self.elements]

    def display(self, value: int) -> str:
        """String form of a value, mirroring the generated String() method."""
        if value in self.value_to_string:
            return self.value_to_string[value]
        return f"{self.type_name}({value})"

    def parse(self, text: str) -> int:
        """Exact, case-sensitive lookup mirroring the generated <T>String()."""
        if text not in self.string_to_value:
            raise ValueError(f"{text} is not a valid {self.type_name}")
        return self.string_to_value[text]

    def is_valid(self, value: int) -> bool:
        """Membership test mirroring the generated Valid() method."""
        return value in self.value_to_string

    def shadowed_elements(self) -> List[Element]:
        """Elements for which parse(display(value)) no longer yields their value."""
        return [
            element
            for element in self.elements
            if self.string_to_value.get(self.value_to_string[element.exact_value])
            != element.exact_value
        ]


@dataclass
class GenerationJob:
    """Everything the emitter needs to render one output file."""

    package_name: str
    type_names: List[str]
    enum_sets: Dict[str, EnumSet]
    enabled_groups: Tuple[MethodGroup, ...]
    command: str
