"""
Lookup table builder.

Turns an ordered Element list into the three structures every generated
type carries: value to string, the ordered value sequence, and string to
value. Collisions resolve by declaration order: the last Element wins.
"""

from typing import List

from ...logging_config import get_logger
from .model import Element, EnumSet

logger = get_logger(__name__)


def build_enum_set(type_name: str, elements: List[Element]) -> EnumSet:
    """
    Build the lookup tables for one type.

    Both maps are filled by iterating in resolver order so a later Element
    overwrites an earlier one sharing its value (value_to_string) or its
    display string (string_to_value). The ordered sequence is never
    deduplicated.
    """
    enum_set = EnumSet(type_name=type_name, elements=list(elements))

    for element in elements:
        value = element.exact_value
        display = element.display_string

        if value in enum_set.value_to_string:
            logger.debug(
                "%s: %s shares value %d with %s, last declaration wins",
                type_name,
                element.declared_name,
                value,
                enum_set.value_owner[value],
            )
        enum_set.value_to_string[value] = display
        enum_set.value_owner[value] = element.declared_name

        if display in enum_set.string_to_value:
            logger.debug(
                "%s: display string %r of %s collides with %s, last declaration wins",
                type_name,
                display,
                element.declared_name,
                enum_set.string_owner[display],
            )
        enum_set.string_to_value[display] = value
        enum_set.string_owner[display] = element.declared_name

    for element in enum_set.shadowed_elements():
        logger.info(
            "%s: %s (%d) does not round-trip through its string form %r",
            type_name,
            element.declared_name,
            element.exact_value,
            element.display_string,
        )

    return enum_set
