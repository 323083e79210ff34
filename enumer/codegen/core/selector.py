"""
Method-set selector.

Pure mapping from configuration toggles to the ordered method groups the
emitter renders. The base group is always present; optional groups follow
in a fixed order regardless of how the toggles were supplied.
"""

from typing import Tuple

from .config import EnumerConfig
from .model import MethodGroup

OPTIONAL_GROUP_ORDER = (
    MethodGroup.BITMASK,
    MethodGroup.JSON,
    MethodGroup.YAML,
    MethodGroup.SQL,
)


def select_method_groups(config: EnumerConfig) -> Tuple[MethodGroup, ...]:
    """Return the method groups to emit for every type of the run."""
    toggles = {
        MethodGroup.BITMASK: config.bitmask,
        MethodGroup.JSON: config.json,
        MethodGroup.YAML: config.yaml,
        MethodGroup.SQL: config.sql,
    }
    return (MethodGroup.BASE,) + tuple(
        group for group in OPTIONAL_GROUP_ORDER if toggles[group]
    )
