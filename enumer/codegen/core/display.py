"""Display string derivation for resolved constants."""

from typing import Optional


def derive_display(
    name: str,
    trim_prefix: str = "",
    comment: Optional[str] = None,
    use_comment: bool = False,
) -> str:
    """
    Compute the string form of a constant.

    The declared name is the starting point. A non-empty trim_prefix that is
    an exact leading match is removed once. When use_comment is set and the
    trailing line comment has text, that text replaces the result entirely.
    """
    display = name
    if trim_prefix and display.startswith(trim_prefix):
        display = display[len(trim_prefix):]

    if use_comment and comment and comment.strip():
        display = comment.strip()

    return display
