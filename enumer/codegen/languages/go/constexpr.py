"""
Go constant expression evaluation.

Evaluates the right-hand side of const specs parsed by tree-sitter with
Go's exact constant arithmetic: integers never overflow, integer division
truncates toward zero, and a typed operand gives its type to the result.
"""

from fractions import Fraction
from typing import Callable, Optional, Tuple, Union

ConstValue = Union[int, Fraction, str, bool]
Typed = Tuple[ConstValue, Optional[str]]

UNSIGNED_BITS = {
    "uint8": 8,
    "byte": 8,
    "uint16": 16,
    "uint32": 32,
    "uint64": 64,
    "uint": 64,
    "uintptr": 64,
}

_RUNE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
    "'": 0x27,
    '"': 0x22,
}


class UnsupportedExpression(Exception):
    """Raised for expressions outside the supported constant subset."""

    pass


def parse_int_literal(text: str) -> int:
    """Parse a Go integer literal, including legacy `0755` octal."""
    digits = text.replace("_", "")
    lowered = digits.lower()
    if lowered.startswith(("0x", "0b", "0o")):
        return int(digits, 0)
    if len(digits) > 1 and digits.startswith("0"):
        return int(digits, 8)
    return int(digits, 10)


def parse_float_literal(text: str) -> Fraction:
    """Parse a decimal Go float literal exactly."""
    digits = text.replace("_", "")
    if digits.lower().startswith("0x"):
        return Fraction(float.fromhex(digits))
    return Fraction(digits)


def parse_rune_literal(text: str) -> int:
    """Return the code point of a Go rune literal such as 'a' or '\\x41'."""
    body = text[1:-1]
    if not body.startswith("\\"):
        if len(body) != 1:
            raise UnsupportedExpression(f"invalid rune literal {text}")
        return ord(body)

    kind = body[1:2]
    if kind in _RUNE_ESCAPES:
        return _RUNE_ESCAPES[kind]
    if kind in ("x", "u", "U"):
        return int(body[2:], 16)
    if kind.isdigit():
        return int(body[1:], 8)
    raise UnsupportedExpression(f"invalid rune literal {text}")


def _truncated_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left >= 0) == (right >= 0) else -quotient


def _require_int(value: ConstValue, operator: str) -> int:
    if isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnsupportedExpression(f"operator {operator} needs integer operands")
    return value


def normalize(value: ConstValue) -> ConstValue:
    """Collapse integral fractions to int."""
    if isinstance(value, Fraction) and value.denominator == 1:
        return int(value)
    return value


def apply_binary(operator: str, left: ConstValue, right: ConstValue) -> ConstValue:
    """Apply a Go binary operator to two constant values."""
    if operator in ("<<", ">>"):
        shifted = _require_int(left, operator)
        count = _require_int(right, operator)
        if count < 0:
            raise UnsupportedExpression("negative shift count")
        return shifted << count if operator == "<<" else shifted >> count

    if operator in ("&", "|", "^", "&^", "%"):
        a = _require_int(left, operator)
        b = _require_int(right, operator)
        if operator == "&":
            return a & b
        if operator == "|":
            return a | b
        if operator == "^":
            return a ^ b
        if operator == "&^":
            return a & ~b
        if b == 0:
            raise UnsupportedExpression("division by zero")
        return a - b * _truncated_div(a, b)

    if isinstance(left, (str, bool)) or isinstance(right, (str, bool)):
        raise UnsupportedExpression(f"operator {operator} needs numeric operands")

    if operator == "+":
        return normalize(left + right)
    if operator == "-":
        return normalize(left - right)
    if operator == "*":
        return normalize(left * right)
    if operator == "/":
        if right == 0:
            raise UnsupportedExpression("division by zero")
        if isinstance(left, int) and isinstance(right, int):
            return _truncated_div(left, right)
        return normalize(Fraction(left) / Fraction(right))

    raise UnsupportedExpression(f"unsupported operator {operator}")


def apply_unary(operator: str, operand: ConstValue, unsigned_bits: Optional[int]) -> ConstValue:
    """Apply a Go unary operator; `^` on unsigned types complements within their size."""
    if operator == "+":
        return operand
    if operator == "-":
        if isinstance(operand, (str, bool)):
            raise UnsupportedExpression("unary - needs a numeric operand")
        return -operand
    if operator == "^":
        value = _require_int(operand, operator)
        if unsigned_bits:
            return value ^ ((1 << unsigned_bits) - 1)
        return ~value
    if operator == "!" and isinstance(operand, bool):
        return not operand
    raise UnsupportedExpression(f"unsupported unary operator {operator}")


class ConstEvaluator:
    """
    Evaluates constant expression nodes.

    Args:
        lookup: Returns (value, type) for a constant name, raising
            UnsupportedExpression when the name is not a constant.
        is_type: True when a name denotes a type usable in conversions.
        unsigned_bits: Bit width when a type's underlying type is unsigned.
    """

    def __init__(
        self,
        lookup: Callable[[str], Typed],
        is_type: Callable[[str], bool],
        unsigned_bits: Callable[[Optional[str]], Optional[int]],
    ):
        self._lookup = lookup
        self._is_type = is_type
        self._unsigned_bits = unsigned_bits

    def evaluate(self, node, iota: int) -> Typed:
        """Return (value, type name or None for untyped) for an expression node."""
        kind = node.type
        text = node.text.decode("utf-8")

        if kind == "int_literal":
            return parse_int_literal(text), None
        if kind == "float_literal":
            return parse_float_literal(text), None
        if kind == "rune_literal":
            return parse_rune_literal(text), None
        if kind in ("interpreted_string_literal", "raw_string_literal"):
            return text, None
        if kind in ("true", "false"):
            return kind == "true", None
        if kind == "iota" or (kind == "identifier" and text == "iota"):
            return iota, None
        if kind == "identifier":
            return self._lookup(text)
        if kind == "parenthesized_expression":
            return self.evaluate(self._single_operand(node), iota)
        if kind == "unary_expression":
            operator = node.child_by_field_name("operator").text.decode("utf-8")
            value, type_name = self.evaluate(node.child_by_field_name("operand"), iota)
            bits = self._unsigned_bits(type_name)
            return apply_unary(operator, value, bits), type_name
        if kind == "binary_expression":
            return self._binary(node, iota)
        if kind in ("call_expression", "type_conversion_expression"):
            return self._conversion(node, iota)

        raise UnsupportedExpression(f"unsupported constant expression: {text}")

    def _binary(self, node, iota: int) -> Typed:
        operator = node.child_by_field_name("operator").text.decode("utf-8")
        left, left_type = self.evaluate(node.child_by_field_name("left"), iota)
        right, right_type = self.evaluate(node.child_by_field_name("right"), iota)

        if operator in ("<<", ">>"):
            result_type = left_type
        else:
            result_type = left_type or right_type

        return apply_binary(operator, left, right), result_type

    def _conversion(self, node, iota: int) -> Typed:
        if node.type == "call_expression":
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            operands = [child for child in arguments.named_children if child.type != "comment"]
        else:
            function = node.child_by_field_name("type")
            operands = [node.child_by_field_name("operand")]

        type_name = function.text.decode("utf-8")
        if not self._is_type(type_name) or len(operands) != 1:
            raise UnsupportedExpression(
                f"unsupported call in constant expression: {node.text.decode('utf-8')}"
            )

        value, _ = self.evaluate(operands[0], iota)
        return normalize(value), type_name

    @staticmethod
    def _single_operand(node):
        children = [child for child in node.named_children if child.type != "comment"]
        if len(children) != 1:
            raise UnsupportedExpression(node.text.decode("utf-8"))
        return children[0]
