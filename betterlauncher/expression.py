"""Evaluation of arithmetic and logical expressions typed into the launcher.

Supported: 64-bit integers, floats, booleans, ``+ - * / % ^``, comparisons,
``&& || !`` and parentheses. Integer arithmetic is checked for overflow,
``^`` always yields a float, and integer division truncates toward zero.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Union

Value = Union[bool, int, float, tuple]

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<op>&&=?|\|\|=?|==|!=|<=|>=|[+\-*/%^]=?|[()=!<>,;&|"])
    | (?P<word>[^\s+\-*/%^()=!<>&|,;"]+)
    """,
    re.VERBOSE,
)
_INT_RE = re.compile(r"[0-9]+")
_SIGNED_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)

_COMPARISONS = {"==", "!=", "<", ">", "<=", ">="}


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


def _literal(word: str) -> Value:
    if _INT_RE.fullmatch(word):
        number = int(word)
        if number <= INT_MAX:
            return number
    if _FLOAT_RE.fullmatch(word):
        return float(word)
    if word == "true":
        return True
    if word == "false":
        return False
    raise ExpressionError(f"variable not found: {word}")


def _tokenize(text: str) -> list[tuple[str, object]]:
    tokens: list[tuple[str, object]] = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        lexeme = match.group()
        if kind == "space":
            continue
        if kind == "word":
            tokens.append(("value", _literal(lexeme)))
        elif lexeme == '"':
            raise ExpressionError("string literals are not supported")
        else:
            tokens.append(("op", lexeme))
    return tokens


def _require_number(value: Value) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ExpressionError(f"expected a number, got {format_value(value)}")
    return value


def _require_bool(value: Value) -> bool:
    if not isinstance(value, bool):
        raise ExpressionError(f"expected a boolean, got {format_value(value)}")
    return value


def _checked(number: int) -> int:
    if not INT_MIN <= number <= INT_MAX:
        raise ExpressionError("integer overflow")
    return number


def _both_int(a: Value, b: Value) -> bool:
    return type(a) is int and type(b) is int


def _divide(a: Value, b: Value) -> Value:
    a, b = _require_number(a), _require_number(b)
    if _both_int(a, b):
        if b == 0:
            raise ExpressionError("division by zero")
        quotient = abs(a) // abs(b)
        return _checked(quotient if (a < 0) == (b < 0) else -quotient)
    a, b = float(a), float(b)
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _remainder(a: Value, b: Value) -> Value:
    a, b = _require_number(a), _require_number(b)
    if _both_int(a, b):
        if b == 0:
            raise ExpressionError("division by zero")
        if a == INT_MIN and b == -1:
            raise ExpressionError("integer overflow")
        rest = abs(a) % abs(b)
        return -rest if a < 0 else rest
    try:
        return math.fmod(float(a), float(b))
    except ValueError:
        return math.nan


def _power(a: Value, b: Value) -> float:
    base, exponent = float(_require_number(a)), float(_require_number(b))
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        return math.inf if base == 0.0 else math.nan


def _arithmetic(op: str, a: Value, b: Value) -> Value:
    if op == "/":
        return _divide(a, b)
    if op == "%":
        return _remainder(a, b)
    a, b = _require_number(a), _require_number(b)
    if _both_int(a, b):
        if op == "+":
            return _checked(a + b)
        if op == "-":
            return _checked(a - b)
        return _checked(a * b)
    a, b = float(a), float(b)
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    return a * b


def _compare(op: str, a: Value, b: Value) -> bool:
    if op == "==":
        return type(a) is type(b) and a == b
    if op == "!=":
        return not (type(a) is type(b) and a == b)
    a, b = _require_number(a), _require_number(b)
    if not _both_int(a, b):
        a, b = float(a), float(b)
    if op == "<":
        return a < b
    if op == ">":
        return a > b
    if op == "<=":
        return a <= b
    return a >= b


class _Parser:
    def __init__(self, tokens: list[tuple[str, object]]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek_op(self) -> str | None:
        if self._pos < len(self._tokens):
            kind, lexeme = self._tokens[self._pos]
            if kind == "op":
                return lexeme  # type: ignore[return-value]
        return None

    def _take(self) -> tuple[str, object]:
        if self._pos >= len(self._tokens):
            raise ExpressionError("unexpected end of expression")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def parse(self) -> Value:
        if not self._tokens:
            return ()
        value = self._or()
        if self._pos < len(self._tokens):
            kind, lexeme = self._tokens[self._pos]
            if kind == "op" and lexeme not in {")", "("}:
                raise ExpressionError(f"unsupported operator: {lexeme}")
            raise ExpressionError("unexpected token after expression")
        return value

    def _binary_chain(self, operators, operand, combine) -> Value:
        left = operand()
        while (op := self._peek_op()) in operators:
            self._pos += 1
            right = operand()
            left = combine(op, left, right)
        return left

    def _or(self) -> Value:
        return self._binary_chain(
            {"||"},
            self._and,
            lambda _op, a, b: _require_bool(a) | _require_bool(b),
        )

    def _and(self) -> Value:
        return self._binary_chain(
            {"&&"},
            self._comparison,
            lambda _op, a, b: _require_bool(a) & _require_bool(b),
        )

    def _comparison(self) -> Value:
        return self._binary_chain(_COMPARISONS, self._additive, _compare)

    def _additive(self) -> Value:
        return self._binary_chain({"+", "-"}, self._multiplicative, _arithmetic)

    def _multiplicative(self) -> Value:
        return self._binary_chain({"*", "/", "%"}, self._unary, _arithmetic)

    def _unary(self) -> Value:
        op = self._peek_op()
        if op == "-":
            self._pos += 1
            value = _require_number(self._unary())
            return _checked(-value) if type(value) is int else -value
        if op == "!":
            self._pos += 1
            return not _require_bool(self._unary())
        return self._power()

    def _power(self) -> Value:
        left = self._primary()
        while self._peek_op() == "^":
            self._pos += 1
            right = self._unary() if self._peek_op() in {"-", "!"} else self._primary()
            left = _power(left, right)
        return left

    def _primary(self) -> Value:
        kind, lexeme = self._take()
        if kind == "value":
            return lexeme  # type: ignore[return-value]
        if lexeme == "(":
            if self._peek_op() == ")":
                self._pos += 1
                return ()
            value = self._or()
            if self._peek_op() != ")":
                raise ExpressionError("unbalanced parentheses")
            self._pos += 1
            return value
        raise ExpressionError(f"unexpected operator: {lexeme}")


def evaluate(expression: str) -> Value:
    """Evaluate ``expression`` and return an int, float, bool or ``()``."""
    try:
        return _Parser(_tokenize(expression)).parse()
    except RecursionError as exc:
        raise ExpressionError("expression nested too deeply") from exc


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_value(value: Value) -> str:
    """Render a value the way the launcher displays results."""
    if isinstance(value, tuple) and value == ():
        return "()"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    raise TypeError(f"cannot format {value!r}")


def _is_i64(token: str) -> bool:
    return bool(_SIGNED_INT_RE.fullmatch(token)) and INT_MIN <= int(token) <= INT_MAX


def evaluate_math_expression(expression: str) -> str | None:
    """Evaluate a query, treating whole numbers around ``/`` as floats.

    Returns the formatted result, or ``None`` if the query is not an expression.
    """
    if "/" in expression:
        tokens = expression.replace("/", " / ").split()
        expression = " ".join(
            f"{token}.0" if _is_i64(token) else token for token in tokens
        ).replace(" / ", "/")
    try:
        return format_value(evaluate(expression))
    except ExpressionError:
        return None