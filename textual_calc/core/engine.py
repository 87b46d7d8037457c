"""Calculator engine: a single-accumulator state machine driven by keypad tokens.

The engine knows nothing about widgets, glyphs or key bindings. Front ends
translate their own button presses into ``Token`` values and render whatever
display text ``CalculatorEngine.handle`` returns.
"""

import logging
import math
import operator
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger("textual_calc.engine")

ERROR_MARKER = "Error"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Operator(str, Enum):
    """Binary operators the engine can hold pending."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class TokenKind(str, Enum):
    """Kinds of keypad input."""
    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"


class EnginePhase(str, Enum):
    """Coarse view of the engine state, derived from ``EngineState``."""
    IDLE = "idle"
    OPERAND_ENTERED = "operand_entered"
    OPERATOR_PENDING = "operator_pending"
    RESULT_SHOWN = "result_shown"
    ERROR_SHOWN = "error_shown"


class Token(BaseModel):
    """One normalized keypad press."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    digit: int | None = Field(default=None, ge=0, le=9)
    operator: Operator | None = None

    @model_validator(mode="after")
    def check_payload(self) -> "Token":
        if (self.kind is TokenKind.DIGIT) != (self.digit is not None):
            raise ValueError("a digit value is required for, and only allowed on, digit tokens")
        if (self.kind is TokenKind.OPERATOR) != (self.operator is not None):
            raise ValueError("an operator is required for, and only allowed on, operator tokens")
        return self

    @property
    def symbol(self) -> str:
        """Canonical ASCII label, used in logs and traces."""
        if self.kind is TokenKind.DIGIT:
            return str(self.digit)
        if self.kind is TokenKind.OPERATOR:
            return self.operator.value
        return {
            TokenKind.DECIMAL: ".",
            TokenKind.EQUALS: "=",
            TokenKind.CLEAR: "C",
        }[self.kind]


def digit_token(value: int) -> Token:
    """Build a ``Digit(value)`` token."""
    return Token(kind=TokenKind.DIGIT, digit=value)


def operator_token(op: Operator) -> Token:
    """Build an ``Operator(op)`` token."""
    return Token(kind=TokenKind.OPERATOR, operator=op)


DECIMAL = Token(kind=TokenKind.DECIMAL)
EQUALS = Token(kind=TokenKind.EQUALS)
CLEAR = Token(kind=TokenKind.CLEAR)


class EngineState(BaseModel):
    """Mutable calculator state. Owned by exactly one engine."""
    display: str = "0"
    pending_operand: float = 0.0
    pending_operator: Operator | None = None
    awaiting_new_operand: bool = False


class ArithmeticResult(BaseModel):
    """Outcome of ``apply``: either a value or an error reason."""
    value: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


_OPERATIONS = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
}


def apply(left: float, right: float, op: Operator) -> ArithmeticResult:
    """Compute ``left op right`` without raising.

    Division by zero and non-finite results come back as error results.
    """
    if op is Operator.DIVIDE and right == 0.0:
        return ArithmeticResult(error="Division by zero")

    value = _OPERATIONS[op](left, right)
    if not math.isfinite(value):
        return ArithmeticResult(error=f"Result out of range: {value}")
    return ArithmeticResult(value=value)


def format_number(value: float) -> str:
    """Render a result as plain positional digits.

    Integral values in the signed 64-bit range drop the decimal point. Other
    values keep the shortest round-tripping digits of the float, written out
    without an exponent (``1e-05`` becomes ``0.00001``).
    """
    if INT64_MIN <= value <= INT64_MAX and value == int(value):
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class CalculatorEngine:
    """Translates a stream of tokens into a running computation and display text."""

    def __init__(self) -> None:
        self.state = EngineState()
        self._handlers = {
            TokenKind.DIGIT: self._on_digit,
            TokenKind.DECIMAL: self._on_decimal,
            TokenKind.OPERATOR: self._on_operator,
            TokenKind.EQUALS: self._on_equals,
            TokenKind.CLEAR: self._on_clear,
        }

    @property
    def display(self) -> str:
        """Text currently shown to the user."""
        return self.state.display

    def current_display(self) -> str:
        """Return the text currently shown to the user."""
        return self.state.display

    @property
    def phase(self) -> EnginePhase:
        """Where the engine sits in the input state machine."""
        state = self.state
        if state.display == ERROR_MARKER:
            return EnginePhase.ERROR_SHOWN
        if state.pending_operator is not None:
            if state.awaiting_new_operand:
                return EnginePhase.OPERATOR_PENDING
            return EnginePhase.OPERAND_ENTERED
        if state.awaiting_new_operand:
            return EnginePhase.RESULT_SHOWN
        if state.display == "0":
            return EnginePhase.IDLE
        return EnginePhase.OPERAND_ENTERED

    def handle(self, token: Token) -> str:
        """Apply one token and return the new display text."""
        if not isinstance(token, Token):
            raise TypeError(f"Expected a Token, got {type(token).__name__}")

        self._handlers[token.kind](token)
        logger.debug(f"{token.symbol} -> {self.state.display!r} ({self.phase.value})")
        return self.state.display

    def feed(self, tokens: Iterable[Token]) -> str:
        """Apply tokens in order and return the final display text."""
        for token in tokens:
            self.handle(token)
        return self.state.display

    def reset(self) -> str:
        """Return to the initial state, exactly like pressing Clear."""
        self.state = EngineState()
        return self.state.display

    def snapshot(self) -> dict:
        """JSON-ready copy of the state plus the derived phase."""
        data = self.state.model_dump(mode="json")
        data["phase"] = self.phase.value
        return data

    def _on_digit(self, token: Token) -> None:
        state = self.state
        text = str(token.digit)
        if state.awaiting_new_operand:
            state.display = text
            state.awaiting_new_operand = False
        elif state.display == "0":
            state.display = text
        else:
            state.display += text

    def _on_decimal(self, token: Token) -> None:
        state = self.state
        if state.awaiting_new_operand:
            state.display = "0."
            state.awaiting_new_operand = False
        elif "." not in state.display:
            state.display += "."

    def _on_operator(self, token: Token) -> None:
        state = self.state
        # A second operator press before any new digit is ignored, not swapped in.
        if state.awaiting_new_operand:
            return

        if state.pending_operator is not None:
            self._on_equals(EQUALS)
            if state.display == ERROR_MARKER:
                return

        left = self._parse_display()
        if left is None:
            return

        state.pending_operand = left
        state.pending_operator = token.operator
        state.awaiting_new_operand = True

    def _on_equals(self, token: Token) -> None:
        state = self.state
        if state.pending_operator is None or state.awaiting_new_operand:
            return

        right = self._parse_display()
        if right is None:
            return

        result = apply(state.pending_operand, right, state.pending_operator)
        if not result.ok:
            self._fail(result.error)
            return

        state.display = format_number(result.value)
        state.pending_operator = None
        state.awaiting_new_operand = True

    def _on_clear(self, token: Token) -> None:
        self.reset()

    def _parse_display(self) -> float | None:
        try:
            return float(self.state.display)
        except ValueError:
            self._fail(f"Cannot read {self.state.display!r} as a number")
            return None

    def _fail(self, reason: str) -> None:
        logger.warning(f"Calculation failed: {reason}")
        state = self.state
        state.display = ERROR_MARKER
        state.pending_operator = None
        state.awaiting_new_operand = True
