"""Translation between keypad labels, keyboard characters and engine tokens.

Skins label their buttons however they like (``*`` or ``×``, ``C`` or ``AC``);
this module is the only place those labels are mapped onto the four canonical
operators and the other token kinds.
"""

from .engine import (
    CLEAR,
    DECIMAL,
    EQUALS,
    CalculatorEngine,
    EngineState,
    Operator,
    Token,
    TokenKind,
    digit_token,
    format_number,
    operator_token,
)


class UnknownSymbolError(ValueError):
    """Raised when a label or key has no token mapping."""

    def __init__(self, symbol: str):
        super().__init__(f"Unknown keypad symbol: {symbol!r}")
        self.symbol = symbol


SYMBOL_TOKENS: dict[str, Token] = {str(d): digit_token(d) for d in range(10)}
SYMBOL_TOKENS.update({
    ".": DECIMAL,
    "+": operator_token(Operator.ADD),
    "-": operator_token(Operator.SUBTRACT),
    "−": operator_token(Operator.SUBTRACT),
    "*": operator_token(Operator.MULTIPLY),
    "×": operator_token(Operator.MULTIPLY),
    "x": operator_token(Operator.MULTIPLY),
    "/": operator_token(Operator.DIVIDE),
    "÷": operator_token(Operator.DIVIDE),
    "=": EQUALS,
    "C": CLEAR,
    "c": CLEAR,
    "AC": CLEAR,
})

ASCII_GLYPHS: dict[Operator, str] = {op: op.value for op in Operator}

UNICODE_GLYPHS: dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "−",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}

_OPERATOR_IDS = {
    Operator.ADD: "plus",
    Operator.SUBTRACT: "minus",
    Operator.MULTIPLY: "multiply",
    Operator.DIVIDE: "divide",
}


def token_for_symbol(symbol: str) -> Token:
    """Look up the token for a button label or typed character."""
    try:
        return SYMBOL_TOKENS[symbol]
    except KeyError:
        raise UnknownSymbolError(symbol) from None


def tokenize(keys: str) -> list[Token]:
    """Split a key string such as ``"12+3×4="`` into tokens.

    Whitespace is ignored and ``AC`` is read as a single clear key.
    """
    tokens = []
    index = 0
    while index < len(keys):
        if keys[index:index + 2] == "AC":
            tokens.append(CLEAR)
            index += 2
            continue

        char = keys[index]
        index += 1
        if char.isspace():
            continue
        tokens.append(token_for_symbol(char))
    return tokens


def run_keys(engine: CalculatorEngine, keys: str) -> str:
    """Feed a key string to an engine and return the resulting display."""
    return engine.feed(tokenize(keys))


def button_id(token: Token) -> str:
    """Stable widget id for the button that produces ``token``."""
    if token.kind is TokenKind.DIGIT:
        return f"number-{token.digit}"
    if token.kind is TokenKind.OPERATOR:
        return _OPERATOR_IDS[token.operator]
    return {
        TokenKind.DECIMAL: "point",
        TokenKind.EQUALS: "equals",
        TokenKind.CLEAR: "clear",
    }[token.kind]


def describe_pending(state: EngineState, glyphs: dict[Operator, str] = ASCII_GLYPHS) -> str:
    """Short text of the operation waiting for its right operand, e.g. ``"6 ×"``."""
    if state.pending_operator is None:
        return ""
    return f"{format_number(state.pending_operand)} {glyphs[state.pending_operator]}"
