"""Core engine, keypad translation and base classes for calculator apps."""

from .base import AppConfig, AppRegistry, AppStatus, BaseCalculatorApp, StatusWidget, register_app
from .engine import (
    CLEAR,
    DECIMAL,
    EQUALS,
    ERROR_MARKER,
    ArithmeticResult,
    CalculatorEngine,
    EnginePhase,
    EngineState,
    Operator,
    Token,
    TokenKind,
    apply,
    digit_token,
    format_number,
    operator_token,
)
from .keypad import UnknownSymbolError, run_keys, token_for_symbol, tokenize

__all__ = [
    "BaseCalculatorApp",
    "AppConfig",
    "AppStatus",
    "AppRegistry",
    "StatusWidget",
    "register_app",
    "CalculatorEngine",
    "EngineState",
    "EnginePhase",
    "ArithmeticResult",
    "Operator",
    "Token",
    "TokenKind",
    "CLEAR",
    "DECIMAL",
    "EQUALS",
    "ERROR_MARKER",
    "apply",
    "digit_token",
    "operator_token",
    "format_number",
    "UnknownSymbolError",
    "token_for_symbol",
    "tokenize",
    "run_keys",
]
