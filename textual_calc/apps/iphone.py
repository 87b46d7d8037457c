"""Dark iPhone-style skin with Unicode operator glyphs."""

from textual_calc.core.base import AppConfig, BaseCalculatorApp, register_app
from textual_calc.core.keypad import UNICODE_GLYPHS


@register_app
class IPhoneCalculatorApp(BaseCalculatorApp):
    """Same calculator, dressed like the phone one."""

    APP_CONFIG = AppConfig(
        name="iphone",
        description="Dark iPhone-style calculator skin",
        version="1.0.0",
        tags=["calculator", "math", "utility", "dark"]
    )

    TITLE = "Calculator"

    KEYPAD = [
        ["AC", "÷"],
        ["7", "8", "9", "×"],
        ["4", "5", "6", "−"],
        ["1", "2", "3", "+"],
        ["0", ".", "="],
    ]
    OPERATOR_GLYPHS = UNICODE_GLYPHS

    CSS = """
    Screen {
        overflow: auto;
        background: #000000;
    }

    Header, Footer {
        background: #1c1c1c;
    }

    #calculator {
        layout: grid;
        grid-size: 4;
        grid-gutter: 1 2;
        grid-columns: 1fr;
        grid-rows: 3 1 1fr 1fr 1fr 1fr 1fr;
        margin: 1 2;
        min-height: 20;
        min-width: 26;
        height: 100%;
        background: #000000;
    }

    #display {
        column-span: 4;
        height: 100%;
        padding: 0 1;
        background: #000000;
        color: #ffffff;
        text-style: bold;
        content-align: right bottom;
    }

    #display.error {
        color: #ff453a;
    }

    #pending {
        column-span: 4;
        text-align: right;
        color: #8e8e93;
    }

    #pending.status-error {
        color: #ff453a;
    }

    Button {
        width: 100%;
        height: 100%;
        min-width: 4;
        border: none;
        background: #333333;
        color: #ffffff;
    }

    .operator, .equals {
        background: #ff9f0a;
        color: #ffffff;
        text-style: bold;
    }

    .clear {
        background: #a5a5a5;
        color: #000000;
        column-span: 3;
    }

    #number-0 {
        column-span: 2;
    }
    """


if __name__ == "__main__":
    app = IPhoneCalculatorApp()
    app.run()
