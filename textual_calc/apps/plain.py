"""Plain calculator skin: light grid, ASCII operators, coloured function keys."""

from textual_calc.core.base import AppConfig, BaseCalculatorApp, register_app
from textual_calc.core.keypad import ASCII_GLYPHS


@register_app
class PlainCalculatorApp(BaseCalculatorApp):
    """Classic four-function calculator."""

    APP_CONFIG = AppConfig(
        name="plain",
        description="Simple four-function calculator with a classic button grid",
        version="1.0.0",
        tags=["calculator", "math", "utility"]
    )

    TITLE = "Simple Calculator"

    KEYPAD = [
        ["C", "/", "*", "-"],
        ["7", "8", "9", "+"],
        ["4", "5", "6", "="],
        ["1", "2", "3", "0"],
        ["."],
    ]
    OPERATOR_GLYPHS = ASCII_GLYPHS

    CSS = """
    Screen {
        overflow: auto;
        background: #eeeeee;
    }

    #calculator {
        layout: grid;
        grid-size: 4;
        grid-gutter: 1 1;
        grid-columns: 1fr;
        grid-rows: 3 1 1fr 1fr 1fr 1fr 1fr;
        margin: 1 2;
        min-height: 20;
        min-width: 26;
        height: 100%;
    }

    #display {
        column-span: 4;
        height: 100%;
        padding: 0 1;
        background: #ffffff;
        color: #000000;
        text-style: bold;
        content-align: right middle;
    }

    #display.error {
        color: #b00020;
    }

    #pending {
        column-span: 4;
        text-align: right;
        color: #555555;
    }

    #pending.status-error {
        color: #b00020;
    }

    Button {
        width: 100%;
        height: 100%;
        min-width: 4;
        text-style: bold;
    }

    .operator {
        background: #ffa500;
        color: #000000;
    }

    .clear {
        background: #ff6347;
        color: #000000;
    }

    .equals {
        background: #32cd32;
        color: #000000;
    }

    #point {
        column-span: 4;
    }
    """


if __name__ == "__main__":
    app = PlainCalculatorApp()
    app.run()
