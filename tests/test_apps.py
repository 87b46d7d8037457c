"""Tests for the calculator skins, driven headlessly."""

import pytest
from textual.widgets import Button, Static

from textual_calc import apps  # noqa: F401  # Required for app auto-registration
from textual_calc.apps.iphone import IPhoneCalculatorApp
from textual_calc.apps.plain import PlainCalculatorApp
from textual_calc.core.base import AppRegistry, BaseCalculatorApp
from textual_calc.core.engine import ERROR_MARKER, Operator, TokenKind
from textual_calc.core.keypad import button_id, token_for_symbol

SKINS = [PlainCalculatorApp, IPhoneCalculatorApp]


async def click_keys(app: BaseCalculatorApp, pilot, key_ids: list[str]) -> None:
    for key_id in key_ids:
        app.query_one(f"#{key_id}", Button).press()
        await pilot.pause()


def test_skins_are_registered():
    assert AppRegistry.get_app_class("plain") is PlainCalculatorApp
    assert AppRegistry.get_app_class("iphone") is IPhoneCalculatorApp
    names = [config.name for config in AppRegistry.list_apps()]
    assert "plain" in names
    assert "iphone" in names


@pytest.mark.parametrize("app_class", SKINS)
def test_keypad_covers_every_key(app_class):
    tokens = [token_for_symbol(label) for row in app_class.KEYPAD for label in row]
    assert len({button_id(token) for token in tokens}) == len(tokens)
    assert {token.digit for token in tokens if token.kind is TokenKind.DIGIT} == set(range(10))
    assert {token.operator for token in tokens if token.kind is TokenKind.OPERATOR} == set(Operator)
    assert {token.kind for token in tokens} == set(TokenKind)


def test_iphone_skin_uses_unicode_glyphs():
    labels = {label for row in IPhoneCalculatorApp.KEYPAD for label in row}
    assert {"−", "×", "÷", "AC"} <= labels
    assert not {"-", "*", "/"} & labels


@pytest.mark.parametrize("app_class", SKINS)
def test_status_before_running(app_class):
    app = app_class()
    app.set_app_id("calc_test")
    status = app.get_status()
    assert status.app_id == "calc_test"
    assert status.name == app_class.APP_CONFIG.name
    assert status.status == "stopped"
    assert status.error_message is None


@pytest.mark.asyncio
@pytest.mark.parametrize("app_class", SKINS)
async def test_buttons_drive_shared_engine(app_class):
    app = app_class()
    async with app.run_test(size=(60, 40)) as pilot:
        await click_keys(app, pilot, ["number-6", "plus", "number-4", "equals"])
        assert app.engine.display == "10"
        assert app.numbers == "10"
        assert len(app.output_buffer) == 4


@pytest.mark.asyncio
async def test_iphone_pending_line_uses_glyphs():
    app = IPhoneCalculatorApp()
    async with app.run_test(size=(60, 40)) as pilot:
        await click_keys(app, pilot, ["number-6", "multiply"])
        state = app.get_app_specific_state()
        assert state["pending"] == "6 ×"
        assert state["engine"]["pending_operator"] == "*"


@pytest.mark.asyncio
async def test_error_styling_and_clear():
    app = PlainCalculatorApp()
    async with app.run_test(size=(60, 40)) as pilot:
        await click_keys(app, pilot, ["number-5", "divide", "number-0", "equals"])
        display = app.query_one("#display", Static)
        assert app.numbers == ERROR_MARKER
        assert display.has_class("error")
        assert app.get_status().error_message is not None

        await click_keys(app, pilot, ["clear"])
        assert app.numbers == "0"
        assert not display.has_class("error")


@pytest.mark.asyncio
async def test_keyboard_input():
    app = PlainCalculatorApp()
    async with app.run_test(size=(60, 40)) as pilot:
        await pilot.press("2", "+", "3", "*", "4", "=")
        await pilot.pause()
        assert app.numbers == "20"

        await pilot.press("c")
        await pilot.pause()
        assert app.numbers == "0"


def test_app_config_holds_calculator_metadata_only():
    from textual_calc.core.base import AppConfig

    assert set(AppConfig.model_fields) == {"name", "description", "version", "author", "tags"}
