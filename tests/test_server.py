"""Tests for the MCP tools."""

import pytest

from textual_calc.server import mcp_server
from textual_calc.server.mcp_server import SessionManager


@pytest.fixture(autouse=True)
def clean_sessions():
    yield
    mcp_server.session_manager.close_all()


def test_required_tools_exist():
    required_functions = [
        "list_apps",
        "get_app_info",
        "create_calculator_session",
        "press_keys",
        "get_calculator_state",
        "clear_calculator",
        "close_calculator_session",
        "list_calculator_sessions",
        "evaluate_keys",
        "get_server_info",
    ]
    for func_name in required_functions:
        assert callable(getattr(mcp_server, func_name))


def test_list_apps_and_info():
    names = [app["name"] for app in mcp_server.list_apps()]
    assert "plain" in names
    assert "iphone" in names

    info = mcp_server.get_app_info("iphone")
    assert info["status"] == "success"
    assert info["keypad"][0] == ["AC", "÷"]

    assert mcp_server.get_app_info("scientific")["status"] == "error"


def test_session_round_trip():
    created = mcp_server.create_calculator_session()
    assert created["status"] == "success"
    assert created["display"] == "0"
    session_id = created["session_id"]
    assert session_id.startswith("calc_")

    result = mcp_server.press_keys(session_id, "2+3")
    assert result["display"] == "3"
    assert result["phase"] == "operand_entered"
    assert result["tokens_applied"] == 3

    result = mcp_server.press_keys(session_id, "×4=")
    assert result["display"] == "20"
    assert result["phase"] == "result_shown"

    state = mcp_server.get_calculator_state(session_id)
    assert state["session"]["presses"] == 6
    assert state["engine"]["display"] == "20"

    assert mcp_server.clear_calculator(session_id)["display"] == "0"
    assert mcp_server.list_calculator_sessions()["count"] == 1

    assert mcp_server.close_calculator_session(session_id)["status"] == "success"
    assert mcp_server.list_calculator_sessions()["count"] == 0


def test_bad_keys_leave_session_untouched():
    session_id = mcp_server.create_calculator_session()["session_id"]
    mcp_server.press_keys(session_id, "12")

    result = mcp_server.press_keys(session_id, "3^4")
    assert result["status"] == "error"
    assert "^" in result["error"]
    assert mcp_server.get_calculator_state(session_id)["engine"]["display"] == "12"


def test_unknown_session():
    for result in [
        mcp_server.press_keys("calc_missing", "1"),
        mcp_server.get_calculator_state("calc_missing"),
        mcp_server.clear_calculator("calc_missing"),
        mcp_server.close_calculator_session("calc_missing"),
    ]:
        assert result["status"] == "error"
        assert result["session_id"] == "calc_missing"


def test_evaluate_keys():
    assert mcp_server.evaluate_keys("6+4=")["display"] == "10"

    result = mcp_server.evaluate_keys("5÷0=")
    assert result["display"] == "Error"
    assert result["phase"] == "error_shown"

    assert mcp_server.evaluate_keys("1%")["status"] == "error"


def test_server_info():
    mcp_server.create_calculator_session()
    info = mcp_server.get_server_info()
    assert info["status"] == "success"
    assert info["open_sessions"] == 1
    assert "plain" in info["apps"]


def test_app_listing_reports_calculator_metadata_only():
    for app in mcp_server.list_apps():
        assert set(app) == {"name", "description", "version", "tags"}

    info = mcp_server.get_app_info("plain")
    assert "requires_web" not in info
    assert "requires_sudo" not in info


def test_session_limit_evicts_least_recently_used():
    manager = SessionManager(max_sessions=2)
    first = manager.create_session()
    second = manager.create_session()

    manager.press_keys(first, "7")
    third = manager.create_session()

    assert manager.get_engine(second) is None
    assert manager.get_engine(first).display == "7"
    assert manager.get_engine(third) is not None
    assert len(manager.list_sessions()) == 2


def test_session_limit_must_allow_one_session():
    with pytest.raises(ValueError):
        SessionManager(max_sessions=0)


def test_clear_keeps_session_alive():
    manager = mcp_server.session_manager
    original_limit = manager.max_sessions
    manager.max_sessions = 2
    try:
        first = mcp_server.create_calculator_session()["session_id"]
        second = mcp_server.create_calculator_session()["session_id"]
        mcp_server.clear_calculator(first)
        mcp_server.create_calculator_session()

        assert mcp_server.get_calculator_state(first)["status"] == "success"
        assert mcp_server.get_calculator_state(second)["status"] == "error"
    finally:
        manager.max_sessions = original_limit
