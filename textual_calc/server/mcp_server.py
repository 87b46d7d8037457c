"""MCP Server for Textual Calc

Exposes the calculator engine as headless sessions, plus the catalogue of
terminal skins, over the Model Context Protocol.
"""

import atexit
import logging
import signal
import sys
import uuid
from collections import OrderedDict
from datetime import datetime
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel

# Import apps module to trigger registration decorators
from textual_calc import apps  # noqa: F401  # Required for app auto-registration
from textual_calc.core.base import AppRegistry
from textual_calc.core.engine import CalculatorEngine
from textual_calc.core.keypad import UnknownSymbolError, tokenize

# Configure logging to stderr for MCP servers
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger("textual_calc.server")


class SessionInfo(BaseModel):
    """Summary of one headless calculator session."""
    session_id: str
    display: str
    phase: str
    created_at: str
    presses: int = 0


MAX_SESSIONS = 100


class SessionManager:
    """Manages headless calculator engines, one per session.

    At most ``max_sessions`` stay open; creating one more closes the session
    that has gone longest without a key press.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        # Least recently used first
        self.engines: OrderedDict[str, CalculatorEngine] = OrderedDict()
        self.created_at: dict[str, str] = {}
        self.presses: dict[str, int] = {}

    def generate_session_id(self) -> str:
        """Generate a unique session ID."""
        return f"calc_{uuid.uuid4().hex[:8]}"

    def create_session(self) -> str:
        """Start a fresh engine and return its session ID."""
        while len(self.engines) >= self.max_sessions:
            oldest = next(iter(self.engines))
            logger.info(f"Session limit {self.max_sessions} reached, evicting idle session {oldest}")
            self.close_session(oldest)

        session_id = self.generate_session_id()
        self.engines[session_id] = CalculatorEngine()
        self.created_at[session_id] = datetime.now().isoformat()
        self.presses[session_id] = 0
        logger.info(f"Created calculator session {session_id}")
        return session_id

    def get_engine(self, session_id: str) -> CalculatorEngine | None:
        """Get the engine behind a session."""
        return self.engines.get(session_id)

    def touch(self, session_id: str) -> None:
        """Mark a session as just used so it is evicted last."""
        self.engines.move_to_end(session_id)

    def press_keys(self, session_id: str, keys: str) -> int:
        """Feed a key string to a session and return how many tokens were applied.

        Raises:
            KeyError: unknown session.
            UnknownSymbolError: the key string contains an unmapped symbol;
                nothing is applied in that case.
        """
        engine = self.engines[session_id]
        tokens = tokenize(keys)
        engine.feed(tokens)
        self.touch(session_id)
        self.presses[session_id] += len(tokens)
        return len(tokens)

    def get_info(self, session_id: str) -> SessionInfo | None:
        """Get a summary of a session."""
        engine = self.engines.get(session_id)
        if engine is None:
            return None
        return SessionInfo(
            session_id=session_id,
            display=engine.display,
            phase=engine.phase.value,
            created_at=self.created_at[session_id],
            presses=self.presses[session_id]
        )

    def close_session(self, session_id: str) -> bool:
        """Drop a session."""
        if session_id not in self.engines:
            logger.warning(f"Session {session_id} not found")
            return False

        del self.engines[session_id]
        self.created_at.pop(session_id, None)
        self.presses.pop(session_id, None)
        logger.info(f"Closed calculator session {session_id}")
        return True

    def list_sessions(self) -> list[SessionInfo]:
        """List all open sessions."""
        return [self.get_info(session_id) for session_id in list(self.engines)]

    def close_all(self) -> int:
        """Close every session and return how many were open."""
        count = len(self.engines)
        self.engines.clear()
        self.created_at.clear()
        self.presses.clear()
        return count


# Initialize MCP server and session manager
mcp = FastMCP("Textual Calc MCP Server")
session_manager = SessionManager()


def _unknown_session(session_id: str) -> dict[str, Any]:
    return {
        "status": "error",
        "error": f"Calculator session {session_id} not found",
        "session_id": session_id
    }


@mcp.tool()
def list_apps() -> list[dict[str, Any]]:
    """List all available calculator skins.

    Returns:
        List of application configurations with metadata.
    """
    app_configs = []
    for config in AppRegistry.list_apps():
        app_configs.append({
            "name": config.name,
            "description": config.description,
            "version": config.version,
            "tags": config.tags
        })
    return app_configs


@mcp.tool()
def get_app_info(app_name: str) -> dict[str, Any]:
    """Get detailed information about a calculator skin.

    Args:
        app_name: Name of the application

    Returns:
        Detailed application information.
    """
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        return {
            "status": "error",
            "error": f"Unknown application: {app_name}"
        }

    config = app_class.get_config()
    return {
        "status": "success",
        "name": config.name,
        "description": config.description,
        "version": config.version,
        "author": config.author,
        "tags": config.tags,
        "keypad": app_class.KEYPAD,
        "bindings": getattr(app_class, 'BINDINGS', [])
    }


@mcp.tool()
def create_calculator_session() -> dict[str, Any]:
    """Open a headless calculator session.

    Returns:
        The new session ID and its initial display.
    """
    session_id = session_manager.create_session()
    return {
        "status": "success",
        "session_id": session_id,
        "display": session_manager.get_engine(session_id).display,
        "timestamp": datetime.now().isoformat()
    }


@mcp.tool()
def press_keys(session_id: str, keys: str) -> dict[str, Any]:
    """Press calculator keys in a session.

    Args:
        session_id: ID returned by create_calculator_session
        keys: Key string, e.g. "12+3=" (digits, ".", + - * / or − × ÷, "=", "C" or "AC")

    Returns:
        The display after the last key and the engine phase.
    """
    if session_manager.get_engine(session_id) is None:
        return _unknown_session(session_id)

    try:
        applied = session_manager.press_keys(session_id, keys)
    except UnknownSymbolError as e:
        return {
            "status": "error",
            "error": str(e),
            "session_id": session_id
        }

    engine = session_manager.get_engine(session_id)
    return {
        "status": "success",
        "session_id": session_id,
        "display": engine.display,
        "phase": engine.phase.value,
        "tokens_applied": applied,
        "timestamp": datetime.now().isoformat()
    }


@mcp.tool()
def get_calculator_state(session_id: str) -> dict[str, Any]:
    """Get the full engine state of a session.

    Args:
        session_id: ID of the session

    Returns:
        Display, pending operand and operator, replacement flag and phase.
    """
    info = session_manager.get_info(session_id)
    if info is None:
        return _unknown_session(session_id)

    return {
        "status": "success",
        "session": info.model_dump(),
        "engine": session_manager.get_engine(session_id).snapshot()
    }


@mcp.tool()
def clear_calculator(session_id: str) -> dict[str, Any]:
    """Press Clear in a session.

    Args:
        session_id: ID of the session

    Returns:
        The reset display.
    """
    engine = session_manager.get_engine(session_id)
    if engine is None:
        return _unknown_session(session_id)

    session_manager.touch(session_id)
    return {
        "status": "success",
        "session_id": session_id,
        "display": engine.reset()
    }


@mcp.tool()
def close_calculator_session(session_id: str) -> dict[str, Any]:
    """Close a calculator session.

    Args:
        session_id: ID of the session to close

    Returns:
        Close result.
    """
    if session_manager.close_session(session_id):
        return {
            "status": "success",
            "session_id": session_id,
            "closed_at": datetime.now().isoformat()
        }
    return _unknown_session(session_id)


@mcp.tool()
def list_calculator_sessions() -> dict[str, Any]:
    """List all open calculator sessions.

    Returns:
        Summaries of open sessions.
    """
    sessions = session_manager.list_sessions()
    return {
        "status": "success",
        "sessions": [session.model_dump() for session in sessions],
        "count": len(sessions),
        "timestamp": datetime.now().isoformat()
    }


@mcp.tool()
def evaluate_keys(keys: str) -> dict[str, Any]:
    """Run a key string on a fresh calculator without keeping a session.

    Args:
        keys: Key string, e.g. "2+3*4="

    Returns:
        The final display and engine phase.
    """
    engine = CalculatorEngine()
    try:
        tokens = tokenize(keys)
    except UnknownSymbolError as e:
        return {
            "status": "error",
            "error": str(e),
            "keys": keys
        }

    display = engine.feed(tokens)
    return {
        "status": "success",
        "keys": keys,
        "display": display,
        "phase": engine.phase.value
    }


@mcp.tool()
def get_server_info() -> dict[str, Any]:
    """Get information about this server.

    Returns:
        Server name, registered skins and open session count.
    """
    return {
        "status": "success",
        "name": mcp.name,
        "apps": [config.name for config in AppRegistry.list_apps()],
        "open_sessions": len(session_manager.engines),
        "timestamp": datetime.now().isoformat()
    }


def cleanup_sessions():
    """Close every open session."""
    count = session_manager.close_all()
    logger.info(f"Cleanup completed, closed {count} sessions")


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    logger.info(f"Received signal {signum}, shutting down gracefully")
    cleanup_sessions()
    sys.exit(0)


def main():
    """Main entry point for the MCP server."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)
    atexit.register(cleanup_sessions)

    try:
        logger.info(f"Starting Textual Calc MCP Server with {len(AppRegistry.list_apps())} applications")
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
    finally:
        cleanup_sessions()


if __name__ == "__main__":
    main()
