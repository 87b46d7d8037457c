"""Main entry point for Textual Calc MCP Server."""

from textual_calc.server.mcp_server import main

if __name__ == "__main__":
    main()
