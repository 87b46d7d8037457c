#!/usr/bin/env python3
"""
Textual Calc CLI Tool

Simple command-line interface for running the calculator skins, evaluating
key sequences, or starting the MCP server.
"""

import subprocess
import sys

import click

from textual_calc import apps  # noqa: F401  # Required for app auto-registration
from textual_calc.core.base import AppRegistry
from textual_calc.core.engine import CalculatorEngine
from textual_calc.core.keypad import UnknownSymbolError, tokenize


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """Textual Calc - Terminal calculator with an MCP interface."""
    pass


@cli.command()
def server():
    """Start the MCP server."""
    from textual_calc.server.mcp_server import main as server_main

    click.echo("Starting Textual Calc MCP Server...", err=True)
    server_main()


@cli.command()
def list_apps():
    """List all available calculator skins."""
    app_configs = AppRegistry.list_apps()
    if not app_configs:
        click.echo("No applications available.")
        return

    click.echo("Available applications:")
    click.echo()

    for app_config in app_configs:
        click.echo(f"  {app_config.name}")
        click.echo(f"    Description: {app_config.description}")
        click.echo(f"    Version: {app_config.version}")
        click.echo(f"    Tags: {', '.join(app_config.tags)}")
        click.echo()


@cli.command()
@click.argument('app_name')
@click.option('--web', is_flag=True, help='Run in web browser mode')
@click.option('--port', default=8000, help='Port for web mode')
def run(app_name: str, web: bool, port: int):
    """Run a calculator skin."""
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        click.echo(f"Unknown application: {app_name}", err=True)
        click.echo("Use 'textual-calc list-apps' to see available applications.")
        sys.exit(1)

    if web:
        click.echo(f"Starting {app_name} in web mode on port {port}...")
        # Use textual serve to run in web mode
        module_path = f"{app_class.__module__}:{app_class.__name__}"
        cmd = ["textual", "serve", module_path, "--port", str(port)]
        subprocess.run(cmd)
    else:
        click.echo(f"Starting {app_name} in terminal mode...")
        app = app_class()
        app.run()


@cli.command()
@click.argument('app_name')
def info(app_name: str):
    """Get detailed information about a calculator skin."""
    app_class = AppRegistry.get_app_class(app_name)
    if not app_class:
        click.echo(f"Unknown application: {app_name}", err=True)
        sys.exit(1)

    config = app_class.get_config()

    click.echo(f"Application: {config.name}")
    click.echo(f"Description: {config.description}")
    click.echo(f"Version: {config.version}")
    click.echo(f"Author: {config.author}")
    click.echo(f"Tags: {', '.join(config.tags)}")

    click.echo("\nKeypad:")
    for row in app_class.KEYPAD:
        click.echo(f"  {' '.join(row)}")

    bindings = getattr(app_class, 'BINDINGS', [])
    if bindings:
        click.echo("\nKey Bindings:")
        for binding in bindings:
            if len(binding) >= 3:
                key, action, description = binding[:3]
                click.echo(f"  {key}: {description}")


@cli.command(name="eval")
@click.argument('keys')
@click.option('--trace', is_flag=True, help='Print the display after every key')
def eval_keys(keys: str, trace: bool):
    """Evaluate a key sequence such as '12+3*4=' and print the display."""
    try:
        tokens = tokenize(keys)
    except UnknownSymbolError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    engine = CalculatorEngine()
    for token in tokens:
        display = engine.handle(token)
        if trace:
            click.echo(f"{token.symbol:>2}  {display}")

    if not trace:
        click.echo(engine.display)


if __name__ == "__main__":
    cli()
