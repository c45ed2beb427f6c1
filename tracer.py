#!/usr/bin/env python3
"""
🔎 API Tracer

Loads a web page in a headless browser while recording its network
traffic, to help reverse-engineer undocumented APIs.

A summary of every response is printed to stdout. API calls (URLs containing
/api/v3/ by default) are written to notion_api_trace.txt together with the
pretty-printed request body and JSON response.

Usage:
    python tracer.py https://www.notion.so/Test-text-4c6a54c68b3e4ea2af9cfaabcc88d58d

To access private pages, set NOTION_TOKEN to the value of the token_v2
cookie on the www.notion.so domain.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from api_tracer import __version__
from api_tracer.config_manager import load_config, save_config
from api_tracer.models import TraceConfig
from api_tracer.session import TraceSession

# Initialize CLI app
app = typer.Typer(
    name="api-tracer",
    help="🔎 API Tracer - Record the API calls a web page makes",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

USAGE = """Call me as:
python tracer.py <PAGE_URL>
e.g.:
python tracer.py https://www.notion.so/Test-text-4c6a54c68b3e4ea2af9cfaabcc88d58d"""


def print_usage():
    console.print(USAGE, markup=False, highlight=False)


def version_callback(value: bool):
    if value:
        console.print(f"API Tracer [bold]{__version__}[/]")
        raise typer.Exit()


@app.command()
def trace(
    urls: Optional[List[str]] = typer.Argument(None, metavar="PAGE_URL", help="The page to load and trace"),

    # Configuration
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c",
        envvar="API_TRACER_CONFIG",
        help="JSON file with classifier lists and run settings"
    ),
    save_config_to: Optional[str] = typer.Option(
        None, "--save-config",
        help="Write the effective configuration to this JSON file"
    ),

    # Run options
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Trace file to write (default: notion_api_trace.txt)"
    ),
    wait_time: Optional[int] = typer.Option(
        None, "--wait-time", "-w",
        help="Time to wait after the network goes idle (milliseconds)"
    ),
    headless: Optional[bool] = typer.Option(
        None, "--headless/--no-headless",
        help="Run browser in headless mode"
    ),
    only_api: Optional[bool] = typer.Option(
        None, "--only-api/--all-traffic",
        help="Only write API calls to the trace file, or write all traffic"
    ),
    version: Optional[bool] = typer.Option(
        None, "--version",
        callback=version_callback, is_eager=True,
        help="Show version information"
    ),
):
    """
    🕷️ Load a page and trace the API calls it makes.
    """
    if not urls or len(urls) != 1:
        print_usage()
        return

    config = load_config(config_file)
    if not config:
        raise typer.Exit(1)

    # Override with any CLI arguments provided
    if output:
        config.output_path = output
    if wait_time is not None:
        config.wait_time = wait_time
    if headless is not None:
        config.headless = headless
    if only_api is not None:
        config.only_api = only_api

    if save_config_to:
        save_config(config, save_config_to)

    try:
        asyncio.run(run_trace(urls[0], config))
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Trace interrupted by user[/]")
        raise typer.Exit(1)


async def run_trace(url: str, config: TraceConfig):
    """Execute the trace and write the trace file."""

    try:
        session = TraceSession(config)
        await session.run(url)
    except Exception as e:
        console.print(f"\n[red]✗ Error: {escape(str(e))}[/]")
        raise


if __name__ == "__main__":
    app()
