"""Run driver: load one page in a browser and record its traffic."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

from playwright.async_api import async_playwright
from rich.console import Console
from rich.markup import escape

from .auth import AuthHandler
from .models import TraceConfig
from .recorder import ResponseRecorder
from .trace_log import TraceLog

console = Console()


class TraceSession:
    """Loads a page once and collects a trace of its network traffic."""

    def __init__(self, config: TraceConfig):
        self.config = config
        self.trace_log = TraceLog()
        self.recorder = ResponseRecorder(config, self.trace_log)
        self.auth_handler = AuthHandler(config)
        self.output_path: Optional[Path] = None
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    async def run(self, url: str) -> TraceLog:
        """Trace ``url`` and write the trace file. Navigation errors propagate."""
        self.start_time = datetime.now()

        console.print(f"[bold]Target:[/] {escape(url)}")

        async with async_playwright() as p:
            console.print("[cyan]🚀 Launching browser...[/]")
            browser = await p.chromium.launch(headless=self.config.headless)
            try:
                context = await browser.new_context()
                await self.auth_handler.setup_auth(context)

                page = await context.new_page()
                await self.recorder.setup(page)

                await page.goto(url, wait_until="networkidle", timeout=self.config.navigation_timeout)

                # Late async calls after the network went idle
                await asyncio.sleep(self.config.wait_time / 1000)
            finally:
                await browser.close()

        self.end_time = datetime.now()
        self.output_path = self.trace_log.write(self.config.output_path)
        console.print(f"[green]✓[/] Wrote api trace to {escape(str(self.output_path))}")
        self._print_summary()

        return self.trace_log

    def _print_summary(self):
        console.print(f"  [dim]API calls traced: {self.trace_log.api_calls}[/]")
        console.print(f"  [dim]Other responses: {self.trace_log.summaries}[/]")
        console.print(f"  [dim]Blocked requests: {self.recorder.aborted}[/]")
        if self.recorder.failed:
            console.print(f"  [dim yellow]Unreadable responses: {self.recorder.failed}[/]")
        console.print(f"  [dim]Duration: {self.duration_seconds:.1f}s[/]")
