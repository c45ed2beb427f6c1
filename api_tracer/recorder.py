"""Network recorder that turns browser traffic into trace records."""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Page, Request, Response, Route
from rich.console import Console
from rich.markup import escape

from .classifier import UrlClassifier
from .formatter import pad_method
from .models import ObservedExchange, TraceConfig, TrafficKind
from .trace_log import TraceLog

console = Console()


class ResponseRecorder:
    """Observes page traffic and appends what matters to a trace log."""

    def __init__(self, config: TraceConfig, trace_log: TraceLog, classifier: Optional[UrlClassifier] = None):
        self.config = config
        self.trace_log = trace_log
        self.classifier = classifier or UrlClassifier(config)

        self.aborted: int = 0
        self.recorded: int = 0
        self.failed: int = 0

    async def setup(self, page: Page):
        """Set up request interception and response listeners on the page."""
        await page.route("**/*", self.handle_route)
        page.on("response", self.handle_response)
        page.on("requestfailed", self.handle_request_failed)

    async def handle_route(self, route: Route):
        """Abort tracking requests before they leave the browser."""
        if self.classifier.is_blacklisted(route.request.url):
            self.aborted += 1
            await route.abort()
            return
        await route.continue_()

    def handle_request_failed(self, request: Request):
        url = request.url
        if self.classifier.is_blacklisted(url):
            # aborted by handle_route
            return
        console.print(f"[yellow]request failed url:[/] {escape(url)}", soft_wrap=True)

    async def read_body(self, response: Response) -> str:
        """Return the response body as text, decoding binary bodies leniently."""
        try:
            return await response.text()
        except UnicodeDecodeError:
            body_bytes = await response.body()
            return body_bytes.decode("utf-8", errors="replace")

    async def handle_response(self, response: Response):
        """Read the response body and record the exchange."""
        request = response.request
        url = request.url
        kind = self.classifier.classify(url)
        if kind in (TrafficKind.SILENCED, TrafficKind.BLACKLISTED):
            return

        method = pad_method(request.method)
        shown_url = self.classifier.truncate_url(url)
        status = response.status

        post_data = None
        try:
            post_data = request.post_data
        except Exception:
            pass  # binary post body

        try:
            body = await self.read_body(response)
        except Exception as e:
            self.failed += 1
            console.print(
                f"[red]{escape(method)} {escape(shown_url)} {status} ex: {escape(str(e))} FAIL !!![/]",
                soft_wrap=True,
            )
            return

        console.print(f"{escape(method)} {escape(shown_url)} {status} size: {len(body)}", soft_wrap=True)

        exchange = ObservedExchange(
            method=request.method,
            status=status,
            url=shown_url,
            request_body=post_data,
            response_body=body,
        )

        if kind is TrafficKind.API:
            self.trace_log.add_api_exchange(exchange)
        elif self.config.only_api:
            return
        else:
            self.trace_log.add_summary(exchange)
        self.recorded += 1
