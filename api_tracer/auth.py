"""Session authentication for traced pages."""

from __future__ import annotations

import os
from typing import Optional

from playwright.async_api import BrowserContext
from rich.console import Console

from .models import TraceConfig

console = Console()


class AuthHandler:
    """Attaches a logged-in session cookie when a token is available."""

    def __init__(self, config: TraceConfig):
        self.config = config

    def get_token(self) -> Optional[str]:
        """Return the session token from the environment, if set."""
        token = os.environ.get(self.config.token_env, "")
        return token or None

    async def setup_auth(self, context: BrowserContext) -> bool:
        """Add the session cookie to the context. Returns True if one was set."""
        token = self.get_token()
        env_name = self.config.token_env

        if not token:
            console.print(f"[yellow]only public pages, {env_name} env var not set[/]")
            return False

        console.print(f"[green]✓[/] {env_name} set, can access private pages")
        await context.add_cookies([{
            "name": self.config.cookie_name,
            "value": token,
            "domain": self.config.cookie_domain,
            "path": "/",
        }])
        return True
