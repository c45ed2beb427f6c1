"""Data models for API Tracer."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TrafficKind(str, Enum):
    API = "api"
    SILENCED = "silenced"
    BLACKLISTED = "blacklisted"
    ORDINARY = "ordinary"


class ObservedExchange(BaseModel):
    """A completed request/response pair seen by the browser."""

    method: str
    status: int
    url: str  # already truncated for display
    request_body: Optional[str] = None
    response_body: str = ""


class TraceConfig(BaseModel):
    """Configuration for a trace run."""

    # Classification
    api_path: str = "/api/v3/"
    silenced: list[str] = Field(default_factory=lambda: [
        "/api/v3/ping",
        "/appcache.html",
        "/loading-spinner.svg",
        "/api/v3/getUserAnalyticsSettings",
    ])
    blacklisted: list[str] = Field(default_factory=lambda: [
        "amplitude.com/",
        "fullstory.com/",
        "intercom.io/",
        "segment.io/",
        "segment.com/",
        "loggly.com/",
    ])
    truncate_patterns: list[str] = Field(default_factory=lambda: ["data:"])
    max_url_length: int = 72

    # Authentication
    token_env: str = "NOTION_TOKEN"
    cookie_name: str = "token_v2"
    cookie_domain: str = "www.notion.so"

    # Run
    output_path: str = "notion_api_trace.txt"
    wait_time: int = 5000  # settle delay after network idle (milliseconds)
    navigation_timeout: int = 30000
    headless: bool = True
    only_api: bool = False
