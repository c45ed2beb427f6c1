"""Formatting helpers for trace records."""

from __future__ import annotations

import json
from typing import Optional

from .models import ObservedExchange


def format_json(body: Optional[str]) -> str:
    """Pretty-print a JSON body, or return it untouched if it isn't JSON."""
    if body is None:
        return ""
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return body
    return json.dumps(data, indent=2, ensure_ascii=False)


def pad_method(method: str) -> str:
    # "GET " lines up with "POST" in the console and in the trace
    if method == "GET":
        return "GET "
    return method


def summary_line(exchange: ObservedExchange) -> str:
    return f"{pad_method(exchange.method)} {exchange.status} {exchange.url}"
