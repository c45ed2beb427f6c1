"""The in-memory trace log and its file output."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from .formatter import format_json, summary_line
from .models import ObservedExchange

SEPARATOR = "-------------------------------"


class TraceLog:
    """Ordered, append-only list of trace records.

    Ordinary traffic adds a single summary line. API traffic adds a group of
    four records: summary, request body, response body and a separator.
    """

    def __init__(self):
        self.records: list[str] = []
        self.api_calls: int = 0
        self.summaries: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def add_summary(self, exchange: ObservedExchange):
        self.records.append(summary_line(exchange))
        self.summaries += 1

    def add_api_exchange(self, exchange: ObservedExchange):
        self.records.extend([
            summary_line(exchange),
            format_json(exchange.request_body),
            format_json(exchange.response_body),
            SEPARATOR,
        ])
        self.api_calls += 1

    def render(self) -> str:
        return "\n".join(self.records)

    def write(self, path: Union[str, Path]) -> Path:
        """Write the log to ``path`` in one step, replacing any old trace."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(self.render())
            os.replace(tmp_path, path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        return path
