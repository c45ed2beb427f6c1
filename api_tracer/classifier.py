"""URL classification for observed network traffic."""

from __future__ import annotations

from .models import TraceConfig, TrafficKind


class UrlClassifier:
    """Sorts URLs into API, silenced, blacklisted or ordinary traffic.

    Matching is plain substring containment. Blacklisted entries are checked
    first, then silenced ones, so a silenced API endpoint (a keep-alive ping,
    say) never reaches the trace.
    """

    def __init__(self, config: TraceConfig):
        self.config = config

    def is_blacklisted(self, url: str) -> bool:
        return any(entry in url for entry in self.config.blacklisted)

    def is_silenced(self, url: str) -> bool:
        return any(entry in url for entry in self.config.silenced)

    def is_api(self, url: str) -> bool:
        return self.config.api_path in url

    def classify(self, url: str) -> TrafficKind:
        if self.is_blacklisted(url):
            return TrafficKind.BLACKLISTED
        if self.is_silenced(url):
            return TrafficKind.SILENCED
        if self.is_api(url):
            return TrafficKind.API
        return TrafficKind.ORDINARY

    def truncate_url(self, url: str) -> str:
        """Shorten embedded-data and other known long URLs for display."""
        max_len = self.config.max_url_length
        if len(url) <= max_len:
            return url
        if not any(pattern in url for pattern in self.config.truncate_patterns):
            return url
        return url[:max_len] + "..."
