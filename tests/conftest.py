from datetime import datetime, timezone
from typing import Dict, Optional

from freshen import Headers, Request

NOW = datetime(2015, 8, 25, 12, 0, 0, tzinfo=timezone.utc)
"""Tue, 25 Aug 2015 12:00:00 GMT (1440504000)"""


def create_request(
    headers: Optional[Dict[str, str]] = None,
    method: str = "GET",
    url: str = "https://example.com/articles/1",
) -> Request:
    """Helper to create a request."""
    return Request(method=method, url=url, headers=Headers(headers or {}))
