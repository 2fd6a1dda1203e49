from __future__ import annotations

import logging
import math
import time
from datetime import datetime, timedelta
from typing import Dict, Mapping, Optional, Tuple, Union

from freshen._core._directives import (
    CacheControl,
    DirectiveInput,
    DirectiveValues,
    ValueDirective,
    to_value_directive,
)
from freshen._core._headers import EXPIRES
from freshen._exceptions import ConflictingDirective, InvalidDirective
from freshen._utils import generate_http_date, to_timestamp

logger = logging.getLogger("freshen.core.expires")

Amount = Union[int, timedelta, datetime]


class Expires:
    """
    Paired `Expires` and `Cache-Control: max-age` headers.

    ``amount`` is either a number of seconds from now (an ``int`` or a
    ``timedelta``) or the absolute point in time the response goes stale
    (a ``datetime``, naive values are read as UTC). The remaining values are
    Cache-Control directives as accepted by `CacheControl`, without
    ``max_age``, which is derived from ``amount``.

    Directives are validated at construction. The dates are computed whenever
    `headers` is read, so a relative expiry declared once stays relative to
    each response.

    Example:
        ```python
        from freshen import Expires

        expires = Expires(300, "private", "no_cache")
        expires.headers
        # {'Expires': 'Mon, 25 Aug 2015 12:05:00 GMT',
        #  'Cache-Control': 'private, no-cache, max-age=300'}
        ```
    """

    HEADER = EXPIRES

    def __init__(self, amount: Amount, *values: DirectiveInput) -> None:
        flags: Tuple[DirectiveInput, ...] = values
        mapping: DirectiveValues = {}
        if values and isinstance(values[-1], Mapping):
            flags, mapping = values[:-1], values[-1]

        for key in mapping:
            if to_value_directive(key) is ValueDirective.MAX_AGE:
                raise ConflictingDirective(
                    "The 'max-age' directive is derived from the expiry amount and cannot be given explicitly."
                )

        self._flags = flags
        self._mapping = mapping
        self._expires_at: Optional[float] = None
        self._seconds: Optional[int] = None
        if isinstance(amount, datetime):
            self._expires_at = to_timestamp(amount)
        else:
            self._seconds = self._to_seconds(amount)

        # Fail fast on bad directives or a negative amount
        self.cache_control_at(time.time())

    @staticmethod
    def _to_seconds(amount: Union[int, timedelta]) -> int:
        if isinstance(amount, timedelta):
            return math.floor(amount.total_seconds())
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidDirective(
                f"The expiry amount should be seconds, a timedelta or a datetime, but got {amount!r}."
            )
        return amount

    def expires_at(self, now: float) -> float:
        if self._expires_at is not None:
            return self._expires_at
        assert self._seconds is not None
        return now + self._seconds

    def max_age(self, now: float) -> int:
        if self._seconds is not None:
            return self._seconds
        assert self._expires_at is not None
        return max(0, math.floor(self._expires_at - now))

    def cache_control_at(self, now: float) -> CacheControl:
        return CacheControl(*self._flags, {**self._mapping, ValueDirective.MAX_AGE: self.max_age(now)})

    def headers_at(self, now: float) -> Dict[str, str]:
        expires = generate_http_date(self.expires_at(now))
        cache_control = self.cache_control_at(now)
        logger.debug("Built Expires header: %r with Cache-Control %r", expires, cache_control.value)
        return {self.HEADER: expires, **cache_control.headers}

    @property
    def headers(self) -> Dict[str, str]:
        return self.headers_at(time.time())

    def __repr__(self) -> str:
        amount = self._seconds if self._seconds is not None else generate_http_date(self._expires_at)
        return f"<{type(self).__name__} {amount}>"


def build_expires(amount: Amount, *values: DirectiveInput) -> Dict[str, str]:
    """
    Render the `Expires` and `Cache-Control` headers for ``amount``.

    Both values are derived from a single reading of the clock.
    """
    return Expires(amount, *values).headers
