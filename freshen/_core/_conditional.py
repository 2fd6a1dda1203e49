from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from freshen._core._headers import (
    ETAG,
    IF_MODIFIED_SINCE,
    IF_NONE_MATCH,
    LAST_MODIFIED,
    Headers,
    opaque_tag,
    parse_if_none_match,
    quote_etag,
)
from freshen._utils import generate_http_date, parse_date, to_timestamp, whole_seconds

logger = logging.getLogger("freshen.core.conditional")

LastModified = Union[datetime, int, float]


@dataclass
class ConditionalOptions:
    """
    Configuration options for conditional GET evaluation.

    Attributes:
    ----------
    weak_comparison : bool
        Controls how entity tags from If-None-Match are compared.

        RFC 7232 Section 2.3.2: Comparison
        https://www.rfc-editor.org/rfc/rfc7232#section-2.3.2

        - Exact (False): the request must carry the very tag the resource
          reports, including any ``W/`` prefix.
        - Weak (True): the ``W/`` prefix is ignored on both sides, which is the
          comparison RFC 7232 prescribes for If-None-Match.

        Default: False (exact comparison)

        Examples:
        --------
        >>> options = ConditionalOptions(weak_comparison=True)
    """

    weak_comparison: bool = False
    """When True, `W/"x"` and `"x"` are considered the same entity tag."""


@dataclass
class Freshness:
    headers: Dict[str, str] = field(default_factory=dict)
    is_fresh: bool = False


class ConditionalGet:
    """
    Validator headers for a resource and the freshness decision for a request.

    The evaluator computes ``ETag``/``Last-Modified`` response headers from
    the supplied validators and compares them with ``If-None-Match`` and
    ``If-Modified-Since`` from the request. It never ends a request by itself.

    Freshness rules:
        - The ETag check applies when an ``etag`` was supplied and the request
          carries If-None-Match. It passes when the request lists ``*`` or
          the resource's quoted tag.
        - The date check applies when ``last_modified`` was supplied and the
          request carries a parseable If-Modified-Since. It passes when the
          resource was last modified at or before that date, compared in whole
          seconds.
        - The resource is fresh when at least one check applies and every
          applicable check passes.
    """

    def __init__(
        self,
        request_headers: Mapping[str, str],
        etag: Optional[Any] = None,
        last_modified: Optional[LastModified] = None,
        options: Optional[ConditionalOptions] = None,
    ) -> None:
        self._request_headers = request_headers if isinstance(request_headers, Headers) else Headers(request_headers)
        self.options = options or ConditionalOptions()
        self.etag = quote_etag(etag) if etag is not None else None
        self.last_modified = to_timestamp(last_modified) if last_modified is not None else None

    @property
    def headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.etag is not None:
            headers[ETAG] = self.etag
        if self.last_modified is not None:
            headers[LAST_MODIFIED] = generate_http_date(whole_seconds(self.last_modified))
        return headers

    def _none_match(self) -> Optional[List[str]]:
        value = self._request_headers.get(IF_NONE_MATCH)
        if value is None:
            return None
        return parse_if_none_match(value)

    def _modified_since(self) -> Optional[int]:
        value = self._request_headers.get(IF_MODIFIED_SINCE)
        if value is None:
            return None
        since = parse_date(value)
        if since is None:
            logger.debug("Ignoring malformed If-Modified-Since header: %r", value)
        return since

    def _etag_matches(self, tags: List[str]) -> bool:
        assert self.etag is not None
        if "*" in tags:
            return True
        if self.options.weak_comparison:
            return opaque_tag(self.etag) in [opaque_tag(tag) for tag in tags]
        return self.etag in tags

    def is_fresh(self) -> bool:
        checks: List[bool] = []

        if self.etag is not None:
            tags = self._none_match()
            if tags is not None:
                fresh_by_etag = self._etag_matches(tags)
                logger.debug("ETag %s against If-None-Match %s: fresh=%s", self.etag, tags, fresh_by_etag)
                checks.append(fresh_by_etag)

        if self.last_modified is not None:
            since = self._modified_since()
            if since is not None:
                fresh_by_date = whole_seconds(self.last_modified) <= since
                logger.debug(
                    "Last-Modified %d against If-Modified-Since %d: fresh=%s",
                    whole_seconds(self.last_modified),
                    since,
                    fresh_by_date,
                )
                checks.append(fresh_by_date)

        if not checks:
            logger.debug("No applicable conditional request headers, the response is not fresh")
            return False
        return all(checks)


def evaluate(
    request_headers: Mapping[str, str],
    etag: Optional[Any] = None,
    last_modified: Optional[LastModified] = None,
    options: Optional[ConditionalOptions] = None,
) -> Freshness:
    conditional_get = ConditionalGet(request_headers, etag=etag, last_modified=last_modified, options=options)
    return Freshness(headers=conditional_get.headers, is_fresh=conditional_get.is_fresh())
