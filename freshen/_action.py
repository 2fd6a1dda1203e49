from __future__ import annotations

import logging
from enum import Enum
from typing import Any, ClassVar, Mapping, Optional

from typing_extensions import assert_never

from freshen._core._conditional import ConditionalGet, ConditionalOptions, LastModified
from freshen._core._directives import CacheControl, DirectiveInput
from freshen._core._expires import Amount, Expires
from freshen._core._headers import Headers
from freshen._core.models import Continue, Halt, Outcome, Request, Response
from freshen._synchronization import set_class_attribute_once

logger = logging.getLogger(__name__)

NOT_MODIFIED = 304


class CacheHeaderState(Enum):
    UNSET = "unset"
    PER_REQUEST_SET = "per_request_set"
    FINALIZED = "finalized"


class CacheableAction:
    """
    Request handler with HTTP cache helpers.

    Subclasses implement `handle` and may declare class-wide defaults with
    `declare_cache_control` and `declare_expires`. Calling the action runs
    `handle` and then `finish`, which fills in the defaults for any cache
    header the handler did not set itself.

    Example:
        ```python
        from freshen import CacheableAction, Halt

        class ShowArticle(CacheableAction):
            def handle(self):
                article = load_article()
                outcome = self.fresh(etag=article.revision, last_modified=article.updated_at)
                if isinstance(outcome, Halt):
                    return outcome
                self.cache_control("public", {"max_age": 900})
                self.response.body = render(article)

        ShowArticle.declare_expires(60, "private")
        response = ShowArticle(request)()
        ```
    """

    conditional_options: ClassVar[ConditionalOptions] = ConditionalOptions()

    _cache_control: ClassVar[Optional[CacheControl]] = None
    _expires: ClassVar[Optional[Expires]] = None

    def __init__(self, request: Request, response: Optional[Response] = None) -> None:
        self.request = request
        self.response = response if response is not None else Response()
        self.cache_state = CacheHeaderState.UNSET

    # Class-wide defaults

    @classmethod
    def declare_cache_control(cls, *values: DirectiveInput) -> CacheControl:
        """
        Declare the default `Cache-Control` header for this action class.

        Only the first declaration on a class takes effect, later calls return
        the existing default unchanged. Defaults are not shared with
        subclasses.
        """
        return set_class_attribute_once(cls, "_cache_control", lambda: CacheControl(*values))

    @classmethod
    def declare_expires(cls, amount: Amount, *values: DirectiveInput) -> Expires:
        """
        Declare the default `Expires` header for this action class.

        Follows the same first-declaration-wins rule as `declare_cache_control`.
        """
        return set_class_attribute_once(cls, "_expires", lambda: Expires(amount, *values))

    @classmethod
    def default_cache_control(cls) -> Optional[CacheControl]:
        return cls.__dict__.get("_cache_control")

    @classmethod
    def default_expires(cls) -> Optional[Expires]:
        return cls.__dict__.get("_expires")

    # Per-request helpers

    @property
    def headers(self) -> Headers:
        return self.response.headers

    def _merge(self, headers: Mapping[str, str]) -> None:
        self.headers.merge(headers)

    def cache_control(self, *values: DirectiveInput) -> None:
        """
        Set the `Cache-Control` header for this response.

        Any number of flag directives (``"public"``, ``"private"``,
        ``"no_cache"``, ``"no_store"``, ``"must_revalidate"``,
        ``"proxy_revalidate"``) may be followed by a mapping of value
        directives (``max_age``, ``s_maxage``, ``max_stale``, ``min_stale``).
        A later call replaces the header set by an earlier one.
        """
        headers = CacheControl(*values).headers
        if not headers:
            return
        self._merge(headers)
        self.cache_state = CacheHeaderState.PER_REQUEST_SET

    def expires(self, amount: Amount, *values: DirectiveInput) -> None:
        """
        Set the `Expires` header and the matching `Cache-Control: max-age`.

        ``amount`` is a number of seconds from now, a ``timedelta`` or the
        ``datetime`` at which the response goes stale. The other values are
        passed on as for `cache_control`.
        """
        self._merge(Expires(amount, *values).headers)
        self.cache_state = CacheHeaderState.PER_REQUEST_SET

    def fresh(self, etag: Optional[Any] = None, last_modified: Optional[LastModified] = None) -> Outcome:
        """
        Set the `ETag` and/or `Last-Modified` headers and check the request's
        conditional headers against them.

        Returns `Halt` with status 304 when the client's copy is still fresh,
        `Continue` otherwise. The caller returns the `Halt` from `handle` to
        stop processing.
        """
        conditional_get = ConditionalGet(
            self.request.headers,
            etag=etag,
            last_modified=last_modified,
            options=self.conditional_options,
        )
        self._merge(conditional_get.headers)

        if conditional_get.is_fresh():
            logger.debug("Request for %s is fresh, halting with %d", self.request.url, NOT_MODIFIED)
            return Halt(NOT_MODIFIED)
        return Continue()

    # Lifecycle

    def handle(self) -> Optional[Outcome]:
        raise NotImplementedError("Subclasses must implement this method")

    def finish(self) -> None:
        """
        Apply the class-wide default headers.

        A default is used only for header names that are not already present
        on the response, so headers set during the request always win.
        """
        for default in (self.default_cache_control(), self.default_expires()):
            if default is None:
                continue
            for name, value in default.headers.items():
                if name in self.headers:
                    continue
                logger.debug("Applying default %s header: %r", name, value)
                self.headers[name] = value
        self.cache_state = CacheHeaderState.FINALIZED

    def __call__(self) -> Response:
        try:
            outcome = self.handle()
            if outcome is None:
                outcome = Continue()

            if isinstance(outcome, Halt):
                self.response.status_code = outcome.status_code
                self.response.body = b""
            elif isinstance(outcome, Continue):
                pass
            else:
                assert_never(outcome)
        finally:
            self.finish()
        return self.response
