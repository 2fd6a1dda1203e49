from __future__ import annotations

import logging
import typing as t

from freshen._core._conditional import ConditionalGet, ConditionalOptions, LastModified
from freshen._core._directives import CacheControl, DirectiveInput
from freshen._core._expires import Amount, Expires

try:
    import fastapi
except ImportError as e:
    raise ImportError(
        "fastapi is required to use freshen.fastapi module. "
        "Please install freshen with the 'fastapi' extra, "
        "e.g., 'pip install freshen[fastapi]'."
    ) from e

logger = logging.getLogger(__name__)


def cache_control(*values: DirectiveInput) -> t.Any:
    """
    Add a `Cache-Control` header to FastAPI responses.

    Directives are validated when the dependency is declared, so a typo
    fails at import time instead of on the first request.

    Args:
        *values: Flag directives (``"public"``, ``"private"``, ``"no_cache"``,
            ``"no_store"``, ``"must_revalidate"``, ``"proxy_revalidate"``),
            optionally followed by a mapping of value directives
            (``max_age``, ``s_maxage``, ``max_stale``, ``min_stale``).

    Returns:
        A dependency that sets the header on the response.

    Examples:
        >>> from fastapi import FastAPI
        >>> from freshen.fastapi import cache_control
        >>>
        >>> app = FastAPI()
        >>>
        >>> @app.get("/api/public/data")
        >>> async def get_data(
        ...     _: None = cache_control("public", {"max_age": 300, "s_maxage": 3600})
        ... ):
        ...     return {"data": "public"}
    """
    header = CacheControl(*values)

    def add_cache_control(response: fastapi.Response) -> None:
        response.headers.update(header.headers)

    return fastapi.Depends(add_cache_control)


def expires(amount: Amount, *values: DirectiveInput) -> t.Any:
    """
    Add `Expires` and `Cache-Control: max-age` headers to FastAPI responses.

    A relative ``amount`` is measured from the time each response is produced.

    Examples:
        >>> @app.get("/api/news")
        >>> async def get_news(_: None = expires(600, "public")):
        ...     return {"news": "articles"}
    """
    header = Expires(amount, *values)

    def add_expires(response: fastapi.Response) -> None:
        response.headers.update(header.headers)

    return fastapi.Depends(add_expires)


def fresh(
    request: fastapi.Request,
    response: fastapi.Response,
    etag: t.Optional[t.Any] = None,
    last_modified: t.Optional[LastModified] = None,
    options: t.Optional[ConditionalOptions] = None,
) -> t.Optional[fastapi.Response]:
    """
    Set validator headers and answer conditional GET requests.

    ``ETag`` and ``Last-Modified`` are written to ``response``. When the
    request's If-None-Match/If-Modified-Since show the client's copy is
    still fresh, a 304 response carrying the same headers is returned for
    the endpoint to send back; otherwise the result is None.

    Examples:
        >>> @app.get("/articles/{slug}")
        >>> async def show(slug: str, request: Request, response: Response):
        ...     article = load(slug)
        ...     not_modified = fresh(request, response, etag=article.revision)
        ...     if not_modified is not None:
        ...         return not_modified
        ...     return article.to_dict()
    """
    conditional_get = ConditionalGet(
        dict(request.headers),
        etag=etag,
        last_modified=last_modified,
        options=options,
    )
    headers = conditional_get.headers
    response.headers.update(headers)

    if not conditional_get.is_fresh():
        return None

    logger.debug("Request for %s is fresh, answering with 304", request.url.path)
    not_modified = fastapi.Response(status_code=304)
    not_modified.headers.update(headers)
    for name in ("Cache-Control", "Expires"):
        if name in response.headers:
            not_modified.headers[name] = response.headers[name]
    return not_modified
