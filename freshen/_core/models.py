from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from freshen._core._headers import Headers


@dataclass
class Request:
    method: str
    url: str
    headers: Headers = field(default_factory=Headers)


@dataclass
class Response:
    status_code: int = 200
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""


@dataclass
class Continue:
    """The handler goes on and produces the full response."""


@dataclass
class Halt:
    """
    The handler stops here and the response is sent with ``status_code``
    and an empty body.
    """

    status_code: int


Outcome = Union[Continue, Halt]
