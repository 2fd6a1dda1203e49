from freshen._core._conditional import (
    ConditionalGet as ConditionalGet,
    ConditionalOptions as ConditionalOptions,
    Freshness as Freshness,
    evaluate as evaluate,
)
from freshen._core._directives import (
    CacheControl as CacheControl,
    Directive as Directive,
    ValueDirective as ValueDirective,
    build_cache_control as build_cache_control,
)
from freshen._core._expires import Expires as Expires, build_expires as build_expires
from freshen._core._headers import Headers as Headers
from freshen._core.models import (
    Continue as Continue,
    Halt as Halt,
    Outcome as Outcome,
    Request as Request,
    Response as Response,
)

__all__ = (
    ## Builders
    "CacheControl",
    "Directive",
    "ValueDirective",
    "build_cache_control",
    "Expires",
    "build_expires",
    ## Conditional GET
    "ConditionalGet",
    "ConditionalOptions",
    "Freshness",
    "evaluate",
    ## Models
    "Request",
    "Response",
    "Continue",
    "Halt",
    "Outcome",
    ## Headers
    "Headers",
)
