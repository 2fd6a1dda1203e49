from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Mapping, Tuple, Union

from freshen._core._headers import CACHE_CONTROL
from freshen._exceptions import ConflictingDirective, InvalidDirective

logger = logging.getLogger("freshen.core.directives")


class Directive(str, Enum):
    """
    Cache-Control directives that carry no value.

    RFC 2616 Section 14.9:
    https://www.rfc-editor.org/rfc/rfc2616#section-14.9
    """

    PUBLIC = "public"
    PRIVATE = "private"
    NO_CACHE = "no-cache"
    NO_STORE = "no-store"
    MUST_REVALIDATE = "must-revalidate"
    PROXY_REVALIDATE = "proxy-revalidate"


class ValueDirective(str, Enum):
    """
    Cache-Control directives bound to a number of seconds.

    Members are declared in the order they are rendered.
    """

    MAX_AGE = "max-age"
    S_MAXAGE = "s-maxage"
    MAX_STALE = "max-stale"
    MIN_STALE = "min-stale"


VALUE_DIRECTIVE_ALIASES = {
    "s-max-age": ValueDirective.S_MAXAGE,
}

DirectiveValues = Mapping[Union[str, ValueDirective], int]
DirectiveInput = Union[str, Directive, DirectiveValues]


def normalize_directive(text: str) -> str:
    return text.strip().lower().replace("_", "-")


def to_directive(symbol: Union[str, Directive]) -> Directive:
    """
    Resolve a flag symbol to a `Directive`.

    Accepts enum members as well as ``snake_case`` and ``header-case`` strings.

    Examples:
        >>> to_directive("no_store")
        <Directive.NO_STORE: 'no-store'>
        >>> to_directive("must-revalidate")
        <Directive.MUST_REVALIDATE: 'must-revalidate'>
    """
    if isinstance(symbol, Directive):
        return symbol
    if isinstance(symbol, ValueDirective):
        raise InvalidDirective(f"The directive '{symbol.value}' necessitates a value.")
    if not isinstance(symbol, str):
        raise InvalidDirective(f"Expected a directive name, got {symbol!r}.")

    name = normalize_directive(symbol)
    try:
        return Directive(name)
    except ValueError:
        if name in VALUE_DIRECTIVE_ALIASES or name in ValueDirective._value2member_map_:
            raise InvalidDirective(f"The directive '{symbol}' necessitates a value.") from None
        raise InvalidDirective(f"Unrecognized Cache-Control directive '{symbol}'.") from None


def to_value_directive(key: Union[str, ValueDirective]) -> ValueDirective:
    """
    Resolve a value-directive key to a `ValueDirective`.

    Examples:
        >>> to_value_directive("max_age")
        <ValueDirective.MAX_AGE: 'max-age'>
        >>> to_value_directive("s_max_age")
        <ValueDirective.S_MAXAGE: 's-maxage'>
    """
    if isinstance(key, ValueDirective):
        return key
    if isinstance(key, Directive):
        raise InvalidDirective(f"The directive '{key.value}' should have no value, but it does.")
    if not isinstance(key, str):
        raise InvalidDirective(f"Expected a directive name, got {key!r}.")

    name = normalize_directive(key)
    if name in VALUE_DIRECTIVE_ALIASES:
        return VALUE_DIRECTIVE_ALIASES[name]
    try:
        return ValueDirective(name)
    except ValueError:
        if name in Directive._value2member_map_:
            raise InvalidDirective(f"The directive '{key}' should have no value, but it does.") from None
        raise InvalidDirective(f"Unrecognized Cache-Control directive '{key}'.") from None


def validate_seconds(directive: ValueDirective, value: object) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDirective(f"The argument '{directive.value}' should be an integer, but got {value!r}.")
    if value < 0:
        raise InvalidDirective(f"The argument '{directive.value}' should not be negative, but got {value}.")
    return value


def parse_directives(
    values: Tuple[DirectiveInput, ...],
) -> Tuple[List[Directive], Dict[ValueDirective, int]]:
    """
    Split builder arguments into flag directives and value directives.

    Only the last argument may be a mapping of value directives, everything
    before it must name a flag directive. Duplicate flags are collapsed
    to their first occurrence.

    Raises:
        InvalidDirective: for unknown names, misplaced mappings, or values
            that are not non-negative integers.
        ConflictingDirective: when a value directive is given twice through
            an alias (``s_maxage`` and ``s_max_age``).
    """
    flag_symbols: Tuple[DirectiveInput, ...] = values
    mapping: DirectiveValues = {}
    if values and isinstance(values[-1], Mapping):
        flag_symbols, mapping = values[:-1], values[-1]

    flags: List[Directive] = []
    for symbol in flag_symbols:
        if isinstance(symbol, Mapping):
            raise InvalidDirective("Value directives must be passed as the last argument.")
        directive = to_directive(symbol)
        if directive not in flags:
            flags.append(directive)

    directive_values: Dict[ValueDirective, int] = {}
    for key, value in mapping.items():
        directive = to_value_directive(key)
        if directive in directive_values:
            raise ConflictingDirective(f"The directive '{directive.value}' was given more than once.")
        directive_values[directive] = validate_seconds(directive, value)

    return flags, directive_values


class CacheControl:
    """
    A `Cache-Control` response header built from symbolic directives.

    Example:
        ```python
        from freshen import CacheControl

        cache_control = CacheControl("public", {"max_age": 900, "s_maxage": 86400})
        cache_control.value  # 'public, max-age=900, s-maxage=86400'
        ```

    The header value is computed once, at construction, so invalid input fails
    where the directive is declared.
    """

    HEADER = CACHE_CONTROL

    def __init__(self, *values: DirectiveInput) -> None:
        self.flags, self.values = parse_directives(values)
        self._value = self._render()
        logger.debug("Built Cache-Control header: %r", self._value)

    def _render(self) -> str:
        tokens = [flag.value for flag in self.flags]
        for directive in ValueDirective:
            if directive in self.values:
                tokens.append(f"{directive.value}={self.values[directive]}")
        return ", ".join(tokens)

    @property
    def value(self) -> str:
        return self._value

    @property
    def headers(self) -> Dict[str, str]:
        if not self._value:
            return {}
        return {self.HEADER: self._value}

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CacheControl) and self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._value}>"


def build_cache_control(*values: DirectiveInput) -> str:
    """
    Render directives to a `Cache-Control` header value.

    Examples:
        >>> build_cache_control("private", "no_cache", "no_store")
        'private, no-cache, no-store'
        >>> build_cache_control("public", {"s_max_age": 60, "max_age": 30})
        'public, max-age=30, s-maxage=60'
    """
    return CacheControl(*values).value
