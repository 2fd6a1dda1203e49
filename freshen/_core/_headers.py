from __future__ import annotations

from typing import (
    Any,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
)

"""
HTTP header containers and entity-tag parsing.

The character classes follow RFC 7230 / RFC 7232.
"""

CACHE_CONTROL = "Cache-Control"
EXPIRES = "Expires"
ETAG = "ETag"
LAST_MODIFIED = "Last-Modified"
IF_NONE_MATCH = "If-None-Match"
IF_MODIFIED_SINCE = "If-Modified-Since"


def is_etagc(c: str) -> bool:
    """
    Check if character is valid inside an opaque entity tag.

    Per RFC 7232 Section 2.3:
    etagc = %x21 / %x23-7E / obs-text
    obs-text = %x80-FF

    Args:
        c: Single character string

    Returns:
        True if character may appear between the quotes of an entity tag

    Examples:
        >>> is_etagc('a')
        True
        >>> is_etagc(',')
        True
        >>> is_etagc('"')
        False
        >>> is_etagc(' ')
        False
    """
    if not c:
        return False
    b = ord(c)
    return b == 0x21 or (0x23 <= b <= 0x7E) or b >= 0x80


def is_weak(tag: str) -> bool:
    return tag.startswith("W/")


def opaque_tag(tag: str) -> str:
    """
    Strip the weakness indicator from an entity tag.

    Examples:
        >>> opaque_tag('W/"abc"')
        '"abc"'
        >>> opaque_tag('"abc"')
        '"abc"'
    """
    return tag[2:] if is_weak(tag) else tag


def quote_etag(value: Any) -> str:
    """
    Render a validator as an entity tag.

    Values that already look like an entity tag (strong or weak) are kept
    as they are, everything else is converted to a string and double-quoted.

    Examples:
        >>> quote_etag("abc")
        '"abc"'
        >>> quote_etag('"abc"')
        '"abc"'
        >>> quote_etag('W/"abc"')
        'W/"abc"'
        >>> quote_etag(1440504000)
        '"1440504000"'
    """
    text = str(value)
    opaque = opaque_tag(text)
    if len(opaque) >= 2 and opaque[0] == '"' and opaque[-1] == '"':
        return text
    return f'"{text}"'


def read_entity_tag(raw: str, start: int) -> Tuple[int, Optional[str]]:
    """
    Read one entity tag from ``raw`` beginning at ``start``.

    Per RFC 7232 Section 2.3:
    entity-tag = [ weak ] opaque-tag
    weak       = %x57.2F ; "W/", case-sensitive
    opaque-tag = DQUOTE *etagc DQUOTE

    Returns:
        Tuple of (end, tag) where:
        - end: index right after the consumed characters
        - tag: the entity tag including quotes and weakness prefix, or None
          when the characters at ``start`` are not a valid entity tag

    Examples:
        >>> read_entity_tag('"abc", "def"', 0)
        (5, '"abc"')
        >>> read_entity_tag('W/"abc"', 0)
        (7, 'W/"abc"')
        >>> read_entity_tag('abc', 0)
        (0, None)
    """
    i = start
    prefix = ""
    if raw.startswith("W/", i):
        prefix = "W/"
        i += 2

    if i >= len(raw) or raw[i] != '"':
        return start, None

    j = i + 1
    while j < len(raw) and raw[j] != '"':
        if not is_etagc(raw[j]):
            return start, None
        j += 1

    if j >= len(raw):
        # Closing quote is missing
        return start, None

    return j + 1, prefix + raw[i : j + 1]


def parse_if_none_match(value: str) -> List[str]:
    """
    Parse an If-None-Match header value into a list of entity tags.

    Per RFC 7232 Section 3.2:
    If-None-Match = "*" / 1#entity-tag

    Malformed members are skipped up to the next comma, so a single bad tag
    does not hide the valid ones around it.

    Examples:
        >>> parse_if_none_match('"abc", W/"def"')
        ['"abc"', 'W/"def"']
        >>> parse_if_none_match('*')
        ['*']
        >>> parse_if_none_match('')
        []
    """
    tags: List[str] = []
    i = 0
    length = len(value)

    while i < length:
        # Skip whitespace and list separators
        while i < length and value[i] in (" ", "\t", ","):
            i += 1

        if i >= length:
            break

        if value[i] == "*":
            tags.append("*")
            i += 1
            continue

        end, tag = read_entity_tag(value, i)
        if tag is None:
            # Skip to the next list member
            while i < length and value[i] != ",":
                i += 1
            continue

        tags.append(tag)
        i = end

    return tags


class Headers(MutableMapping[str, str]):
    """
    Case-insensitive header map.

    Setting a header replaces its previous value. The name casing of the last
    assignment is kept for iteration, so the map can be handed to a framework
    that writes header names verbatim.
    """

    def __init__(self, headers: Optional[Mapping[str, str]] = None) -> None:
        self._headers: dict[str, Tuple[str, str]] = {}
        if headers:
            self.merge(headers)

    def merge(self, other: Mapping[str, str]) -> None:
        for key, value in other.items():
            self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._headers[key.lower()][1]

    def __setitem__(self, key: str, value: str) -> None:
        self._headers[key.lower()] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._headers[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._headers.values())

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def __eq__(self, other_headers: Any) -> Any:
        if isinstance(other_headers, Headers):
            other_headers = dict(other_headers.items())
        if not isinstance(other_headers, Mapping):
            return NotImplemented
        return {k.lower(): v for k, v in self.items()} == {k.lower(): v for k, v in other_headers.items()}
