import pytest

from freshen import Headers
from freshen._core._headers import is_etagc, parse_if_none_match, quote_etag, read_entity_tag


class TestHeaders:
    def test_lookup_is_case_insensitive(self):
        headers = Headers({"Cache-Control": "public"})
        assert headers["cache-control"] == "public"
        assert "CACHE-CONTROL" in headers

    def test_assignment_replaces_value(self):
        headers = Headers({"Cache-Control": "public"})
        headers["cache-control"] = "private"
        assert headers["Cache-Control"] == "private"
        assert len(headers) == 1

    def test_iteration_keeps_last_name_casing(self):
        headers = Headers({"etag": '"a"'})
        headers["ETag"] = '"b"'
        assert list(headers) == ["ETag"]
        assert dict(headers.items()) == {"ETag": '"b"'}

    def test_merge(self):
        headers = Headers({"Cache-Control": "public", "ETag": '"a"'})
        headers.merge({"cache-control": "no-store", "Expires": "Tue, 25 Aug 2015 12:00:00 GMT"})
        assert headers == {
            "Cache-Control": "no-store",
            "ETag": '"a"',
            "Expires": "Tue, 25 Aug 2015 12:00:00 GMT",
        }

    def test_delete(self):
        headers = Headers({"ETag": '"a"'})
        del headers["etag"]
        assert "ETag" not in headers

    def test_missing_key(self):
        with pytest.raises(KeyError):
            Headers()["ETag"]

    def test_non_string_membership(self):
        assert 1 not in Headers({"ETag": '"a"'})

    def test_equality(self):
        assert Headers({"ETag": '"a"'}) == {"etag": '"a"'}
        assert Headers({"ETag": '"a"'}) == Headers({"ETAG": '"a"'})
        assert Headers({"ETag": '"a"'}) != Headers({"ETag": '"b"'})
        assert Headers() != 1


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param('"abc"', ['"abc"'], id="single"),
        pytest.param('"abc", W/"def"', ['"abc"', 'W/"def"'], id="strong_and_weak"),
        pytest.param("*", ["*"], id="wildcard"),
        pytest.param('  "a" ,,"b"\t', ['"a"', '"b"'], id="extra_separators"),
        pytest.param('""', ['""'], id="empty_opaque_tag"),
        pytest.param('w/"abc"', [], id="lowercase_weak_prefix"),
        pytest.param('"a b"', [], id="space_inside_tag"),
    ],
)
def test_parse_if_none_match(value, expected):
    assert parse_if_none_match(value) == expected


def test_read_entity_tag_offset():
    assert read_entity_tag('"a", "b"', 5) == (8, '"b"')


def test_etagc():
    assert is_etagc("!")
    assert is_etagc("\x80")
    assert not is_etagc('"')
    assert not is_etagc("")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", '"abc"'),
        ('"abc"', '"abc"'),
        ('W/"abc"', 'W/"abc"'),
        (42, '"42"'),
        ('"', '"""'),
    ],
)
def test_quote_etag(value, expected):
    assert quote_etag(value) == expected
