from datetime import datetime, timedelta, timezone

import pytest

from freshen._utils import generate_http_date, parse_date, to_timestamp, whole_seconds


def test_parse_date():
    date = "Tue, 25 Aug 2015 12:00:00 GMT"
    timestamp = parse_date(date)
    assert timestamp == 1440504000


def test_parse_invalid_date():
    date = "0"
    timestamp = parse_date(date)
    assert timestamp is None


def test_parse_date_with_offset():
    assert parse_date("Tue, 25 Aug 2015 13:00:00 +0200") == 1440500400
    assert parse_date("Tue, 25 Aug 2015 07:00:00 -0500") == 1440504000


def test_parse_out_of_range_date():
    assert parse_date("Tue, 25 Aug 10000 12:00:00 GMT") is None


def test_generate_http_date():
    assert generate_http_date(1440504000) == "Tue, 25 Aug 2015 12:00:00 GMT"
    assert generate_http_date(1440504000.99) == "Tue, 25 Aug 2015 12:00:00 GMT"


def test_generate_http_date_defaults_to_now():
    assert generate_http_date().endswith(" GMT")


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(datetime(2015, 8, 25, 12, 0, 0, tzinfo=timezone.utc), id="aware"),
        pytest.param(datetime(2015, 8, 25, 12, 0, 0), id="naive_is_utc"),
        pytest.param(datetime(2015, 8, 25, 14, 0, 0, tzinfo=timezone(timedelta(hours=2))), id="offset"),
        pytest.param(1440504000, id="int"),
        pytest.param(1440504000.0, id="float"),
    ],
)
def test_to_timestamp(value):
    assert to_timestamp(value) == 1440504000.0


@pytest.mark.parametrize("value", [True, "1440504000", None])
def test_to_timestamp_rejects_other_types(value):
    with pytest.raises(TypeError, match="Expected a datetime or a POSIX timestamp"):
        to_timestamp(value)


def test_whole_seconds():
    assert whole_seconds(1440504000.999) == 1440504000
    assert whole_seconds(1440504000) == 1440504000
