# tests/test_common/test_common_utils.py
"""Tests for shared time, distance and flat-file helpers."""

from datetime import datetime

import pytest

from src.catalog_domain.domain.entities.product import Product
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import RecordFormatError
from src.common.utils.date_utils import current_timestamp, format_timestamp, now, parse_timestamp
from src.common.utils.flat_file_utils import (
    format_id_list,
    parse_id_list,
    read_records,
    split_record,
    write_records,
)
from src.common.utils.geo_utils import KM_PER_DEGREE, is_valid_coordinate, planar_distance_km


def test_format_and_parse_timestamp() -> None:
    moment = datetime(2026, 10, 18, 9, 5)

    assert format_timestamp(moment) == "20261018:09:05"
    assert parse_timestamp("20261018:09:05") == moment


@pytest.mark.parametrize("value", ["", "2026-10-18 09:05", "not a time"])
def test_parse_timestamp_invalid(value) -> None:
    assert parse_timestamp(value) is None


def test_current_timestamp_shape() -> None:
    stamp = current_timestamp()

    assert len(stamp) == len("YYYYMMDD:HH:MM")
    assert parse_timestamp(stamp) is not None


def test_now_uses_configured_timezone(mocker) -> None:
    mocker.patch.object(settings, "TIMEZONE", "Asia/Kuala_Lumpur")

    moment = now()

    assert moment.tzinfo is not None
    assert moment.utcoffset().total_seconds() == 8 * 3600


def test_now_defaults_to_local_naive_time() -> None:
    assert now().tzinfo is None


def test_planar_distance() -> None:
    assert planar_distance_km(0.0, 0.0, 3.0, 4.0) == pytest.approx(5 * KM_PER_DEGREE)
    assert planar_distance_km(3.168, 101.708, 3.168, 101.708) == 0.0


def test_coordinate_ranges() -> None:
    assert is_valid_coordinate(90.0, -180.0) is True
    assert is_valid_coordinate(90.1, 0.0) is False
    assert is_valid_coordinate(0.0, 180.1) is False


def test_split_record() -> None:
    assert split_record("1|Rice|5.5|1000\r\n", "product", 4) == ["1", "Rice", "5.5", "1000"]

    with pytest.raises(RecordFormatError) as exc_info:
        split_record("1|Rice", "product", 4)

    assert "Invalid product data format" in str(exc_info.value)


def test_id_lists() -> None:
    assert format_id_list([1, 2, 3]) == "1,2,3"
    assert parse_id_list("1,2,,3,") == (1, 2, 3)
    assert parse_id_list("") == ()


def test_write_and_read_records(tmp_path) -> None:
    path = str(tmp_path / "nested" / "numbers.dat")

    assert write_records(path, ["1", "2", "x", "3"]) == 4

    def parse(line: str) -> int:
        try:
            return int(line)
        except ValueError as e:
            raise RecordFormatError("number", line, original_exception=e)

    assert read_records(path, parse, "number") == [1, 2, 3]


def test_read_records_missing_file(tmp_path) -> None:
    assert read_records(str(tmp_path / "absent.dat"), int, "number") == []


def test_read_records_skips_undecodable_line(tmp_path) -> None:
    """A line with invalid UTF-8 is dropped; the lines around it still load."""
    path = tmp_path / "products.dat"
    path.write_bytes(b"1|Rice|5.5|1000\n2|\xff\xfeBad|1.0|5\n3|Fruits|4.75|600\n")

    products = read_records(str(path), Product.from_record, "product")

    assert [p.id for p in products] == [1, 3]
    assert products[1].name == "Fruits"


def test_read_records_handles_crlf_lines(tmp_path) -> None:
    path = tmp_path / "products.dat"
    path.write_bytes(b"1|Rice|5.5|1000\r\n\r\n3|Fruits|4.75|600\r\n")

    products = read_records(str(path), Product.from_record, "product")

    assert [(p.id, p.stock) for p in products] == [(1, 1000), (3, 600)]
