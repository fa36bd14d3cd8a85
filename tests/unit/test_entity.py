"""
Unit tests for entity variants and adapters.
"""

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from httpetag import FileInfo, InvalidEntityError, encode, stat_entity, to_entity
from httpetag.core.entity import EPOCH, coerce_timestamp, is_file_info_like


class TestFileInfo:
    """Tests for FileInfo construction."""

    def test_from_stat(self, sample_file):
        """Test building from os.stat()."""
        st = os.stat(sample_file)
        info = FileInfo.from_stat(st)

        assert info.size == 14
        assert info.mtime.tzinfo is not None
        assert abs(info.mtime.timestamp() - st.st_mtime) < 0.001

    def test_stat_entity(self, sample_file):
        """Test stat_entity reads size and mtime from disk."""
        info = stat_entity(sample_file)

        assert info.size == 14
        assert encode(info).startswith('W/"e-')

    def test_stat_entity_missing(self, tmp_path):
        """Test OSError propagates for missing files."""
        with pytest.raises(FileNotFoundError):
            stat_entity(tmp_path / "missing.txt")

    def test_from_mapping(self):
        info = FileInfo.from_mapping({
            "size": 20,
            "mtime": "1970-01-01T00:26:54.579Z",
            "ino": 7,
        })

        assert info.size == 20
        assert info.ino == 7
        assert info.mtime == EPOCH + timedelta(milliseconds=0x18A2F3)
        assert encode(info) == 'W/"14-18a2f3"'

    @pytest.mark.parametrize("size", [-5, 1.5, True, None, "20"])
    def test_invalid_size(self, size):
        """Test sizes that are not non-negative ints are rejected."""
        with pytest.raises(InvalidEntityError, match="size"):
            FileInfo(size=size)

    def test_from_mapping_invalid_size(self):
        with pytest.raises(InvalidEntityError):
            FileInfo.from_mapping({"size": -1, "mtime": 0})


class TestCoerceTimestamp:
    """Tests for timestamp normalization."""

    def test_none(self):
        assert coerce_timestamp(None) is None

    def test_naive_datetime(self):
        value = coerce_timestamp(datetime(2024, 1, 1))
        assert value == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_other_timezone(self):
        """Test aware datetimes are converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        value = coerce_timestamp(datetime(2024, 1, 1, 2, tzinfo=plus_two))
        assert value == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert value.tzinfo == timezone.utc

    def test_epoch_seconds(self):
        assert coerce_timestamp(1614) == EPOCH + timedelta(seconds=1614)

    def test_iso_string(self):
        assert coerce_timestamp("2024-01-01T00:00:00+00:00") == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    def test_invalid(self):
        with pytest.raises(InvalidEntityError):
            coerce_timestamp("yesterday")
        with pytest.raises(InvalidEntityError):
            coerce_timestamp(True)
        with pytest.raises(InvalidEntityError):
            coerce_timestamp(object())

    @pytest.mark.parametrize("value", [1700000000000, 1e20, -1e20, float("nan")])
    def test_out_of_range_number(self, value):
        """Test numbers datetime cannot represent raise InvalidEntityError."""
        with pytest.raises(InvalidEntityError, match="Not a timestamp"):
            coerce_timestamp(value)

    def test_millisecond_record(self):
        """Test a stat record with a millisecond mtime is rejected cleanly."""
        with pytest.raises(InvalidEntityError):
            to_entity({"size": 1, "mtime": 1700000000000, "ino": 1})


class TestIsFileInfoLike:
    """Tests for the file metadata duck test."""

    def test_file_info(self, file_info):
        assert is_file_info_like(file_info)

    def test_stat_result(self, sample_file):
        assert is_file_info_like(os.stat(sample_file))

    def test_mapping(self):
        assert is_file_info_like({"size": 1, "mtime": 0, "ino": None})
        assert is_file_info_like({"size": 1, "mtime": datetime.now(), "ino": 5})

    def test_object(self):
        record = SimpleNamespace(size=1, mtime="2024-01-01T00:00:00Z", ino=3)
        assert is_file_info_like(record)

    def test_missing_fields(self):
        assert not is_file_info_like({"size": 1, "mtime": 0})
        assert not is_file_info_like({"size": 1})

    def test_wrong_field_types(self):
        assert not is_file_info_like({"size": "1", "mtime": 0, "ino": None})
        assert not is_file_info_like({"size": True, "mtime": 0, "ino": None})
        assert not is_file_info_like({"size": 1, "mtime": [], "ino": None})
        assert not is_file_info_like({"size": 1, "mtime": 0, "ino": "x"})

    def test_content(self):
        assert not is_file_info_like("size mtime ino")
        assert not is_file_info_like(b"")
        assert not is_file_info_like(None)


class TestToEntity:
    """Tests for resolving response bodies into entities."""

    def test_none(self):
        assert to_entity(None) is None

    def test_content_passes_through(self, file_info):
        assert to_entity("text") == "text"
        assert to_entity(b"bytes") == b"bytes"
        assert to_entity(file_info) is file_info

    def test_stat_result(self, sample_file):
        info = to_entity(os.stat(sample_file))
        assert isinstance(info, FileInfo)
        assert info.size == 14

    def test_path(self, sample_file):
        """Test paths are stat'ed, not read."""
        info = to_entity(sample_file)
        assert isinstance(info, FileInfo)
        assert info.size == 14

    def test_stat_like_mapping(self):
        info = to_entity({"size": 20, "mtime": 1614, "ino": None})
        assert info == FileInfo(size=20, mtime=EPOCH + timedelta(seconds=1614))

    def test_stat_like_object(self):
        record = SimpleNamespace(size=5, mtime=0, ino=1)
        info = to_entity(record)
        assert info == FileInfo(size=5, mtime=EPOCH, ino=1)

    def test_json_body(self):
        """Test JSON bodies are rendered compactly."""
        assert to_entity({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'
        assert to_entity([1, "x"]) == '[1,"x"]'

    def test_json_body_non_ascii(self):
        assert to_entity({"name": "é"}) == '{"name":"é"}'

    def test_unserializable_body(self):
        with pytest.raises(InvalidEntityError, match="serialize"):
            to_entity({"when": object()})

    def test_unsupported(self):
        with pytest.raises(InvalidEntityError):
            to_entity(3.5)
