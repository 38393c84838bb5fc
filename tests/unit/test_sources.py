"""Tests for byte sources."""

import gzip
from unittest import mock

import pytest
import requests

from tgph.errors import FormatError, SourceError
from tgph.format import encode
from tgph.sources import fetch_snapshot, load_store, maybe_decompress, read_snapshot


class TestMaybeDecompress:
    def test_plain_passthrough(self):
        assert maybe_decompress(b"TGPH\x01\x00\x00") == b"TGPH\x01\x00\x00"

    def test_gzip(self):
        assert maybe_decompress(gzip.compress(b"payload")) == b"payload"

    def test_corrupt_gzip(self):
        broken = gzip.compress(b"payload" * 100)[:20]
        with pytest.raises(FormatError, match="gzip"):
            maybe_decompress(broken)


class TestReadSnapshot:
    def test_reads_gzipped_file(self, tmp_path, telemetry_containers):
        raw = encode(telemetry_containers)
        path = tmp_path / "data.tgph.gz"
        path.write_bytes(gzip.compress(raw))
        assert read_snapshot(path) == raw

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError, match="cannot read"):
            read_snapshot(tmp_path / "missing.tgph.gz")


class TestFetchSnapshot:
    def _session(self, content=b"", status_error=None, get_error=None):
        response = mock.Mock()
        response.content = content
        response.raise_for_status.side_effect = status_error
        session = mock.Mock()
        session.get.side_effect = get_error
        session.get.return_value = response
        return session

    def test_fetch_and_decompress(self, telemetry_containers):
        raw = encode(telemetry_containers)
        session = self._session(content=gzip.compress(raw))

        assert fetch_snapshot("http://host/data.tgph.gz", session=session, timeout=5) == raw
        session.get.assert_called_once_with("http://host/data.tgph.gz", timeout=5)

    def test_http_error(self):
        session = self._session(status_error=requests.HTTPError("404 Not Found"))
        with pytest.raises(SourceError, match="404"):
            fetch_snapshot("http://host/data.tgph.gz", session=session)

    def test_connection_error(self):
        session = self._session(get_error=requests.ConnectionError("refused"))
        with pytest.raises(SourceError, match="refused"):
            fetch_snapshot("http://host/data.tgph.gz", session=session)


class TestLoadStore:
    def test_from_path(self, tmp_path, telemetry_containers):
        path = tmp_path / "data.tgph"
        path.write_bytes(encode(telemetry_containers))
        store = load_store(path)
        assert store.names() == ["Unix timestamp", "CPU Usage", "Host name"]

    def test_from_url(self, telemetry_containers):
        raw = encode(telemetry_containers)
        with mock.patch("tgph.sources.fetch_snapshot", return_value=raw) as fetch:
            store = load_store("https://host/data.tgph.gz")
        fetch.assert_called_once_with("https://host/data.tgph.gz")
        assert len(store) == 3

    def test_decode_failure_is_fatal(self, tmp_path):
        path = tmp_path / "bad.tgph"
        path.write_bytes(b"NOPE\x01\x00\x00")
        with pytest.raises(FormatError, match="bad magic"):
            load_store(path)
