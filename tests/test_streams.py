"""Tests for lazily opened output streams."""

import pytest

from filetransport.utils.streams import LazyFileOutputStream, open_lazy_output


def test_no_file_until_write(tmp_path):
    """Test the file appears only with the first byte."""
    target = tmp_path / "out.bin"
    stream = LazyFileOutputStream(target)

    assert not target.exists()
    assert not stream.opened

    stream.write(b"a")

    assert stream.opened
    assert target.exists()
    stream.close()
    assert target.read_bytes() == b"a"


def test_close_without_write(tmp_path):
    """Test closing an unused stream creates nothing."""
    target = tmp_path / "out.bin"
    stream = LazyFileOutputStream(target)

    stream.flush()
    stream.close()

    assert stream.closed
    assert not target.exists()


def test_empty_write_does_not_open(tmp_path):
    target = tmp_path / "out.bin"

    with LazyFileOutputStream(target) as stream:
        assert stream.write(b"") == 0

    assert not target.exists()


def test_write_after_close(tmp_path):
    stream = LazyFileOutputStream(tmp_path / "out.bin")
    stream.close()

    with pytest.raises(ValueError):
        stream.write(b"x")


def test_truncates_existing_file(tmp_path):
    """Test an existing file is replaced once data arrives."""
    target = tmp_path / "out.bin"
    target.write_bytes(b"previous contents")

    with LazyFileOutputStream(target) as stream:
        assert target.read_bytes() == b"previous contents"
        stream.write(b"new")

    assert target.read_bytes() == b"new"


def test_buffered_writer(tmp_path):
    """Test buffered writes land on close."""
    target = tmp_path / "out.bin"
    data = b"0123456789" * 1000

    with open_lazy_output(target, buffer_size=64) as stream:
        stream.write(data)

    assert target.read_bytes() == data


def test_buffered_writer_unused(tmp_path):
    target = tmp_path / "out.bin"

    open_lazy_output(target).close()

    assert not target.exists()
