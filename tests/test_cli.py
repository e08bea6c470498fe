import io
import os
import sys
import logging

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

import huffman_cli
from huffman_service import compress


def _fake_stdin(monkeypatch, data):
	monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_compress_file(tmp_path, capsysbinary):
	src = tmp_path / "input.txt"
	src.write_bytes(b"abracadabra")

	assert huffman_cli.main(["c", str(src)]) == 0
	out = capsysbinary.readouterr().out
	assert out == compress(b"abracadabra")


def test_extract_stdin(monkeypatch, capsysbinary):
	_fake_stdin(monkeypatch, compress(b"hello from stdin"))

	assert huffman_cli.main(["x", "-"]) == 0
	assert capsysbinary.readouterr().out == b"hello from stdin"


def test_compress_then_extract_via_cli(tmp_path, monkeypatch, capsysbinary):
	src = tmp_path / "data.bin"
	src.write_bytes(bytes(range(256)) * 3)

	assert huffman_cli.main(["c", str(src)]) == 0
	packed = capsysbinary.readouterr().out

	_fake_stdin(monkeypatch, packed)
	assert huffman_cli.main(["x", "-"]) == 0
	assert capsysbinary.readouterr().out == bytes(range(256)) * 3


@pytest.mark.parametrize("argv", [[], ["c"], ["c", "a", "b"], ["z", "-"]])
def test_usage_errors(argv, capsysbinary):
	assert huffman_cli.main(argv) == 1
	captured = capsysbinary.readouterr()
	assert captured.out == b""
	lines = captured.err.decode().splitlines()
	assert len(lines) == 2
	assert lines[0].startswith("usage: huffpack")


def test_corrupt_input_reports_error(monkeypatch, capsysbinary):
	_fake_stdin(monkeypatch, compress(b"This is a test" * 10)[:-2])

	assert huffman_cli.main(["x", "-"]) == 1
	captured = capsysbinary.readouterr()
	assert captured.out == b""
	assert captured.err.startswith(b"error: payload")


def test_missing_file_propagates(tmp_path):
	with pytest.raises(FileNotFoundError):
		huffman_cli.main(["c", str(tmp_path / "nope")])


def test_log_level_from_environment():
	assert huffman_cli.configure_logging({"HUFFPACK_LOG": "debug"}) == logging.DEBUG
	assert huffman_cli.configure_logging({"HUFFPACK_LOG": "bogus"}) == logging.WARNING
	assert huffman_cli.configure_logging({}) == logging.WARNING


def test_all_zero_stream_reports_error(tmp_path, capsysbinary):
	src = tmp_path / "zeros.bin"
	src.write_bytes(b"\x00" * 200)

	assert huffman_cli.main(["x", str(src)]) == 1
	captured = capsysbinary.readouterr()
	assert captured.out == b""
	assert captured.err.startswith(b"error: trie")


def test_file_name_starting_with_dash(tmp_path, monkeypatch, capsysbinary):
	monkeypatch.chdir(tmp_path)
	(tmp_path / "-data.bin").write_bytes(b"dash")

	assert huffman_cli.main(["c", "-data.bin"]) == 0
	assert capsysbinary.readouterr().out == compress(b"dash")
