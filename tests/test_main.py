"""Tests for the command line entry point."""

from unittest.mock import patch

import pytest

from hlscp.errors import NetworkError
from hlscp.main import main, parse_args


def test_parse_args_defaults(monkeypatch):
    for name in ("WORKERS", "TIMEOUT", "NO_PROGRESS", "LOG_LEVEL", "USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    args = parse_args(["https://example.com/master.m3u8", "out"])

    assert args.source == "https://example.com/master.m3u8"
    assert args.destination == "out"
    assert args.workers == 0
    assert args.timeout == 30
    assert args.no_progress is False
    assert args.log_level == "INFO"


def test_parse_args_reads_environment(monkeypatch):
    monkeypatch.setenv("WORKERS", "8")
    monkeypatch.setenv("NO_PROGRESS", "yes")
    args = parse_args(["https://example.com/master.m3u8", "out"])

    assert args.workers == 8
    assert args.no_progress is True


def test_parse_args_reads_fractional_timeout(monkeypatch):
    monkeypatch.setenv("TIMEOUT", "2.5")
    args = parse_args(["https://example.com/master.m3u8", "out"])

    assert args.timeout == 2.5


@pytest.mark.parametrize("value", ["-1", "many"])
def test_main_rejects_bad_workers_from_environment(monkeypatch, tmp_path, capsys, value):
    monkeypatch.setenv("WORKERS", value)
    with patch("hlscp.main.HlsCopier") as mock_copier:
        with pytest.raises(SystemExit) as excinfo:
            main(["https://example.com/master.m3u8", str(tmp_path)])

    assert excinfo.value.code == 2
    assert "--workers" in capsys.readouterr().err
    mock_copier.assert_not_called()


def test_parse_args_rejects_negative_workers():
    with pytest.raises(SystemExit):
        parse_args(["https://example.com/master.m3u8", "out", "--workers", "-1"])


def test_parse_args_requires_both_positionals():
    with pytest.raises(SystemExit):
        parse_args(["https://example.com/master.m3u8"])


def test_main_success(tmp_path):
    with patch("hlscp.main.HlsCopier") as mock_copier:
        mock_copier.return_value.copy_hls.return_value = ["a", "b"]
        code = main(["https://example.com/master.m3u8", str(tmp_path), "--workers", "4", "--no-progress"])

    assert code == 0
    _, source, destination = mock_copier.call_args.args
    assert source == "https://example.com/master.m3u8"
    assert destination == str(tmp_path)
    assert mock_copier.call_args.kwargs == {"workers": 4, "show_progress": False}


def test_main_reports_failure(tmp_path, caplog):
    with patch("hlscp.main.HlsCopier") as mock_copier:
        mock_copier.return_value.copy_hls.side_effect = NetworkError("Failed to fetch playlist")
        code = main(["https://example.com/master.m3u8", str(tmp_path)])

    assert code == 1
    assert "Failed to fetch playlist" in caplog.text


def test_main_rejects_invalid_source(tmp_path):
    assert main(["not-a-url", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()
