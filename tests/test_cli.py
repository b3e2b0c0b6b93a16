import argparse
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from aochelper import get_cmd, main
from aochelper.config import Config, NotConfigured


def _response(status: int, content: bytes = b"") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.content = content
    return resp


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_set_and_get(workspace: Path):
    assert main(["set", "year", "2023"]) == 0
    assert main(["set", "session_key", "abc123"]) == 0

    with patch("aochelper.fetch.requests.get") as mock_get:
        mock_get.return_value = _response(200, b"two1nine\neightwothree\n")
        assert main(["get", "1"]) == 0

    mock_get.assert_called_once_with(
        "https://adventofcode.com/2023/day/1/input", cookies={"session": "abc123"}
    )
    assert (workspace / "inputs" / "2023" / "1").read_bytes() == b"two1nine\neightwothree\n"
    assert json.loads((workspace / ".aochelper.json").read_text(encoding="utf-8")) == {
        "year": 2023,
        "session_key": "abc123",
    }


def test_get_again_refreshes_file(workspace: Path):
    main(["set", "year", "2023"])
    main(["set", "session_key", "abc123"])

    with patch("aochelper.fetch.requests.get") as mock_get:
        mock_get.return_value = _response(200, b"first\n")
        main(["get", "3"])
        mock_get.return_value = _response(200, b"second\n")
        assert main(["get", "3"]) == 0

    assert (workspace / "inputs" / "2023" / "3").read_bytes() == b"second\n"


def test_get_without_year_fails_before_network(workspace: Path, capsys):
    with patch("aochelper.fetch.requests.get") as mock_get, patch(
        "aochelper.session.default_sources"
    ) as mock_sources:
        assert main(["get", "1"]) == 1

    mock_get.assert_not_called()
    mock_sources.assert_not_called()
    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "aochelper set year" in err


def test_get_without_session_fails(workspace: Path, capsys):
    main(["set", "year", "2023"])

    with patch("aochelper.fetch.requests.get") as mock_get, patch(
        "aochelper.session.default_sources", return_value=[]
    ):
        assert main(["get", "1"]) == 1

    mock_get.assert_not_called()
    assert "aochelper set session_key" in capsys.readouterr().err


def test_get_uses_browser_cookie(workspace: Path):
    main(["set", "year", "2022"])
    source = MagicMock()
    source.lookup.return_value = "from-browser"

    with patch("aochelper.fetch.requests.get") as mock_get, patch(
        "aochelper.session.default_sources", return_value=[source]
    ):
        mock_get.return_value = _response(200, b"data\n")
        assert main(["get", "2"]) == 0

    assert mock_get.call_args.kwargs["cookies"] == {"session": "from-browser"}
    assert "from-browser" not in (workspace / ".aochelper.json").read_text(encoding="utf-8")


def test_rejected_session_writes_nothing(workspace: Path, capsys):
    main(["set", "year", "2023"])
    main(["set", "session_key", "expired"])

    with patch("aochelper.fetch.requests.get") as mock_get:
        mock_get.return_value = _response(400, b"Puzzle inputs differ by user.")
        assert main(["get", "1"]) == 1

    assert not (workspace / "inputs").exists()
    assert "session rejected" in capsys.readouterr().err


def test_get_defaults_to_today(workspace: Path):
    main(["set", "year", "2023"])
    main(["set", "session_key", "abc123"])

    with patch("aochelper.fetch.requests.get") as mock_get, patch(
        "aochelper.today", return_value=5
    ):
        mock_get.return_value = _response(200, b"seeds: 79 14 55 13\n")
        assert main(["get"]) == 0

    assert (workspace / "inputs" / "2023" / "5").exists()


@pytest.mark.parametrize("argv", [["get", "0"], ["get", "26"], ["get", "x"], ["set", "year", "1999"]])
def test_invalid_arguments_exit_2(workspace: Path, argv: list[str]):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2


def test_get_cmd_rejects_config_without_year():
    store = MagicMock()
    store.read.return_value = Config(year=None, session_key="abc123")

    with patch("aochelper.fetch.requests.get") as mock_get:
        with pytest.raises(NotConfigured):
            get_cmd(store, argparse.Namespace(day=1))

    mock_get.assert_not_called()
