"""Tests for the command-line launcher."""

from unittest.mock import patch

from fluppy_snake.cli import _build_parser, main
from fluppy_snake.config import GameConfig


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_serve_defaults(self):
        args = _build_parser().parse_args(["serve"])
        assert args.command == "serve"
        assert args.host == "127.0.0.1"
        assert args.port == 8000
        assert args.config is None
        assert args.high_score_file is None

    def test_serve_flags(self):
        args = _build_parser().parse_args([
            "serve", "--port", "9000", "--high-score-file", "hs.json",
        ])
        assert args.port == 9000
        assert args.high_score_file == "hs.json"


class TestCLICommands:
    def test_init_config_writes_loadable_file(self, tmp_path):
        out = tmp_path / "cfg.json"
        assert main(["init-config", str(out)]) == 0
        assert GameConfig.load(out) == GameConfig()

    def test_serve_runs_uvicorn(self, tmp_path):
        with patch("uvicorn.run") as run:
            rc = main([
                "serve", "--port", "8123",
                "--high-score-file", str(tmp_path / "hs.json"),
            ])
        assert rc == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 8123
