"""
Unit tests for the command-line entry point.
"""

import logging
import signal
from unittest.mock import patch

import pytest

from x3dpinner.cli.main import build_parser, configure_logging, main_cli
from x3dpinner.config import DEFAULT_CONFIG_PATH


@pytest.mark.unit
class TestArgumentParsing:
    """Test cases for the argument parser."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config == DEFAULT_CONFIG_PATH
        assert args.log_level == "INFO"
        assert args.once is False

    def test_custom_config(self, temp_dir):
        args = build_parser().parse_args(["--config", str(temp_dir / "p.toml"), "--once"])
        assert args.config == temp_dir / "p.toml"
        assert args.once is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test cases for stdout/stderr routing of log records."""

    def test_info_to_stdout_errors_to_stderr(self, capsys, restore_logging):
        configure_logging("INFO")
        log = logging.getLogger("x3dpinner.test")

        log.info("Implicitly ignoring bash (1)")
        log.error("Command pin (echo 1) failed")

        captured = capsys.readouterr()
        assert "Implicitly ignoring bash (1)" in captured.out
        assert "Implicitly ignoring" not in captured.err
        assert "Command pin (echo 1) failed" in captured.err
        assert "failed" not in captured.out

    def test_debug_hidden_at_info_level(self, capsys, restore_logging):
        configure_logging("INFO")
        logging.getLogger("x3dpinner.test").debug("scan details")
        assert "scan details" not in capsys.readouterr().out


@pytest.mark.unit
class TestMainCli:
    """Test cases for main_cli()."""

    def test_missing_config_exits_with_status_1(self, temp_dir, capsys, restore_logging):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(temp_dir / "missing.toml")])

        assert exc_info.value.code == 1
        assert "file not found" in capsys.readouterr().err

    def test_unknown_user_exits_with_status_1(self, temp_dir, sample_config_data, mock_pwd,
                                              capsys, restore_logging):
        import toml

        sample_config_data["general"]["username"] = "mallory"
        path = temp_dir / "x3d-pinner.toml"
        path.write_text(toml.dumps(sample_config_data))

        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(path)])

        assert exc_info.value.code == 1
        assert "No user named mallory" in capsys.readouterr().err

    def test_invalid_log_level_exits_with_status_2(self, config_file, restore_logging):
        with pytest.raises(SystemExit) as exc_info:
            main_cli(["--config", str(config_file), "--log-level", "LOUD"])
        assert exc_info.value.code == 2

    @patch("x3dpinner.cli.main.signal.signal")
    @patch("x3dpinner.monitoring.poll_loop.take_snapshot")
    def test_once_runs_a_single_iteration(self, mock_snapshot, mock_signal, config_file,
                                          mock_pwd, capsys, restore_logging):
        mock_snapshot.return_value = {}

        main_cli(["--config", str(config_file), "--once", "--log-level", "debug"])

        out = capsys.readouterr().out
        assert "Loaded 2 command_configs" in out
        assert "Started x3d-pinner" in out
        assert "x3d-pinner stopped" in out
        mock_snapshot.assert_called_once_with()
        registered = {call.args[0] for call in mock_signal.call_args_list}
        assert registered == {signal.SIGINT, signal.SIGTERM}
