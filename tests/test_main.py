"""Tests for dds_security_config.main module."""

import json
import logging

import pytest
import yaml
from pathlib import Path
from unittest.mock import Mock, patch, mock_open

from dds_security_config import constants
from dds_security_config.main import (
    configure_logging,
    first_not_none,
    format_properties,
    main,
    parse_args,
)
from dds_security_config.properties import PropertyCollection


def make_args(**overrides) -> Mock:
    args = Mock()
    args.config = None
    args.security_root = None
    args.enforce = None
    args.no_security_support = False
    args.output = None
    args.log_level = "INFO"
    args.rich_logs = False
    args.print_config_and_exit = False
    for key, value in overrides.items():
        setattr(args, key, value)
    return args


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv(constants.SECURITY_ROOT_DIRECTORY_ENV, raising=False)
    monkeypatch.delenv(constants.SECURITY_STRATEGY_ENV, raising=False)


class TestParseArgs:
    """Test cases for argument parsing."""

    def test_parse_args_defaults(self):
        with patch("sys.argv", ["main.py"]):
            args = parse_args()

            assert args.config is None
            assert args.security_root is None
            assert args.enforce is None
            assert args.no_security_support is False
            assert args.output is None
            assert args.log_level == "INFO"
            assert args.print_config_and_exit is False

    def test_parse_args_all_options(self):
        test_args = [
            "--config",
            "/path/to/config.yaml",
            "--security-root",
            "/secure/root",
            "--enforce",
            "--no-security-support",
            "--output",
            "yaml",
            "--log-level",
            "DEBUG",
            "--rich-logs",
            "--print-config-and-exit",
        ]

        with patch("sys.argv", ["main.py"] + test_args):
            args = parse_args()

            assert args.config == Path("/path/to/config.yaml")
            assert args.security_root == Path("/secure/root")
            assert args.enforce is True
            assert args.no_security_support is True
            assert args.output == "yaml"
            assert args.log_level == "DEBUG"
            assert args.rich_logs is True
            assert args.print_config_and_exit is True

    def test_parse_args_no_enforce(self):
        with patch("sys.argv", ["main.py", "--no-enforce"]):
            assert parse_args().enforce is False

    def test_parse_args_invalid_output(self):
        with patch("sys.argv", ["main.py", "--output", "xml"]):
            with pytest.raises(SystemExit):
                parse_args()


class TestConfigureLogging:
    """Test cases for logging configuration."""

    @patch("dds_security_config.main.logging.basicConfig")
    def test_configure_logging_info_level(self, mock_basic_config):
        configure_logging("INFO")

        mock_basic_config.assert_called_once()
        call_args = mock_basic_config.call_args
        assert call_args[1]["level"] == logging.INFO
        assert "%(asctime)s" in call_args[1]["format"]

    @patch("dds_security_config.main.logging.basicConfig")
    def test_configure_logging_rich(self, mock_basic_config):
        from rich.logging import RichHandler

        configure_logging("DEBUG", use_rich=True)

        call_args = mock_basic_config.call_args
        assert call_args[1]["level"] == logging.DEBUG
        assert isinstance(call_args[1]["handlers"][0], RichHandler)


class TestHelpers:
    """Test cases for helper functions."""

    def test_first_not_none(self):
        assert first_not_none(None, False, True) is False
        assert first_not_none(None, None) is None

    def test_format_properties_json(self):
        properties = PropertyCollection([("b", "1"), ("a", "2")])

        assert json.loads(format_properties(properties, "json")) == [
            {"name": "b", "value": "1"},
            {"name": "a", "value": "2"},
        ]

    def test_format_properties_yaml(self):
        properties = PropertyCollection([("b", "1"), ("a", "2")])

        assert yaml.safe_load(format_properties(properties, "yaml")) == [
            {"name": "b", "value": "1"},
            {"name": "a", "value": "2"},
        ]


@pytest.mark.usefixtures("clean_env")
class TestMain:
    """Test cases for main function."""

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_with_security_root(
        self, mock_configure_logging, mock_parse_args, security_root, capsys
    ):
        mock_parse_args.return_value = make_args(
            security_root=security_root, enforce=True
        )

        result = main()

        assert result == 0
        mock_configure_logging.assert_called_once_with("INFO", False)
        output = json.loads(capsys.readouterr().out)
        assert len(output) == 9
        assert output[0] == {"name": "dds.sec.auth.plugin", "value": "builtin.PKI-DH"}

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_without_root(self, mock_configure_logging, mock_parse_args, capsys):
        mock_parse_args.return_value = make_args()

        result = main()

        assert result == 0
        assert json.loads(capsys.readouterr().out) == []

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_missing_files_enforced(
        self, mock_configure_logging, mock_parse_args, security_root, caplog
    ):
        (security_root / constants.GOVERNANCE_FILE_NAME).unlink()
        mock_parse_args.return_value = make_args(
            security_root=security_root, enforce=True
        )

        with caplog.at_level(logging.ERROR):
            result = main()

        assert result == 1
        assert "couldn't find all security files!" in caplog.text

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_enforce_from_env(
        self, mock_configure_logging, mock_parse_args, security_root, monkeypatch
    ):
        """Test that the security strategy envvar enables enforcement."""
        (security_root / constants.KEY_FILE_NAME).unlink()
        monkeypatch.setenv(constants.SECURITY_ROOT_DIRECTORY_ENV, str(security_root))
        monkeypatch.setenv(
            constants.SECURITY_STRATEGY_ENV, constants.SECURITY_STRATEGY_ENFORCE
        )
        mock_parse_args.return_value = make_args()

        assert main() == 1

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_cli_overrides_env(
        self, mock_configure_logging, mock_parse_args, security_root, monkeypatch
    ):
        (security_root / constants.KEY_FILE_NAME).unlink()
        monkeypatch.setenv(
            constants.SECURITY_STRATEGY_ENV, constants.SECURITY_STRATEGY_ENFORCE
        )
        mock_parse_args.return_value = make_args(
            security_root=security_root, enforce=False
        )

        assert main() == 0

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    @patch(
        "builtins.open",
        new_callable=mock_open,
        read_data="security_root_path: /secure/root\nenforce_security: true\n"
        "security_support: false\noutput_format: yaml\n",
    )
    def test_main_with_config_file(
        self, mock_open_file, mock_configure_logging, mock_parse_args, capsys
    ):
        mock_parse_args.return_value = make_args(
            config=Path("/config.yaml"), print_config_and_exit=True
        )

        result = main()

        assert result == 0
        mock_open_file.assert_called_once_with(
            Path("/config.yaml"), "r", encoding="utf-8"
        )
        assert json.loads(capsys.readouterr().out) == {
            "enforce_security": True,
            "output_format": "yaml",
            "security_root_path": "/secure/root",
            "security_support": False,
        }

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_no_security_support(
        self, mock_configure_logging, mock_parse_args, security_root, caplog
    ):
        mock_parse_args.return_value = make_args(
            security_root=security_root, no_security_support=True
        )

        with caplog.at_level(logging.ERROR):
            result = main()

        assert result == 1
        assert "security libraries" in caplog.text

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_invalid_config(self, mock_configure_logging, mock_parse_args, caplog):
        mock_parse_args.return_value = make_args(output="xml")

        with caplog.at_level(logging.ERROR):
            result = main()

        assert result == 1
        assert "Invalid config" in caplog.text

    @patch("dds_security_config.main.parse_args")
    @patch("dds_security_config.main.configure_logging")
    def test_main_missing_config_file(
        self, mock_configure_logging, mock_parse_args, tmp_path, caplog
    ):
        mock_parse_args.return_value = make_args(config=tmp_path / "nonexistent.yaml")

        with caplog.at_level(logging.ERROR):
            result = main()

        assert result == 1
        assert "Error loading configuration" in caplog.text
