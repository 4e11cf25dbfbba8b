import pytest

from utils.arg_parser import parse_and_validate_console_args


class TestArgParser:
    def test_defaults(self):
        args = parse_and_validate_console_args([])

        assert args.config == "config.json"
        assert args.yes is False
        assert args.log_level == "INFO"
        assert args.log_to_file is False

    def test_all_options(self, tmp_path):
        config_path = str(tmp_path / "bot.json")

        args = parse_and_validate_console_args(
            ["--config", config_path, "--yes", "--log-level", "debug", "--log-to-file"]
        )

        assert args.config == config_path
        assert args.yes is True
        assert args.log_level == "DEBUG"
        assert args.log_to_file is True

    def test_default_log_level_from_environment(self):
        assert parse_and_validate_console_args([], default_log_level="warning").log_level == "WARNING"
        assert parse_and_validate_console_args([], default_log_level="verbose").log_level == "INFO"

    def test_missing_config_directory_fails(self, tmp_path):
        with pytest.raises(RuntimeError, match="Argument validation failed"):
            parse_and_validate_console_args(["--config", str(tmp_path / "missing" / "config.json")])

    def test_directory_as_config_fails(self, tmp_path):
        with pytest.raises(RuntimeError, match="Argument validation failed"):
            parse_and_validate_console_args(["--config", str(tmp_path)])

    def test_invalid_log_level_fails(self):
        with pytest.raises(RuntimeError, match="Failed to parse arguments"):
            parse_and_validate_console_args(["--log-level", "LOUD"])
