import argparse
import logging
import os
import traceback

DEFAULT_CONFIG_PATH = "config.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_args(args):
    """
    Validates parsed arguments.

    Args:
        args: Parsed arguments object.
    Raises:
        ValueError: If validation fails.
    """
    # The config file itself may be missing (a template is written), but its directory must exist.
    config_dir = os.path.dirname(args.config)
    if config_dir and not os.path.isdir(config_dir):
        raise ValueError(f"The directory for the configuration file does not exist: {config_dir}")

    if os.path.isdir(args.config):
        raise ValueError(f"Config path is a directory: {args.config}")


def parse_and_validate_console_args(cli_args=None, default_log_level: str = "INFO"):
    """
    Parses and validates console arguments.

    Args:
        cli_args: Optional CLI arguments for testing.
        default_log_level: Log level used when --log-level is not given.
    Returns:
        argparse.Namespace: Parsed and validated arguments.
    Raises:
        RuntimeError: If argument parsing or validation fails.
    """
    try:
        parser = argparse.ArgumentParser(
            description="Grid Ticker Bot - computes a price grid around a central price "
            "and follows the live ticker of the configured pair.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )

        parser.add_argument(
            "--config",
            type=str,
            default=DEFAULT_CONFIG_PATH,
            metavar="CONFIG",
            help="Path to the JSON configuration file. A template is created when it does not exist.",
        )
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Do not ask for confirmation of the configuration and the grid levels.",
        )
        parser.add_argument(
            "--log-level",
            type=str.upper,
            choices=LOG_LEVELS,
            default=default_log_level.upper() if default_log_level.upper() in LOG_LEVELS else "INFO",
            help="Logging level.",
        )
        parser.add_argument(
            "--log-to-file",
            action="store_true",
            help="Also write logs to the logs/ directory.",
        )

        args = parser.parse_args(cli_args)
        validate_args(args)
        return args

    except SystemExit as e:
        if e.code == 0:  # Exit code 0 indicates a successful --help invocation
            raise
        logging.error(f"Argument parsing failed: {e}")
        raise RuntimeError("Failed to parse arguments. Please check your inputs.") from e

    except ValueError as e:
        logging.error(f"Validation failed: {e}")
        raise RuntimeError("Argument validation failed.") from e

    except Exception as e:
        logging.error(f"An unexpected error occurred while parsing arguments: {e}")
        logging.error(traceback.format_exc())
        raise RuntimeError("An unexpected error occurred during argument parsing.") from e
