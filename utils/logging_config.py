import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DIRECTORY = "logs"


class DuplicateLogFilter(logging.Filter):
    """
    Drops a record when it repeats the previous one verbatim.
    """

    def __init__(self):
        super().__init__()
        self.last_log = None

    def filter(self, record: logging.LogRecord) -> bool:
        current_log = (record.name, record.levelno, record.getMessage())
        if current_log == self.last_log:
            return False
        self.last_log = current_log
        return True


def setup_logging(log_level: int | str, log_to_file: bool = False, config_name: str | None = None) -> None:
    """
    Configures the root logger with a console handler and, optionally, a file handler.

    Args:
        log_level: Logging level, either numeric or a name such as "INFO".
        log_to_file: Also write logs to ``logs/<config_name>.log``.
        config_name: Base name of the log file. Defaults to "grid_ticker_bot".
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.addFilter(DuplicateLogFilter())
    handlers.append(console_handler)

    if log_to_file:
        os.makedirs(LOG_DIRECTORY, exist_ok=True)
        log_file_path = os.path.join(LOG_DIRECTORY, f"{config_name or 'grid_ticker_bot'}.log")
        handlers.append(logging.FileHandler(log_file_path, encoding="utf-8"))

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers, force=True)
