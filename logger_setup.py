# Module for setting up logging of a migration run
import logging
import sys
import os

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
NOISY_LOGGERS = ("urllib3", "PIL")


def _open_log_file(log_file):
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    return logging.FileHandler(log_file, mode='a', encoding='utf-8')


def setup_logging(log_file, console_level=logging.INFO):
    """
    Logs everything down to DEBUG into `log_file` (per-link decisions and
    cache hits included) and `console_level` and above to stdout.
    Exits when the log file cannot be opened.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Handlers from an earlier call would duplicate every line
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    try:
        file_handler = _open_log_file(log_file)
    except OSError as e:
        print(f"Error: Could not open migration log {log_file}: {e}", file=sys.stderr)
        sys.exit(1)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Connection pool and image decoder chatter drowns the per-note progress
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.debug(f"Logging to {os.path.abspath(log_file)}")
