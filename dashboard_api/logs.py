import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Marks the stdout handler this module installs on the root logger.
_HANDLER_NAME = "dashboard_api.stdout"


def configure_logging(level: str = "INFO") -> None:
    """Install one stdout handler on the root logger. Other handlers are left alone."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(log_level)
            return

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.set_name(_HANDLER_NAME)
    stream_handler.setLevel(log_level)
    stream_handler.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(stream_handler)
