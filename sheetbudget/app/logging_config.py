"""Logging setup shared by the API process and background archival runs."""
import logging

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach one stream handler to the root logger and set its level.

    Safe to call more than once: an existing handler is reused and only the
    formatter and level are refreshed.
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)

    resolved = logging.getLevelName(str(level).upper().strip())
    root_logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    return logging.getLogger("sheetbudget")
