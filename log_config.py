# log_config.py
import logging

from config import Settings


LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"

_configured = False


def setup_logging(settings: Settings) -> None:
    """Console handler always, file handler when settings.log_file is set."""
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level, logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _configured = True
