"""Настройка логирования."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Настроить корневой логгер один раз при старте приложения."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())

    # SQL эхо управляется настройкой DATABASE_ECHO, а не уровнем приложения
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
