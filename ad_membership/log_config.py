"""Настройка логирования.

- Консольный handler всегда.
- Файловый handler (RotatingFileHandler), если задан log_file.
- Уровень: настраивается через log_level (по умолчанию INFO).
- Повторный вызов заменяет ранее установленные handlers.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Отслеживаем установленные handlers, чтобы при реконфигурации удалять старые.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _parse_level(level: str) -> tuple[str, int]:
    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    return level_str, getattr(logging, level_str, logging.INFO)


def setup_logging(level: str = "INFO", log_file: str = "", max_size_mb: int = 50, backup_count: int = 5) -> None:
    """Настраивает корневой логгер."""
    global _file_handler, _console_handler

    level_str, log_level = _parse_level(level)
    max_size_mb = max(1, min(500, int(max_size_mb or 50)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)

    root.setLevel(log_level)

    # ldap3 очень многословен на DEBUG
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))

    logging.getLogger("ad_membership").info(
        "Логирование настроено: уровень=%s, файл=%s", level_str, log_file or "-",
    )


def setup_logging_from_settings(settings) -> None:
    setup_logging(level=settings.log_level, log_file=settings.log_file)
