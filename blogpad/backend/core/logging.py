"""
Logging Setup.

structlog on top of the stdlib root logger, driven by logging.yaml.
Console output is either coloured key/value lines or JSON; the optional
file handler always writes JSON lines (logs/system.jsonl by default).

Records carry timestamp, level, logger, event, func_name and lineno, plus
whatever RequestContextMiddleware bound for the current request
(request_id, source, method, path) and the fields passed in extra.

Usage:
    from blogpad.backend.core.logging import get_logger, setup_logging

    setup_logging()                  # logging.yaml as is
    setup_logging(level="DEBUG")     # with overrides

    logger = get_logger(__name__)
    logger.info("Entry saved", extra={"entry_id": entry.id})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import Processor

from blogpad.backend.core.config import find_project_root, get_app_config
from blogpad.backend.core.config_schema import FileHandlerSchema


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _formatter(renderer: Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_shared_processors(),
    )


def _json_formatter() -> logging.Formatter:
    # Thai titles stay readable in the log file
    return _formatter(structlog.processors.JSONRenderer(ensure_ascii=False))


def _file_handler(file_config: FileHandlerSchema) -> logging.Handler:
    log_path = find_project_root() / file_config.path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_json_formatter())
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Any argument left as None takes its value from logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'console' or 'json' for the console handler
        enable_console: Write to stdout
        enable_file_logging: Write JSON lines to handlers.file.path
    """
    config = get_app_config().logging

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if enable_file_logging is None:
        enable_file_logging = config.handlers.file.enabled

    structlog.configure(
        processors=_shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if format_type == "console":
            console_handler.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=True)))
        else:
            console_handler.setFormatter(_json_formatter())
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(config.handlers.file))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Structlog logger for a module, usually get_logger(__name__)."""
    return structlog.get_logger(name)
