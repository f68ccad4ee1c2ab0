"""
Logging utilities for the Drive uploader.

Provides console logging with secret masking, JSON formatting for log
aggregation, GitHub Actions workflow-command annotations and an entry/exit
decorator for the main upload operations.

Features:
    - Secret masking on every handler (credentials never reach the output)
    - Structured JSON logging (LOG_FORMAT=json)
    - GitHub Actions annotations (LOG_FORMAT=github or GITHUB_ACTIONS=true)
    - Colorized console output for local runs

Example usage:
    >>> from drive_uploader.utils.logging import get_logger, register_secret
    >>>
    >>> logger = get_logger(__name__)
    >>> register_secret("s3cr3t")
    >>> logger.info("token is s3cr3t")   # logged as "token is ***"
"""

import functools
import json
import logging
import os
from datetime import datetime
from typing import Any, Callable, Dict, List, Set, TypeVar, cast

import coloredlogs

# Type variable for generic decorator typing
F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MASK = "***"
# Inserted before INFO lines starting with "::"; the runner only parses
# workflow commands at the start of a whitespace-trimmed line.
COMMAND_BREAK = "\u200b"

# Values that must never appear in log output
_secrets: Set[str] = set()
_exception_formatter = logging.Formatter()


# ============================================================================
# Secret Masking
# ============================================================================

def register_secret(value: str) -> None:
    """
    Register a value that must be masked in all log output.

    Empty and whitespace-only values are ignored.

    Args:
        value: Secret string (credential blob, private key, ...)
    """
    if value and value.strip():
        _secrets.add(value)


def clear_secrets() -> None:
    """Forget all registered secrets."""
    _secrets.clear()


def mask_secrets(text: str) -> str:
    """
    Replace every registered secret in text with the mask.

    Longer secrets are replaced first so a secret containing another
    secret is masked as a whole.
    """
    for secret in sorted(_secrets, key=len, reverse=True):
        if secret in text:
            text = text.replace(secret, MASK)
    return text


class SecretMaskingFilter(logging.Filter):
    """
    Logging filter that masks registered secrets in the rendered message.

    The record's message is rendered once and its arguments are dropped so
    formatters downstream only ever see the masked text. The traceback
    text is rendered and masked too; formatters reuse the cached exc_text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if _secrets:
            record.msg = mask_secrets(record.getMessage())
            record.args = ()
            if record.exc_info and not record.exc_text:
                record.exc_text = _exception_formatter.formatException(record.exc_info)
            if record.exc_text:
                record.exc_text = mask_secrets(record.exc_text)
        return True


# ============================================================================
# Formatters
# ============================================================================

_STANDARD_ATTRIBUTES = frozenset(
    [
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Example output:
        {
            "timestamp": "2026-01-04T10:30:15.123456Z",
            "level": "INFO",
            "logger": "drive_uploader.uploader.batch",
            "message": "Processing file logs/run.txt",
            "extra": {"event": "function_exit"}
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRIBUTES
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]),
                "traceback": mask_secrets(self.formatException(record.exc_info)),
            }

        return mask_secrets(json.dumps(log_data, default=str))


class GitHubActionsFormatter(logging.Formatter):
    """
    Formatter emitting GitHub Actions workflow commands.

    DEBUG records become ``::debug::``, WARNING ``::warning::`` and
    ERROR/CRITICAL ``::error::`` annotations. INFO is printed as plain
    lines, with any line that would read as a workflow command broken by
    COMMAND_BREAK. Newlines in annotations are escaped as the
    workflow-command syntax requires.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            exc_text = record.exc_text or self.formatException(record.exc_info)
            message = f"{message}\n{exc_text}"
        message = mask_secrets(message)

        if record.levelno >= logging.ERROR:
            command = "error"
        elif record.levelno >= logging.WARNING:
            command = "warning"
        elif record.levelno <= logging.DEBUG:
            command = "debug"
        else:
            return "\n".join(
                COMMAND_BREAK + line if line.strip().startswith("::") else line
                for line in message.split("\n")
            )

        escaped = (
            message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        )
        return f"::{command}::{escaped}"


def running_in_github_actions() -> bool:
    """Return True when the process runs inside a GitHub Actions job."""
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def _selected_format() -> str:
    log_format = os.getenv("LOG_FORMAT", "").lower()
    if log_format:
        return log_format
    return "github" if running_in_github_actions() else "text"


def setup_logging(level: str = "INFO", enable_colors: bool = True) -> None:
    """
    Configure global logging settings for the application.

    The output format is picked from the LOG_FORMAT environment variable
    (``text``, ``json`` or ``github``); inside GitHub Actions it defaults to
    ``github``. Every installed handler masks registered secrets.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_colors: Whether to colorize text output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    log_format = _selected_format()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if log_format == "text" and enable_colors:
        coloredlogs.install(
            level=log_level,
            fmt=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            logger=root_logger,
        )
    else:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        if log_format == "json":
            console_handler.setFormatter(JSONFormatter())
        elif log_format == "github":
            console_handler.setFormatter(GitHubActionsFormatter())
        else:
            console_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
        root_logger.addHandler(console_handler)

    for handler in root_logger.handlers:
        if not any(isinstance(f, SecretMaskingFilter) for f in handler.filters):
            handler.addFilter(SecretMaskingFilter())


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_function_call(func: F) -> F:
    """
    Decorator that logs function entry and exit at DEBUG level.

    Arguments and the return value are logged through repr(), so objects
    holding credentials must keep them out of their repr. Exceptions are
    logged and re-raised unchanged.

    Example:
        >>> @log_function_call
        >>> def resolve(name: str) -> str:
        >>>     return name
        >>>
        >>> # DEBUG - ENTER resolve(name='a.txt')
        >>> # DEBUG - EXIT resolve -> 'a.txt' (0.00s)
    """
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_names = func.__code__.co_varnames[: func.__code__.co_argcount]
        args_repr: List[str] = [
            f"{name}={value!r}" for name, value in zip(arg_names, args)
        ]
        args_repr.extend(f"{key}={value!r}" for key, value in kwargs.items())

        logger.debug(
            f"ENTER {func.__name__}({', '.join(args_repr)})",
            extra={"function": func.__name__, "event": "function_entry"},
        )
        start_time = datetime.now()

        try:
            result = func(*args, **kwargs)
        except Exception as error:
            execution_time = (datetime.now() - start_time).total_seconds()
            logger.debug(
                f"ERROR {func.__name__} raised {type(error).__name__}: {error}",
                extra={
                    "function": func.__name__,
                    "event": "function_error",
                    "duration_seconds": execution_time,
                },
            )
            raise

        execution_time = (datetime.now() - start_time).total_seconds()
        logger.debug(
            f"EXIT {func.__name__} -> {result!r} ({execution_time:.2f}s)",
            extra={
                "function": func.__name__,
                "event": "function_exit",
                "duration_seconds": execution_time,
            },
        )
        return result

    return cast(F, wrapper)
