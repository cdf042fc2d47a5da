"""
Logger Implementation
=====================

structlog configuration for the connectivity layer.

Every entry carries the service name and library version. Session
tokens and wallet secrets are replaced before rendering; account
addresses and transaction hashes are public and pass through. Output
is JSON when ``json_logs`` is set, a rich console renderer otherwise.

Version: 0.1.0
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


REDACTED = "***REDACTED***"

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "secret",
        "token",
        "authorization",
        "private_key",
        "mnemonic",
    }
)

# Third-party loggers that flood DEBUG while the resolvers probe
_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "asyncio", "web3")


def _service_context(service_name: str, version: str) -> Processor:
    """Stamp every entry with the service name and version."""

    def add_service_context(
        logger: logging.Logger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", version)
        return event_dict

    return add_service_context


def _is_sensitive(key: str) -> bool:
    key_lower = key.lower()
    return key_lower != "event" and any(s in key_lower for s in _SENSITIVE_KEYS)


def _censor(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: REDACTED if _is_sensitive(str(key)) else _censor(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return type(value)(_censor(item) for item in value)
    return value


def _censor_secrets(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Replace secret-looking values, including inside nested payloads."""
    return _censor(event_dict)


def setup_logging(
    log_level: str | None = None,
    json_logs: bool | None = None,
    service_name: str | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments left as None are taken from ``settings``.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_logs: Render JSON instead of the console format
        service_name: Value of the ``service`` field
    """
    from medichain import __version__
    from medichain.config import settings

    level = (log_level or settings.log_level.value).upper()
    json_output = settings.json_logs if json_logs is None else json_logs
    service = service_name or settings.service_name

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(service, __version__),
        _censor_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Processor
    if json_output:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        shared_processors.append(structlog.dev.set_exc_info)
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(
                show_locals=False,
                max_frames=10,
            ),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> "BoundLogger":
    """Structured logger for a module (pass ``__name__``)."""
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Attach fields to every later entry in the current async context.

    ``SessionContext.connect_wallet`` binds ``account`` this way.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all fields bound with ``bind_context``."""
    structlog.contextvars.clear_contextvars()
