"""
Structured logging for the scs-client SDK.

The SDK only ever asks for loggers. Applications that want structured
output from it call ``configure_logging`` themselves, typically with
``Configuration.log_level``.
"""

import logging
import sys
import uuid
from contextvars import ContextVar, Token
from typing import Any, Dict, List, Optional, Tuple

import structlog
from opentelemetry import trace

SDK_LOGGER_PREFIX = "scs_client."

# Per-call correlation
call_id_var: ContextVar[Optional[str]] = ContextVar('call_id', default=None)
operation_var: ContextVar[Optional[str]] = ContextVar('operation', default=None)


def configure_logging(log_level: str = "info", json_output: bool = True) -> None:
    """Route SDK logs through structlog.

    Args:
        log_level: Standard level name, e.g. ``"debug"``.
        json_output: Render JSON lines; otherwise use the console renderer.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    processors: List[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_sdk_component,
        add_trace_context,
        add_call_context,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_sdk_component(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events from SDK loggers with the emitting component."""
    logger_name = event_dict.get("logger", "")
    if logger_name.startswith(SDK_LOGGER_PREFIX):
        event_dict["component"] = logger_name[len(SDK_LOGGER_PREFIX):]

    return event_dict


def add_trace_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Attach the active span's ids, if any."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = f"{span_context.trace_id:032x}"
        event_dict["span_id"] = f"{span_context.span_id:016x}"

    return event_dict


def add_call_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Attach the SDK call currently in flight."""
    call_id = call_id_var.get()
    if call_id:
        event_dict["call_id"] = call_id

    operation = operation_var.get()
    if operation:
        event_dict.setdefault("operation", operation)

    return event_dict


def bind_call(operation: str, call_id: Optional[str] = None) -> Tuple[Token, Token]:
    """Bind a call id and operation name to the current context."""
    if call_id is None:
        call_id = str(uuid.uuid4())
    return call_id_var.set(call_id), operation_var.set(operation)


def unbind_call(tokens: Tuple[Token, Token]) -> None:
    """Restore the context saved by ``bind_call``."""
    call_token, operation_token = tokens
    call_id_var.reset(call_token)
    operation_var.reset(operation_token)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
