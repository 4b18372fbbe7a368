"""Structured logging and OpenTelemetry spans for bundle-compressed.

This module provides:
- The structlog logger shared by the extraction components
- An OpenTelemetry span per visited compilation
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

# Module-level logger and tracer
_logger: BoundLogger | None = None
_tracer: Tracer | None = None

# Tracer name for OpenTelemetry
TRACER_NAME = "bundle.compressed"
COMPILATION_SPAN = "bundle.compilation"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        >>> logger = get_logger()
        >>> logger.warning("asset_unreadable", asset="main.js")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for bundle-compressed.

    Returns:
        OpenTelemetry Tracer instance.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def compilation_operation(
    build_id: str | None,
    *,
    depth: int | None = None,
) -> Iterator[Span]:
    """Create a span for one compilation visited by the walker.

    The span status is set to OK on exit, or to ERROR with the exception
    recorded when one escapes the block.

    Args:
        build_id: Compilation hash.
        depth: Nesting depth of the compilation below the root.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with compilation_operation("a1b2c3", depth=0):
        ...     await extractor.extract(compilation)
    """
    attrs: dict[str, Any] = {}
    if build_id:
        attrs["bundle.build_id"] = build_id
    if depth is not None:
        attrs["bundle.depth"] = depth

    with get_tracer().start_as_current_span(COMPILATION_SPAN, attributes=attrs) as s:
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            get_logger().error("compilation_failed", error=str(exc), **attrs)
            raise
        s.set_status(Status(StatusCode.OK))
