# Trace/log correlation: stamps the active OpenTelemetry span onto records.

from __future__ import annotations
from typing import Dict

from opentelemetry import trace


def current_trace_fields() -> Dict[str, str]:
    """Return trace_id/span_id of the current span, or {} when none is active."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return {}
    return {
        "trace_id": trace.format_trace_id(ctx.trace_id),
        "span_id": trace.format_span_id(ctx.span_id),
    }
