"""Data models for trace capture."""

from .address import TraceAddress, step_pattern, trace_file_name
from .scenario import Context, ExceptionInfo, Neighbor, OutboundMessage, Scenario

CURRENT_SCHEMA_VERSION = "0.1.0"

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "Context",
    "ExceptionInfo",
    "Neighbor",
    "OutboundMessage",
    "Scenario",
    "TraceAddress",
    "step_pattern",
    "trace_file_name",
]
