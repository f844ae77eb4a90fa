"""Capture runtime: selection policy and recorder."""

from .debug_config import DebugConfig
from .hooks import NullHook, RecorderHook
from .recorder import Recorder
from .selection import Decision, SelectionState, admit_anomaly, decide

__all__ = [
    "DebugConfig",
    "Decision",
    "NullHook",
    "Recorder",
    "RecorderHook",
    "SelectionState",
    "admit_anomaly",
    "decide",
]
