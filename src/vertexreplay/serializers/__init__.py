"""Serialization helpers."""

from .codec import decode, encode
from .scenario import (
    ScenarioRecord,
    load_scenario_file,
    save_scenario,
    scenario_from_bytes,
    scenario_to_bytes,
)

__all__ = [
    "ScenarioRecord",
    "decode",
    "encode",
    "load_scenario_file",
    "save_scenario",
    "scenario_from_bytes",
    "scenario_to_bytes",
]
