from __future__ import annotations

from collections.abc import Iterable

import vertexreplay
from vertexreplay.models import Scenario
from vertexreplay.values import IntValue, TypeRegistry


def reset_vertexreplay_config() -> None:
    """Reset the default recorder between tests."""
    vertexreplay._reset_default_recorder()


import pytest  # noqa: E402


class MinLabelComputation:
    """Connected-components style logic used as the computation under test."""

    def compute(self, vertex: object, messages: Iterable[object]) -> None:
        pass


def build_example_scenario() -> Scenario:
    scenario = Scenario.for_computation(
        MinLabelComputation,
        vertex_id_type=IntValue,
        vertex_value_type=IntValue,
        edge_value_type=IntValue,
        inbound_message_type=IntValue,
        step_number=3,
        vertex_id=IntValue(7),
        vertex_value_before=IntValue(5),
        vertex_value_after=IntValue(6),
    )
    scenario.add_neighbor(IntValue(3))
    scenario.add_neighbor(IntValue(9), IntValue(1))
    scenario.add_inbound_message(IntValue(2))
    scenario.add_inbound_message(IntValue(4))
    scenario.add_outbound_message(IntValue(3), IntValue(10))
    scenario.add_outbound_message(IntValue(9), IntValue(11))
    return scenario


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    reset_vertexreplay_config()


@pytest.fixture
def computation() -> type:
    return MinLabelComputation


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry([MinLabelComputation])


@pytest.fixture
def example_scenario() -> Scenario:
    return build_example_scenario()
