"""
Audience Dice - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.engine.controller import RoundController
from src.engine.sessions import SessionRegistry
from src.engine.state import RoundState


# =============================================================================
# STATS TEST DATA
# =============================================================================

@pytest.fixture
def median_cases() -> dict[str, tuple[tuple[int, ...], int]]:
    """
    Roll sequences with their expected median.

    Returns:
        Dict mapping name to (results, expected_median)
    """
    return {
        "single": ((5,), 5),
        "odd_sorted": ((1, 2, 3), 2),
        "odd_unsorted": ((6, 1, 4), 4),
        "even_half_rounds_up": ((1, 2, 3, 4), 3),
        "even_exact": ((2, 4, 6, 8), 5),
        "even_unsorted": ((4, 1, 3, 2), 3),
        "pair_half": ((1, 2), 2),
    }


@pytest.fixture
def mode_cases() -> dict[str, tuple[tuple[int, ...], int]]:
    """
    Roll sequences with their expected mode.

    Returns:
        Dict mapping name to (results, expected_mode)
    """
    return {
        "clear_winner": ((3, 3, 5), 3),
        "tie_first_reached": ((1, 1, 2, 2), 1),
        "tie_later_value_reaches_first": ((2, 1, 1, 2), 1),
        "all_distinct": ((4, 6, 2), 4),
        "single": ((20,), 20),
    }


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def state() -> RoundState:
    return RoundState()


@pytest.fixture
def registry(state) -> SessionRegistry:
    return SessionRegistry(state)


@pytest.fixture
def controller(state, registry) -> RoundController:
    return RoundController(state, registry)


@pytest.fixture
def active_controller(controller) -> RoundController:
    """Controller with one registered session (conn-1 -> session-a) and a running round."""
    controller.connect("conn-1")
    controller.register_session("conn-1", "session-a")
    controller.start_round()
    return controller
