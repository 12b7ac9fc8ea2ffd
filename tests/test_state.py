"""
Input state manager tests — raw text storage, listeners, calculate, reset.
"""

import pytest

from fillcalc.schemas import FormState, InputMode
from fillcalc.state import InputStateManager
from fillcalc.url_sync import hydrate_state


def test_fresh_manager_is_blank():
    manager = InputStateManager()
    assert manager.state == FormState()
    assert manager.result is None
    assert manager.errors == []
    assert manager.warnings == []


def test_raw_text_preserved():
    """Partial and invalid input is stored verbatim until validated."""
    manager = InputStateManager()
    manager.set_container_dimension("length", "12.")
    manager.set_void_volume("abc")
    manager.set_density(" 1.2 ")
    assert manager.state.container_dimensions.length == "12."
    assert manager.state.void_volume.volume == "abc"
    assert manager.state.density == " 1.2 "


def test_unknown_dimension_field_raises():
    manager = InputStateManager()
    with pytest.raises(ValueError):
        manager.set_container_dimension("depth", "3")


def test_mode_switch_accepts_strings():
    manager = InputStateManager()
    manager.set_container_type("volume")
    manager.set_void_type(InputMode.VOLUME)
    assert manager.state.container_type == InputMode.VOLUME
    assert manager.state.void_type == InputMode.VOLUME


def test_every_mutation_notifies_listeners():
    manager = InputStateManager()
    calls = []
    manager.subscribe(lambda m, reset: calls.append(reset))
    manager.set_container_type("volume")
    manager.set_container_volume("100")
    manager.set_void_dimension("width", "2")
    manager.set_density("1")
    assert calls == [False, False, False, False]


def test_unsubscribe_stops_notifications():
    manager = InputStateManager()
    calls = []
    unsubscribe = manager.subscribe(lambda m, reset: calls.append(reset))
    unsubscribe()
    manager.set_density("1")
    assert calls == []


def test_calculate_stores_outcome():
    manager = InputStateManager()
    for field in ("length", "width", "height"):
        manager.set_container_dimension(field, "10")
    outcome = manager.calculate()
    assert outcome.result.material_volume == 1000
    assert manager.result == outcome.result
    assert manager.errors == []


def test_calculate_replaces_previous_result_with_errors():
    manager = InputStateManager()
    manager.set_container_type("volume")
    manager.set_container_volume("100")
    manager.calculate()
    assert manager.result is not None

    manager.set_void_type("volume")
    manager.set_void_volume("200")
    manager.calculate()
    assert manager.result is None
    assert manager.errors == ["Void volume cannot be larger than container volume"]


def test_reset_clears_everything_and_flags_reset():
    manager = InputStateManager()
    manager.set_container_type("volume")
    manager.set_container_volume("0")
    manager.calculate()
    assert manager.warnings

    flags = []
    manager.subscribe(lambda m, reset: flags.append(reset))
    manager.reset()
    assert manager.state == FormState()
    assert manager.result is None
    assert manager.errors == []
    assert manager.warnings == []
    assert flags == [True]


def test_reset_then_empty_hydration_matches_fresh_load():
    manager = InputStateManager()
    manager.set_void_dimension("height", "4")
    manager.reset()
    manager.load(hydrate_state(""))
    assert manager.state == InputStateManager().state


def test_apply_material_fills_density():
    manager = InputStateManager()
    manager.apply_material("Concrete")
    assert manager.state.density == "2.4"


def test_apply_unknown_material_raises():
    manager = InputStateManager()
    with pytest.raises(ValueError):
        manager.apply_material("unobtainium")


def test_initial_state_is_copied():
    state = FormState(density="1.5")
    manager = InputStateManager(state)
    manager.set_density("2")
    assert state.density == "1.5"
