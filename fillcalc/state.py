"""
Input state manager — holds the form exactly as typed.

Every mutation notifies the registered listeners; the URL synchronizer is the
main listener. Results are re-derived on each calculate() and never persisted.
"""

import logging
from typing import Callable, List, Optional

from . import calculator
from .densities import density_for
from .schemas import CalculationOutcome, CalculationResult, FormState, InputMode

logger = logging.getLogger(__name__)

# listener(manager, reset) — reset is True only for reset()
Listener = Callable[["InputStateManager", bool], None]

DIMENSION_FIELDS = ("length", "width", "height")


class InputStateManager:

    def __init__(self, state: Optional[FormState] = None):
        self.state = state.model_copy(deep=True) if state else FormState()
        self.result: Optional[CalculationResult] = None
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self._listeners: List[Listener] = []

    # --- Observers ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self, reset: bool = False) -> None:
        for listener in list(self._listeners):
            listener(self, reset)

    # --- Mutators ---

    def load(self, state: FormState) -> None:
        """Replace the whole form, e.g. from hydrated URL parameters."""
        self.state = state.model_copy(deep=True)
        self._changed()

    def set_container_type(self, mode) -> None:
        self.state.container_type = InputMode(mode)
        self._changed()

    def set_void_type(self, mode) -> None:
        self.state.void_type = InputMode(mode)
        self._changed()

    def set_container_dimension(self, field: str, value: str) -> None:
        self._set_dimension(self.state.container_dimensions, field, value)

    def set_void_dimension(self, field: str, value: str) -> None:
        self._set_dimension(self.state.void_dimensions, field, value)

    def _set_dimension(self, dims, field: str, value: str) -> None:
        if field not in DIMENSION_FIELDS:
            raise ValueError(
                f"Unknown dimension field: {field}. Available: {list(DIMENSION_FIELDS)}"
            )
        setattr(dims, field, value)
        self._changed()

    def set_container_volume(self, value: str) -> None:
        self.state.container_volume.volume = value
        self._changed()

    def set_void_volume(self, value: str) -> None:
        self.state.void_volume.volume = value
        self._changed()

    def set_density(self, value: str) -> None:
        self.state.density = value
        self._changed()

    def apply_material(self, material: str) -> None:
        """Fill the density field from the reference density table."""
        self.set_density(f"{density_for(material):g}")

    # --- Actions ---

    def calculate(self) -> CalculationOutcome:
        outcome = calculator.calculate(self.state)
        self.result = outcome.result
        self.errors = list(outcome.errors)
        self.warnings = list(outcome.warnings)
        return outcome

    def reset(self) -> None:
        """Clear every field and any result; listeners also clear the URL."""
        self.state = FormState()
        self.result = None
        self.errors = []
        self.warnings = []
        logger.debug("Form reset")
        self._changed(reset=True)
