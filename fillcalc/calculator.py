"""
Fill material calculation engine.

Input: FormState (raw text exactly as typed)
Output: CalculationOutcome — a CalculationResult, or the errors that blocked it,
plus any non-blocking warnings.

Units: dimensions in mm, volumes in mm³, density in g/cm³, weight in g.
Box-volume model only; callers supply box-equivalent dimensions.
"""

import logging
import math
from typing import List, NamedTuple, Optional

from .schemas import (
    CalculationOutcome,
    CalculationResult,
    DimensionInputs,
    FormattedResult,
    FormState,
    InputMode,
)

logger = logging.getLogger(__name__)

MM3_PER_CM3 = 1000.0
CM3_DISPLAY_THRESHOLD = 1_000_000.0  # mm³
KG_DISPLAY_THRESHOLD = 1000.0        # g

ERR_CONTAINER_DIMENSIONS_REQUIRED = "All container dimensions are required"
ERR_CONTAINER_VOLUME_REQUIRED = "Container volume is required"
ERR_VOID_DIMENSIONS_INCOMPLETE = "If specifying void dimensions, all fields are required"
ERR_VOID_TOO_LARGE = "Void volume cannot be larger than container volume"


class FieldCheck(NamedTuple):
    """Outcome of validating one text field. At most one of value/error is set."""
    value: Optional[float] = None
    error: Optional[str] = None
    warning: Optional[str] = None

    @property
    def provided(self) -> bool:
        return self.value is not None or self.error is not None


def validate_number(value: str, field_name: str) -> FieldCheck:
    """
    Validate one numeric field.

    Blank text means "not provided" and is not an error by itself; whether the
    field is mandatory is decided by the caller. Zero is allowed but warned about.
    """
    text = (value or "").strip()
    if not text:
        return FieldCheck()

    try:
        num = float(text)
    except ValueError:
        return FieldCheck(error=f"{field_name} must be a valid number")
    if not math.isfinite(num):
        return FieldCheck(error=f"{field_name} must be a valid number")

    if num < 0:
        return FieldCheck(error=f"{field_name} cannot be negative")
    if num == 0:
        return FieldCheck(value=0.0, warning=f"{field_name} is zero")
    return FieldCheck(value=num)


def calculate_volume(length: float, width: float, height: float) -> float:
    """Box volume, mm × mm × mm → mm³."""
    return length * width * height


def material_weight(material_volume: float, density: float) -> float:
    """mm³ → cm³, then × g/cm³ → g."""
    return (material_volume / MM3_PER_CM3) * density


def _collect(checks: List[FieldCheck], errors: List[str], warnings: List[str]) -> None:
    for check in checks:
        if check.error:
            errors.append(check.error)
        if check.warning:
            warnings.append(check.warning)


def _check_dimensions(dims: DimensionInputs, label: str) -> List[FieldCheck]:
    return [
        validate_number(dims.length, f"{label} length"),
        validate_number(dims.width, f"{label} width"),
        validate_number(dims.height, f"{label} height"),
    ]


def calculate(state: FormState) -> CalculationOutcome:
    """
    Validate the form and compute container, void and material volumes and
    the material weight.

    Missing mandatory fields stop the calculation before any volume is
    computed. Zero warnings gathered up to the point of failure are still
    reported alongside the errors.
    """
    errors: List[str] = []
    warnings: List[str] = []

    def blocked() -> CalculationOutcome:
        logger.debug("Calculation blocked: %s", errors)
        return CalculationOutcome(result=None, errors=errors, warnings=warnings)

    # --- Container (mandatory) ---
    if state.container_type == InputMode.DIMENSIONS:
        checks = _check_dimensions(state.container_dimensions, "Container")
        _collect(checks, errors, warnings)
        missing = any(not c.provided for c in checks)
        if missing:
            errors.append(ERR_CONTAINER_DIMENSIONS_REQUIRED)
        if errors:
            return blocked()
        container_volume = calculate_volume(*(c.value for c in checks))
    else:
        check = validate_number(state.container_volume.volume, "Container volume")
        _collect([check], errors, warnings)
        if check.error:
            return blocked()
        if not check.provided:
            errors.append(ERR_CONTAINER_VOLUME_REQUIRED)
            return blocked()
        container_volume = check.value

    # --- Void (optional) ---
    void_volume = 0.0
    if state.void_type == InputMode.DIMENSIONS:
        if not state.void_dimensions.is_blank():
            checks = _check_dimensions(state.void_dimensions, "Void")
            _collect(checks, errors, warnings)
            if any(not c.provided for c in checks):
                errors.append(ERR_VOID_DIMENSIONS_INCOMPLETE)
            if errors:
                return blocked()
            void_volume = calculate_volume(*(c.value for c in checks))
    else:
        check = validate_number(state.void_volume.volume, "Void volume")
        _collect([check], errors, warnings)
        if check.error:
            return blocked()
        if check.provided:
            void_volume = check.value

    if void_volume > container_volume:
        errors.append(ERR_VOID_TOO_LARGE)
        return blocked()

    material_volume = container_volume - void_volume

    # --- Weight (only when a density is given) ---
    weight = 0.0
    density = validate_number(state.density, "Material density")
    _collect([density], errors, warnings)
    if density.error:
        return blocked()
    if density.provided:
        weight = material_weight(material_volume, density.value)

    return CalculationOutcome(
        result=CalculationResult(
            container_volume=container_volume,
            void_volume=void_volume,
            material_volume=material_volume,
            material_weight=weight,
        ),
        errors=errors,
        warnings=warnings,
    )


def format_volume(volume: float) -> str:
    """mm³ for small volumes, cm³ from 1,000,000 mm³ up."""
    if volume >= CM3_DISPLAY_THRESHOLD:
        return f"{volume / CM3_DISPLAY_THRESHOLD:.2f} cm³"
    return f"{volume:.2f} mm³"


def format_weight(weight: float) -> str:
    """g below 1000 g, kg from there up."""
    if weight >= KG_DISPLAY_THRESHOLD:
        return f"{weight / KG_DISPLAY_THRESHOLD:.2f} kg"
    return f"{weight:.2f} g"


def format_result(result: CalculationResult, has_density: bool = True) -> FormattedResult:
    return FormattedResult(
        container_volume=format_volume(result.container_volume),
        void_volume=format_volume(result.void_volume),
        material_volume=format_volume(result.material_volume),
        material_weight=format_weight(result.material_weight) if has_density else None,
    )
