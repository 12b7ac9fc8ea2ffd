from pydantic import BaseModel, Field
from typing import Optional, List
import enum


class InputMode(str, enum.Enum):
    DIMENSIONS = "dimensions"
    VOLUME = "volume"


class DimensionInputs(BaseModel):
    # Raw text as typed; millimeters once validated
    length: str = ""
    width: str = ""
    height: str = ""

    def as_list(self) -> List[str]:
        return [self.length, self.width, self.height]

    def is_blank(self) -> bool:
        return not any(v.strip() for v in self.as_list())


class VolumeInputs(BaseModel):
    # Raw text as typed; cubic millimeters once validated
    volume: str = ""


class FormState(BaseModel):
    """Everything the user has typed into the form, kept verbatim."""
    container_type: InputMode = InputMode.DIMENSIONS
    container_dimensions: DimensionInputs = Field(default_factory=DimensionInputs)
    container_volume: VolumeInputs = Field(default_factory=VolumeInputs)
    void_type: InputMode = InputMode.DIMENSIONS
    void_dimensions: DimensionInputs = Field(default_factory=DimensionInputs)
    void_volume: VolumeInputs = Field(default_factory=VolumeInputs)
    density: str = ""  # g/cm³


class CalculationResult(BaseModel):
    container_volume: float  # mm³
    void_volume: float       # mm³
    material_volume: float   # mm³
    material_weight: float   # g, 0 when no density given


class CalculationOutcome(BaseModel):
    result: Optional[CalculationResult] = None
    errors: List[str] = []
    warnings: List[str] = []

    @property
    def ok(self) -> bool:
        return self.result is not None


class FormattedResult(BaseModel):
    container_volume: str
    void_volume: str
    material_volume: str
    material_weight: Optional[str] = None


class CalculationResponse(BaseModel):
    state: FormState
    query: str
    result: Optional[CalculationResult] = None
    formatted: Optional[FormattedResult] = None
    errors: List[str] = []
    warnings: List[str] = []


class StateResponse(BaseModel):
    state: FormState
    query: str


class ShareResponse(BaseModel):
    query: str
    url: str


class MaterialDensity(BaseModel):
    name: str
    label: str
    density: float  # g/cm³
