from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Dict, Any, Optional
from datetime import datetime

from building_compliance.config import element_types, sub_types_for
from building_compliance.layers import LayerGroup

class LayerModel(BaseModel):
    """One layer of an element's build-up."""
    id: str = Field(default="", description="Layer identifier")
    name: str = Field(default="", description="Display name")
    substance: str = Field(description="Catalog substance")
    maker: str = Field(description="Catalog maker")
    product: str = Field(description="Catalog product")
    thickness: float = Field(description="Thickness in cm", gt=0)
    thermal_conductivity: float = Field(
        default=0.0, description="Thermal conductivity in W/(m*K)", ge=0
    )
    mass: float = Field(default=0.0, description="Density in kg/m3", ge=0)
    group: Optional[int] = Field(
        default=None, description="Layer group (1-3); assigned from position when missing"
    )

    @field_validator('group')
    @classmethod
    def validate_group(cls, v: Optional[int]) -> Optional[int]:
        """Group must be one of the layer groups."""
        if v is not None and v not in [g.value for g in LayerGroup]:
            raise ValueError("Group must be 1, 2 or 3")
        return v

class ElementInput(BaseModel):
    """Element data as sent by clients on create and update."""
    type: str = Field(default="Wall", description="Element type")
    sub_type: Optional[str] = Field(default=None, description="Element sub-type")
    outside_cover: Optional[str] = Field(default=None, description="Outside cover of an outside wall")
    build_method: Optional[str] = Field(default=None, description="Build method of an outside wall")
    build_method_isolation: Optional[str] = Field(
        default=None, description="Isolation method of the build method"
    )
    isolation_coverage: Optional[str] = Field(default=None, description="Outer surface colour")
    name: str = Field(default="", max_length=200, description="Element name")
    parameters: Dict[str, Any] = Field(default={}, description="Free-form element parameters")
    layers: List[LayerModel] = Field(default=[], description="Layers in build-up order")

    @field_validator('type')
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Type must be a known element type."""
        if v not in element_types():
            raise ValueError(f"Element type must be one of {element_types()}")
        return v

    @model_validator(mode='after')
    def validate_element(self) -> 'ElementInput':
        """Check the sub-type and number the layer groups."""
        if self.sub_type and self.sub_type not in sub_types_for(self.type):
            raise ValueError("SubType does not match Element Type")

        # Layers without a group cycle through 1, 2, 3 by position
        for index, layer in enumerate(self.layers):
            if layer.group is None:
                layer.group = (index % 3) + 1

        return self

class ElementRecord(ElementInput):
    """Stored element with its location and timestamps."""
    element_id: str = Field(description="Element identifier")
    project_id: str = Field(description="Project identifier")
    type_id: str = Field(description="Building type identifier")
    space_id: str = Field(description="Space identifier")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

class ElementResponse(BaseModel):
    """Envelope returned by the element endpoints."""
    success: bool = Field(description="Whether the operation succeeded")
    data: Optional[Any] = Field(default=None, description="Element, list of elements or result")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")

class TransitionRequest(BaseModel):
    """One cascading change of an element configuration."""
    values: Dict[str, Optional[str]] = Field(
        default={}, description="Current configuration values"
    )
    field: str = Field(description="Field being changed")
    value: Optional[str] = Field(default=None, description="New value, null to clear")

class TransitionResponse(BaseModel):
    """Configuration after a change, with the options of every field."""
    values: Dict[str, Optional[str]]
    options: Dict[str, List[str]]
    missing: List[str]

class ComplianceDetailsModel(BaseModel):
    checks_passed: List[str] = []
    checks_failed: List[str] = []
    recommendations: List[str] = []

class ComplianceResultModel(BaseModel):
    """Result of an element compliance check."""
    is_compliant: bool
    u_value: Optional[float] = Field(default=None, description="U-value in W/(m2*K)")
    max_u_value: Optional[float] = Field(default=None, description="Maximum allowed U-value")
    areal_mass: float = Field(default=0.0, description="Mass per area in kg/m2")
    details: ComplianceDetailsModel
