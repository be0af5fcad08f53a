from pydantic import Field
from nutritrack.schemas.base import CamelModel

class BMIRequest(CamelModel):
    weight_kg: float = Field(..., gt=0, le=500)
    height_cm: float = Field(..., gt=0, le=300)

class BMIResponse(CamelModel):
    bmi: float
    category: str
    catalog_category: str
