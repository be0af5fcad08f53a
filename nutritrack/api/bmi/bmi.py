from fastapi import APIRouter
from nutritrack.schemas.bmi import BMIRequest, BMIResponse
from nutritrack.services.bmi import calculate_bmi, catalog_category, display_category

router = APIRouter()

@router.post("", response_model=BMIResponse)
async def compute_bmi(bmi_request: BMIRequest):
    bmi = calculate_bmi(bmi_request.weight_kg, bmi_request.height_cm)
    return {
        "bmi": bmi,
        "category": display_category(bmi),
        "catalog_category": catalog_category(bmi)
    }
