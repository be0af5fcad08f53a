from fastapi import Request
from nutritrack.services.catalog import MealCatalog

def get_catalog(request: Request) -> MealCatalog:
    """The catalog loaded once by the application at startup."""
    return getattr(request.app.state, "catalog", None) or MealCatalog()
