from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cargo_pricing.config.logging_config import configure_logging
from cargo_pricing.config.settings import get_settings
from cargo_pricing.api.quote_api import router as quote_router
from cargo_pricing.api.state import reference

configure_logging()

app = FastAPI(
    title="Cargo Pricing API",
    description="Booking pricing and delivery estimates for air-freight shipments",
    version="1.0.0"
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quote_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Cargo Pricing API Active"}


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    has_report = settings.reference_report.exists()
    return {
        "engine_active": True,
        "destinations_count": len(reference.destinations),
        "services_count": len(reference.services),
        "reference_warnings": reference.warnings,
        "data_dir": str(settings.data_dir),
        "reference_last_build": settings.reference_report.stat().st_mtime if has_report else None
    }
