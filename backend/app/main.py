"""FastAPI application."""

from fastapi import FastAPI

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.rates import router as rates_router
from backend.app.api.routes.tours import router as tours_router

app = FastAPI(title="Tour Builder API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(rates_router, tags=["rates"])
app.include_router(tours_router, tags=["tours"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Tour Builder API", "version": "0.1.0"}
