"""Main FastAPI application with modularized routes."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import builders, forms, preview
from core.logging_setup import setup_console_logging

setup_console_logging()

app = FastAPI(title="Form Builder API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/test")
def health() -> dict[str, str]:
    """Check that the API is up."""
    return {"message": "Form builder API is running"}


# Include routers
app.include_router(forms.router)
app.include_router(builders.router)
app.include_router(preview.router)
