"""
FastAPI application entrypoint.

Run locally:  uvicorn mms_validator.main:app --reload
"""

import logging

from fastapi import FastAPI

from mms_validator.api.routes import router
from mms_validator.config import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s | %(name)s | %(message)s")

app = FastAPI(
    title="MMS Schema Validator API",
    description=(
        "Structural contract checks and data-modeling advisories for "
        "MongoDB member and provider documents."
    ),
    version="1.0.0",
)

app.include_router(router, prefix="/api/v1")
