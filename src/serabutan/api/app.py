# src/serabutan/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and mounts the API router.
Business logic lives in `serabutan.search` and `serabutan.ingestion`.

Run locally with: `uvicorn serabutan.api.app:app --reload`
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from serabutan.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="Serabutan API", version="0.1.0")

# Configure via env: SERABUTAN_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
cors_origins = [s.strip() for s in os.getenv("SERABUTAN_CORS_ORIGINS", "").split(",") if s.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(router)


@app.get("/")
def index() -> dict:
    """Landing payload pointing at the interactive docs."""
    return {"message": "Welcome to Serabutan API! Visit /docs for documentation."}
