"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime
from time import time
from typing import Any

from fastapi import APIRouter

from foundry_ai import settings

# Track server start time for uptime metrics
start_time = time()

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/healthz", summary="Basic Health Check", response_description="Service health status")
async def healthz() -> dict[str, Any]:
    """
    Basic health check endpoint for load balancers and monitoring.

    **Example Response:**
    ```json
    {
        "status": "ok",
        "timestamp": "2026-10-17T13:45:00.000000",
        "service": "foundry-ai"
    }
    ```
    """
    return {"status": "ok", "timestamp": datetime.now().isoformat(), "service": "foundry-ai"}


@router.get("/health/detailed", summary="Detailed Health Check")
async def health_detailed() -> dict[str, Any]:
    """Report which integrations are configured, plus uptime."""
    checks = {
        "supabase": bool(settings.supabase_url and (settings.supabase_service_role_key or settings.supabase_anon_key)),
        "ai_gateway": bool(settings.openrouter_api_key or settings.openai_api_key),
    }
    return {
        "status": "ok" if all(checks.values()) else "degraded",
        "checks": checks,
        "uptime_seconds": round(time() - start_time, 1),
        "timestamp": datetime.now().isoformat(),
    }
