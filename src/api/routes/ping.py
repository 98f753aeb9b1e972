"""
Ping Route

Connectivity check for the storefront frontend.
"""

from datetime import datetime
from fastapi import APIRouter
from pydantic import BaseModel

from common import global_config

router = APIRouter(tags=["Health"])


class PingResponse(BaseModel):
    message: str
    status: str
    service: str
    timestamp: str


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    return PingResponse(
        message="pong",
        status="ok",
        service=global_config.app_name,
        timestamp=datetime.now().isoformat(),
    )
