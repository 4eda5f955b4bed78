from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.dependencies import EscalationService, get_escalation_service
from escalation.config import EscalationConfig
from escalation.schemas import EscalationDetection, EscalationResult, EscalationStats
from escalation.stats import to_naive_utc

router = APIRouter(prefix="/escalations", tags=["escalations"])


class EscalationRequest(BaseModel):
    session_id: str = Field(min_length=1)
    customer_id: Optional[str] = None
    message: str
    confidence: float = Field(ge=0.0, le=1.0)
    failure_count: int = Field(default=0, ge=0)
    config: Optional[EscalationConfig] = None


@router.post("", response_model=EscalationResult)
async def escalate(
    request: EscalationRequest,
    service: EscalationService = Depends(get_escalation_service),
):
    config = await _resolve_config(request, service)
    return await service.orchestrator.escalate_conversation(
        request.session_id,
        request.customer_id,
        request.message,
        request.confidence,
        request.failure_count,
        config,
    )


@router.post("/detect", response_model=EscalationDetection)
async def detect(
    request: EscalationRequest,
    service: EscalationService = Depends(get_escalation_service),
):
    config = await _resolve_config(request, service)
    return service.classifier.classify(
        request.message,
        request.confidence,
        request.failure_count,
        request.customer_id,
        config,
    )


@router.get("/stats", response_model=EscalationStats)
async def stats(
    start: datetime = Query(...),
    end: datetime = Query(...),
    service: EscalationService = Depends(get_escalation_service),
):
    start, end = to_naive_utc(start), to_naive_utc(end)
    if end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    return await service.stats.get_escalation_stats(start, end)


async def _resolve_config(request: EscalationRequest, service: EscalationService) -> EscalationConfig:
    """Request config (or the service default) with customer-store VIP status merged in."""
    config = request.config or service.orchestrator.default_config
    return await service.vip_checker.resolve_config(config, request.customer_id)
