"""
Admin dashboard overview and audit trail.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from suryaghar.api.deps import get_client
from suryaghar.core.backend import DataClient, decode_all
from suryaghar.core.response import DictResponse, success_response
from suryaghar.models import AuditLog, AuditLogResponse
from suryaghar.services.analytics import dashboard_overview

router = APIRouter()


@router.get("/overview", summary="Dashboard figures", response_model=DictResponse)
async def get_overview(client: DataClient = Depends(get_client)):
    return success_response(data=await dashboard_overview(client))


@router.get("/audit-logs", summary="Moderation audit trail", response_model=DictResponse)
async def list_audit_logs(
    entity_type: Optional[str] = Query(None, description="e.g. job"),
    entity_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    client: DataClient = Depends(get_client),
):
    where = []
    if entity_type:
        where.append(AuditLog.entity_type == entity_type)
    if entity_id:
        where.append(AuditLog.entity_id == entity_id)
    rows = await client.select(AuditLog, *where, order_by=AuditLog.created_at.desc(), limit=limit)
    return success_response(data={"items": decode_all(AuditLogResponse, rows)})
