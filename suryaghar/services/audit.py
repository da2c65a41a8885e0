"""
Audit trail for admin moderation actions.
"""
from typing import Any, Optional

from loguru import logger

from suryaghar.core.backend import DataClient
from suryaghar.models import AuditLog
from suryaghar.models.constants import AuditAction


async def log_audit(
    client: DataClient,
    *,
    admin_id: Optional[str],
    action: AuditAction,
    entity_type: str,
    entity_id: Optional[str] = None,
    changes: Optional[dict[str, Any]] = None,
) -> AuditLog:
    """Write one audit entry; it commits with the caller's unit of work."""
    entry = await client.insert(AuditLog, {
        "admin_id": admin_id,
        "action": action.value,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "changes": changes or {},
    })
    logger.info(f"Audit: {action.value} {entity_type}:{entity_id} by {admin_id}")
    return entry
