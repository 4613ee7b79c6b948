"""Audit service — who changed what, per gym."""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from gymdesk.core.guards import GymContext
from gymdesk.models.audit_log import AuditLog

logger = logging.getLogger("gymdesk")


def _to_json(value: Any) -> Optional[str]:
    if value is None or value == {} or value == []:
        return None
    return json.dumps(value, default=str, sort_keys=True)


class AuditService:
    """Writes audit entries and answers audit queries."""

    @staticmethod
    def log(
        db: Session,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        actor_id: Optional[int] = None,
        actor_email: Optional[str] = None,
        actor_role: Optional[str] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
        gym_id: Optional[int] = None,
        request_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """Insert one entry and commit it on its own.

        ``action`` is ``<resource>.<verb>``; values are stored as JSON text.
        """
        entry = AuditLog(
            gym_id=gym_id,
            actor_id=actor_id,
            actor_email=actor_email,
            actor_role=actor_role,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            old_value_json=_to_json(old_value),
            new_value_json=_to_json(new_value),
            request_id=request_id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.add(entry)
        db.commit()
        logger.debug("audit %s %s:%s by %s", action, resource_type, resource_id, actor_id)
        return entry

    @staticmethod
    def log_from_request(
        db: Session,
        request: Request,
        ctx: GymContext,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
    ) -> AuditLog:
        """Audit an action by the guarded caller, in the gym the guard bound."""
        return AuditService.log(
            db,
            action,
            resource_type,
            resource_id=resource_id,
            actor_id=ctx.user_id,
            actor_email=ctx.caller.email,
            actor_role=ctx.role,
            old_value=old_value,
            new_value=new_value,
            gym_id=ctx.gym_id,
            request_id=getattr(request.state, "request_id", None),
            ip_address=request.client.host if request.client else None,
            user_agent=(request.headers.get("user-agent") or "")[:500] or None,
        )

    @staticmethod
    def query_logs(
        db: Session,
        gym_id: Optional[int] = None,
        actor_id: Optional[int] = None,
        action: Optional[str] = None,
        resource_type: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Dict[str, Any]:
        """Newest entries first. ``action`` matches as a prefix (``role.``)."""
        query = db.query(AuditLog)
        if gym_id is not None:
            query = query.filter(AuditLog.gym_id == gym_id)
        if actor_id is not None:
            query = query.filter(AuditLog.actor_id == actor_id)
        if action:
            query = query.filter(AuditLog.action.startswith(action))
        if resource_type:
            query = query.filter(AuditLog.resource_type == resource_type)
        if since:
            query = query.filter(AuditLog.created_at >= since)
        if until:
            query = query.filter(AuditLog.created_at < until)

        total = query.count()
        logs = (
            query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return {"logs": logs, "total": total, "page": page, "page_size": page_size}


audit_service = AuditService()
