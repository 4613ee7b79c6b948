"""Reports API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gymdesk.core.constants import ADMIN_ROLES, Roles
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import ReportSummary
from gymdesk.services.report_service import report_service

router = APIRouter(prefix="/reports", tags=["reports"])

report_guard = AccessGuard(
    Roles.SUPERADMIN, *ADMIN_ROLES, Roles.MANAGER, scope=ScopeMode.optional,
)


@router.get("/summary", response_model=ReportSummary)
async def summary(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(report_guard),
):
    """Gym summary, or platform-wide totals when no gym is in scope."""
    return report_service.summary(db, ctx.gym_id)
