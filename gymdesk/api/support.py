"""Support tickets API router."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gymdesk.core.constants import GYM_ROLES, Roles, STAFF_ROLES
from gymdesk.core.exceptions import ResourceNotFoundError
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import TicketCreate, TicketOut, TicketUpdate
from gymdesk.services.support_service import support_service

router = APIRouter(prefix="/support/tickets", tags=["support"])

member_guard = AccessGuard(Roles.SUPERADMIN, *GYM_ROLES, scope=ScopeMode.required)
staff_guard = AccessGuard(Roles.SUPERADMIN, *STAFF_ROLES, scope=ScopeMode.required)


def _own_tickets_only(ctx: GymContext) -> bool:
    return ctx.role == Roles.CLIENT


@router.post("/", response_model=TicketOut, status_code=201)
async def create_ticket(
    body: TicketCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    return support_service.create(db, ctx.gym_id, ctx.user_id, body)


@router.get("/", response_model=List[TicketOut])
async def list_tickets(
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    """Clients see their own tickets; staff see every ticket of the gym."""
    user_id = ctx.user_id if _own_tickets_only(ctx) else None
    return support_service.list_tickets(db, ctx.gym_id, user_id=user_id, status=status)


@router.get("/{ticket_id}", response_model=TicketOut)
async def get_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    ticket = support_service.get(db, ctx.gym_id, ticket_id)
    if _own_tickets_only(ctx) and ticket.user_id != ctx.user_id:
        raise ResourceNotFoundError(f"Ticket {ticket_id} not found")
    return ticket


@router.patch("/{ticket_id}", response_model=TicketOut)
async def update_ticket(
    ticket_id: int,
    body: TicketUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    return support_service.update(db, ctx.gym_id, ticket_id, body)
