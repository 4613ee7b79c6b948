"""Support ticket service."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceNotFoundError, ValidationError
from gymdesk.models.lookup import Lookup, LookupType
from gymdesk.models.support_ticket import SupportTicket
from gymdesk.schemas.schemas import TicketCreate, TicketUpdate
from gymdesk.services.auth_service import auth_service

CLOSED_STATUSES = ("resolved", "closed")


class SupportService:
    """Ticket fields take their values from the TICKET_* lookup types."""

    @staticmethod
    def _check_lookup(db: Session, type_code: str, value: str) -> None:
        exists = (
            db.query(Lookup)
            .join(LookupType, Lookup.lookup_type_id == LookupType.id)
            .filter(
                LookupType.code == type_code,
                Lookup.code == value,
                Lookup.is_active == True,  # noqa: E712
            )
            .first()
        )
        if not exists:
            raise ValidationError(f"Invalid {type_code.lower()} '{value}'")

    @staticmethod
    def create(db: Session, gym_id: int, user_id: int, data: TicketCreate) -> SupportTicket:
        SupportService._check_lookup(db, "TICKET_CATEGORY", data.category)
        SupportService._check_lookup(db, "TICKET_PRIORITY", data.priority)
        ticket = SupportTicket(gym_id=gym_id, user_id=user_id, **data.model_dump())
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
        return ticket

    @staticmethod
    def list_tickets(
        db: Session,
        gym_id: int,
        user_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[SupportTicket]:
        query = db.query(SupportTicket).filter(SupportTicket.gym_id == gym_id)
        if user_id is not None:
            query = query.filter(SupportTicket.user_id == user_id)
        if status:
            query = query.filter(SupportTicket.status == status)
        return query.order_by(SupportTicket.created_at.desc(), SupportTicket.id.desc()).all()

    @staticmethod
    def get(db: Session, gym_id: int, ticket_id: int) -> SupportTicket:
        ticket = db.query(SupportTicket).filter(
            SupportTicket.id == ticket_id, SupportTicket.gym_id == gym_id
        ).first()
        if not ticket:
            raise ResourceNotFoundError(f"Ticket {ticket_id} not found")
        return ticket

    @staticmethod
    def update(db: Session, gym_id: int, ticket_id: int, data: TicketUpdate) -> SupportTicket:
        ticket = SupportService.get(db, gym_id, ticket_id)
        if data.status:
            SupportService._check_lookup(db, "TICKET_STATUS", data.status)
            if data.status in CLOSED_STATUSES and ticket.status not in CLOSED_STATUSES:
                ticket.resolved_at = datetime.now(timezone.utc)
            ticket.status = data.status
        if data.priority:
            SupportService._check_lookup(db, "TICKET_PRIORITY", data.priority)
            ticket.priority = data.priority
        if data.assigned_to is not None:
            auth_service.get_gym_user(db, data.assigned_to, gym_id)
            ticket.assigned_to = data.assigned_to
        db.commit()
        db.refresh(ticket)
        return ticket


support_service = SupportService()
