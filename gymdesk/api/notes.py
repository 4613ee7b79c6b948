"""Member notes API router."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gymdesk.core.constants import STAFF_ROLES
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import MessageResponse, NoteCreate, NoteOut, NoteUpdate
from gymdesk.services.note_service import note_service

router = APIRouter(prefix="/notes", tags=["notes"])

staff_guard = AccessGuard(*STAFF_ROLES, scope=ScopeMode.required)


@router.get("/", response_model=List[NoteOut])
async def list_notes(
    member_id: int = Query(..., alias="memberId"),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    """Notes about one member, pinned first."""
    return note_service.list_notes(db, ctx.gym_id, member_id)


@router.post("/", response_model=NoteOut, status_code=201)
async def create_note(
    body: NoteCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    return note_service.create(db, ctx.gym_id, ctx.user_id, body)


@router.put("/{note_id}", response_model=NoteOut)
async def update_note(
    note_id: int,
    body: NoteUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    return note_service.update(db, ctx.gym_id, note_id, body)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    note_service.delete(db, ctx.gym_id, note_id)
    return {"message": "Note deleted"}
