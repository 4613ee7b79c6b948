"""Trainers API router — gym trainer roster."""

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gymdesk.core.constants import Roles, STAFF_ROLES
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import MessageResponse, TrainerCreate, TrainerOut, TrainerUpdate
from gymdesk.services.audit_service import audit_service
from gymdesk.services.trainer_service import trainer_service

router = APIRouter(prefix="/trainers", tags=["trainers"])

read_guard = AccessGuard(Roles.SUPERADMIN, *STAFF_ROLES, scope=ScopeMode.required)
manage_guard = AccessGuard(
    Roles.SUPERADMIN, Roles.ADMIN, Roles.BRANCH_ADMIN, Roles.MANAGER,
    scope=ScopeMode.required,
)


@router.get("/", response_model=List[TrainerOut])
async def list_trainers(
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(read_guard),
):
    return trainer_service.list_trainers(db, ctx.gym_id, active_only)


@router.post("/", response_model=TrainerOut, status_code=201)
async def create_trainer(
    body: TrainerCreate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(manage_guard),
):
    trainer = trainer_service.create(db, ctx.gym_id, body, created_by=ctx.user_id)
    audit_service.log_from_request(
        db, request, ctx,
        action="trainer.created",
        resource_type="trainer",
        resource_id=str(trainer.id),
        new_value=body.model_dump(mode="json"),
    )
    return trainer


@router.get("/{trainer_id}", response_model=TrainerOut)
async def get_trainer(
    trainer_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(read_guard),
):
    return trainer_service.get(db, ctx.gym_id, trainer_id)


@router.put("/{trainer_id}", response_model=TrainerOut)
async def update_trainer(
    trainer_id: int,
    body: TrainerUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(manage_guard),
):
    return trainer_service.update(db, ctx.gym_id, trainer_id, body)


@router.delete("/{trainer_id}", response_model=MessageResponse)
async def delete_trainer(
    trainer_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(manage_guard),
):
    trainer_service.delete(db, ctx.gym_id, trainer_id)
    audit_service.log_from_request(
        db, request, ctx,
        action="trainer.deleted",
        resource_type="trainer",
        resource_id=str(trainer_id),
    )
    return {"message": "Trainer deleted"}
