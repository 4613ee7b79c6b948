"""Trainer service — gym-scoped trainer records."""

from typing import List, Optional

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceNotFoundError
from gymdesk.models.trainer import Trainer
from gymdesk.schemas.schemas import TrainerCreate, TrainerUpdate


class TrainerService:
    """Every query is filtered by ``gym_id``; a trainer of another gym is
    indistinguishable from a missing one."""

    @staticmethod
    def list_trainers(db: Session, gym_id: int, active_only: bool = False) -> List[Trainer]:
        query = db.query(Trainer).filter(Trainer.gym_id == gym_id)
        if active_only:
            query = query.filter(Trainer.is_active == True)  # noqa: E712
        return query.order_by(Trainer.name).all()

    @staticmethod
    def get(db: Session, gym_id: int, trainer_id: int) -> Trainer:
        trainer = db.query(Trainer).filter(
            Trainer.id == trainer_id, Trainer.gym_id == gym_id
        ).first()
        if not trainer:
            raise ResourceNotFoundError(f"Trainer {trainer_id} not found")
        return trainer

    @staticmethod
    def create(
        db: Session, gym_id: int, data: TrainerCreate, created_by: Optional[int] = None
    ) -> Trainer:
        trainer = Trainer(gym_id=gym_id, created_by=created_by, **data.model_dump())
        db.add(trainer)
        db.commit()
        db.refresh(trainer)
        return trainer

    @staticmethod
    def update(db: Session, gym_id: int, trainer_id: int, data: TrainerUpdate) -> Trainer:
        trainer = TrainerService.get(db, gym_id, trainer_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(trainer, field, value)
        db.commit()
        db.refresh(trainer)
        return trainer

    @staticmethod
    def delete(db: Session, gym_id: int, trainer_id: int) -> None:
        trainer = TrainerService.get(db, gym_id, trainer_id)
        db.delete(trainer)
        db.commit()


trainer_service = TrainerService()
