"""Gym service — tenant records."""

from typing import List

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceConflictError, ResourceNotFoundError
from gymdesk.models.gym import Gym
from gymdesk.schemas.schemas import GymCreate


class GymService:

    @staticmethod
    def create(db: Session, data: GymCreate) -> Gym:
        if db.query(Gym).filter(Gym.slug == data.slug).first():
            raise ResourceConflictError(f"Gym with slug {data.slug} already exists")
        gym = Gym(**data.model_dump())
        db.add(gym)
        db.commit()
        db.refresh(gym)
        return gym

    @staticmethod
    def list_gyms(db: Session) -> List[Gym]:
        return db.query(Gym).order_by(Gym.name).all()

    @staticmethod
    def get(db: Session, gym_id: int) -> Gym:
        gym = db.query(Gym).filter(Gym.id == gym_id).first()
        if not gym:
            raise ResourceNotFoundError(f"Gym {gym_id} not found")
        return gym


gym_service = GymService()
