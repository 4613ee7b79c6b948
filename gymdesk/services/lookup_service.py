"""Lookup service — controlled-vocabulary types and values."""

from typing import List

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceConflictError, ResourceNotFoundError
from gymdesk.models.lookup import Lookup, LookupType
from gymdesk.schemas.schemas import (
    LookupCreate, LookupTypeCreate, LookupTypeUpdate, LookupUpdate,
)


class LookupService:
    """CRUD over lookup types and their values. Deletes are soft."""

    @staticmethod
    def list_types(db: Session) -> List[LookupType]:
        return (
            db.query(LookupType)
            .filter(LookupType.is_active == True)  # noqa: E712
            .order_by(LookupType.name)
            .all()
        )

    @staticmethod
    def get_type(db: Session, code: str) -> LookupType:
        lookup_type = db.query(LookupType).filter(LookupType.code == code).first()
        if not lookup_type:
            raise ResourceNotFoundError(f"LookupType with code {code} not found")
        return lookup_type

    @staticmethod
    def create_type(db: Session, data: LookupTypeCreate) -> LookupType:
        existing = db.query(LookupType).filter(LookupType.code == data.code).first()
        if existing and not existing.is_active:
            existing.name = data.name
            existing.description = data.description
            existing.is_active = True
            db.commit()
            db.refresh(existing)
            return existing
        if existing:
            raise ResourceConflictError(f"LookupType with code {data.code} already exists")
        lookup_type = LookupType(**data.model_dump())
        db.add(lookup_type)
        db.commit()
        db.refresh(lookup_type)
        return lookup_type

    @staticmethod
    def update_type(db: Session, code: str, data: LookupTypeUpdate) -> LookupType:
        lookup_type = LookupService.get_type(db, code)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(lookup_type, field, value)
        db.commit()
        db.refresh(lookup_type)
        return lookup_type

    @staticmethod
    def delete_type(db: Session, code: str) -> LookupType:
        return LookupService.update_type(db, code, LookupTypeUpdate(is_active=False))

    @staticmethod
    def list_values(db: Session, type_code: str) -> List[Lookup]:
        lookup_type = LookupService.get_type(db, type_code)
        return (
            db.query(Lookup)
            .filter(Lookup.lookup_type_id == lookup_type.id, Lookup.is_active == True)  # noqa: E712
            .order_by(Lookup.display_order)
            .all()
        )

    @staticmethod
    def get_value(db: Session, lookup_id: int) -> Lookup:
        lookup = db.query(Lookup).filter(Lookup.id == lookup_id).first()
        if not lookup:
            raise ResourceNotFoundError(f"Lookup with id {lookup_id} not found")
        return lookup

    @staticmethod
    def create_value(db: Session, type_code: str, data: LookupCreate) -> Lookup:
        """Add a value to a type; codes are unique within the type.

        Re-adding a soft-deleted code reactivates that row with the new fields.
        """
        lookup_type = LookupService.get_type(db, type_code)
        existing = db.query(Lookup).filter(
            Lookup.lookup_type_id == lookup_type.id,
            Lookup.code == data.code,
        ).first()
        if existing and not existing.is_active:
            for field, value in data.model_dump().items():
                setattr(existing, field, value)
            existing.is_active = True
            db.commit()
            db.refresh(existing)
            return existing
        if existing:
            raise ResourceConflictError(
                f"Lookup with code {data.code} already exists for type {type_code}"
            )
        lookup = Lookup(lookup_type_id=lookup_type.id, **data.model_dump())
        db.add(lookup)
        db.commit()
        db.refresh(lookup)
        return lookup

    @staticmethod
    def update_value(db: Session, lookup_id: int, data: LookupUpdate) -> Lookup:
        lookup = LookupService.get_value(db, lookup_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(lookup, field, value)
        db.commit()
        db.refresh(lookup)
        return lookup

    @staticmethod
    def delete_value(db: Session, lookup_id: int) -> Lookup:
        return LookupService.update_value(db, lookup_id, LookupUpdate(is_active=False))


lookup_service = LookupService()
