"""Lookups API router — controlled vocabularies."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gymdesk.core.guards import GymContext, require_authenticated, require_super_admin
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import (
    LookupCreate, LookupOut, LookupTypeCreate, LookupTypeOut, LookupTypeUpdate, LookupUpdate,
)
from gymdesk.services.lookup_service import lookup_service

router = APIRouter(prefix="/lookups", tags=["lookups"])


@router.get("/", response_model=List[LookupTypeOut])
async def list_lookup_types(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return lookup_service.list_types(db)


@router.post("/", response_model=LookupTypeOut, status_code=201)
async def create_lookup_type(
    body: LookupTypeCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.create_type(db, body)


@router.put("/values/{lookup_id}", response_model=LookupOut)
async def update_lookup(
    lookup_id: int,
    body: LookupUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.update_value(db, lookup_id, body)


@router.delete("/values/{lookup_id}", response_model=LookupOut)
async def delete_lookup(
    lookup_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.delete_value(db, lookup_id)


@router.get("/{type_code}", response_model=List[LookupOut])
async def list_lookups(
    type_code: str,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return lookup_service.list_values(db, type_code)


@router.post("/{type_code}", response_model=LookupOut, status_code=201)
async def create_lookup(
    type_code: str,
    body: LookupCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.create_value(db, type_code, body)


@router.put("/{type_code}/type", response_model=LookupTypeOut)
async def update_lookup_type(
    type_code: str,
    body: LookupTypeUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.update_type(db, type_code, body)


@router.delete("/{type_code}/type", response_model=LookupTypeOut)
async def delete_lookup_type(
    type_code: str,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return lookup_service.delete_type(db, type_code)
