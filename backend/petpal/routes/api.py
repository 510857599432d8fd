"""
PetPal Backend — Pet JSON API Routes
======================================

What:  Stateless JSON endpoints for pet CRUD, filtering and owner assignment.
How:   Extracts query/body data, delegates to PetService/UserService, wraps
       the result in the success envelope. Failures raise application
       exceptions that the global handlers turn into the failure envelope.
Who:   External API clients. No session state is consulted.

Endpoints:
    GET    /api/pets               list with filters
    GET    /api/pets/public        pets without an owner
    GET    /api/pets/{id}          one pet
    POST   /api/pets               create (public, createdBy=api)
    POST   /api/pets/by-username   create owned by a registered user
    PUT    /api/pets/{id}          partial update
    DELETE /api/pets/{id}          delete by id (not owner-scoped)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.database import get_db_session
from petpal.exceptions import ValidationError
from petpal.schemas.common import ErrorResponse
from petpal.schemas.pet import (
    MessageEnvelope,
    OwnerSummary,
    PetCreate,
    PetCreateByUsername,
    PetEnvelope,
    PetListEnvelope,
    PetResponse,
    PetUpdate,
)
from petpal.services.pet_filters import build_listing_filters, public_only
from petpal.services.pet_service import pet_service, prepare_new_pet
from petpal.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Pets API"])

API_CREATED_BY = "api"

_NOT_FOUND = {404: {"description": "Pet not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Validation error", "model": ErrorResponse}}


def _list_envelope(pets) -> PetListEnvelope:
    data = [PetResponse.from_pet(pet) for pet in pets]
    return PetListEnvelope(count=len(data), data=data)


@router.get(
    "/pets",
    response_model=PetListEnvelope,
    responses=_BAD_REQUEST,
    summary="List pets with optional filters",
)
async def list_pets(
    species: Optional[str] = Query(default=None, description="Exact species match"),
    rarity: Optional[str] = Query(default=None, description="Exact rarity match"),
    trait: Optional[str] = Query(default=None, description="Pet must have this trait"),
    min_happiness: Optional[int] = Query(default=None, alias="minHappiness", ge=0, le=100),
    max_happiness: Optional[int] = Query(default=None, alias="maxHappiness", ge=0, le=100),
    db: AsyncSession = Depends(get_db_session),
) -> PetListEnvelope:
    """
    All filters are ANDed; omitted filters impose no constraint.
    Happiness bounds are inclusive and must lie in [0, 100].
    """
    filters = build_listing_filters(
        species=species,
        rarity=rarity,
        trait=trait,
        min_happiness=min_happiness,
        max_happiness=max_happiness,
    )
    pets = await pet_service.find_pets(db, filters)
    return _list_envelope(pets)


# Declared before /pets/{pet_id} so "public" is not captured as an id
@router.get(
    "/pets/public",
    response_model=PetListEnvelope,
    summary="List pets that have no owner",
)
async def list_public_pets(db: AsyncSession = Depends(get_db_session)) -> PetListEnvelope:
    pets = await pet_service.find_pets(db, [public_only()])
    return _list_envelope(pets)


@router.get(
    "/pets/{pet_id}",
    response_model=PetEnvelope,
    responses=_NOT_FOUND,
    summary="Get a single pet by id",
)
async def get_pet(pet_id: str, db: AsyncSession = Depends(get_db_session)) -> PetEnvelope:
    pet = await pet_service.get_pet(db, pet_id)
    return PetEnvelope(data=PetResponse.from_pet(pet))


@router.post(
    "/pets",
    status_code=201,
    response_model=PetEnvelope,
    responses=_BAD_REQUEST,
    summary="Create a public pet",
)
async def create_pet(payload: PetCreate, db: AsyncSession = Depends(get_db_session)) -> PetEnvelope:
    pet = await pet_service.create_pet(db, payload, owner_id=None, created_by=API_CREATED_BY)
    return PetEnvelope(message="Pet created successfully", data=PetResponse.from_pet(pet))


@router.post(
    "/pets/by-username",
    status_code=201,
    response_model=PetEnvelope,
    responses={**_BAD_REQUEST, 404: {"description": "User not found", "model": ErrorResponse}},
    summary="Create a pet owned by a registered user",
)
async def create_pet_by_username(
    payload: PetCreateByUsername,
    db: AsyncSession = Depends(get_db_session),
) -> PetEnvelope:
    """
    Validation order: pet fields first, then username presence, then lookup.
    Nothing is written unless all three pass.
    """
    prepare_new_pet(payload)
    username = (payload.username or "").strip()
    if not username:
        raise ValidationError(message="Username is required", field="username")

    owner = await user_service.require_by_username(db, username)
    pet = await pet_service.create_pet(db, payload, owner_id=owner.id, created_by=API_CREATED_BY)
    return PetEnvelope(
        message=f"Pet created successfully for user: {owner.username}",
        data=PetResponse.from_pet(pet),
        owner=OwnerSummary(id=owner.id, username=owner.username),
    )


@router.put(
    "/pets/{pet_id}",
    response_model=PetEnvelope,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Partially update a pet",
)
async def update_pet(
    pet_id: str,
    payload: PetUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PetEnvelope:
    pet = await pet_service.update_pet(db, pet_id, payload)
    return PetEnvelope(message="Pet updated successfully", data=PetResponse.from_pet(pet))


@router.delete(
    "/pets/{pet_id}",
    response_model=MessageEnvelope,
    responses=_NOT_FOUND,
    summary="Delete a pet by id",
)
async def delete_pet(pet_id: str, db: AsyncSession = Depends(get_db_session)) -> MessageEnvelope:
    # Not owner-scoped: the API carries no identity
    await pet_service.delete_pet(db, pet_id)
    return MessageEnvelope(message="Pet deleted successfully")
