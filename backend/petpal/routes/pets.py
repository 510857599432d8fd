"""
PetPal Backend — Pet Page Routes
==================================

What:  Session-gated pages for listing, adopting, viewing, caring for,
       re-imaging and deleting the logged-in user's pets.
How:   Every handler resolves the session user first (no session → redirect
       to the login page), then passes that user id explicitly to PetService,
       which scopes every read and write to pets owned by that user.
       Mutations answer with a redirect; the care handler answers a missing
       pet with a JSON error instead.
"""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.database import get_db_session
from petpal.exceptions import DatabaseError, NotFoundError, ValidationError
from petpal.routes.auth import login_redirect, redirect_to, session_user_id
from petpal.schemas.pet import ALLOWED_SPECIES, PetCreate
from petpal.services.care import CARE_ACTIONS
from petpal.services.pet_filters import owned_by
from petpal.services.pet_service import pet_service
from petpal.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pets", tags=["Pet Pages"])

RARITIES = ("Common", "Uncommon", "Rare", "Epic", "Legendary")
SUGGESTED_TRAITS = ("brave", "curious", "lazy", "loyal", "playful", "shy", "smart", "sneaky")


def _create_form(request: Request, error: Optional[str] = None, status_code: int = 200) -> Response:
    return templates.TemplateResponse(
        request,
        "pets/create.html",
        {
            "title": "Adopt New Pet",
            "error": error,
            "species_options": ALLOWED_SPECIES,
            "rarity_options": RARITIES,
            "trait_options": SUGGESTED_TRAITS,
        },
        status_code=status_code,
    )


def _error_page(request: Request, title: str, message: str, status_code: int) -> Response:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "message": message},
        status_code=status_code,
    )


@router.get("", summary="My pets")
async def list_my_pets(
    request: Request,
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()
    try:
        pets = await pet_service.find_pets(db, [owned_by(user_id)])
        error = None
    except DatabaseError:
        pets, error = [], "Failed to get pet list"
    return templates.TemplateResponse(
        request,
        "pets/list.html",
        {"title": "My Pets", "pets": pets, "error": error},
    )


@router.get("/create", summary="Adopt form")
async def create_page(
    request: Request,
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
) -> Response:
    if user_id is None:
        return login_redirect()
    return _create_form(request)


@router.post("/create", summary="Adopt handler")
async def create_pet(
    request: Request,
    name: str = Form(default=""),
    species: str = Form(default=""),
    rarity: str = Form(default=""),
    traits: List[str] = Form(default=[]),
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()

    data = PetCreate(name=name, species=species, rarity=rarity or None, traits=traits)
    try:
        await pet_service.create_pet(db, data, owner_id=user_id)
    except ValidationError as e:
        return _create_form(request, error=e.message, status_code=400)
    except DatabaseError:
        return _create_form(request, error="Failed to create pet, please try again", status_code=500)
    return redirect_to("/pets")


@router.get("/{pet_id}", summary="Pet detail")
async def pet_detail(
    request: Request,
    pet_id: str,
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()
    try:
        pet = await pet_service.get_pet(db, pet_id, owner_id=user_id)
    except NotFoundError:
        return _error_page(request, "Pet Not Found", "Pet not found", 404)
    except DatabaseError:
        return _error_page(request, "Error", "Failed to get pet details", 500)
    return templates.TemplateResponse(
        request,
        "pets/detail.html",
        {"title": f"Pet Details - {pet.name}", "pet": pet, "care_actions": CARE_ACTIONS, "error": None},
    )


@router.post("/{pet_id}/care", summary="Feed, play or rest")
async def care_for_pet(
    pet_id: str,
    action: str = Form(default=""),
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()
    try:
        pet = await pet_service.care_for_pet(db, pet_id, action, owner_id=user_id)
    except NotFoundError:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "Pet not found", "error": "not_found"},
        )
    except DatabaseError:
        return redirect_to("/pets")
    return redirect_to(f"/pets/{pet.id}")


@router.post("/{pet_id}/update-image", summary="Change pet image")
async def update_image(
    pet_id: str,
    image: str = Form(default=""),
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()
    try:
        pet = await pet_service.update_image(db, pet_id, image.strip(), owner_id=user_id)
    except ValidationError as e:
        logger.info("Image update of pet %s rejected: %s", pet_id, e.message)
        return redirect_to(f"/pets/{pet_id}")
    except (NotFoundError, DatabaseError):
        return redirect_to("/pets")
    return redirect_to(f"/pets/{pet.id}")


@router.post("/{pet_id}/delete", summary="Delete pet")
async def delete_pet(
    pet_id: str,
    user_id: Optional[uuid.UUID] = Depends(session_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if user_id is None:
        return login_redirect()
    try:
        await pet_service.delete_pet(db, pet_id, owner_id=user_id)
    except (NotFoundError, DatabaseError) as e:
        logger.info("Delete of pet %s by %s not applied: %s", pet_id, user_id, e.message)
    return redirect_to("/pets")
