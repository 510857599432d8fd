"""
PetPal Backend — Landing Page Routes
======================================

What:  Home page (public pets, login/register links) and the session-gated
       dashboard users land on after logging in.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.database import get_db_session
from petpal.exceptions import DatabaseError
from petpal.routes.auth import login_redirect, session_user_id
from petpal.schemas.pet import STAT_NAMES
from petpal.services.pet_filters import owned_by, public_only
from petpal.services.pet_service import pet_service
from petpal.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", summary="Home page")
async def home(request: Request, db: AsyncSession = Depends(get_db_session)) -> Response:
    try:
        public_pets = await pet_service.find_pets(db, [public_only()])
        error = None
    except DatabaseError:
        public_pets, error = [], "Failed to load public pets"
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": "PetPal", "public_pets": public_pets, "error": error},
    )


@router.get("/dashboard", summary="Dashboard")
async def dashboard(
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
        pets, error = [], "Failed to load your pets"

    # Average of each stat across the user's pets, for the summary bars
    averages = {
        stat: round(sum(getattr(pet, stat) for pet in pets) / len(pets)) if pets else 0
        for stat in STAT_NAMES
    }
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": "Dashboard",
            "username": request.session.get("username", ""),
            "pet_count": len(pets),
            "averages": averages,
            "error": error,
        },
    )
