"""
PetPal Backend — Account Page Routes
======================================

What:  Registration, login and logout pages/handlers for the web layer.
How:   Form posts are validated with Pydantic, delegated to UserService, and
       answered by re-rendering the form with an error or by redirecting.
       The session cookie holds only the user id and username.
Who:   Browser users.

Also exports `session_user_id`, the dependency every session-gated page uses
to read the acting user and hand it explicitly to the services.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from pydantic import ValidationError as FormValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.database import get_db_session
from petpal.exceptions import DatabaseError, DuplicateError, ValidationError
from petpal.models.user import User
from petpal.schemas.user import LoginForm, RegistrationForm
from petpal.services.user_service import user_service
from petpal.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth Pages"])

LOGIN_URL = "/auth/login"
HOME_AFTER_LOGIN = "/dashboard"


# ── Session helpers ───────────────────────────────────────────────────────

def session_user_id(request: Request) -> Optional[uuid.UUID]:
    """The logged-in user's id, or None when there is no valid session."""
    raw = request.session.get("user_id")
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        request.session.clear()
        return None


def start_session(request: Request, user: User) -> None:
    request.session["user_id"] = str(user.id)
    request.session["username"] = user.username


def redirect_to(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


def login_redirect() -> RedirectResponse:
    return redirect_to(LOGIN_URL)


def _render(request: Request, name: str, title: str, error: Optional[str] = None, status_code: int = 200) -> Response:
    return templates.TemplateResponse(
        request,
        name,
        {"title": title, "error": error},
        status_code=status_code,
    )


# ── Registration ──────────────────────────────────────────────────────────

@router.get("/register", summary="Registration page")
async def register_page(request: Request) -> Response:
    return _render(request, "auth/register.html", "Register")


@router.post("/register", summary="Registration handler")
async def register(
    request: Request,
    username: str = Form(default=""),
    email: str = Form(default=""),
    password: str = Form(default=""),
    confirm_password: str = Form(default=""),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    try:
        form = RegistrationForm(
            username=username,
            email=email,
            password=password,
            confirm_password=confirm_password,
        )
    except FormValidationError:
        return _render(
            request, "auth/register.html", "Register",
            error="Please enter a username, a valid email address and a password",
            status_code=400,
        )

    if not form.passwords_match:
        return _render(request, "auth/register.html", "Register", error="Passwords do not match", status_code=400)

    try:
        user = await user_service.create_user(db, form.username, str(form.email), form.password)
    except DuplicateError:
        return _render(
            request, "auth/register.html", "Register",
            error="Username or email already exists", status_code=409,
        )
    except (ValidationError, DatabaseError) as e:
        logger.warning("Registration failed for %s: %s", form.username, e.message)
        return _render(request, "auth/register.html", "Register", error="Registration failed", status_code=400)

    start_session(request, user)
    return redirect_to(HOME_AFTER_LOGIN)


# ── Login / Logout ────────────────────────────────────────────────────────

@router.get("/login", summary="Login page")
async def login_page(request: Request) -> Response:
    return _render(request, "auth/login.html", "Log In")


@router.post("/login", summary="Login handler")
async def login(
    request: Request,
    username: str = Form(default=""),
    password: str = Form(default=""),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    try:
        form = LoginForm(username=username.strip(), password=password)
    except FormValidationError:
        return _render(request, "auth/login.html", "Log In", error="Please enter username and password", status_code=400)

    try:
        user = await user_service.find_by_username(db, form.username)
    except DatabaseError:
        return _render(request, "auth/login.html", "Log In", error="Login failed", status_code=500)

    if user is None:
        return _render(request, "auth/login.html", "Log In", error="User not found", status_code=401)
    if not user_service.verify_password(user, form.password):
        return _render(request, "auth/login.html", "Log In", error="Incorrect password", status_code=401)

    start_session(request, user)
    logger.info("User logged in: %s", user.username)
    return redirect_to(HOME_AFTER_LOGIN)


@router.get("/logout", summary="Log out")
async def logout(request: Request) -> RedirectResponse:
    request.session.clear()
    return redirect_to("/")
