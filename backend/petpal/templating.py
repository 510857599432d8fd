"""
PetPal Backend — Template Rendering
=====================================

What:  Shared Jinja2Templates instance for the web page routes and the
       generic error page rendered by the catch-all exception handler.
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def pet_image_url(image: str) -> str:
    """Absolute URLs pass through; bare filenames are served from /static/images."""
    if not image:
        return "/static/images/placeholder.svg"
    if image.startswith(("http://", "https://", "/")):
        return image
    return f"/static/images/{image}"


templates.env.filters["pet_image"] = pet_image_url
