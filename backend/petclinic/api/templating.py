"""Module: templating."""

from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from petclinic.core.config import settings
from petclinic.db.repositories import VetRepository

templates = Jinja2Templates(directory=str(settings.templates_dir))


def render(
    request: Request,
    view: str,
    model: dict[str, Any],
    vets: VetRepository,
):
    """
    Compose the final HTML response for a view.

    Every page gets the vet listing under ``vets`` alongside the
    handler-specific model; handler keys win on collision.
    """
    context = {"vets": vets.find_vet_types(), **model}
    return templates.TemplateResponse(request, view, context)
