"""Module: visits.

Create, edit and return visits under /owners/{owner_id}/pets/{pet_id}/visits.
Each handler builds its context explicitly with ``prepare_visit_context`` and
finishes by rendering the visit form or redirecting to the owner page.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from petclinic.api.routes.deps import (
    get_owner_repository,
    get_pet_repository,
    get_vet_repository,
    get_visit_repository,
)
from petclinic.api.templating import render
from petclinic.db.models.owner import Owner
from petclinic.db.models.pet import Pet
from petclinic.db.models.visit import VISIT_STATUS_ACTIVE, VISIT_STATUS_RETURNED, Visit
from petclinic.db.repositories import OwnerRepository, PetRepository, VetRepository, VisitRepository

logger = logging.getLogger(__name__)

router = APIRouter()

VISIT_FORM_VIEW = "pets/create_or_update_visit_form.html"
OWNER_REDIRECT = "/owners/{owner_id}"
EDIT_ACTION = "edit"
ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


# Fields accepted from the visit form; the HTML field is named "date".
class VisitForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    visit_date: date = Field(alias="date")
    description: str = Field(min_length=1, max_length=255)

    @field_validator("visit_date", mode="before")
    @classmethod
    def parse_iso_date(cls, value):
        # Only YYYY-MM-DD; lax mode would otherwise read "0" as a Unix timestamp.
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not ISO_DATE.fullmatch(value):
            raise ValueError("Date must be in YYYY-MM-DD format")
        return date.fromisoformat(value)


@dataclass
class VisitContext:
    pet: Pet
    visits: list[Visit]
    visit: Visit


# -------------------------
# Helpers
# -------------------------
def prepare_visit_context(pet_id: int, pets: PetRepository, visits: VisitRepository) -> VisitContext:
    """Load the pet with its visit history and pair it with a fresh, unsaved visit."""
    pet = pets.find_by_id(pet_id)
    if not pet:
        logger.warning("Pet %s not found", pet_id)
        raise HTTPException(status_code=404, detail="Pet not found")

    history = visits.find_by_pet_id(pet.id)
    visit = Visit(pet_id=pet.id, visit_date=date.today(), status=VISIT_STATUS_RETURNED)
    return VisitContext(pet=pet, visits=history, visit=visit)


def _require_owner(owners: OwnerRepository, owner_id: int) -> Owner:
    owner = owners.find_by_id(owner_id)
    if not owner:
        logger.warning("Owner %s not found", owner_id)
        raise HTTPException(status_code=404, detail="Owner not found")
    return owner


def _require_visit(visits: VisitRepository, visit_id: int) -> Visit:
    visit = visits.find_by_id(visit_id)
    if not visit:
        logger.warning("Visit %s not found", visit_id)
        raise HTTPException(status_code=404, detail="Visit not found")
    return visit


def _form_values(visit: Visit) -> dict[str, str]:
    return {
        "date": visit.visit_date.isoformat() if visit.visit_date else "",
        "description": visit.description or "",
    }


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "form"
        errors.setdefault(field, err["msg"])
    return errors


def _bind_visit(visit: Visit, submitted: dict[str, str]) -> dict[str, str]:
    # Copy validated fields onto the visit; on failure the visit is left untouched.
    try:
        form = VisitForm.model_validate(submitted)
    except ValidationError as exc:
        return _field_errors(exc)

    visit.visit_date = form.visit_date
    visit.description = form.description
    return {}


def _submitted(visit_date: str | None, description: str | None) -> dict[str, str]:
    # Omit absent fields so validation reports them as missing.
    raw = {"date": visit_date, "description": description}
    return {k: v for k, v in raw.items() if v is not None}


async def get_action(request: Request) -> str | None:
    # Read the raw form so an empty submitted action stays "" instead of
    # collapsing to "absent"; links may carry it in the query string instead.
    form = await request.form()
    action = form.get("action")
    if action is None:
        action = request.query_params.get("action")
    return action


def render_visit_form(
    request: Request,
    vets: VetRepository,
    context: VisitContext,
    owner_id: int,
    action_url: str,
    owner: Owner | None = None,
    visit: Visit | None = None,
    form: dict[str, str] | None = None,
    errors: dict[str, str] | None = None,
):
    visit = visit if visit is not None else context.visit
    model = {
        "pet": context.pet,
        "visits": context.visits,
        "visit": visit,
        "owner": owner,
        "owner_id": owner_id,
        "action_url": action_url,
        "form": form if form is not None else _form_values(visit),
        "errors": errors or {},
    }
    return render(request, VISIT_FORM_VIEW, model, vets)


def _redirect_to_owner(owner_id: int) -> RedirectResponse:
    # Owner id comes from the request path so no second lookup is needed.
    return RedirectResponse(url=OWNER_REDIRECT.format(owner_id=owner_id), status_code=303)


# -------------------------
# Endpoints
# -------------------------

# Endpoint: renders an empty visit form for the pet.
@router.get("/owners/{owner_id}/pets/{pet_id}/visits/new", summary="Show new visit form")
def init_new_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pets: PetRepository = Depends(get_pet_repository),
    visits: VisitRepository = Depends(get_visit_repository),
    vets: VetRepository = Depends(get_vet_repository),
):
    context = prepare_visit_context(pet_id, pets, visits)
    owner = _require_owner(owners, owner_id)

    return render_visit_form(
        request,
        vets,
        context,
        owner_id=owner_id,
        action_url=request.url.path,
        owner=owner,
    )


# Endpoint: validates the new visit form, inserts the visit and redirects.
@router.post("/owners/{owner_id}/pets/{pet_id}/visits/new", summary="Create a visit")
def process_new_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    visit_date: str | None = Form(default=None, alias="date"),
    description: str | None = Form(default=None),
    pets: PetRepository = Depends(get_pet_repository),
    visits: VisitRepository = Depends(get_visit_repository),
    vets: VetRepository = Depends(get_vet_repository),
):
    context = prepare_visit_context(pet_id, pets, visits)
    submitted = _submitted(visit_date, description)

    errors = _bind_visit(context.visit, submitted)
    if errors:
        logger.debug("Rejected new visit for pet %s: %s", pet_id, errors)
        return render_visit_form(
            request,
            vets,
            context,
            owner_id=owner_id,
            action_url=request.url.path,
            form={"date": "", "description": "", **submitted},
            errors=errors,
        )

    context.visit.status = VISIT_STATUS_ACTIVE
    visit = visits.save(context.visit)
    logger.info("Created visit %s for pet %s", visit.id, pet_id)
    return _redirect_to_owner(owner_id)


# Endpoint: renders the visit form for an existing visit.
@router.get("/owners/{owner_id}/pets/{pet_id}/visits/{visit_id}/edit", summary="Show edit visit form")
def init_edit_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    visit_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    pets: PetRepository = Depends(get_pet_repository),
    visits: VisitRepository = Depends(get_visit_repository),
    vets: VetRepository = Depends(get_vet_repository),
):
    context = prepare_visit_context(pet_id, pets, visits)
    owner = _require_owner(owners, owner_id)
    visit = _require_visit(visits, visit_id)

    return render_visit_form(
        request,
        vets,
        context,
        owner_id=owner_id,
        action_url=request.url.path,
        owner=owner,
        visit=visit,
    )


# Endpoint: validates the edit form, updates the visit in place and redirects.
@router.post("/owners/{owner_id}/pets/{pet_id}/visits/{visit_id}/edit", summary="Update a visit")
def process_edit_visit_form(
    request: Request,
    owner_id: int,
    pet_id: int,
    visit_id: int,
    visit_date: str | None = Form(default=None, alias="date"),
    description: str | None = Form(default=None),
    submitted_id: str | None = Form(default=None, alias="id"),
    action: str | None = Depends(get_action),
    pets: PetRepository = Depends(get_pet_repository),
    visits: VisitRepository = Depends(get_visit_repository),
    vets: VetRepository = Depends(get_vet_repository),
):
    context = prepare_visit_context(pet_id, pets, visits)

    if action is None:
        raise HTTPException(status_code=400, detail="Missing action")

    _require_visit(visits, visit_id)

    if submitted_id and submitted_id != str(visit_id):
        logger.info("Ignoring submitted id %r for visit %s", submitted_id, visit_id)

    # Always update the addressed row, never insert a copy.
    context.visit.id = visit_id

    submitted = _submitted(visit_date, description)
    errors = _bind_visit(context.visit, submitted)
    if errors:
        logger.debug("Rejected edit of visit %s: %s", visit_id, errors)
        return render_visit_form(
            request,
            vets,
            context,
            owner_id=owner_id,
            action_url=request.url.path,
            form={"date": "", "description": "", **submitted},
            errors=errors,
        )

    context.visit.status = VISIT_STATUS_ACTIVE if action == EDIT_ACTION else VISIT_STATUS_RETURNED

    visit = visits.save(context.visit)
    logger.info("Updated visit %s (action=%r, status=%s)", visit.id, action, visit.status)
    return _redirect_to_owner(owner_id)


# Endpoint: marks a visit active again and redirects to the owner page.
@router.get("/owners/{owner_id}/pets/{pet_id}/visits/{visit_id}/return", summary="Mark a visit active again")
def init_return_visit_form(
    owner_id: int,
    pet_id: int,
    visit_id: int,
    pets: PetRepository = Depends(get_pet_repository),
    visits: VisitRepository = Depends(get_visit_repository),
):
    prepare_visit_context(pet_id, pets, visits)
    visit = _require_visit(visits, visit_id)

    visit.status = VISIT_STATUS_ACTIVE
    visits.save(visit)
    logger.info("Returned visit %s", visit_id)
    return _redirect_to_owner(owner_id)
