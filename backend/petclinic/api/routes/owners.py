"""Module: owners."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from petclinic.api.routes.deps import get_owner_repository, get_vet_repository, get_visit_repository
from petclinic.api.templating import render
from petclinic.db.repositories import OwnerRepository, VetRepository, VisitRepository

logger = logging.getLogger(__name__)

router = APIRouter()

OWNER_DETAILS_VIEW = "owners/owner_details.html"


# Endpoint: owner page with pets and their visits; target of every visit redirect.
@router.get("/owners/{owner_id}", summary="Show owner")
def show_owner(
    request: Request,
    owner_id: int,
    owners: OwnerRepository = Depends(get_owner_repository),
    visits: VisitRepository = Depends(get_visit_repository),
    vets: VetRepository = Depends(get_vet_repository),
):
    owner = owners.find_by_id(owner_id)
    if not owner:
        logger.warning("Owner %s not found", owner_id)
        raise HTTPException(status_code=404, detail="Owner not found")

    pets = owners.find_pets(owner.id)
    visits_by_pet = {pet.id: visits.find_by_pet_id(pet.id) for pet in pets}

    return render(
        request,
        OWNER_DETAILS_VIEW,
        {"owner": owner, "pets": pets, "visits_by_pet": visits_by_pet},
        vets,
    )
