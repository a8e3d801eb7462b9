"""Module: repositories.

Thin data-access collaborators over one SQLAlchemy session. Lookups return
the entity or ``None``; turning a miss into an HTTP status is the caller's job.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from petclinic.db.models.owner import Owner
from petclinic.db.models.pet import Pet
from petclinic.db.models.vet import Specialty, Vet, vet_specialties
from petclinic.db.models.visit import Visit

logger = logging.getLogger(__name__)


class OwnerRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, owner_id: int) -> Owner | None:
        return self.db.execute(select(Owner).where(Owner.id == owner_id)).scalar_one_or_none()

    def find_pets(self, owner_id: int) -> list[Pet]:
        stmt = select(Pet).where(Pet.owner_id == owner_id).order_by(Pet.name)
        return list(self.db.execute(stmt).scalars().all())


class PetRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, pet_id: int) -> Pet | None:
        return self.db.execute(select(Pet).where(Pet.id == pet_id)).scalar_one_or_none()


class VisitRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, visit_id: int) -> Visit | None:
        return self.db.execute(select(Visit).where(Visit.id == visit_id)).scalar_one_or_none()

    def find_by_pet_id(self, pet_id: int) -> list[Visit]:
        stmt = select(Visit).where(Visit.pet_id == pet_id).order_by(Visit.visit_date, Visit.id)
        return list(self.db.execute(stmt).scalars().all())

    def save(self, visit: Visit) -> Visit:
        """
        Insert a visit without an id, otherwise update the row carrying its id.

        Returns the session-bound instance, which differs from the argument
        when a detached or transient visit is merged onto an existing row.
        """
        if visit.id is None:
            self.db.add(visit)
        else:
            visit = self.db.merge(visit)
        self.db.commit()
        self.db.refresh(visit)
        logger.debug("Saved visit %s (pet=%s, status=%s)", visit.id, visit.pet_id, visit.status)
        return visit


class VetRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_vet_types(self) -> list[dict]:
        stmt = (
            select(
                Vet.id.label("id"),
                Vet.first_name.label("first_name"),
                Vet.last_name.label("last_name"),
                Specialty.name.label("specialty"),
            )
            .select_from(Vet)
            .outerjoin(vet_specialties, vet_specialties.c.vet_id == Vet.id)
            .outerjoin(Specialty, Specialty.id == vet_specialties.c.specialty_id)
            .order_by(Vet.last_name, Vet.first_name, Vet.id)
        )

        # Collapse one row per (vet, specialty) into one entry per vet.
        out: dict[int, dict] = {}
        for r in self.db.execute(stmt).mappings().all():
            entry = out.setdefault(
                r["id"],
                {
                    "id": r["id"],
                    "first_name": r["first_name"],
                    "last_name": r["last_name"],
                    "specialties": [],
                },
            )
            if r["specialty"]:
                entry["specialties"].append(r["specialty"])

        for entry in out.values():
            entry["specialties"].sort()
        return list(out.values())
