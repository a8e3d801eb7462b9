"""Module: deps."""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from petclinic.db.repositories import OwnerRepository, PetRepository, VetRepository, VisitRepository
from petclinic.db.session import SessionLocal


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Repository providers share the request's session.
def get_owner_repository(db: Session = Depends(get_db)) -> OwnerRepository:
    return OwnerRepository(db)


def get_pet_repository(db: Session = Depends(get_db)) -> PetRepository:
    return PetRepository(db)


def get_visit_repository(db: Session = Depends(get_db)) -> VisitRepository:
    return VisitRepository(db)


def get_vet_repository(db: Session = Depends(get_db)) -> VetRepository:
    return VetRepository(db)
