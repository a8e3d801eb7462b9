from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import petclinic.db.models  # noqa: F401  (registers all tables)
from petclinic.api.api import api_router
from petclinic.api.routes.deps import get_db
from petclinic.db.base import Base
from petclinic.db.models.owner import Owner
from petclinic.db.models.pet import Pet
from petclinic.db.models.vet import Specialty, Vet, vet_specialties
from petclinic.db.models.visit import VISIT_STATUS_ACTIVE, VISIT_STATUS_RETURNED, Visit
from petclinic.db.repositories import VisitRepository


@pytest.fixture()
def engine():
    # One shared in-memory database for every session in the test.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def seeded(session_factory):
    with session_factory() as session:
        session.add(Owner(id=5, first_name="George", last_name="Franklin", address="110 W. Liberty St.",
                          city="Madison", telephone="6085551023"))
        session.add(Owner(id=6, first_name="Betty", last_name="Davis", city="Sun Prairie"))
        session.flush()
        session.add(Pet(id=3, name="Leo", type_name="cat", birth_date=date(2020, 9, 7), owner_id=5))
        session.add(Pet(id=4, name="Basil", type_name="hamster", owner_id=6))
        session.flush()
        session.add(Visit(id=42, pet_id=3, visit_date=date(2023, 3, 4), description="rabies shot",
                          status=VISIT_STATUS_RETURNED))
        session.add(Visit(id=99, pet_id=3, visit_date=date(2023, 6, 1), description="neutered",
                          status=VISIT_STATUS_ACTIVE))

        session.add(Vet(id=1, first_name="James", last_name="Carter"))
        session.add(Vet(id=2, first_name="Helen", last_name="Leary"))
        session.add(Specialty(id=1, name="radiology"))
        session.add(Specialty(id=2, name="surgery"))
        session.flush()
        session.execute(vet_specialties.insert().values(vet_id=2, specialty_id=2))
        session.execute(vet_specialties.insert().values(vet_id=2, specialty_id=1))
        session.commit()


@pytest.fixture()
def client(session_factory, seeded):
    app = FastAPI()
    app.include_router(api_router)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture()
def save_calls(monkeypatch):
    """Record (id, status) of every visit handed to VisitRepository.save."""
    calls = []
    original = VisitRepository.save

    def spy(self, visit):
        calls.append((visit.id, visit.status))
        return original(self, visit)

    monkeypatch.setattr(VisitRepository, "save", spy)
    return calls


@pytest.fixture()
def fetch_visit(session_factory):
    def _fetch(visit_id):
        with session_factory() as session:
            return session.get(Visit, visit_id)

    return _fetch


@pytest.fixture()
def visit_count(session_factory):
    def _count():
        with session_factory() as session:
            return session.execute(select(func.count(Visit.id))).scalar_one()

    return _count
