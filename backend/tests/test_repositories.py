from datetime import date

import pytest
from sqlalchemy import text

from petclinic.db.models.visit import VISIT_STATUS_ACTIVE, VISIT_STATUS_RETURNED, Visit
from petclinic.db.repositories import OwnerRepository, PetRepository, VetRepository, VisitRepository


@pytest.fixture()
def db(session_factory, seeded):
    with session_factory() as session:
        yield session


def test_lookups_return_none_when_missing(db):
    assert OwnerRepository(db).find_by_id(999) is None
    assert PetRepository(db).find_by_id(999) is None
    assert VisitRepository(db).find_by_id(999) is None


def test_lookups_return_entities(db):
    assert OwnerRepository(db).find_by_id(5).full_name == "George Franklin"
    assert PetRepository(db).find_by_id(3).name == "Leo"
    assert VisitRepository(db).find_by_id(42).description == "rabies shot"


def test_find_pets_only_returns_owners_pets(db):
    assert [p.id for p in OwnerRepository(db).find_pets(5)] == [3]
    assert OwnerRepository(db).find_pets(999) == []


def test_find_by_pet_id_orders_by_date(db):
    repo = VisitRepository(db)
    repo.save(Visit(pet_id=3, visit_date=date(2022, 1, 1), description="first", status=VISIT_STATUS_ACTIVE))

    assert [v.description for v in repo.find_by_pet_id(3)] == ["first", "rabies shot", "neutered"]
    assert repo.find_by_pet_id(4) == []


def test_save_inserts_new_visit(db):
    repo = VisitRepository(db)
    visit = Visit(pet_id=4, visit_date=date(2024, 1, 1), description="checkup", status=VISIT_STATUS_ACTIVE)
    assert visit.is_new

    saved = repo.save(visit)
    assert saved.id is not None
    assert not saved.is_new
    assert repo.find_by_id(saved.id).pet_id == 4


def test_save_with_id_updates_existing_row(db, session_factory, visit_count):
    before = visit_count()
    detached = Visit(id=42, pet_id=3, visit_date=date(2024, 5, 5), description="updated",
                     status=VISIT_STATUS_ACTIVE)

    saved = VisitRepository(db).save(detached)
    assert saved.id == 42
    assert visit_count() == before

    with session_factory() as other:
        row = VisitRepository(other).find_by_id(42)
        assert row.description == "updated"
        assert row.status == VISIT_STATUS_ACTIVE


def test_save_persisted_visit_changes_status(db, fetch_visit):
    repo = VisitRepository(db)
    visit = repo.find_by_id(99)
    visit.status = VISIT_STATUS_RETURNED
    repo.save(visit)
    assert fetch_visit(99).status == VISIT_STATUS_RETURNED


def test_find_vet_types_groups_specialties(db):
    vets = VetRepository(db).find_vet_types()
    assert vets == [
        {"id": 1, "first_name": "James", "last_name": "Carter", "specialties": []},
        {"id": 2, "first_name": "Helen", "last_name": "Leary", "specialties": ["radiology", "surgery"]},
    ]


def test_visit_status_defaults_to_returned_in_schema(db, fetch_visit):
    # Rows written outside the ORM still get status 0 from the column default.
    db.execute(text("INSERT INTO visits (id, pet_id, visit_date, description) VALUES (7, 3, '2024-01-01', 'raw')"))
    db.commit()
    assert fetch_visit(7).status == VISIT_STATUS_RETURNED
