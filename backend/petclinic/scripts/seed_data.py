"""Module: seed_data.

Populate a development database with owners, pets, vets and visits.

    python -m petclinic.scripts.seed_data --owners 10
"""

import argparse
import logging
import random
from datetime import date, timedelta

from faker import Faker
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from petclinic.db.init_db import init_db
from petclinic.db.models.owner import Owner
from petclinic.db.models.pet import Pet
from petclinic.db.models.vet import Specialty, Vet, vet_specialties
from petclinic.db.models.visit import VISIT_STATUS_ACTIVE, VISIT_STATUS_RETURNED, Visit
from petclinic.db.session import SessionLocal

logger = logging.getLogger(__name__)

fake = Faker()

PET_TYPES = ["cat", "dog", "lizard", "snake", "bird", "hamster"]
SPECIALTIES = ["radiology", "surgery", "dentistry"]
VISIT_REASONS = ["rabies shot", "neutered", "spayed", "annual checkup", "dental clean", "skin irritation"]


def seed_vets(session: Session, count: int = 6) -> list[Vet]:
    specialties = [Specialty(name=name) for name in SPECIALTIES]
    session.add_all(specialties)
    session.flush()

    vets = [Vet(first_name=fake.first_name(), last_name=fake.last_name()) for _ in range(count)]
    session.add_all(vets)
    session.flush()

    # randint(0, 2): about a third of vets end up with no specialty.
    for vet in vets:
        for specialty in random.sample(specialties, k=random.randint(0, 2)):
            session.execute(vet_specialties.insert().values(vet_id=vet.id, specialty_id=specialty.id))
    return vets


def seed_owner(session: Session, max_pets: int = 3, max_visits: int = 4) -> Owner:
    owner = Owner(
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        address=fake.street_address(),
        city=fake.city(),
        telephone=fake.msisdn()[:10],
    )
    session.add(owner)
    session.flush()

    for _ in range(random.randint(1, max_pets)):
        pet = Pet(
            name=fake.first_name(),
            type_name=random.choice(PET_TYPES),
            birth_date=fake.date_between(start_date="-12y", end_date="-3M"),
            owner_id=owner.id,
        )
        session.add(pet)
        session.flush()

        for _ in range(random.randint(0, max_visits)):
            session.add(
                Visit(
                    pet_id=pet.id,
                    visit_date=date.today() - timedelta(days=random.randint(0, 720)),
                    description=random.choice(VISIT_REASONS),
                    status=random.choice([VISIT_STATUS_RETURNED, VISIT_STATUS_ACTIVE]),
                )
            )
    return owner


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the pet clinic database with demo data.")
    parser.add_argument("--owners", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    if args.seed is not None:
        random.seed(args.seed)
        Faker.seed(args.seed)

    init_db()
    with SessionLocal() as session:
        if session.execute(select(func.count(Vet.id))).scalar_one() == 0:
            vets = seed_vets(session)
            logger.info("Seeded %d vets", len(vets))
        for _ in range(args.owners):
            seed_owner(session)
        session.commit()
    logger.info("Seeded %d owners", args.owners)


if __name__ == "__main__":
    main()
