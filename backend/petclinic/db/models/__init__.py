# backend/petclinic/db/models/__init__.py

from petclinic.db.models.owner import Owner
from petclinic.db.models.pet import Pet
from petclinic.db.models.visit import Visit, VISIT_STATUS_ACTIVE, VISIT_STATUS_RETURNED
from petclinic.db.models.vet import Specialty, Vet, vet_specialties
