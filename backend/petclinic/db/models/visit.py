"""Module: visit."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.db.base import Base

# Two-valued status flag. Set to active on create, edit and return; the
# edit form's non-"edit" action puts a visit back to returned.
VISIT_STATUS_RETURNED = 0
VISIT_STATUS_ACTIVE = 1


# A pet's appointment record. Created from the visit form, never deleted.
class Visit(Base):
    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    pet_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=VISIT_STATUS_RETURNED, server_default=str(VISIT_STATUS_RETURNED)
    )

    @property
    def is_new(self) -> bool:
        return self.id is None
