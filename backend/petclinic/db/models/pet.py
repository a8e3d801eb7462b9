"""Module: pet."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from petclinic.db.base import Base


# Pet profile; visit history is loaded per request rather than mapped as a collection.
class Pet(Base):
    __tablename__ = "pets"

    # Primary Key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Basic Info
    name: Mapped[str] = mapped_column(String(30), nullable=False)
    type_name: Mapped[str] = mapped_column(String(80), nullable=True)
    birth_date: Mapped[date] = mapped_column(Date, nullable=True)

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("owners.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
