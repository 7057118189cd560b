"""SQLAlchemy declarative base for all ORM models."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class NPCModel(Base):
    """ORM model for simulated NPCs.

    Queryable attributes live in scalar columns. Schedule, special
    appointments, relationship records and the dialogue graph are
    stored together in the JSON ``payload`` column.
    """

    __tablename__ = "npcs"

    npc_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    occupation: Mapped[str | None] = mapped_column(String, nullable=True)
    faction: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str] = mapped_column(String, nullable=False, default="", index=True)
    current_activity: Mapped[str] = mapped_column(String, nullable=False, default="")
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
