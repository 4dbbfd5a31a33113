"""Organization ORM model. The tenant every other record belongs to."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    CuidMixin,
    TimestampMixin,
)


class Organization(CuidMixin, TimestampMixin, ActiveFlagMixin, Base):
    """Organization (tenant). Table: organization."""

    __tablename__ = "organization"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
