"""Domain name tracker ORM model."""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class Domain(OrganizationScopedModel, Base):
    """Registered domain name. Table: domain."""

    __tablename__ = "domain"

    domain_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    registrar: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
