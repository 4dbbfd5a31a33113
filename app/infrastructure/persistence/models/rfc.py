"""Request for change ORM model."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class Rfc(OrganizationScopedModel, Base):
    """Change request. Table: rfc."""

    __tablename__ = "rfc"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    priority: Mapped[str | None] = mapped_column(String(50), nullable=True)
    requested_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
