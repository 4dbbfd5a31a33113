"""Configuration ORM model."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class Configuration(OrganizationScopedModel, Base):
    """Device or service configuration record. Table: configuration."""

    __tablename__ = "configuration"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    config_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    config_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
