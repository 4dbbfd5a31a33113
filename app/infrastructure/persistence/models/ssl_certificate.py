"""SSL certificate tracker ORM model.

private_key holds a secret; search never selects it.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import OrganizationScopedModel


class SslCertificate(OrganizationScopedModel, Base):
    """TLS certificate. Table: ssl_certificate."""

    __tablename__ = "ssl_certificate"

    common_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    issuer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subject_alt_names: Mapped[str | None] = mapped_column(Text, nullable=True)
    valid_from: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    valid_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    private_key: Mapped[str | None] = mapped_column(Text, nullable=True)
