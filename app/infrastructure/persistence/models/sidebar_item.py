"""Sidebar item ORM model. Custom navigation entries that own a page."""

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    OrganizationScopedModel,
)


class SidebarItem(OrganizationScopedModel, ActiveFlagMixin, Base):
    """Navigation entry of an organization. Table: sidebar_item."""

    __tablename__ = "sidebar_item"

    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    item_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ux_sidebar_item_org_slug", "organization_id", "slug", unique=True),
    )
