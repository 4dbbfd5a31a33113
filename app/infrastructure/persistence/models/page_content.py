"""Page content ORM model. JSON body of a sidebar item's page.

Tenant ownership comes from the owning sidebar item.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class PageContent(CuidMixin, TimestampMixin, Base):
    """Content of one page. Table: page_content."""

    __tablename__ = "page_content"

    sidebar_item_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("sidebar_item.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    content_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    # Layout of content_data, e.g. rich_text, contacts, locations.
    content_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
