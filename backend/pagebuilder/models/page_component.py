import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from pagebuilder.db.base import Base


class PageComponent(Base):
    __tablename__ = "page_components"
    __table_args__ = (
        CheckConstraint(
            "type IN ('navigation', 'hero', 'product_grid', 'contact_form', 'cart', 'footer')",
            name="ck_page_components_type",
        ),
        CheckConstraint("position >= 0", name="ck_page_components_position"),
        Index("ix_page_components_page_id_position", "page_id", "position"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    page_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("pages.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    # Overlaid on the current type defaults on read; stored keys win
    config: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
