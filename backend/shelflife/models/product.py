"""Product definition SQLAlchemy model."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from shelflife.core.database import Base

SKU_LENGTH = 5


class Product(Base):
    """Catalog entry describing how long a product keeps."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("shelf_life > 0", name="ck_products_shelf_life_positive"),
        CheckConstraint(
            "reminder_days >= 0 AND reminder_days <= shelf_life",
            name="ck_products_reminder_within_shelf_life",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(SKU_LENGTH), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    shelf_life: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Days from production to expiry"
    )
    reminder_days: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Days before expiry that count as expiring"
    )
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
