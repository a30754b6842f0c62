"""Production record SQLAlchemy model."""

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from shelflife.core.database import Base
from shelflife.models.product import SKU_LENGTH


class ProductionRecord(Base):
    """One production batch of a product.

    name, shelf_life, reminder_days and location are a snapshot of the
    product definition at insert time, not a live reference. expiry_date and
    alert_date are derived from that snapshot when the row is written.
    """

    __tablename__ = "product_records"
    __table_args__ = (
        UniqueConstraint("sku", "production_date", name="uq_product_records_sku_production_date"),
        CheckConstraint("shelf_life > 0", name="ck_product_records_shelf_life_positive"),
        CheckConstraint(
            "reminder_days >= 0 AND reminder_days <= shelf_life",
            name="ck_product_records_reminder_within_shelf_life",
        ),
        Index("ix_product_records_alert_date", "alert_date"),
        Index("ix_product_records_expiry", "expiry_date", "production_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String(SKU_LENGTH), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    production_date: Mapped[date] = mapped_column(Date, index=True, nullable=False)
    shelf_life: Mapped[int] = mapped_column(Integer, nullable=False)
    reminder_days: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    expiry_date: Mapped[date] = mapped_column(
        Date, nullable=False, comment="production_date + shelf_life"
    )
    alert_date: Mapped[date] = mapped_column(
        Date, nullable=False, comment="expiry_date - reminder_days"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
