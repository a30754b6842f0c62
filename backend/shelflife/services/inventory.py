"""Inventory store for production records."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelflife.core.exceptions import DuplicateRecordError, ValidationError
from shelflife.models.record import ProductionRecord
from shelflife.schemas.record import RecordResponse, RecordSnapshot
from shelflife.services.catalog import validate_limits, validate_sku, validate_text
from shelflife.services.expiry import (
    Classification,
    alert_date_for,
    classify,
    expiry_date_for,
    normalize_reference,
    parse_iso_date,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpiringRecord:
    record: ProductionRecord
    classification: Classification


def _duplicate(existing: ProductionRecord) -> DuplicateRecordError:
    # Detached copy: the session is rolled back before the error is rendered
    return DuplicateRecordError(
        existing.sku,
        existing.production_date.isoformat(),
        RecordResponse.model_validate(existing),
    )


class InventoryStore:
    """Reads and writes production records through one session.

    Records are keyed by (sku, production_date). The pre-insert lookup only
    exists to report the conflicting row; the unique constraint on the table
    is what actually prevents duplicates.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> list[ProductionRecord]:
        query = select(ProductionRecord).order_by(
            ProductionRecord.production_date.desc(), ProductionRecord.sku
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_by_sku(self, sku: str) -> list[ProductionRecord]:
        query = (
            select(ProductionRecord)
            .where(ProductionRecord.sku == sku)
            .order_by(ProductionRecord.production_date.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, sku: str, production_date: date | str) -> ProductionRecord | None:
        produced = parse_iso_date(production_date)
        result = await self.db.execute(
            select(ProductionRecord).where(
                ProductionRecord.sku == sku,
                ProductionRecord.production_date == produced,
            )
        )
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(ProductionRecord))
        return int(result.scalar_one())

    async def list_expiring(self, reference: date | datetime) -> list[ExpiringRecord]:
        """Records that are expired or inside their reminder window.

        Soonest to expire first; for equal expiry, newest production first.
        """
        today = normalize_reference(reference)
        query = (
            select(ProductionRecord)
            .where(ProductionRecord.alert_date <= today)
            .order_by(
                ProductionRecord.expiry_date.asc(),
                ProductionRecord.production_date.desc(),
                ProductionRecord.sku,
            )
        )
        result = await self.db.execute(query)
        return [
            ExpiringRecord(
                record=record,
                classification=classify(
                    record.production_date, record.shelf_life, record.reminder_days, today
                ),
            )
            for record in result.scalars().all()
        ]

    async def count_expiring(self, reference: date | datetime) -> int:
        today = normalize_reference(reference)
        result = await self.db.execute(
            select(func.count())
            .select_from(ProductionRecord)
            .where(ProductionRecord.alert_date <= today)
        )
        return int(result.scalar_one())

    async def add(self, snapshot: RecordSnapshot) -> ProductionRecord:
        """Insert a production record.

        Raises:
            ValidationError: If the snapshot violates the product invariants.
            DateError: If production_date is not a calendar date.
            DuplicateRecordError: If (sku, production_date) already exists.
                ``existing`` holds a detached copy of the conflicting row.
        """
        validate_sku(snapshot.sku)
        validate_text("name", snapshot.name)
        validate_text("location", snapshot.location)
        validate_limits(snapshot.shelf_life, snapshot.reminder_days)
        produced = parse_iso_date(snapshot.production_date)

        existing = await self.get(snapshot.sku, produced)
        if existing is not None:
            logger.warning(
                "Rejected duplicate record %s/%s", snapshot.sku, produced.isoformat()
            )
            raise _duplicate(existing)

        record = ProductionRecord(
            sku=snapshot.sku,
            name=snapshot.name,
            production_date=produced,
            shelf_life=snapshot.shelf_life,
            reminder_days=snapshot.reminder_days,
            location=snapshot.location,
            expiry_date=expiry_date_for(produced, snapshot.shelf_life),
            alert_date=alert_date_for(produced, snapshot.shelf_life, snapshot.reminder_days),
        )
        self.db.add(record)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            await self.db.rollback()
            existing = await self.get(snapshot.sku, produced)
            if existing is not None:
                logger.warning(
                    "Unique constraint rejected record %s/%s",
                    snapshot.sku,
                    produced.isoformat(),
                )
                raise _duplicate(existing) from exc
            raise ValidationError(
                "record", "Record violates a storage constraint", str(exc.orig)
            ) from exc
        await self.db.refresh(record)
        logger.info("Added record %s/%s", record.sku, produced.isoformat())
        return record

    async def delete(self, sku: str, production_date: date | str) -> int:
        """Remove one record. Returns 0 when nothing matched."""
        produced = parse_iso_date(production_date)
        result = await self.db.execute(
            delete(ProductionRecord).where(
                ProductionRecord.sku == sku,
                ProductionRecord.production_date == produced,
            )
        )
        changes = result.rowcount or 0
        logger.info("Deleted record %s/%s (%d row(s))", sku, produced.isoformat(), changes)
        return changes
