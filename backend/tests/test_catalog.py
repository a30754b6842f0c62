"""Tests for the catalog store and product schemas."""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from shelflife.core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from shelflife.schemas.product import ProductCreate, ProductUpdate
from shelflife.services.catalog import CatalogStore, validate_limits


def _definition(**overrides) -> ProductCreate:
    values = {"sku": "10001", "name": "Whole Milk", "shelf_life": 180, "reminder_days": 7, "location": "Chilled row 1"}
    values.update(overrides)
    return ProductCreate(**values)


# ---------------------------------------------------------------------------
# Schema Validation Tests
# ---------------------------------------------------------------------------


class TestProductSchemaValidation:
    def test_valid_product_create(self):
        product = _definition()
        assert product.sku == "10001"
        assert product.reminder_days == 7

    def test_reminder_longer_than_shelf_life_rejected(self):
        with pytest.raises(PydanticValidationError, match="reminder_days must not exceed shelf_life"):
            ProductCreate(sku="99999", name="X", shelf_life=10, reminder_days=15, location="A")

    @pytest.mark.parametrize("sku", ["1234", "123456", ""])
    def test_sku_must_be_five_characters(self, sku):
        with pytest.raises(PydanticValidationError):
            _definition(sku=sku)

    def test_shelf_life_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            _definition(shelf_life=0, reminder_days=0)

    def test_reminder_may_be_zero(self):
        assert _definition(reminder_days=0).reminder_days == 0

    def test_reminder_must_not_be_negative(self):
        with pytest.raises(PydanticValidationError):
            _definition(reminder_days=-1)

    def test_missing_location_rejected(self):
        with pytest.raises(PydanticValidationError):
            ProductCreate(sku="10001", name="Milk", shelf_life=10, reminder_days=1)

    def test_update_has_no_sku(self):
        update = ProductUpdate(name="Milk", shelf_life=10, reminder_days=1, location="A")
        assert not hasattr(update, "sku")


class TestValidateLimits:
    def test_accepts_valid_pair(self):
        validate_limits(10, 10)

    @pytest.mark.parametrize(
        "shelf_life, reminder_days, field",
        [(0, 0, "shelf_life"), (-3, 0, "shelf_life"), (10, -1, "reminder_days"), (10, 11, "reminder_days"), (True, 0, "shelf_life")],
    )
    def test_names_offending_field(self, shelf_life, reminder_days, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_limits(shelf_life, reminder_days)
        assert exc_info.value.field == field


# ---------------------------------------------------------------------------
# Store Tests (mock session)
# ---------------------------------------------------------------------------


class TestCatalogStoreAdd:
    @pytest.mark.asyncio
    async def test_add_success(self, mock_db, make_result):
        mock_db.execute = AsyncMock(return_value=make_result(scalar=None))

        product = await CatalogStore(mock_db).add(_definition())
        assert product.sku == "10001"
        mock_db.add.assert_called_once()
        mock_db.flush.assert_awaited_once()
        mock_db.refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_duplicate_sku_rejected_before_insert(self, mock_db, make_result, product_factory):
        existing = product_factory.create(sku="10001")
        mock_db.execute = AsyncMock(return_value=make_result(scalar=existing))

        with pytest.raises(DuplicateKeyError) as exc_info:
            await CatalogStore(mock_db).add(_definition())
        assert exc_info.value.sku == "10001"
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_constraint_violation_translated_to_duplicate(self, mock_db, make_result, product_factory):
        mock_db.execute = AsyncMock(
            side_effect=[make_result(scalar=None), make_result(scalar=product_factory.create(sku="10001"))]
        )
        mock_db.flush = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE")))

        with pytest.raises(DuplicateKeyError):
            await CatalogStore(mock_db).add(_definition())
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_definition_never_reaches_session(self, mock_db):
        bad = ProductCreate.model_construct(sku="10001", name="X", shelf_life=10, reminder_days=15, location="A")
        with pytest.raises(ValidationError) as exc_info:
            await CatalogStore(mock_db).add(bad)
        assert exc_info.value.field == "reminder_days"
        mock_db.execute.assert_not_awaited()


class TestCatalogStoreUpdate:
    @pytest.mark.asyncio
    async def test_update_success(self, mock_db, make_result, product_factory):
        product = product_factory.create(sku="10001")
        mock_db.execute = AsyncMock(return_value=make_result(scalar=product))

        changes = await CatalogStore(mock_db).update(
            "10001", ProductUpdate(name="Skim Milk", shelf_life=90, reminder_days=5, location="Chilled row 3")
        )
        assert changes == 1
        assert product.name == "Skim Milk"
        assert product.shelf_life == 90
        mock_db.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_db, make_result):
        mock_db.execute = AsyncMock(return_value=make_result(scalar=None))

        with pytest.raises(NotFoundError):
            await CatalogStore(mock_db).update(
                "00000", ProductUpdate(name="X", shelf_life=10, reminder_days=1, location="A")
            )


class TestCatalogStoreDelete:
    @pytest.mark.asyncio
    async def test_delete_reports_affected_rows(self, mock_db, make_result):
        mock_db.execute = AsyncMock(return_value=make_result(rowcount=1))
        assert await CatalogStore(mock_db).delete("10001") == 1

    @pytest.mark.asyncio
    async def test_delete_missing_is_zero(self, mock_db, make_result):
        mock_db.execute = AsyncMock(return_value=make_result(rowcount=0))
        assert await CatalogStore(mock_db).delete("00000") == 0


# ---------------------------------------------------------------------------
# Store Tests (SQLite)
# ---------------------------------------------------------------------------


class TestCatalogStoreDatabase:
    @pytest.mark.asyncio
    async def test_list_is_ordered_by_sku(self, session):
        store = CatalogStore(session)
        for sku in ("30001", "10002", "20001"):
            await store.add(_definition(sku=sku))
        await session.commit()

        assert [p.sku for p in await store.list_all()] == ["10002", "20001", "30001"]

    @pytest.mark.asyncio
    async def test_get_absent_returns_none(self, session):
        assert await CatalogStore(session).get("12345") is None

    @pytest.mark.asyncio
    async def test_duplicate_sku_keeps_single_row(self, session):
        store = CatalogStore(session)
        await store.add(_definition())
        await session.commit()

        with pytest.raises(DuplicateKeyError):
            await store.add(_definition(name="Other"))
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_update_then_get(self, session):
        store = CatalogStore(session)
        await store.add(_definition())
        await session.commit()

        await store.update("10001", ProductUpdate(name="Milk 2", shelf_life=90, reminder_days=90, location="B"))
        await session.commit()

        product = await store.require("10001")
        assert (product.name, product.shelf_life, product.reminder_days, product.location) == ("Milk 2", 90, 90, "B")

    @pytest.mark.asyncio
    async def test_delete_twice(self, session):
        store = CatalogStore(session)
        await store.add(_definition())
        await session.commit()

        assert await store.delete("10001") == 1
        assert await store.delete("10001") == 0
        assert await store.count() == 0
