"""Soft-delete store behaviour, exercised through ProductRepository."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from catalog_api.core.base_repository import ActiveRecordRepository
from catalog_api.core.exceptions import DuplicateEntityError, NotFoundError, ValidationFailedError
from catalog_api.core.pagination import PageRequest
from catalog_api.entities.record import RecordMeta, require_record_columns
from catalog_api.infrastructure.database.base_model import BaseModel
from catalog_api.infrastructure.database.models.product_model import ProductModel

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

pytestmark = pytest.mark.unit


class _NoRecordColumns(BaseModel):
    __tablename__ = "test_no_record_columns"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    label: Mapped[str] = mapped_column(String(20))


def _product(sku: str, *, quantity: int = 1, name: str | None = None) -> ProductModel:
    return ProductModel(
        name=name or f"Product {sku}",
        price=Decimal("1.00"),
        quantity=quantity,
        sku=sku,
    )


class TestSave:
    def test_insert_assigns_identity_and_timestamps(self, product_repo):
        saved = product_repo.save(_product("A1"))

        assert saved.id
        assert saved.is_active is True
        assert saved.created_at is not None
        assert saved.created_at == saved.updated_at

    def test_update_refreshes_updated_at_only(self, product_repo):
        saved = product_repo.save(_product("A1"))
        created_at = saved.created_at
        original_id = saved.id

        saved.created_at = created_at
        saved.updated_at = created_at - timedelta(minutes=5)
        saved.name = "Renamed"
        product_repo.save(saved)

        assert saved.id == original_id
        assert saved.created_at == created_at
        assert saved.updated_at > created_at - timedelta(minutes=5)
        assert saved.updated_at >= created_at

    def test_unique_constraint_is_final_guard(self, product_repo):
        product_repo.save(_product("DUP"))

        with pytest.raises(DuplicateEntityError):
            product_repo.save(_product("DUP"))

    def test_failed_save_keeps_earlier_writes(self, product_repo, session):
        keep = product_repo.save(_product("KEEP"))
        product_repo.save(_product("DUP"))

        with pytest.raises(DuplicateEntityError):
            product_repo.save(_product("DUP"))

        assert product_repo.find_by_id(keep.id).sku == "KEEP"
        after = product_repo.save(_product("AFTER"))
        session.commit()
        assert product_repo.exists_by_sku("KEEP") is True
        assert product_repo.exists_by_sku("AFTER") is True
        assert product_repo.find_by_id(after.id).is_active is True

    def test_check_constraint_is_a_validation_error(self, product_repo):
        bad = _product("NEG")
        bad.price = Decimal("-5")

        with pytest.raises(ValidationFailedError) as exc_info:
            product_repo.save(bad)

        assert exc_info.value.errors == {"product": "violates a data constraint"}

    def test_missing_required_value_is_a_validation_error(self, product_repo):
        bad = _product("NONAME")
        bad.name = None

        with pytest.raises(ValidationFailedError) as exc_info:
            product_repo.save(bad)

        assert exc_info.value.errors == {"product": "required value is missing"}


class TestLookups:
    def test_find_active_by_id_hides_inactive(self, product_repo):
        saved = product_repo.save(_product("A1"))
        product_repo.deactivate(saved)

        with pytest.raises(NotFoundError):
            product_repo.find_active_by_id(saved.id)

        raw = product_repo.find_by_id(saved.id)
        assert raw.is_active is False

    def test_missing_id_raises_not_found(self, product_repo):
        with pytest.raises(NotFoundError, match="Product not found with id: nope"):
            product_repo.find_by_id("nope")
        with pytest.raises(NotFoundError):
            product_repo.find_active_by_id("nope")

    def test_exists_by_counts_inactive_rows(self, product_repo):
        saved = product_repo.save(_product("KEEP"))
        product_repo.deactivate(saved)

        assert product_repo.exists_by_sku("KEEP") is True
        assert product_repo.exists_by_sku("OTHER") is False


class TestListing:
    def test_pages_over_active_records_only(self, product_repo):
        for i in range(15):
            product_repo.save(_product(f"ACT-{i}"))
        for i in range(3):
            product_repo.deactivate(product_repo.save(_product(f"OFF-{i}")))

        first = product_repo.list_active(PageRequest(page=0, size=10))
        second = product_repo.list_active(PageRequest(page=1, size=10))

        assert len(first.content) == 10
        assert len(second.content) == 5
        assert first.total_elements == 15
        assert first.total_pages == 2

        ids = [p.id for p in first.content] + [p.id for p in second.content]
        assert len(set(ids)) == 15
        assert all(p.is_active for p in first.content + second.content)
        assert not any(p.sku.startswith("OFF") for p in first.content + second.content)

    def test_newest_first(self, product_repo, session):
        base = datetime(2024, 1, 1, 12, 0, 0)
        for offset, sku in enumerate(["OLD", "MID", "NEW"]):
            p = product_repo.save(_product(sku))
            p.created_at = base + timedelta(days=offset)
        session.flush()

        page = product_repo.list_active(PageRequest(page=0, size=10))

        assert [p.sku for p in page.content] == ["NEW", "MID", "OLD"]

    def test_list_all_includes_inactive(self, product_repo):
        product_repo.save(_product("ON"))
        product_repo.deactivate(product_repo.save(_product("OFF")))

        everything = product_repo.list_all(PageRequest(page=0, size=10))
        active_only = product_repo.list_all(PageRequest(page=0, size=10), include_inactive=False)

        assert everything.total_elements == 2
        assert active_only.total_elements == 1


class TestRecordCapability:
    def test_record_meta_extracts_base_fields(self, product_repo):
        saved = product_repo.save(_product("META"))

        meta = RecordMeta.of(saved)

        assert meta.id == saved.id
        assert meta.is_active is True
        assert meta.created_at == meta.updated_at

    def test_models_without_record_columns_are_rejected(self, session):
        with pytest.raises(TypeError, match="missing record columns"):
            require_record_columns(_NoRecordColumns)

        class _BadRepository(ActiveRecordRepository):
            model = _NoRecordColumns

        with pytest.raises(TypeError):
            _BadRepository(session)
