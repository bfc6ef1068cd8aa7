"""제네릭 레포지토리 테스트.

Generic repository tests: save/select round trips, single-result semantics,
criteria translation, and StorageError wrapping.
"""

import pytest
from sqlalchemy.exc import IntegrityError, InvalidRequestError
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.bill import Bill
from cashier.models.catalog import Department, Item
from cashier.repositories.bill_repository import bill_repository
from cashier.repositories.criteria import And, Eq, StartsWith, combine, escape_like
from cashier.repositories.department_repository import department_repository
from cashier.repositories.item_repository import item_repository
from cashier.utils.exceptions import (
    AmbiguousResultError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
)
from cashier.utils.pagination import PagingInfo
from tests.conftest import make_item


def _columns(entity) -> dict:
    return {c.key: getattr(entity, c.key) for c in type(entity).__table__.columns}


class TestSaveAndSelect:
    """저장 및 단건 조회 테스트."""

    async def test_save_assigns_identity(self, db: AsyncSession):
        """저장 시 id와 uuid가 할당되고 활성 상태로 시작."""
        item = await item_repository.save(db, Item(name="Gauze"))
        assert item.id is not None
        assert item.uuid is not None
        assert item.voided is False
        assert item.void_reason is None

    async def test_round_trip_by_id(self, db: AsyncSession):
        """save 후 select_by_id 결과가 모든 필드에서 동일."""
        saved = await item_repository.save(db, Item(name="Gauze", description="Sterile"))
        expected = _columns(saved)

        db.expunge_all()
        loaded = await item_repository.select_by_id(db, saved.id)
        assert loaded is not saved
        assert _columns(loaded) == expected

    async def test_ids_are_not_reused(self, db: AsyncSession):
        """나중에 저장된 엔티티가 더 큰 id를 받음 (ids follow insertion order)."""
        first = await item_repository.save(db, Item(name="First"))
        second = await item_repository.save(db, Item(name="Second"))
        assert second.id > first.id

    async def test_select_by_uuid(self, db: AsyncSession):
        item = await make_item(db, "Bandage")
        assert (await item_repository.select_by_uuid(db, item.uuid)).id == item.id

    async def test_select_by_id_not_found(self, db: AsyncSession):
        """존재하지 않는 id 조회 시 NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            await item_repository.select_by_id(db, 9999)
        assert "Item" in str(exc_info.value)
        assert "9999" in str(exc_info.value)

    async def test_select_one_ambiguous(self, db: AsyncSession):
        """여러 건이 일치하면 AmbiguousResultError."""
        db.add_all([Department(name="Dup"), Department(name="Dup")])
        await db.flush()
        with pytest.raises(AmbiguousResultError):
            await department_repository.select_one(db, Eq("name", "Dup"))

    async def test_select_one_single_match(self, db: AsyncSession):
        await make_item(db, "Aspirin")
        await make_item(db, "Tylenol")
        found = await item_repository.select_one(db, Eq("name", "Tylenol"))
        assert found.name == "Tylenol"


class TestSelect:
    """조건 기반 목록 조회 테스트."""

    async def test_select_empty_is_not_an_error(self, db: AsyncSession):
        assert await item_repository.select(db, Eq("name", "Nothing")) == []

    async def test_select_defaults_to_insertion_order(self, db: AsyncSession):
        for name in ("Charlie", "Alpha", "Bravo"):
            await make_item(db, name)
        names = [i.name for i in await item_repository.select(db)]
        assert names == ["Charlie", "Alpha", "Bravo"]

    async def test_select_with_order_and_criteria(self, db: AsyncSession):
        for name in ("Charlie", "Alpha", "Bravo"):
            await make_item(db, name)
        await make_item(db, "Aardvark", voided=True)

        items = await item_repository.select(db, Eq("voided", False), order_by=[Item.name])
        assert [i.name for i in items] == ["Alpha", "Bravo", "Charlie"]

    async def test_select_paged_populates_total(self, db: AsyncSession):
        for i in range(3):
            await make_item(db, f"Item {i}")
        paging = PagingInfo(page=2, page_size=2)

        items = await item_repository.select(db, paging=paging)
        assert [i.name for i in items] == ["Item 2"]
        assert paging.total_record_count == 3
        assert paging.page_count == 2

    async def test_select_paged_without_record_count(self, db: AsyncSession):
        await make_item(db, "Only")
        paging = PagingInfo(page=1, page_size=5, load_record_count=False)

        assert len(await item_repository.select(db, paging=paging)) == 1
        assert paging.total_record_count is None

    async def test_count(self, db: AsyncSession):
        await make_item(db, "A")
        await make_item(db, "B", voided=True)
        assert await item_repository.count(db) == 2
        assert await item_repository.count(db, Eq("voided", True)) == 1

    async def test_unknown_field_rejected(self, db: AsyncSession):
        with pytest.raises(InvalidArgumentError):
            await item_repository.select(db, Eq("colour", "red"))


class TestCriteria:
    """추상 조건 변환 테스트."""

    async def test_starts_with_is_case_insensitive(self, db: AsyncSession):
        await make_item(db, "Aspirin")
        await make_item(db, "aspartame")
        items = await item_repository.select(db, StartsWith("name", "ASP"))
        assert {i.name for i in items} == {"Aspirin", "aspartame"}

    async def test_starts_with_folds_non_ascii(self, db: AsyncSession):
        """비ASCII 문자도 대소문자 무시 (Non-ASCII letters fold on both sides)."""
        await make_item(db, "Ébauche")
        await make_item(db, "Ebony")
        for prefix in ("éb", "ÉB", "Éb"):
            items = await item_repository.select(db, StartsWith("name", prefix))
            assert [i.name for i in items] == ["Ébauche"]

    async def test_wildcards_match_literally(self, db: AsyncSession):
        await make_item(db, "100% Cotton")
        await make_item(db, "1000 Units")
        await make_item(db, "10_mg")
        await make_item(db, "10xmg")

        assert [i.name for i in await item_repository.select(db, StartsWith("name", "100%"))] == ["100% Cotton"]
        assert [i.name for i in await item_repository.select(db, StartsWith("name", "10_"))] == ["10_mg"]

    async def test_eq_none_matches_null(self, db: AsyncSession, department):
        await make_item(db, "Loose")
        await make_item(db, "Shelved", department_id=department.id)
        items = await item_repository.select(db, Eq("department_id", None))
        assert [i.name for i in items] == ["Loose"]

    async def test_and_combines(self, db: AsyncSession):
        await make_item(db, "Aspirin")
        await make_item(db, "Aspartame", voided=True)
        items = await item_repository.select(db, And(StartsWith("name", "asp"), Eq("voided", True)))
        assert [i.name for i in items] == ["Aspartame"]

    def test_combine_skips_none(self):
        eq = Eq("voided", False)
        assert combine() is None
        assert combine(None, None) is None
        assert combine(None, eq) is eq
        assert isinstance(combine(eq, StartsWith("name", "a")), And)

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestStorageErrors:
    """영속화 실패 래핑 테스트."""

    async def test_constraint_violation_wrapped(self, db: AsyncSession):
        """유니크 제약 위반은 원인을 보존한 StorageError로 변환."""
        await bill_repository.save(db, Bill(receipt_number="R-1"))
        with pytest.raises(StorageError) as exc_info:
            await bill_repository.save(db, Bill(receipt_number="R-1"))

        error = exc_info.value
        assert "Bill" in str(error)
        assert isinstance(error.cause, IntegrityError)
        assert error.__cause__ is error.cause
        assert error.status_code == 500
        await db.rollback()

    async def test_not_null_violation_wrapped(self, db: AsyncSession):
        with pytest.raises(StorageError):
            await item_repository.save(db, Item(name=None))
        await db.rollback()

    async def test_delete_transient_entity_wrapped(self, db: AsyncSession):
        """저장된 적 없는 엔티티 삭제는 StorageError."""
        with pytest.raises(StorageError) as exc_info:
            await item_repository.delete(db, Item(name="Never saved"))
        assert isinstance(exc_info.value.cause, InvalidRequestError)

    async def test_delete_removes_record(self, db: AsyncSession):
        item = await make_item(db, "Disposable")
        await item_repository.delete(db, item)
        with pytest.raises(NotFoundError):
            await item_repository.select_by_id(db, item.id)
