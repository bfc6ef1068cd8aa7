"""청구서 서비스 테스트: 생성, 영수증 번호 검색, 조정.

Bill service tests: creation with line items, receipt number search,
and bill adjustment.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.bill import BILL_STATUS_ADJUSTED, BILL_STATUS_PENDING, Bill
from cashier.schemas.bill import BillCreate, BillLineItemCreate
from cashier.services.bill_service import bill_service
from cashier.utils.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    NullReferenceError,
    StorageError,
)


async def _create_bill(db: AsyncSession, drugs, receipt_number: str = "R-0001") -> Bill:
    return await bill_service.create_bill(
        db,
        BillCreate(
            receipt_number=receipt_number,
            patient_uuid=uuid4(),
            line_items=[
                BillLineItemCreate(item_id=drugs["aspirin"].id, quantity=2),
                BillLineItemCreate(item_id=drugs["tylenol"].id, quantity=1, price="5.00"),
            ],
        ),
    )


class TestCreateBill:
    """청구서 생성 테스트."""

    async def test_create_bill(self, db: AsyncSession, drugs):
        """항목 단가 기본값 적용 및 총액 계산."""
        bill = await _create_bill(db, drugs)

        assert bill.id is not None
        assert bill.status == BILL_STATUS_PENDING
        assert bill.voided is False
        assert [li.item_id for li in bill.line_items] == [drugs["aspirin"].id, drugs["tylenol"].id]
        assert bill.line_items[0].price == Decimal("4.50")
        assert bill.total == Decimal("14.00")

    async def test_voided_item_rejected(self, db: AsyncSession, drugs):
        with pytest.raises(InvalidArgumentError):
            await bill_service.create_bill(
                db,
                BillCreate(
                    receipt_number="R-0002",
                    line_items=[BillLineItemCreate(item_id=drugs["aspartame"].id)],
                ),
            )

    async def test_unknown_item_rejected(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await bill_service.create_bill(
                db,
                BillCreate(receipt_number="R-0003", line_items=[BillLineItemCreate(item_id=12345)]),
            )

    async def test_zero_quantity_rejected(self, db: AsyncSession, drugs):
        with pytest.raises(InvalidArgumentError):
            await bill_service.create_bill(
                db,
                BillCreate(
                    receipt_number="R-0004",
                    line_items=[BillLineItemCreate(item_id=drugs["aspirin"].id, quantity=0)],
                ),
            )

    async def test_blank_receipt_number_rejected(self, db: AsyncSession):
        with pytest.raises(InvalidArgumentError):
            await bill_service.create_bill(db, BillCreate(receipt_number=""))

    async def test_duplicate_receipt_number(self, db: AsyncSession, drugs):
        """영수증 번호 중복은 StorageError."""
        await _create_bill(db, drugs)
        with pytest.raises(StorageError):
            await bill_service.create_bill(db, BillCreate(receipt_number="R-0001"))
        await db.rollback()


class TestBillLookup:
    """청구서 조회 테스트."""

    async def test_get_by_receipt_number(self, db: AsyncSession, drugs):
        bill = await _create_bill(db, drugs)
        assert (await bill_service.get_by_receipt_number(db, "R-0001")).id == bill.id

    async def test_get_by_receipt_number_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await bill_service.get_by_receipt_number(db, "R-9999")

    async def test_get_by_receipt_number_blank(self, db: AsyncSession):
        with pytest.raises(InvalidArgumentError):
            await bill_service.get_by_receipt_number(db, "")

    async def test_find_by_name_matches_receipt_number(self, db: AsyncSession, drugs):
        """청구서 이름 검색은 영수증 번호 접두어로 동작."""
        await _create_bill(db, drugs, "2026-0001")
        await _create_bill(db, drugs, "2026-0002")
        await _create_bill(db, drugs, "2025-0099")

        bills = await bill_service.find_by_name(db, "2026-", False)
        assert [b.receipt_number for b in bills] == ["2026-0001", "2026-0002"]


class TestAdjustBill:
    """청구서 조정 테스트."""

    async def test_adjust_bill(self, db: AsyncSession, drugs):
        """원 청구서는 무효화되고 새 청구서가 연결됨."""
        original = await _create_bill(db, drugs)
        adjusting = await bill_service.adjust_bill(db, original, "R-0001-A", "Wrong quantity")

        assert original.voided is True
        assert original.void_reason == "Wrong quantity"
        assert original.status == BILL_STATUS_ADJUSTED
        assert adjusting.bill_adjusted_id == original.id
        assert adjusting.patient_uuid == original.patient_uuid
        assert adjusting.total == original.total
        assert [b.id for b in await bill_service.get_adjustments(db, original)] == [adjusting.id]
        assert await bill_service.get_adjustments(db, adjusting) == []

        active = await bill_service.get_all(db, False)
        assert [b.receipt_number for b in active] == ["R-0001-A"]

    async def test_adjust_requires_reason(self, db: AsyncSession, drugs):
        original = await _create_bill(db, drugs)
        with pytest.raises(InvalidArgumentError):
            await bill_service.adjust_bill(db, original, "R-0001-A", None)
        assert original.voided is False
        assert original.status == BILL_STATUS_PENDING

    async def test_adjust_voided_bill(self, db: AsyncSession, drugs):
        original = await _create_bill(db, drugs)
        await bill_service.void_entity(db, original, "Cancelled")
        with pytest.raises(InvalidArgumentError):
            await bill_service.adjust_bill(db, original, "R-0001-A", "Late change")

    async def test_adjust_null_bill(self, db: AsyncSession):
        with pytest.raises(NullReferenceError):
            await bill_service.adjust_bill(db, None, "R-0001-A", "Late change")

    async def test_adjustments_null_bill(self, db: AsyncSession):
        with pytest.raises(NullReferenceError):
            await bill_service.get_adjustments(db, None)
