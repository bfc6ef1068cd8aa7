"""청구서 ORM 모델 정의.

Bill ORM model definitions.

Tables:
    - cashier_bills: 청구서 (Bills issued to a patient)
    - cashier_bill_line_items: 청구서 항목 (Line items of a bill)
"""

from uuid import UUID
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cashier.database import Base
from cashier.models.voidable import VoidableMixin

# 청구서 상태값: Bill status values
BILL_STATUS_PENDING: str = "PENDING"
BILL_STATUS_PAID: str = "PAID"
BILL_STATUS_ADJUSTED: str = "ADJUSTED"


class Bill(VoidableMixin, Base):
    """청구서 모델.

    Bill model. Name search on bills matches the receipt number.
    An adjusting bill points at the bill it replaces through ``bill_adjusted_id``.

    Attributes:
        receipt_number: 영수증 번호 (Receipt number, unique)
        patient_uuid: 호스트 플랫폼 환자 식별자 (Host-platform patient reference)
        status: 상태 (PENDING / PAID / ADJUSTED)
        bill_adjusted_id: 조정 대상 청구서 FK (Bill this one adjusts, optional)

    Relationships:
        line_items: 청구서 항목 목록 (Line items, cascade delete)
        bill_adjusted: 조정 대상 청구서 (Adjusted bill)
    """

    __tablename__ = "cashier_bills"

    receipt_number: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    patient_uuid: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=BILL_STATUS_PENDING)
    bill_adjusted_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cashier_bills.id", ondelete="SET NULL"), nullable=True
    )

    # async 세션에서 지연 로딩을 피하기 위해 selectin 사용 (selectin avoids lazy IO under asyncio)
    line_items = relationship(
        "BillLineItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillLineItem.line_item_order",
        lazy="selectin",
    )
    bill_adjusted = relationship("Bill", remote_side="Bill.id", lazy="selectin")

    @property
    def total(self) -> Decimal:
        """청구 총액: Sum of all line item totals."""
        return sum((li.total for li in self.line_items), Decimal("0.00"))


class BillLineItem(Base):
    """청구서 항목 모델.

    Bill line item model: one billed item with its price and quantity.
    """

    __tablename__ = "cashier_bill_line_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bill_id: Mapped[int] = mapped_column(Integer, ForeignKey("cashier_bills.id", ondelete="CASCADE"), nullable=False)
    item_id: Mapped[int] = mapped_column(Integer, ForeignKey("cashier_items.id"), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    line_item_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    bill = relationship("Bill", back_populates="line_items")

    @property
    def total(self) -> Decimal:
        """항목 금액: price × quantity."""
        return Decimal(self.price) * self.quantity
