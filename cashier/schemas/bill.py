"""청구서 Pydantic 요청/응답 스키마 정의.

Bill Pydantic request/response schema definitions.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from cashier.schemas.catalog import VoidableResponse


class BillLineItemCreate(BaseModel):
    """청구서 항목 생성 요청 스키마.

    Attributes:
        item_id: 과금 항목 ID (Billable item id)
        quantity: 수량 (Quantity, at least 1)
        price: 단가: 생략 시 항목의 현재 단가 (Unit price; item price when omitted)
    """

    item_id: int
    quantity: int = 1
    price: Decimal | None = None


class BillCreate(BaseModel):
    """청구서 생성 요청 스키마.

    Attributes:
        receipt_number: 영수증 번호 (Receipt number, unique)
        patient_uuid: 환자 UUID (Host-platform patient reference)
        line_items: 청구서 항목 목록 (Line items)
    """

    receipt_number: str
    patient_uuid: UUID | None = None
    line_items: list[BillLineItemCreate] = []


class BillAdjustRequest(BaseModel):
    """청구서 조정 요청 스키마.

    Attributes:
        receipt_number: 조정 청구서의 영수증 번호 (Receipt number of the adjusting bill)
        reason: 원 청구서 무효화 사유 (Reason recorded on the adjusted bill)
    """

    receipt_number: str
    reason: str | None = None


class BillLineItemResponse(BaseModel):
    """청구서 항목 응답 스키마 (Bill line item response schema)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    price: Decimal
    quantity: int
    total: Decimal


class BillResponse(VoidableResponse):
    """청구서 응답 스키마 (Bill response schema)."""

    receipt_number: str
    patient_uuid: UUID | None = None
    status: str
    bill_adjusted_id: int | None = None
    line_items: list[BillLineItemResponse] = []
    total: Decimal
