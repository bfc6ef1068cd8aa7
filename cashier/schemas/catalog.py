"""부서 및 과금 항목 Pydantic 요청/응답 스키마 정의.

Department and Item Pydantic request/response schema definitions.
Responses are built straight from ORM instances (from_attributes).
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


# === 무효화 (Void) 스키마 ===

class VoidRequest(BaseModel):
    """무효화 요청 스키마.

    Void request schema. The service rejects a missing or empty reason.

    Attributes:
        reason: 무효화 사유 (Reason for voiding)
    """

    reason: str | None = None  # 무효화 사유 (Void reason)


class VoidableResponse(BaseModel):
    """무효화 가능 엔티티 공통 응답 필드 (Common voidable response fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: int  # 대리 키 (Surrogate id)
    uuid: UUID  # 호스트 플랫폼 식별자 (Host-platform identifier)
    voided: bool  # 무효화 여부 (Voided flag)
    void_reason: str | None = None  # 무효화 사유 (Void reason)
    date_voided: datetime | None = None  # 무효화 일시 (Void timestamp)
    date_created: datetime  # 생성 일시 (Creation timestamp)


# === 부서 (Department) 스키마 ===

class DepartmentCreate(BaseModel):
    """부서 생성 요청 스키마.

    Attributes:
        name: 부서 이름 (Department name)
        description: 설명 (Optional description)
    """

    name: str
    description: str | None = None


class DepartmentResponse(VoidableResponse):
    """부서 응답 스키마 (Department response schema)."""

    name: str
    description: str | None = None


# === 과금 항목 (Item) 스키마 ===

class ItemCreate(BaseModel):
    """과금 항목 생성 요청 스키마.

    Item creation request schema.

    Attributes:
        name: 항목 이름 (Item name)
        price: 단가 (Unit price)
        description: 설명 (Optional description)
        department_id: 소속 부서 ID (Owning department id, optional)
    """

    name: str  # 항목 이름 (Item name)
    price: Decimal = Decimal("0.00")  # 단가 (Unit price)
    description: str | None = None  # 설명 (Description, optional)
    department_id: int | None = None  # 소속 부서 (Department, optional)


class ItemResponse(VoidableResponse):
    """과금 항목 응답 스키마 (Item response schema)."""

    name: str
    description: str | None = None
    department_id: int | None = None
    price: Decimal
