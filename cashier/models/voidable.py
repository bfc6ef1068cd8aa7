"""무효화(soft-delete) 가능 엔티티 공통 컬럼 정의.

Voidable entity common columns.
Every cashier entity carries a surrogate integer id, a host-platform uuid,
and the voided / void_reason / date_voided soft-delete triple.

State machine:
    ACTIVE (voided=False) --void--> VOIDED (voided=True, void_reason set)
    VOIDED --unvoid--> ACTIVE (void_reason and date_voided cleared)
"""

from uuid import UUID, uuid4
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class VoidableMixin:
    """무효화 가능 레코드 믹스인.

    Mixin adding identity and soft-delete columns to a mapped class.

    Attributes:
        id: 자동 증가 대리 키: 삽입 순서 (Autoincrement surrogate key, insertion order)
        uuid: 호스트 플랫폼 식별자 (Host-platform identifier, immutable)
        voided: 무효화 여부 (Soft-delete flag, False at creation)
        void_reason: 무효화 사유 (Reason, non-empty whenever voided)
        date_voided: 무효화 일시 UTC (Void timestamp)
        date_created: 생성 일시 UTC (Creation timestamp)
    """

    # 대리 키: 한 번 할당되면 재사용되지 않음 (Assigned once at insert, never reused)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[UUID] = mapped_column(Uuid, unique=True, nullable=False, default=uuid4)
    voided: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    void_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_voided: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    date_created: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        state: str = "VOIDED" if self.voided else "ACTIVE"
        return f"<{type(self).__name__} id={self.id} {state}>"
