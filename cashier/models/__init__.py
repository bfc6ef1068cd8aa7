"""SQLAlchemy ORM 모델 패키지: 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package: Central import point for all domain models.
Importing from this package registers every model with the metadata,
which Alembic migrations and relationship resolution rely on.

Modules:
    voidable: 무효화 공통 컬럼 (Voidable identity/soft-delete columns)
    catalog: 부서, 과금 항목 (Department, Item)
    bill: 청구서, 청구서 항목 (Bill, BillLineItem)
"""

from cashier.models.voidable import VoidableMixin
from cashier.models.catalog import Department, Item
from cashier.models.bill import Bill, BillLineItem

__all__ = [
    "VoidableMixin",
    "Department", "Item",
    "Bill", "BillLineItem",
]
