"""과금 카탈로그 ORM 모델 정의.

Billing catalog ORM model definitions.

Tables:
    - cashier_departments: 부서 (Departments grouping billable items)
    - cashier_items: 과금 항목 (Billable items with a unit price)
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cashier.database import Base
from cashier.models.voidable import VoidableMixin


class Department(VoidableMixin, Base):
    """부서 모델: 과금 항목을 묶는 단위.

    Department model grouping billable items. Searchable by name.

    Attributes:
        name: 부서 이름 (Department name, max 255 chars)
        description: 설명 (Optional description)
    """

    __tablename__ = "cashier_departments"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Item(VoidableMixin, Base):
    """과금 항목 모델: 청구서에 올릴 수 있는 품목/서비스.

    Billable item model. Searchable by name, sorted by name.

    Attributes:
        name: 항목 이름 (Item name, max 255 chars)
        description: 설명 (Optional description)
        department_id: 소속 부서 FK (Owning department, optional)
        price: 단가 (Unit price)
    """

    __tablename__ = "cashier_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 소속 부서: 부서 삭제 시 NULL로 (Set NULL when the department is purged)
    department_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("cashier_departments.id", ondelete="SET NULL"), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False, default=Decimal("0.00"))
