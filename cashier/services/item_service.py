"""과금 항목 서비스: 항목 생성/조회 비즈니스 로직.

Item Service: Business logic for billable items.
Items sort by name, then id. Creating an item checks that its department
exists and is not voided.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.catalog import Department, Item
from cashier.repositories.item_repository import item_repository
from cashier.schemas.catalog import ItemCreate
from cashier.services.base_data_service import BaseDataService, MAX_NAME_LENGTH
from cashier.services.department_service import department_service
from cashier.utils.exceptions import InvalidArgumentError
from cashier.utils.pagination import PagingInfo


class ItemService(BaseDataService[Item]):
    """과금 항목 관련 비즈니스 로직을 처리하는 서비스.

    Service handling billable item business logic.
    """

    def __init__(self) -> None:
        super().__init__(item_repository)

    def default_order(self) -> Sequence[Any]:
        return [Item.name, Item.id]

    async def create_item(self, db: AsyncSession, data: ItemCreate) -> Item:
        """새 과금 항목을 생성합니다.

        Create a new billable item.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 항목 생성 데이터 (Item creation data)

        Returns:
            Item: 생성된 항목 (Created item)

        Raises:
            InvalidArgumentError: 이름/가격이 잘못되었거나 부서가 무효화되었을 때
                                  (Invalid name or price, or voided department)
            NotFoundError: 부서가 존재하지 않을 때 (Department does not exist)
        """
        if not data.name or len(data.name) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"The item name must be between 1 and {MAX_NAME_LENGTH} characters."
            )
        if data.price < 0:
            raise InvalidArgumentError("The item price must not be negative.")

        # 부서 유효성 확인: Department must exist and be active
        if data.department_id is not None:
            department: Department = await department_service.get_by_id(db, data.department_id)
            if department.voided:
                raise InvalidArgumentError("Items cannot be added to a voided department.")

        item = Item(
            name=data.name,
            description=data.description,
            department_id=data.department_id,
            price=data.price,
        )
        return await self.save(db, item)

    async def get_by_department(
        self,
        db: AsyncSession,
        department_id: int,
        include_voided: bool = False,
        paging: PagingInfo | None = None,
    ) -> list[Item]:
        """부서에 속한 항목 목록을 조회합니다.

        List the items belonging to a department.

        Raises:
            NotFoundError: 부서가 존재하지 않을 때 (Department does not exist)
        """
        self._validate_paging(paging)
        await department_service.get_by_id(db, department_id)
        return await item_repository.get_by_department(db, department_id, include_voided, paging)


# 싱글턴 인스턴스: Singleton instance
item_service: ItemService = ItemService()
