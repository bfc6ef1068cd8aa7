"""과금 항목 레포지토리: 항목 조회 및 부서별 쿼리.

Item Repository: Billable item queries including per-department listing.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.catalog import Item
from cashier.repositories.base import BaseRepository
from cashier.repositories.criteria import Eq, combine
from cashier.utils.pagination import PagingInfo


class ItemRepository(BaseRepository[Item]):
    """과금 항목 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the billable items table.
    """

    def __init__(self) -> None:
        """ItemRepository를 초기화합니다.

        Initialize the ItemRepository with the Item model.
        """
        super().__init__(Item)

    async def get_by_department(
        self,
        db: AsyncSession,
        department_id: int,
        include_voided: bool = False,
        paging: PagingInfo | None = None,
    ) -> list[Item]:
        """부서에 속한 항목을 이름순으로 조회합니다.

        Retrieve the items of one department ordered by name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            department_id: 부서 ID (Department id)
            include_voided: 무효화된 항목 포함 여부 (Include voided items)
            paging: 페이징 정보 (Paging information, optional)

        Returns:
            list[Item]: 항목 목록 (List of items)
        """
        criteria = combine(
            Eq("department_id", department_id),
            None if include_voided else Eq("voided", False),
        )
        return await self.select(db, criteria, order_by=[Item.name, Item.id], paging=paging)


# 싱글턴 인스턴스: Singleton instance
item_repository: ItemRepository = ItemRepository()
