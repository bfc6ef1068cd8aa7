"""청구서 레포지토리: 영수증 번호 조회 및 조정 청구서 쿼리.

Bill Repository: Receipt-number lookup and adjustment queries.
Line items are loaded eagerly through the relationship's selectin strategy.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.bill import Bill
from cashier.repositories.base import BaseRepository
from cashier.repositories.criteria import Eq


class BillRepository(BaseRepository[Bill]):
    """청구서 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the bills table.
    """

    def __init__(self) -> None:
        super().__init__(Bill)

    async def get_by_receipt_number(self, db: AsyncSession, receipt_number: str) -> Bill:
        """영수증 번호로 청구서를 조회합니다.

        Retrieve the bill with the given receipt number.

        Raises:
            NotFoundError: 해당 번호의 청구서가 없을 때 (No such receipt number)
        """
        return await self.select_one(
            db,
            Eq("receipt_number", receipt_number),
            context=f" with receipt number {receipt_number}",
        )

    async def get_adjustments(self, db: AsyncSession, bill_id: int) -> list[Bill]:
        """지정한 청구서를 조정한 청구서 목록을 조회합니다.

        Retrieve the bills that adjust the given bill.
        """
        return await self.select(db, Eq("bill_adjusted_id", bill_id))


# 싱글턴 인스턴스: Singleton instance
bill_repository: BillRepository = BillRepository()
