"""청구서 서비스: 청구서 생성, 조회, 조정 비즈니스 로직.

Bill Service: Business logic for creating, finding and adjusting bills.
Name search on bills matches the receipt number prefix.

Adjustment flow:
    1. 원 청구서를 사유와 함께 무효화하고 상태를 ADJUSTED로 변경
       (Void the original bill with the reason, status becomes ADJUSTED)
    2. 원 청구서의 항목을 복사한 새 청구서를 생성하고 bill_adjusted_id로 연결
       (Create a new bill copying its line items, linked via bill_adjusted_id)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.bill import BILL_STATUS_ADJUSTED, Bill, BillLineItem
from cashier.models.catalog import Item
from cashier.repositories.bill_repository import bill_repository
from cashier.schemas.bill import BillCreate, BillLineItemCreate
from cashier.services.base_data_service import BaseDataService, MAX_NAME_LENGTH
from cashier.services.item_service import item_service
from cashier.utils.exceptions import InvalidArgumentError, NullReferenceError


class BillService(BaseDataService[Bill]):
    """청구서 관련 비즈니스 로직을 처리하는 서비스.

    Service handling bill business logic.
    """

    name_field: str = "receipt_number"

    def __init__(self) -> None:
        super().__init__(bill_repository)

    async def get_by_receipt_number(self, db: AsyncSession, receipt_number: str | None) -> Bill:
        """영수증 번호로 청구서를 조회합니다.

        Retrieve a bill by its receipt number.

        Raises:
            InvalidArgumentError: 번호가 비었을 때 (Blank receipt number)
            NotFoundError: 청구서가 없을 때 (No such bill)
        """
        if not receipt_number:
            raise InvalidArgumentError("The receipt number must be defined.")
        return await bill_repository.get_by_receipt_number(db, receipt_number)

    async def get_adjustments(self, db: AsyncSession, bill: Bill) -> list[Bill]:
        """청구서를 조정한 청구서 목록을 조회합니다.

        List the bills that adjust the given bill, in creation order.

        Raises:
            NullReferenceError: bill이 None일 때 (bill is None)
        """
        if bill is None:
            raise NullReferenceError("The Bill to list adjustments for must be defined.")
        return await bill_repository.get_adjustments(db, bill.id)

    async def create_bill(self, db: AsyncSession, data: BillCreate) -> Bill:
        """새 청구서를 생성합니다.

        Create a bill with its line items. A line item without a price takes
        the item's current price.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 청구서 생성 데이터 (Bill creation data)

        Returns:
            Bill: 생성된 청구서 (Created bill)

        Raises:
            InvalidArgumentError: 영수증 번호, 수량, 가격이 잘못되었거나
                                  무효화된 항목을 청구할 때
                                  (Invalid receipt number, quantity or price,
                                  or a voided item)
            NotFoundError: 항목이 존재하지 않을 때 (Unknown item)
            StorageError: 영수증 번호 중복 등 저장 실패 시
                          (Persistence failure such as a duplicate receipt number)
        """
        self._validate_receipt_number(data.receipt_number)

        bill = Bill(receipt_number=data.receipt_number, patient_uuid=data.patient_uuid)
        for order, line in enumerate(data.line_items):
            bill.line_items.append(await self._build_line_item(db, line, order))
        return await self.save(db, bill)

    async def adjust_bill(
        self,
        db: AsyncSession,
        bill: Bill,
        receipt_number: str,
        reason: str | None,
    ) -> Bill:
        """청구서를 조정합니다.

        Replace a bill by an adjusting copy: the original is voided with the
        given reason and marked ADJUSTED, and the new bill points back to it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            bill: 조정할 원 청구서 (Bill being adjusted)
            receipt_number: 새 청구서의 영수증 번호 (Receipt number of the new bill)
            reason: 원 청구서 무효화 사유 (Reason recorded on the original)

        Returns:
            Bill: 새로 생성된 조정 청구서 (The adjusting bill)

        Raises:
            NullReferenceError: bill이 None일 때 (bill is None)
            InvalidArgumentError: 이미 무효화된 청구서이거나 사유/번호가 잘못되었을 때
                                  (Bill already voided, or invalid reason/receipt number)
        """
        if bill is None:
            raise NullReferenceError("The Bill to adjust must be defined.")
        if bill.voided:
            raise InvalidArgumentError("A voided bill cannot be adjusted.")
        self._validate_receipt_number(receipt_number)

        await self.void_entity(db, bill, reason)
        # 상태 변경은 조정 청구서 저장 시 함께 flush됨 (Flushed with the adjusting bill)
        bill.status = BILL_STATUS_ADJUSTED

        adjusting = Bill(
            receipt_number=receipt_number,
            patient_uuid=bill.patient_uuid,
            bill_adjusted_id=bill.id,
        )
        for line in bill.line_items:
            adjusting.line_items.append(
                BillLineItem(
                    item_id=line.item_id,
                    price=line.price,
                    quantity=line.quantity,
                    line_item_order=line.line_item_order,
                )
            )
        return await self.save(db, adjusting)

    @staticmethod
    def _validate_receipt_number(receipt_number: str | None) -> None:
        if not receipt_number or len(receipt_number) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"The receipt number must be between 1 and {MAX_NAME_LENGTH} characters."
            )

    async def _build_line_item(
        self,
        db: AsyncSession,
        line: BillLineItemCreate,
        order: int,
    ) -> BillLineItem:
        if line.quantity < 1:
            raise InvalidArgumentError("The line item quantity must be 1 or greater.")
        if line.price is not None and line.price < 0:
            raise InvalidArgumentError("The line item price must not be negative.")

        item: Item = await item_service.get_by_id(db, line.item_id)
        if item.voided:
            raise InvalidArgumentError(f"The item '{item.name}' is voided and cannot be billed.")

        return BillLineItem(
            item_id=item.id,
            price=line.price if line.price is not None else item.price,
            quantity=line.quantity,
            line_item_order=order,
        )


# 싱글턴 인스턴스: Singleton instance
bill_service: BillService = BillService()
