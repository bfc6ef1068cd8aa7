"""청구서 라우터: 청구서 생성, 조회, 조정, 무효화 엔드포인트.

Bill Router: Endpoints for bill management.
Search matches the receipt number prefix.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.api.deps import get_paging
from cashier.database import get_db
from cashier.models.bill import Bill
from cashier.schemas.bill import BillAdjustRequest, BillCreate, BillResponse
from cashier.schemas.catalog import VoidRequest
from cashier.services.bill_service import bill_service
from cashier.utils.pagination import Page, PagingInfo

router: APIRouter = APIRouter()


def _to_response(bill: Bill) -> BillResponse:
    return BillResponse.model_validate(bill)


@router.get("/", response_model=Page)
async def list_bills(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
) -> Page:
    """청구서 목록을 조회합니다 (List bills in creation order)."""
    bills = await bill_service.get_all(db, include_voided, paging)
    return Page.from_paging([_to_response(b) for b in bills], paging)


@router.get("/search", response_model=Page)
async def search_bills(
    receipt_number: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
) -> Page:
    """영수증 번호 접두어로 청구서를 검색합니다 (Search bills by receipt number prefix)."""
    bills = await bill_service.find_by_name(db, receipt_number, include_voided, paging)
    return Page.from_paging([_to_response(b) for b in bills], paging)


@router.get("/uuid/{bill_uuid}", response_model=BillResponse)
async def get_bill_by_uuid(
    bill_uuid: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    """UUID로 청구서를 조회합니다 (Retrieve a bill by its host-platform uuid)."""
    return _to_response(await bill_service.get_by_uuid(db, bill_uuid))


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(
    bill_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    return _to_response(await bill_service.get_by_id(db, bill_id))


@router.get("/{bill_id}/adjustments", response_model=list[BillResponse])
async def list_bill_adjustments(
    bill_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[BillResponse]:
    """청구서를 조정한 청구서 목록을 조회합니다 (List the bills adjusting this bill)."""
    bill = await bill_service.get_by_id(db, bill_id)
    return [_to_response(b) for b in await bill_service.get_adjustments(db, bill)]


@router.post("/", response_model=BillResponse, status_code=201)
async def create_bill(
    data: BillCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    """새 청구서를 생성합니다 (Create a bill with line items)."""
    bill = await bill_service.create_bill(db, data)
    await db.commit()
    return _to_response(bill)


@router.post("/{bill_id}/adjust", response_model=BillResponse, status_code=201)
async def adjust_bill(
    bill_id: int,
    data: BillAdjustRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    """청구서를 조정합니다: 원 청구서는 무효화됩니다.

    Adjust a bill. The original is voided and a linked copy is returned.
    """
    bill = await bill_service.get_by_id(db, bill_id)
    adjusting = await bill_service.adjust_bill(db, bill, data.receipt_number, data.reason)
    await db.commit()
    return _to_response(adjusting)


@router.post("/{bill_id}/void", response_model=BillResponse)
async def void_bill(
    bill_id: int,
    data: VoidRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    bill = await bill_service.get_by_id(db, bill_id)
    bill = await bill_service.void_entity(db, bill, data.reason)
    await db.commit()
    return _to_response(bill)


@router.post("/{bill_id}/unvoid", response_model=BillResponse)
async def unvoid_bill(
    bill_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BillResponse:
    bill = await bill_service.get_by_id(db, bill_id)
    bill = await bill_service.unvoid_entity(db, bill)
    await db.commit()
    return _to_response(bill)


@router.delete("/{bill_id}", status_code=204)
async def purge_bill(
    bill_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    bill = await bill_service.get_by_id(db, bill_id)
    await bill_service.purge(db, bill)
    await db.commit()
