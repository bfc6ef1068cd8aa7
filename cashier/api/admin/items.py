"""과금 항목 라우터: 항목 CRUD 및 무효화 엔드포인트.

Item Router: Endpoints for billable item management.
Errors raised by the item service are HTTPExceptions and map to
400 (invalid argument), 404 (not found) or 500 (storage failure).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.api.deps import get_paging
from cashier.database import get_db
from cashier.models.catalog import Item
from cashier.schemas.catalog import ItemCreate, ItemResponse, VoidRequest
from cashier.services.item_service import item_service
from cashier.utils.pagination import Page, PagingInfo

router: APIRouter = APIRouter()


def _to_response(item: Item) -> ItemResponse:
    return ItemResponse.model_validate(item)


@router.get("/", response_model=Page)
async def list_items(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
    department_id: int | None = None,
) -> Page:
    """과금 항목 목록을 조회합니다.

    List billable items, optionally restricted to one department.
    """
    if department_id is not None:
        items = await item_service.get_by_department(db, department_id, include_voided, paging)
    else:
        items = await item_service.get_all(db, include_voided, paging)
    return Page.from_paging([_to_response(i) for i in items], paging)


@router.get("/search", response_model=Page)
async def search_items(
    name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
) -> Page:
    """이름 접두어로 과금 항목을 검색합니다.

    Search billable items whose name starts with ``name`` (case-insensitive).
    """
    items = await item_service.find_by_name(db, name, include_voided, paging)
    return Page.from_paging([_to_response(i) for i in items], paging)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """과금 항목 상세 정보를 조회합니다 (Retrieve one item)."""
    return _to_response(await item_service.get_by_id(db, item_id))


@router.post("/", response_model=ItemResponse, status_code=201)
async def create_item(
    data: ItemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """새 과금 항목을 생성합니다 (Create a billable item)."""
    item = await item_service.create_item(db, data)
    await db.commit()
    return _to_response(item)


@router.post("/{item_id}/void", response_model=ItemResponse)
async def void_item(
    item_id: int,
    data: VoidRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """과금 항목을 무효화합니다 (Void an item)."""
    item = await item_service.get_by_id(db, item_id)
    item = await item_service.void_entity(db, item, data.reason)
    await db.commit()
    return _to_response(item)


@router.post("/{item_id}/unvoid", response_model=ItemResponse)
async def unvoid_item(
    item_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ItemResponse:
    """무효화된 과금 항목을 복원합니다 (Unvoid an item)."""
    item = await item_service.get_by_id(db, item_id)
    item = await item_service.unvoid_entity(db, item)
    await db.commit()
    return _to_response(item)


@router.delete("/{item_id}", status_code=204)
async def purge_item(
    item_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """과금 항목을 영구 삭제합니다 (Permanently delete an item)."""
    item = await item_service.get_by_id(db, item_id)
    await item_service.purge(db, item)
    await db.commit()
