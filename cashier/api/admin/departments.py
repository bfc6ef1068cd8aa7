"""부서 라우터: 부서 조회/생성/무효화 엔드포인트.

Department Router: List, search, create, void and purge departments.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.api.deps import get_paging
from cashier.database import get_db
from cashier.models.catalog import Department
from cashier.schemas.catalog import DepartmentCreate, DepartmentResponse, VoidRequest
from cashier.services.department_service import department_service
from cashier.utils.pagination import Page, PagingInfo

router: APIRouter = APIRouter()


def _to_response(department: Department) -> DepartmentResponse:
    return DepartmentResponse.model_validate(department)


@router.get("/", response_model=Page)
async def list_departments(
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
) -> Page:
    """부서 목록을 조회합니다 (List departments, one page at a time)."""
    departments = await department_service.get_all(db, include_voided, paging)
    return Page.from_paging([_to_response(d) for d in departments], paging)


@router.get("/search", response_model=Page)
async def search_departments(
    name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    paging: Annotated[PagingInfo, Depends(get_paging)],
    include_voided: bool = False,
) -> Page:
    """이름 접두어로 부서를 검색합니다 (Search departments by name prefix)."""
    departments = await department_service.find_by_name(db, name, include_voided, paging)
    return Page.from_paging([_to_response(d) for d in departments], paging)


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DepartmentResponse:
    return _to_response(await department_service.get_by_id(db, department_id))


@router.post("/", response_model=DepartmentResponse, status_code=201)
async def create_department(
    data: DepartmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DepartmentResponse:
    department = await department_service.create_department(db, data)
    await db.commit()
    return _to_response(department)


@router.post("/{department_id}/void", response_model=DepartmentResponse)
async def void_department(
    department_id: int,
    data: VoidRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DepartmentResponse:
    department = await department_service.get_by_id(db, department_id)
    department = await department_service.void_entity(db, department, data.reason)
    await db.commit()
    return _to_response(department)


@router.post("/{department_id}/unvoid", response_model=DepartmentResponse)
async def unvoid_department(
    department_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DepartmentResponse:
    department = await department_service.get_by_id(db, department_id)
    department = await department_service.unvoid_entity(db, department)
    await db.commit()
    return _to_response(department)


@router.delete("/{department_id}", status_code=204)
async def purge_department(
    department_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """부서를 영구 삭제합니다 (Permanently delete a department)."""
    department = await department_service.get_by_id(db, department_id)
    await department_service.purge(db, department)
    await db.commit()
