"""캐셔 API 라우터 패키지: 모든 캐셔 엔드포인트 통합.

Cashier API Router package: Aggregates the cashier endpoints into a single
router for inclusion in the FastAPI application.

Included routers:
    - departments: 부서 관리 (Department management)
    - items: 과금 항목 관리 (Billable item management)
    - bills: 청구서 관리 (Bill management)
"""

from fastapi import APIRouter

from cashier.api.admin.departments import router as departments_router
from cashier.api.admin.items import router as items_router
from cashier.api.admin.bills import router as bills_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(departments_router, prefix="/departments", tags=["Departments"])
admin_router.include_router(items_router, prefix="/items", tags=["Items"])
admin_router.include_router(bills_router, prefix="/bills", tags=["Bills"])
