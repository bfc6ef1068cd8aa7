"""FastAPI 의존성 주입 모듈: 페이징 파라미터.

FastAPI dependency injection module: Paging query parameters.
Authentication and authorization belong to the host platform; these
endpoints trust the caller.
"""

from fastapi import Query

from cashier.config import settings
from cashier.utils.pagination import PagingInfo


def get_paging(
    page: int = Query(1, description="1부터 시작하는 페이지 번호 (1-based page number)"),
    per_page: int | None = Query(None, description="페이지당 항목 수 (Items per page)"),
) -> PagingInfo:
    """쿼리 파라미터로부터 PagingInfo를 생성합니다.

    Build a PagingInfo from the page/per_page query parameters.
    Bounds are validated by the data service, which answers 400 on bad values.
    """
    return PagingInfo(
        page=page,
        page_size=per_page if per_page is not None else settings.DEFAULT_PAGE_SIZE,
    )
