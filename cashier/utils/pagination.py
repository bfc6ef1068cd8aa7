"""페이지네이션 유틸리티 모듈.

Pagination utility module.
``PagingInfo`` travels from the caller into the data service and carries the
total record count back out, so callers can compute the page count from a
single service call. ``Page`` is the typed envelope returned by list endpoints.
"""

import math
from typing import Any

from pydantic import BaseModel


class PagingInfo(BaseModel):
    """페이징 요청 및 결과 정보.

    Paging request/result information. Page numbers are 1-based everywhere.

    Attributes:
        page: 요청 페이지 번호, 1부터 시작 (Requested page, 1-based)
        page_size: 페이지당 레코드 수 (Records per page)
        load_record_count: 전체 개수를 조회할지 여부
                           (Whether the total record count should be loaded)
        total_record_count: 전체 레코드 수: 서비스가 채움
                            (Total record count, populated by the service)
    """

    page: int = 1
    page_size: int = 20
    load_record_count: bool = True
    total_record_count: int | None = None

    @property
    def offset(self) -> int:
        """OFFSET 값: Row offset of the first record on this page."""
        return (self.page - 1) * self.page_size

    @property
    def page_count(self) -> int | None:
        """전체 페이지 수: None until the total has been loaded."""
        if self.total_record_count is None:
            return None
        return math.ceil(self.total_record_count / self.page_size)


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호: 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)
    pages: int  # 전체 페이지 수 (Total pages, computed: ceil(total/per_page))

    @classmethod
    def from_paging(cls, items: list[Any], paging: PagingInfo) -> "Page":
        """PagingInfo로부터 응답 페이지를 구성합니다 (Build a page from PagingInfo)."""
        total: int = paging.total_record_count or 0
        return cls(
            items=items,
            total=total,
            page=paging.page,
            per_page=paging.page_size,
            pages=paging.page_count or 0,
        )
