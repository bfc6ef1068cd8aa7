"""캐셔 예외 클래스 모듈.

Cashier exception classes module.
Every failure of the data-access core surfaces as one of these types.
They subclass HTTPException so routers can let them propagate and FastAPI
renders the matching status code without per-endpoint handlers.

Usage:
    from cashier.utils.exceptions import InvalidArgumentError, NotFoundError
    raise InvalidArgumentError("The name fragment must be defined.")
    raise NotFoundError("No Item entity found with ID 42.")
"""

from fastapi import HTTPException, status


class CashierError(HTTPException):
    """캐셔 예외의 공통 부모 클래스.

    Common parent of all cashier errors. ``str(error)`` returns the detail
    message so the errors read naturally outside of an HTTP context too.
    """

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(status_code=status_code, detail=detail)

    def __str__(self) -> str:
        return str(self.detail)


class InvalidArgumentError(CashierError):
    """400: 호출자가 전달한 값이 사전 조건을 위반했을 때.

    Raised when a caller-supplied value violates a documented precondition
    (null/empty/oversize string, invalid paging bounds, unknown field).
    """

    def __init__(self, detail: str = "Invalid argument") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class NullReferenceError(CashierError):
    """400: 필수 객체 인자가 누락되었을 때.

    Raised when a required object argument itself is missing (None).
    """

    def __init__(self, detail: str = "Required argument is missing") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class NotFoundError(CashierError):
    """404: 단일 결과 조회가 0건일 때.

    Raised when a single-result lookup matched zero records.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class AmbiguousResultError(CashierError):
    """409: 단일 결과 조회가 2건 이상일 때 (데이터 무결성 오류 신호).

    Raised when a single-result lookup matched more than one record.
    With unique identifiers this signals a data-integrity bug.
    """

    def __init__(self, detail: str = "Multiple entities found") -> None:
        super().__init__(status.HTTP_409_CONFLICT, detail)


class StorageError(CashierError):
    """500: 영속성 엔진 실패를 감싸는 예외.

    Uniform wrapper for any persistence-engine failure (constraint violation,
    connection failure, mapping error). The engine exception is kept in
    ``cause`` and chained as ``__cause__`` by the raising code.

    Args:
        detail: 작업 문맥 메시지 (Operation-context message)
        cause: 원본 예외 (Original engine exception)
    """

    def __init__(self, detail: str = "Storage failure", cause: BaseException | None = None) -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)
        self.cause: BaseException | None = cause
