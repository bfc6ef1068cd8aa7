"""추상 조회 조건(criteria) 모듈.

Abstract query criteria module.
Services describe filters with these small value objects instead of engine
clauses; ``BaseRepository`` translates them into SQLAlchemy expressions.
This keeps name search and void filtering out of the repository while the
repository stays free of entity-specific fields.

Usage:
    criteria = And(Eq("voided", False), StartsWith("name", "Asp"))
    items = await item_repository.select(db, criteria)
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import ColumnElement, and_, func, literal

from cashier.utils.exceptions import InvalidArgumentError

# LIKE 와일드카드 이스케이프 문자: Escape character for LIKE wildcards
LIKE_ESCAPE: str = "\\"


class Criterion:
    """조회 조건의 공통 부모 (Common parent of all criteria)."""

    def to_clause(self, model: type) -> ColumnElement[bool]:
        raise NotImplementedError


def _column(model: type, field: str) -> Any:
    """모델의 컬럼 속성을 조회합니다 (Resolve a mapped column by name)."""
    column = getattr(model, field, None)
    if column is None or not hasattr(column, "expression"):
        raise InvalidArgumentError(f"{model.__name__} has no field '{field}'.")
    return column


def escape_like(value: str) -> str:
    """LIKE 패턴 특수문자를 이스케이프합니다.

    Escape ``%``, ``_`` and the escape character itself so the value
    is matched literally inside a LIKE pattern.
    """
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


@dataclass(frozen=True)
class Eq(Criterion):
    """필드 값 일치 조건 (field == value; value None means IS NULL)."""

    field: str
    value: Any

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = _column(model, self.field)
        if self.value is None:
            return column.is_(None)
        return column == self.value


@dataclass(frozen=True)
class StartsWith(Criterion):
    """접두어 일치 조건: 대소문자 무시.

    Case-insensitive prefix match on a string field.
    Wildcards in ``prefix`` are matched literally.
    """

    field: str
    prefix: str

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = _column(model, self.field)
        pattern: str = escape_like(self.prefix) + "%"
        # lower(column) LIKE lower(pattern)
        return func.lower(column).like(func.lower(literal(pattern)), escape=LIKE_ESCAPE)


@dataclass(frozen=True, init=False)
class And(Criterion):
    """모든 하위 조건을 만족 (All nested criteria must hold)."""

    criteria: tuple[Criterion, ...]

    def __init__(self, *criteria: Criterion) -> None:
        object.__setattr__(self, "criteria", tuple(criteria))

    def to_clause(self, model: type) -> ColumnElement[bool]:
        return and_(*(c.to_clause(model) for c in self.criteria))


def combine(*criteria: Criterion | None) -> Criterion | None:
    """None을 제외하고 조건을 AND로 묶습니다.

    Combine criteria with AND, skipping None. Returns None when nothing is left
    and the single criterion unchanged when only one remains.
    """
    present: list[Criterion] = [c for c in criteria if c is not None]
    if not present:
        return None
    if len(present) == 1:
        return present[0]
    return And(*present)
