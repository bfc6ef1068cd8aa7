"""기본 레포지토리: 모든 캐셔 레포지토리의 부모 클래스.

Base Repository: Parent class for all cashier repositories.
Provides generic save, delete, single-result and criteria-based selection
over one model class. Every SQLAlchemy failure is re-raised as StorageError
with an operation-context message, so callers see one error taxonomy
regardless of entity type.

Usage:
    class ItemRepository(BaseRepository[Item]):
        def __init__(self) -> None:
            super().__init__(Item)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cashier.database import Base
from cashier.repositories.criteria import Criterion, Eq
from cashier.utils.exceptions import AmbiguousResultError, NotFoundError, StorageError
from cashier.utils.pagination import PagingInfo

# 제네릭 타입 변수: SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository bound to a single model class. Holds no state besides
    the model, so one instance is shared across calls; every operation
    round-trips to the database through the session it is given.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def build_query(
        self,
        criteria: Criterion | None = None,
        order_by: Sequence[Any] | None = None,
    ) -> Select:
        """조건과 정렬이 적용된 SELECT 쿼리를 생성합니다.

        Build a SELECT for this model with criteria and ordering applied.

        Args:
            criteria: 추상 조회 조건 (Abstract criteria, None for all rows)
            order_by: 정렬 기준 컬럼 목록, None이면 id 순
                      (Columns to order by; defaults to id)

        Returns:
            Select: SQLAlchemy SELECT 쿼리 (SELECT statement)
        """
        query: Select = select(self.model)
        if criteria is not None:
            query = query.where(criteria.to_clause(self.model))
        if order_by:
            query = query.order_by(*order_by)
        else:
            query = query.order_by(self.model.id)
        return query

    async def save(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """엔티티를 저장(삽입 또는 갱신)합니다.

        Insert or update an entity. The session is flushed so constraint
        violations surface here, then the row is refreshed from the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            entity: 저장할 엔티티 (Entity to persist)

        Returns:
            ModelType: 저장된 엔티티 (The persisted entity)

        Raises:
            StorageError: 영속화 실패 시 (On any persistence failure)
        """
        try:
            db.add(entity)
            await db.flush()
            await db.refresh(entity)
        except SQLAlchemyError as exc:
            raise StorageError(
                f"An exception occurred while attempting to save a {type(entity).__name__} entity.",
                cause=exc,
            ) from exc
        return entity

    async def delete(self, db: AsyncSession, entity: ModelType) -> None:
        """엔티티를 물리적으로 삭제합니다.

        Physically remove an entity's row.

        Raises:
            StorageError: 삭제 실패 시: 저장되지 않은 엔티티 포함
                          (On failure, including entities that were never persisted)
        """
        try:
            await db.delete(entity)
            await db.flush()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"An exception occurred while attempting to delete a {type(entity).__name__} entity.",
                cause=exc,
            ) from exc

    async def select_by_id(self, db: AsyncSession, record_id: int) -> ModelType:
        """ID로 단일 레코드를 조회합니다.

        Retrieve exactly one record by id.

        Raises:
            NotFoundError: 0건일 때 (No record with that id)
            AmbiguousResultError: 2건 이상일 때 (More than one record)
            StorageError: 조회 실패 시 (Query failure)
        """
        return await self.select_one(
            db, Eq("id", record_id), context=f" with ID {record_id}"
        )

    async def select_by_uuid(self, db: AsyncSession, uuid: Any) -> ModelType:
        """UUID로 단일 레코드를 조회합니다 (Retrieve exactly one record by uuid)."""
        return await self.select_one(db, Eq("uuid", uuid), context=f" with UUID {uuid}")

    async def select_one(
        self,
        db: AsyncSession,
        criteria: Criterion,
        context: str = "",
    ) -> ModelType:
        """조건에 맞는 단일 레코드를 조회합니다.

        Retrieve exactly one record matching the criteria.
        Fetches at most two rows, enough to tell "one" from "many".

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            criteria: 추상 조회 조건 (Abstract criteria)
            context: 오류 메시지에 덧붙일 문맥 (Suffix for error messages)

        Returns:
            ModelType: 일치하는 유일한 레코드 (The single matching record)

        Raises:
            NotFoundError: 0건일 때 (Zero matches)
            AmbiguousResultError: 2건 이상일 때 (More than one match)
            StorageError: 조회 실패 시 (Query failure)
        """
        query: Select = self.build_query(criteria).limit(2)
        try:
            result = await db.execute(query)
            rows: Sequence[ModelType] = result.scalars().all()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"An exception occurred while attempting to select a single {self.model_name} entity{context}.",
                cause=exc,
            ) from exc

        if not rows:
            raise NotFoundError(f"No {self.model_name} entity found{context}.")
        if len(rows) > 1:
            raise AmbiguousResultError(f"Multiple {self.model_name} entities found{context}.")
        return rows[0]

    async def select(
        self,
        db: AsyncSession,
        criteria: Criterion | None = None,
        order_by: Sequence[Any] | None = None,
        paging: PagingInfo | None = None,
    ) -> list[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve every record matching the criteria, or one page of them.
        An empty list is returned when nothing matches.

        When ``paging`` is given and ``paging.load_record_count`` is set, the
        total number of matching records is written to
        ``paging.total_record_count`` before the page is fetched.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            criteria: 추상 조회 조건 (Abstract criteria, None for all)
            order_by: 정렬 기준 컬럼 목록 (Columns to order by)
            paging: 페이징 정보 (Paging information, None for everything)

        Returns:
            list[ModelType]: 조회된 레코드 목록 (Matching records)

        Raises:
            StorageError: 조회 실패 시 (Query failure)
        """
        query: Select = self.build_query(criteria, order_by)
        try:
            if paging is not None:
                if paging.load_record_count:
                    paging.total_record_count = await self._count_query(db, query)
                query = query.offset(paging.offset).limit(paging.page_size)

            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise StorageError(
                f"An exception occurred while attempting to select {self.model_name} entities.",
                cause=exc,
            ) from exc

    async def count(self, db: AsyncSession, criteria: Criterion | None = None) -> int:
        """조건에 맞는 레코드 수를 조회합니다 (Count records matching the criteria)."""
        try:
            return await self._count_query(db, self.build_query(criteria))
        except SQLAlchemyError as exc:
            raise StorageError(
                f"An exception occurred while attempting to count {self.model_name} entities.",
                cause=exc,
            ) from exc

    async def _count_query(self, db: AsyncSession, query: Select) -> int:
        # 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery, ordering dropped)
        count_query: Select = select(func.count()).select_from(query.order_by(None).subquery())
        return (await db.execute(count_query)).scalar() or 0
