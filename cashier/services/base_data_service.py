"""기본 데이터 서비스: 무효화 가능 엔티티의 공통 비즈니스 로직.

Base Data Service: Common business logic for voidable entities.
Validates caller input, enforces the ACTIVE/VOIDED state machine, and applies
the void-filtering and name-search policy on top of a BaseRepository.

Validation order for name search is fixed: None, then empty, then length.
Each condition raises its own InvalidArgumentError message.

Re-voiding an already voided entity is accepted and overwrites the reason and
date. Unvoiding clears the reason and date.
"""

from datetime import datetime, timezone
from typing import Any, Generic, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.repositories.base import BaseRepository, ModelType
from cashier.repositories.criteria import Criterion, Eq, StartsWith, combine
from cashier.utils.exceptions import InvalidArgumentError, NullReferenceError
from cashier.utils.pagination import PagingInfo

# 이름/사유 최대 길이: Maximum length of names, name fragments and void reasons
MAX_NAME_LENGTH: int = 255


class BaseDataService(Generic[ModelType]):
    """무효화 가능 엔티티용 제네릭 데이터 서비스.

    Generic data service for voidable entities.
    Subclasses bind a repository and may override ``name_field`` and
    ``default_order`` to describe how their entity is searched and sorted.

    Attributes:
        repository: 엔티티 레포지토리 (Repository bound to the entity type)
        name_field: 이름 검색 대상 필드 (Field matched by find_by_name)
    """

    name_field: str = "name"

    def __init__(self, repository: BaseRepository[ModelType]) -> None:
        self.repository: BaseRepository[ModelType] = repository

    @property
    def model(self) -> type[ModelType]:
        return self.repository.model

    def default_order(self) -> Sequence[Any]:
        """기본 정렬: 삽입 순서(id) (Natural sort; insertion order by default)."""
        return [self.model.id]

    # --- 단건 조회/저장 (Single-entity operations) ---

    async def save(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """엔티티를 저장합니다.

        Insert or update an entity.

        Raises:
            NullReferenceError: entity가 None일 때 (entity is None)
            InvalidArgumentError: 무효화 상태인데 사유가 없을 때
                                  (Entity is voided without a void reason)
            StorageError: 저장 실패 시 (Persistence failure)
        """
        if entity is None:
            raise NullReferenceError(f"The {self.model.__name__} to save must be defined.")
        if entity.voided and not entity.void_reason:
            raise InvalidArgumentError(
                f"A voided {self.model.__name__} must have a void reason."
            )
        return await self.repository.save(db, entity)

    async def purge(self, db: AsyncSession, entity: ModelType) -> None:
        """엔티티를 물리적으로 삭제합니다.

        Permanently delete an entity. Prefer ``void_entity`` for normal use.

        Raises:
            NullReferenceError: entity가 None일 때 (entity is None)
            StorageError: 삭제 실패 시 (Persistence failure)
        """
        if entity is None:
            raise NullReferenceError(f"The {self.model.__name__} to purge must be defined.")
        await self.repository.delete(db, entity)

    async def get_by_id(self, db: AsyncSession, entity_id: int) -> ModelType:
        """ID로 엔티티를 조회합니다.

        Raises:
            NotFoundError: 엔티티가 없을 때 (No entity with that id)
        """
        return await self.repository.select_by_id(db, entity_id)

    async def get_by_uuid(self, db: AsyncSession, uuid: UUID | str | None) -> ModelType:
        """UUID로 엔티티를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            uuid: 엔티티 UUID: 문자열도 허용 (Entity uuid, string accepted)

        Raises:
            InvalidArgumentError: uuid가 비었거나 형식이 잘못되었을 때
                                  (Blank or malformed uuid)
            NotFoundError: 엔티티가 없을 때 (No entity with that uuid)
        """
        if uuid is None or (isinstance(uuid, str) and not uuid.strip()):
            raise InvalidArgumentError("The UUID must be defined.")
        if isinstance(uuid, str):
            try:
                uuid = UUID(uuid)
            except ValueError as exc:
                raise InvalidArgumentError(f"'{uuid}' is not a valid UUID.") from exc
        return await self.repository.select_by_uuid(db, uuid)

    # --- 무효화 상태 전이 (Void state transitions) ---

    async def void_entity(
        self,
        db: AsyncSession,
        entity: ModelType,
        reason: str | None,
    ) -> ModelType:
        """엔티티를 무효화(soft-delete)합니다.

        Void an entity, removing it from circulation without deleting it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            entity: 무효화할 엔티티 (Entity to void)
            reason: 무효화 사유: 필수 (Reason for voiding, required)

        Returns:
            ModelType: 무효화된 엔티티 (The voided entity)

        Raises:
            NullReferenceError: entity가 None일 때 (entity is None)
            InvalidArgumentError: 사유가 None, 빈 문자열, 255자 초과일 때
                                  (Reason is None, empty or longer than 255 characters)
            StorageError: 저장 실패 시 (Persistence failure)
        """
        if entity is None:
            raise NullReferenceError(f"The {self.model.__name__} to void must be defined.")
        if reason is None:
            raise InvalidArgumentError("The reason to void must be defined.")
        if reason == "":
            raise InvalidArgumentError("The reason to void must not be empty.")
        if len(reason) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"The reason to void must be less than {MAX_NAME_LENGTH + 1} characters."
            )

        entity.voided = True
        entity.void_reason = reason
        entity.date_voided = datetime.now(timezone.utc)
        return await self.repository.save(db, entity)

    async def unvoid_entity(self, db: AsyncSession, entity: ModelType) -> ModelType:
        """무효화된 엔티티를 복원합니다.

        Unvoid an entity; the void reason and date are cleared.

        Raises:
            NullReferenceError: entity가 None일 때 (entity is None)
            StorageError: 저장 실패 시 (Persistence failure)
        """
        if entity is None:
            raise NullReferenceError(f"The {self.model.__name__} to unvoid must be defined.")

        entity.voided = False
        entity.void_reason = None
        entity.date_voided = None
        return await self.repository.save(db, entity)

    # --- 목록/검색 (Listing and search) ---

    async def get_all(
        self,
        db: AsyncSession,
        include_voided: bool = False,
        paging: PagingInfo | None = None,
    ) -> list[ModelType]:
        """엔티티 목록을 조회합니다.

        Return all entities, or one page of them, in the entity's natural order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            include_voided: True이면 무효화된 엔티티 포함 (Include voided entities)
            paging: 페이징 정보: 전체 개수가 채워짐
                    (Paging information; total_record_count is populated)

        Returns:
            list[ModelType]: 엔티티 목록 (List of entities)

        Raises:
            InvalidArgumentError: 페이징 값이 잘못되었을 때 (Invalid paging bounds)
        """
        self._validate_paging(paging)
        return await self.repository.select(
            db,
            self._void_criterion(include_voided),
            order_by=self.default_order(),
            paging=paging,
        )

    async def find_by_name(
        self,
        db: AsyncSession,
        name_fragment: str | None,
        include_voided: bool = False,
        paging: PagingInfo | None = None,
    ) -> list[ModelType]:
        """이름이 지정한 문자열로 시작하는 엔티티를 조회합니다.

        Find entities whose name starts with the fragment (case-insensitive).
        An empty list is returned when nothing matches.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name_fragment: 이름 접두어 (Name prefix)
            include_voided: True이면 무효화된 엔티티 포함 (Include voided entities)
            paging: 페이징 정보 (Paging information, optional)

        Returns:
            list[ModelType]: 이름이 일치하는 엔티티 목록 (Matching entities)

        Raises:
            InvalidArgumentError: 접두어가 None, 빈 문자열, 255자 초과이거나
                                  페이징 값이 잘못되었을 때
                                  (Fragment is None, empty, over 255 characters,
                                  or paging bounds are invalid)
        """
        if name_fragment is None:
            raise InvalidArgumentError("The name fragment must be defined.")
        if name_fragment == "":
            raise InvalidArgumentError("The name fragment must not be empty.")
        if len(name_fragment) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"The name fragment must be less than {MAX_NAME_LENGTH + 1} characters."
            )
        self._validate_paging(paging)

        criteria: Criterion | None = combine(
            StartsWith(self.name_field, name_fragment),
            self._void_criterion(include_voided),
        )
        return await self.repository.select(
            db, criteria, order_by=self.default_order(), paging=paging
        )

    # --- 내부 헬퍼 (Internal helpers) ---

    @staticmethod
    def _void_criterion(include_voided: bool) -> Criterion | None:
        return None if include_voided else Eq("voided", False)

    @staticmethod
    def _validate_paging(paging: PagingInfo | None) -> None:
        if paging is None:
            return
        if paging.page < 1:
            raise InvalidArgumentError("The page must be 1 or greater.")
        if paging.page_size < 1:
            raise InvalidArgumentError("The page size must be 1 or greater.")
