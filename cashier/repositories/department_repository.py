"""부서 레포지토리.

Department Repository: generic operations bound to the Department model.
"""

from cashier.models.catalog import Department
from cashier.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    """부서 테이블 레포지토리 (Repository for the departments table)."""

    def __init__(self) -> None:
        super().__init__(Department)


# 싱글턴 인스턴스: Singleton instance
department_repository: DepartmentRepository = DepartmentRepository()
