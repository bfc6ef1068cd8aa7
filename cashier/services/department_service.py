"""부서 서비스.

Department Service: data service for departments, sorted by name.
"""

from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from cashier.models.catalog import Department
from cashier.repositories.department_repository import department_repository
from cashier.schemas.catalog import DepartmentCreate
from cashier.services.base_data_service import BaseDataService, MAX_NAME_LENGTH
from cashier.utils.exceptions import InvalidArgumentError


class DepartmentService(BaseDataService[Department]):
    """부서 관련 비즈니스 로직을 처리하는 서비스.

    Service handling department business logic. Departments sort by name.
    """

    def __init__(self) -> None:
        super().__init__(department_repository)

    def default_order(self) -> Sequence[Any]:
        return [Department.name, Department.id]

    async def create_department(self, db: AsyncSession, data: DepartmentCreate) -> Department:
        """새 부서를 생성합니다 (Create a new department).

        Raises:
            InvalidArgumentError: 이름이 비었거나 255자 초과일 때 (Blank or oversize name)
        """
        if not data.name or len(data.name) > MAX_NAME_LENGTH:
            raise InvalidArgumentError(
                f"The department name must be between 1 and {MAX_NAME_LENGTH} characters."
            )
        department = Department(name=data.name, description=data.description)
        return await self.save(db, department)


# 싱글턴 인스턴스: Singleton instance
department_service: DepartmentService = DepartmentService()
