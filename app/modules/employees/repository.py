# app/modules/employees/repository.py
from typing import Any, Dict, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ConflictError
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import Employee, Sale

logger = logging.getLogger(__name__)

EMPLOYEE_SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "employeeId": "employee_id",
    "fname": "fname",
    "lname": "lname",
    "role": "role",
}

EMPLOYEE_SEARCH_FIELDS = ("employee_id", "fname", "lname")


class EmployeesRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_sales(self):
        return (
            selectinload(Employee.sales).joinedload(Sale.customer),
            selectinload(Employee.sales).joinedload(Sale.car),
        )

    def get_employee(self, employee_id: str, with_sales: bool = False) -> Optional[Employee]:
        query = self.db.query(Employee)
        if with_sales:
            query = query.options(*self._with_sales())
        return query.filter(Employee.employee_id == employee_id).first()

    def count_by_role(self, role: str) -> int:
        return self.db.query(Employee).filter(Employee.role == role).count()

    def list_employees(
        self,
        params: ListParams,
        search: Optional[str] = None,
        role: Optional[str] = None
    ) -> Page:
        builder = ListQueryBuilder(
            Employee,
            sortable=EMPLOYEE_SORT_FIELDS,
            default_sort="createdAt",
            search_fields=EMPLOYEE_SEARCH_FIELDS
        )
        builder.search(search)
        builder.equals("role", role)
        return builder.paginate(self.db, params, *self._with_sales())

    def create_employee(self, employee_data: Dict[str, Any]) -> Employee:
        employee = Employee(**employee_data)
        try:
            self.db.add(employee)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Employee ID already exists")
        self.db.refresh(employee)
        return employee

    def update_employee(self, employee: Employee, changes: Dict[str, Any]) -> Employee:
        for field, value in changes.items():
            setattr(employee, field, value)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def delete_employee(self, employee: Employee) -> None:
        try:
            self.db.delete(employee)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Employee {employee.employee_id} still referenced by sales")
            raise ConflictError("Employee has sales and cannot be deleted")
