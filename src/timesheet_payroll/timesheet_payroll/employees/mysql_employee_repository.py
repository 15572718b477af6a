from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_money
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT employee_id, tenant_id, name, email, phone, role, is_active, basic_salary
    FROM employees
"""


def _to_employee(r: dict) -> Employee:
    tenant_id = r.get("tenant_id")
    return Employee(
        employee_id=str(r["employee_id"]),
        tenant_id=str(tenant_id) if tenant_id else None,
        name=r["name"],
        email=r["email"],
        phone=r.get("phone"),
        role=Role(r["role"]),
        is_active=bool(r["is_active"]),
        basic_salary=to_money(r.get("basic_salary")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE is_active=1 ORDER BY name")
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, tenant_id, name, email, phone, role, is_active, basic_salary)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee.employee_id,
                    employee.tenant_id,
                    employee.name,
                    employee.email,
                    employee.phone,
                    employee.role.value,
                    1 if employee.is_active else 0,
                    employee.basic_salary,
                ),
            )

    def set_basic_salary(self, employee_id: str, basic_salary: Decimal) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET basic_salary=%s WHERE employee_id=%s", (basic_salary, employee_id))
            return cur.rowcount > 0
