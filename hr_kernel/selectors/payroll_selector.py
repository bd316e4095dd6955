"""
Module: hr_kernel.selectors.payroll_selector
Responsibility: Payroll aggregates -- the monthly payroll report and the
    department payroll summary.
Architecture position: Kernel > Selectors.

Monthly report:
    Payroll records whose pay date falls inside the calendar month, joined
    to the employee's department, one row per department:

        employees_paid    distinct employees with a record in the month
        total_gross       sum(base_salary + bonus)
        total_deductions  sum(deductions + tax)
        total_net         sum(base_salary + bonus - deductions - tax)

    Ordered by department name.  Records of employees without a department
    are not reported.

Department summary:
    Every department, with the count, average and total salary of its
    active employees.  A department without active employees reports
    count 0, average None and total 0.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import and_, distinct, func, select

from hr_kernel.models.department import Department
from hr_kernel.models.employee import Employee
from hr_kernel.models.payroll import PayrollRecord
from hr_kernel.selectors.base import BaseSelector, as_money


@dataclass(frozen=True)
class MonthlyPayrollRow:
    department_id: int
    department_name: str
    year: int
    month: int
    employees_paid: int
    total_gross: Decimal
    total_deductions: Decimal
    total_net: Decimal


@dataclass(frozen=True)
class DepartmentPayrollSummaryRow:
    department_id: int
    department_name: str
    budget: Decimal
    employee_count: int
    average_salary: Decimal | None
    total_salary: Decimal


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


class PayrollSelector(BaseSelector):
    """Read-only payroll aggregates."""

    def monthly_report(self, year: int, month: int) -> list[MonthlyPayrollRow]:
        """
        Per-department payroll totals for one calendar month.

        Preconditions: 1 <= month <= 12 (validated by the caller).
        """
        start, end = month_bounds(year, month)
        gross = PayrollRecord.base_salary + PayrollRecord.bonus
        withheld = PayrollRecord.deductions + PayrollRecord.tax

        stmt = (
            select(
                Department.id,
                Department.name,
                func.count(distinct(PayrollRecord.employee_id)),
                func.sum(gross),
                func.sum(withheld),
            )
            .select_from(PayrollRecord)
            .join(Employee, PayrollRecord.employee_id == Employee.id)
            .join(Department, Employee.department_id == Department.id)
            .where(PayrollRecord.pay_date >= start, PayrollRecord.pay_date < end)
            .group_by(Department.id, Department.name)
            .order_by(Department.name, Department.id)
        )

        rows = []
        for department_id, name, paid, total_gross, total_withheld in self.session.execute(stmt):
            gross_amount = as_money(total_gross)
            withheld_amount = as_money(total_withheld)
            rows.append(
                MonthlyPayrollRow(
                    department_id=department_id,
                    department_name=name,
                    year=year,
                    month=month,
                    employees_paid=paid,
                    total_gross=gross_amount,
                    total_deductions=withheld_amount,
                    total_net=gross_amount - withheld_amount,
                )
            )
        return rows

    def department_summary(self) -> list[DepartmentPayrollSummaryRow]:
        """Active salary summary for every department, ordered by id."""
        stmt = (
            select(
                Department.id,
                Department.name,
                Department.budget,
                func.count(Employee.id),
                func.sum(Employee.salary),
            )
            .select_from(Department)
            .outerjoin(
                Employee,
                and_(
                    Employee.department_id == Department.id,
                    Employee.is_active.is_(True),
                ),
            )
            .group_by(Department.id, Department.name, Department.budget)
            .order_by(Department.id)
        )

        rows = []
        for department_id, name, budget, count, total in self.session.execute(stmt):
            total_salary = as_money(total)
            rows.append(
                DepartmentPayrollSummaryRow(
                    department_id=department_id,
                    department_name=name,
                    budget=as_money(budget),
                    employee_count=count,
                    average_salary=as_money(total_salary / count) if count else None,
                    total_salary=total_salary,
                )
            )
        return rows
