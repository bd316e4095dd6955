"""
Module: hr_kernel.models.payroll
Responsibility: ORM persistence for payroll disbursements.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - Append-only: no UPDATE or DELETE (ORM listener, see db/immutability.py).
    - bonus, deductions and tax are >= 0 (CHECK constraints; the ledger
      store raises NegativeAmountError first).
    - Net pay is derived, never stored.

Tax is an externally supplied input; the ledger does not derive it.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_kernel.db.base import Base


class PayrollRecord(Base):
    """One disbursement to one employee."""

    __tablename__ = "payroll"

    __table_args__ = (
        Index("idx_payroll_pay_date", "pay_date"),
        Index("idx_payroll_employee", "employee_id"),
        CheckConstraint("bonus >= 0", name="ck_payroll_bonus_non_negative"),
        CheckConstraint("deductions >= 0", name="ck_payroll_deductions_non_negative"),
        CheckConstraint("tax >= 0", name="ck_payroll_tax_non_negative"),
    )

    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"), nullable=False)
    pay_date: Mapped[date] = mapped_column(Date, nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(nullable=False)
    bonus: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    deductions: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    tax: Mapped[Decimal] = mapped_column(nullable=False)
    recorded_by: Mapped[str] = mapped_column(String(128), nullable=False)

    employee = relationship("Employee")

    @property
    def gross_pay(self) -> Decimal:
        return self.base_salary + self.bonus

    @property
    def net_pay(self) -> Decimal:
        return self.base_salary + self.bonus - self.deductions - self.tax

    def __repr__(self) -> str:
        return f"<PayrollRecord {self.id}: employee {self.employee_id} on {self.pay_date}>"
