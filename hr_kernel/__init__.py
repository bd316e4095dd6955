"""
HR Kernel - employee ledger core

A transactional, audited employee/payroll ledger with:
- All-or-nothing salary mutations
- Append-only audit capture of every salary/department change
- Append-only payroll disbursement records
- Typed errors and structured operation results
"""

__version__ = "0.1.0"
