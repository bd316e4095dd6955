"""
hr_modules -- business operations over the HR kernel.

Each subpackage exposes one service whose public methods check the
actor's capability, run inside a ledger transaction or snapshot, and
return an ``OperationResult``.
"""
