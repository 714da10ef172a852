"""HRMS package.

Organized by feature modules (employees, attendance, leaves, payroll,
dashboard) with a thin Flask controller layer over service/repository layers.
The accounting rules live in :mod:`hrms.accounting` and do no I/O.
"""

__version__ = "1.0.0"
