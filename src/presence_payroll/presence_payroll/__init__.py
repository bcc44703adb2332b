"""Presence Payroll package.

Feature modules (attendance, leaves, employees, reimbursements, payroll) follow
the same split: frozen dataclass models, Protocol repositories with MySQL
implementations, services holding the rules, and thin Flask controllers.

The payroll pipeline flows one way: punches and approved leaves are classified
per day, folded into a monthly summary, priced by a calculator and frozen into
a salary slip.
"""
