"""Payroll System package.

Organized by feature modules (attendance, overtime, reimbursements, payroll,
users) with a thin Flask controller layer over service/repository layers.
"""
