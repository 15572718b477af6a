"""Timesheet & payroll core.

Feature modules (punches, shifts, adjustments, jobs, payroll, employees) each
follow the same layering: frozen dataclass models, ``Protocol`` repositories
with MySQL implementations, services holding the business rules and a thin
Flask controller.
"""
