"""HR payroll package.

Feature modules (employees, attendance, payroll, analytics, ...) follow the same
layering: frozen dataclass models, Protocol repositories with MySQL
implementations, service classes holding the use cases, and thin Flask
controllers on top.
"""
