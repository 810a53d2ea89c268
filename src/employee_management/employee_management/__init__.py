"""Employee management package.

Organized by feature modules (employees, attendance, reports) with a thin
Flask controller layer on top of service/repository layers.
"""
