"""
models/ - Domain Models
=======================
Dataclasses for companies and jobs, the tables translating public field
names to column names, and input validation for both.
"""
