"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories validate caller data, run parameterized SQL and return plain
records (dicts keyed by public field names).
"""
