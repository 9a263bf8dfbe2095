"""
db/ - Database Layer
====================
Handles all PostgreSQL connections, schema initialization, and raw SQL helpers.
This layer sits below the models and repositories and never imports them.
"""
