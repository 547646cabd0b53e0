"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool and the administrative schema setup.
This layer is the lowest in the architecture; it only depends on `errors` and `utils`.
"""
