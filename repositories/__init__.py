"""
repositories/ - Data Access Layer
==================================
The review store: an abstract ReviewRepository plus its PostgreSQL and
in-memory implementations. Repositories return Review domain objects and
raise the typed failures from `errors`.
"""
