"""
models/ - Domain Layer
======================
Plain dataclasses for the entities the service stores.
"""
