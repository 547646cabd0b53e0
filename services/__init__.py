"""
services/ - Business Layer
==========================
Orchestrates domain objects and repositories. Handlers call services;
services never touch HTTP.
"""
