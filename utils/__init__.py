"""
utils/ - Shared helpers (logging, date handling).
"""
