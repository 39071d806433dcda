"""Data stores for persistence.

Stores handle:
- SQLite: engine, session management, table creation

No clock or selection logic in stores - that belongs in services.
"""
