"""
dbal-session
============

Connection lifecycle hooks for SQLAlchemy engines.

- Translates connection-establishment failures into
  DatabaseConnectionError
- Applies per-platform session settings (pragmas, charset, collation)
  as soon as a DBAPI connection is opened
"""

__version__ = "1.0.0"
