"""
Infrastructure Layer
=====================

- Database engine lifecycle
- Connection event listeners
"""
