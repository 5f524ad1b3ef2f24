"""
Shared Kernel Module
====================

Generic infrastructure used by the rest of the package.
"""
