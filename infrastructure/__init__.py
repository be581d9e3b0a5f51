"""
Infrastructure Package
======================

Wiring shared by the API layer.

Modules:
    - container: Lazily built, process-wide domain service instances
"""
