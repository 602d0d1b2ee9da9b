"""Infrastructure Layer — database, geocoding, file storage, auth and logging.

Invariants:
    - Infrastructure implements the protocols in core/repository_protocols.py
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
