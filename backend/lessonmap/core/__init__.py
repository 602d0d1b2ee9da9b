"""Core Layer — domain types, error hierarchy and boundary contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing here performs IO

Design Decisions:
    - Contracts live here, implementations live in infrastructure/ (dependency arrows point inward)
"""
