"""Services Layer — lesson use cases orchestrated over the entity store.

Invariants:
    - Cross-entity writes happen only in lesson_consistency.py
    - Services raise LessonMapError subclasses; routes never translate errors themselves

Design Decisions:
    - Services receive collaborators through their constructors (wired in api/dependencies.py)
"""
