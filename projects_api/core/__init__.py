"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/, or db/
      at runtime (repository_protocols only references the ORM type for hints)
    - All functions are pure and deterministic
"""
