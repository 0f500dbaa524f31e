"""Infrastructure Layer — database, repository, logging and tracing adapters.

Invariants:
    - Infrastructure may import core/, never api/
    - Persistence failures are mapped to DatabaseError before leaving this layer
"""
