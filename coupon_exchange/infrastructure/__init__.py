"""Infrastructure Layer - database session management, SQL port implementations, logging.

Invariants:
    - One DatabaseSessionManager per process (initialized via init_db)
    - All storage failures surface as core.errors.DatabaseError
"""
