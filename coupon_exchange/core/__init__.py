"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Randomness and clocks are passed in by the caller

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate
      the async port calls around these pure functions
"""
