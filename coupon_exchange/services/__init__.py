"""Services Layer - orchestration of persistence ports around the pure core.

Invariants:
    - Services receive ports at construction and never touch SQLAlchemy directly
    - Built once per process (build_services) and shared across requests

Design Decisions:
    - One service per component: graph builder, partner deal selector, coupon engine
"""
