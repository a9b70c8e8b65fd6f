"""Services Layer — task mutation and query orchestration over the TaskRepository port.

Invariants:
    - Services receive their repository by injection, never reach a global model
    - Every failure leaving a service is a TaskBoardError

Design Decisions:
    - Mutations and queries split into two services (writes vs. reads)
"""
