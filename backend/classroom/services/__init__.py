"""Service Layer — orchestrates repositories around the pure core.

Invariants:
    - Services depend on RepositoryContainer protocols, never on a concrete backend
    - Not-found indicators from repositories become ResourceNotFoundError here
    - Validation happens before the first repository call
"""
