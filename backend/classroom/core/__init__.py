"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Comment-tree functions mutate only the forest they are handed

Design Decisions:
    - Functional core separated from imperative shell: repositories load a
      forest, call core functions, then persist the result
"""
