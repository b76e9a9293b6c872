"""API Schemas — Pydantic models for request validation and response shaping.

Invariants:
    - Request bodies are validated before reaching route handlers
    - Responses are camelCase on the wire, snake_case in Python
    - Password hashes never appear in any response model
"""
