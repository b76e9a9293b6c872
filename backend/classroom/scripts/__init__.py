"""Operational scripts — run with ``python -m classroom.scripts.<name>``."""
