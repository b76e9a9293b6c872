"""Infrastructure Layer — storage backends, security primitives and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All storage calls wrapped so driver errors surface as BackendFaultError
"""
