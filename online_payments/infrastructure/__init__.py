"""
Infrastructure Layer - State and I/O behind the domain

This layer contains:
- Transaction log (append-only text file, plus an in-memory variant)
- User store and the single active session

Key principle: All infrastructure is REPLACEABLE.
Domain layer knows nothing about this layer (dependency inversion).
"""
