"""Product API Package — product catalog with JWT-authenticated admin writes.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
