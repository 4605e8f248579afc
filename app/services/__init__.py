"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Holds the pure user-modifier merge and the library service that turns
repository results into HTTP-facing outcomes.
"""
