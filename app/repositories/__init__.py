"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Repositories compose filtered/sorted reads and stage writes against the
session passed to each call. Commit happens only through save_all*.
"""
