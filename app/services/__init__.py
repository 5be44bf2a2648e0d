"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services enforce business and ownership rules and call repositories for
DB operations. They flush but never commit; routers own the transaction.
"""
