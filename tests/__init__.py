"""Test suite for recoverkit.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic, flow and adapters in isolation
- integration/: Integration tests - real structlog and SQLAlchemy on SQLite
- api/: API endpoint tests - HTTP endpoints end-to-end
"""
