"""Test suite for EduGuard.

Test structure follows the test pyramid:
- unit/: Unit tests - domain logic and handlers with mocked ports
- integration/: Integration tests - repositories, row-level security and
  workflows against an in-memory SQLite database
- api/: API tests - gate dependencies and problem details through FastAPI
"""
