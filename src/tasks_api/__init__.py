"""
Tasks API package.

FastAPI service exposing CRUD endpoints for tasks stored in PostgreSQL.
The ASGI application lives at ``tasks_api.main:app``; ``create_app`` builds
a fresh instance.
"""

__version__ = "1.0.0"
