"""FastAPI server adapter for EduSpark.

Design intent:
- Keep task logic in `eduspark.flows` and `eduspark.tasks`
- Keep server-specific concerns (routing, CORS, request models) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from eduspark.server.app import create_app
