"""Project Connect entrypoint for running from the repo root.

    uvicorn app.main:app --port 5000
"""

from backend.app.main import app

__all__ = ["app"]
