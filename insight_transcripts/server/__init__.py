"""HTTP API package — FastAPI app exposing segmentation and annotation.

WHY: The vault's web front end calls the engine over HTTP instead of
embedding it. Every endpoint is a thin wrapper around a core function.

RULES:
- Request validation happens in pydantic models (server/models.py)
- Core exceptions map to HTTP statuses in one place (server/app.py)
"""
