"""ASGI surface for serving a pipeline with FastAPI/uvicorn."""

from http_pipeline.api.server import create_app, create_app_from_config

__all__ = ["create_app", "create_app_from_config"]
