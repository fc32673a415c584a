"""Presentation layer: FastAPI dependencies and error responses."""
