"""Presentation layer: FastAPI route generation."""
