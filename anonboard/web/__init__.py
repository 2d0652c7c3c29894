"""AnonBoard Web Module - Flask HTTP interface."""

from .app import create_app, build_service

__all__ = ["create_app", "build_service"]
