"""Route blueprints for the web application."""

from .export import export_bp
from .sync import sync_bp

__all__ = [
    "export_bp",
    "sync_bp",
]
