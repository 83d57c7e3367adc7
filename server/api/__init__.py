"""
API package for Fridge Access Event Server
"""
from .events.routes import events_bp

__all__ = ['events_bp']
