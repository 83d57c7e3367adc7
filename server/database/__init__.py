"""
Database package per Fridge Access Event Server

Nessuna persistenza: gli eventi vivono solo nella memoria del processo.
"""

from .event_db import EventDatabase

__all__ = ['EventDatabase']
