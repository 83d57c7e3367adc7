"""
Event Database
Storico in memoria degli AccessEvent prodotti dal processo corrente
"""

import threading
from collections import deque
from typing import List
from classification.models import AccessEvent


class EventDatabase:
    """
    Store degli eventi con append esplicito.

    Thread-safe: le richieste Flask concorrenti scrivono nella stessa istanza.
    Mantiene al massimo max_events eventi (i più vecchi vengono scartati).
    """

    def __init__(self, max_events: int = 100):
        self._events = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: AccessEvent) -> None:
        with self._lock:
            self._events.append(event)

    def get_recent(self, limit: int = 20) -> List[AccessEvent]:
        """
        Ultimi eventi, dal più recente

        Args:
            limit: numero massimo di eventi restituiti
        """
        with self._lock:
            events = list(self._events)
        events.reverse()
        return events[:max(0, limit)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
