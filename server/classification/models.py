"""
Modelli dati per la classificazione degli accessi al frigo.

- Frame: immagine catturata + intestazione (timestamp, sequenza, direzione)
- ClassPrediction: probabilità per etichetta restituite da un classificatore
- FoodDecision: etichetta cibo più probabile della fase occupata
- AccessEvent: risultato finale (cibo inserito / prelevato)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple


class CaptureDirection(Enum):
    """Direzione della mano durante la cattura del frame"""
    INTO_FRIDGE = "IN"
    OUT_OF_FRIDGE = "OUT"


class EventDirection(Enum):
    """Direzione dell'evento finale"""
    IN = "IN"
    OUT = "OUT"


# Etichette del classificatore binario "oggetto in mano"
EMPTY_LABEL = "Empty"
NON_EMPTY_LABEL = "Non-empty"
OCCUPANCY_LABELS = (EMPTY_LABEL, NON_EMPTY_LABEL)


@dataclass(frozen=True)
class FrameHeader:
    """Metadati codificati nel nome del file caricato"""
    timestamp: int
    sequence_index: int
    direction: CaptureDirection


@dataclass(frozen=True)
class Frame:
    """Singola immagine catturata durante un accesso al frigo"""
    header: FrameHeader
    image: bytes = field(repr=False)
    name: str = ""

    @property
    def direction(self) -> CaptureDirection:
        return self.header.direction

    @property
    def timestamp(self) -> int:
        return self.header.timestamp

    @property
    def sequence_index(self) -> int:
        return self.header.sequence_index


@dataclass(frozen=True)
class ClassPrediction:
    """
    Output di un classificatore remoto su un singolo frame.

    Attributes:
        probabilities: coppie (etichetta, probabilità) nell'ordine
                       restituito dal servizio
    """
    probabilities: Tuple[Tuple[str, float], ...]

    @classmethod
    def from_pairs(cls, pairs) -> "ClassPrediction":
        return cls(tuple((str(label), float(prob)) for label, prob in pairs))

    def as_dict(self) -> Dict[str, float]:
        return dict(self.probabilities)

    def top(self) -> Optional[Tuple[str, float]]:
        """
        Etichetta con probabilità massima.
        A parità vince la prima incontrata; None se non ci sono etichette.
        """
        best = None
        for label, probability in self.probabilities:
            if best is None or probability > best[1]:
                best = (label, probability)
        return best


@dataclass(frozen=True)
class FoodDecision:
    label: str = ""
    probability: float = 0.0


@dataclass(frozen=True)
class AccessEvent:
    """Evento finale: un cibo inserito o prelevato dal frigo"""
    timestamp: int
    direction: EventDirection
    food_label: str
    probability: float

    @property
    def captured_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def action(self) -> str:
        return "placed in" if self.direction is EventDirection.IN else "taken out of"

    def describe(self) -> str:
        """Messaggio leggibile, es. "milk placed in fridge with probability 0.88" """
        return f"{self.food_label} {self.action} fridge with probability {self.probability}"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "time": self.captured_at.isoformat(),
            "direction": self.direction.value,
            "food": self.food_label,
            "probability": self.probability
        }
