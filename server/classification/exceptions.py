"""
Eccezioni del classificatore di eventi.
Ogni errore è terminale per la singola richiesta.
"""


class AccessEventError(Exception):
    """Classe base per gli errori di classificazione di un evento"""


class InputSizeError(AccessEventError):
    """Numero di frame diverso da 2 x FRAMES_PER_ACTION (o fasi sbilanciate)"""

    def __init__(self, expected: int, received: int, message: str = None):
        self.expected = expected
        self.received = received
        super().__init__(message or f"expected {expected} frames, got {received}")


class MalformedFrameError(AccessEventError):
    """Intestazione del frame mancante o non valida"""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"malformed frame '{name}': {reason}")


class ConsistencyError(AccessEventError):
    """Le due fasi hanno la stessa decisione di occupazione"""

    def __init__(self, decision: bool):
        self.decision = decision
        super().__init__(
            f"both stages of item going into fridge and out of fridge: {decision}"
        )


class ClassificationServiceError(AccessEventError):
    """Chiamata al servizio di classificazione fallita o risposta non valida"""
