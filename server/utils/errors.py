"""
Gestione errori standardizzata
"""

from enum import Enum
from flask import jsonify
from typing import Tuple


class ErrorCode(Enum):
    """Codici errore standardizzati"""

    # Validation errors (400)
    INVALID_FRAME_COUNT = ("Numero di frame non valido", 400)
    MALFORMED_FRAME = ("Frame con intestazione non valida", 400)
    INVALID_REQUEST = ("Richiesta non valida", 400)

    # Evento ambiguo (422)
    INCONSISTENT_OCCUPANCY = ("Entrambe le fasi hanno la stessa occupazione", 422)

    # Servizio di classificazione (502)
    CLASSIFIER_ERROR = ("Errore del servizio di classificazione", 502)

    # Server errors (500)
    INTERNAL_ERROR = ("Errore interno del server", 500)


def error_response(error_code: ErrorCode, custom_message: str = None, **details) -> Tuple[dict, int]:
    """
    Crea response di errore standardizzata

    Args:
        error_code: Codice errore da ErrorCode enum
        custom_message: Messaggio custom opzionale (override default)
        **details: Campi diagnostici aggiunti all'oggetto "error"

    Returns:
        Tuple (json_response, http_status_code)

    Usage:
        return error_response(ErrorCode.INVALID_FRAME_COUNT)
        return error_response(ErrorCode.INCONSISTENT_OCCUPANCY, decision=True)
    """
    message, status_code = error_code.value

    if custom_message:
        message = custom_message

    error = {
        "code": error_code.name,
        "message": message
    }
    error.update(details)

    response = {
        "success": False,
        "error": error
    }

    return jsonify(response), status_code
