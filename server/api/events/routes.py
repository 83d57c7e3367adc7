"""
Route Flask per gli eventi di accesso al frigo (upload frame, storico eventi)
"""

from flask import Blueprint, request
from config import Config
from utils.logger import get_logger
from utils.errors import error_response, ErrorCode
from classification import (
    ClassificationServiceError, ClassifierTarget, ConsistencyError,
    InputSizeError, MalformedFrameError, PredictionClient,
    build_frames, classify_access_event
)
from database import EventDatabase

logger = get_logger('events_api')

# Blueprint per route eventi
events_bp = Blueprint('events', __name__)

# Storico eventi del processo corrente
event_db = EventDatabase(max_events=Config.EVENT_HISTORY_SIZE)

# Client condiviso verso il servizio di classificazione
prediction_client = PredictionClient(
    endpoint=Config.PREDICTION_ENDPOINT,
    prediction_key=Config.PREDICTION_KEY,
    timeout=Config.CLASSIFIER_TIMEOUT_SECONDS
)

IN_HAND_TARGET = ClassifierTarget(Config.IN_HAND_PROJECT_ID, Config.IN_HAND_ITERATION)
FOOD_TARGET = ClassifierTarget(Config.FOOD_PROJECT_ID, Config.FOOD_ITERATION)


@events_bp.route('/upload-images', methods=['POST'])
def upload_images():
    """
    Classifica un accesso al frigo a partire dai frame catturati

    Request (multipart/form-data):
        2 x FRAMES_PER_ACTION file, ognuno con nome
        "<prefisso>_<timestamp>_<sequenza>_<IN|OUT>[.jpg]"

    Response:
        Success (200): {
            "success": true,
            "event": {
                "timestamp": 1700000000,
                "time": "2023-11-14T22:13:20+00:00",
                "direction": "IN",
                "food": "milk",
                "probability": 0.88
            },
            "message": "milk placed in fridge with probability 0.88"
        }
        Error (400): INVALID_FRAME_COUNT / MALFORMED_FRAME
        Error (422): INCONSISTENT_OCCUPANCY (con "decision")
        Error (502): CLASSIFIER_ERROR
    """
    try:
        uploads = [
            (storage.filename or field_name, storage.read())
            for field_name, storage in request.files.items(multi=True)
        ]

        frames = build_frames(uploads)

        event = classify_access_event(
            frames,
            prediction_client,
            IN_HAND_TARGET,
            FOOD_TARGET,
            frames_per_action=Config.FRAMES_PER_ACTION,
            max_workers=Config.CLASSIFIER_MAX_WORKERS,
            event_store=event_db
        )

        return {
            "success": True,
            "event": event.to_dict(),
            "message": event.describe()
        }, 200

    except InputSizeError as e:
        logger.warning(f"Rejected upload: {e}")
        return error_response(ErrorCode.INVALID_FRAME_COUNT, str(e),
                              expected=e.expected, received=e.received)

    except MalformedFrameError as e:
        logger.warning(f"Rejected upload: {e}")
        return error_response(ErrorCode.MALFORMED_FRAME, str(e), frame=e.name)

    except ConsistencyError as e:
        return error_response(ErrorCode.INCONSISTENT_OCCUPANCY,
                              f"ERROR: {e}", decision=e.decision)

    except ClassificationServiceError as e:
        logger.error(f"Classification failed: {e}")
        return error_response(ErrorCode.CLASSIFIER_ERROR, str(e))

    except Exception as e:
        logger.error(f"Unexpected error in upload_images: {e}")
        return error_response(ErrorCode.INTERNAL_ERROR)


@events_bp.route('/api/events/recent', methods=['GET'])
def get_recent_events():
    """
    Eventi classificati dal processo corrente (nessuna persistenza)

    Query params:
        limit: Numero massimo di eventi (default: 20, max: 100)

    Response:
        Success (200): {
            "success": true,
            "count": 2,
            "events": [{...}, {...}]
        }
    """
    try:
        limit = int(request.args.get('limit', 20))
    except ValueError:
        return error_response(ErrorCode.INVALID_REQUEST, "limit deve essere un numero intero")

    limit = max(0, min(limit, 100))
    events = event_db.get_recent(limit)

    return {
        "success": True,
        "count": len(events),
        "events": [event.to_dict() for event in events]
    }, 200
