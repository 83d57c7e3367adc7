"""
Frame Partitioner

Responsabilità:
- Leggere l'intestazione codificata nel nome di ogni immagine caricata
  (formato: <prefisso>_<timestamp>_<sequenza>_<IN|OUT>[.estensione])
- Verificare che il batch contenga esattamente 2 x FRAMES_PER_ACTION frame
- Dividere i frame nelle due fasi: mano verso il frigo / mano fuori dal frigo
"""

from typing import Iterable, List, Tuple
from utils.logger import get_logger
from .exceptions import InputSizeError, MalformedFrameError
from .models import CaptureDirection, Frame, FrameHeader

logger = get_logger('partitioner')

_DIRECTION_TAGS = {direction.value: direction for direction in CaptureDirection}


def parse_frame_header(name: str) -> FrameHeader:
    """
    Estrae timestamp, indice di sequenza e direzione dal nome del frame.

    Args:
        name: es. "frame_1700000000_3_IN.jpg"

    Returns:
        FrameHeader validato

    Raises:
        MalformedFrameError: se un campo manca o non è valido
    """
    if not name:
        raise MalformedFrameError(str(name), "missing name")

    parts = name.split('_')

    if len(parts) < 4:
        raise MalformedFrameError(name, "expected <prefix>_<timestamp>_<sequence>_<IN|OUT>")

    try:
        timestamp = int(parts[1])
    except ValueError:
        raise MalformedFrameError(name, f"invalid timestamp '{parts[1]}'")

    try:
        sequence_index = int(parts[2])
    except ValueError:
        raise MalformedFrameError(name, f"invalid sequence index '{parts[2]}'")

    # L'estensione (".jpg") resta attaccata al tag direzione
    tag = parts[3].split('.', 1)[0]
    direction = _DIRECTION_TAGS.get(tag)
    if direction is None:
        raise MalformedFrameError(name, f"unknown direction tag '{tag}'")

    return FrameHeader(timestamp=timestamp, sequence_index=sequence_index, direction=direction)


def build_frames(uploads: Iterable[Tuple[str, bytes]]) -> List[Frame]:
    """
    Converte le coppie (nome, contenuto) ricevute in Frame tipizzati.
    Tutti i frame di un evento devono avere lo stesso timestamp.
    """
    frames = []
    for name, image in uploads:
        logger.debug(f"Collecting image: {name}")
        frames.append(Frame(header=parse_frame_header(name), image=image, name=name))

    if frames:
        event_timestamp = frames[0].timestamp
        for frame in frames[1:]:
            if frame.timestamp != event_timestamp:
                raise MalformedFrameError(
                    frame.name,
                    f"timestamp {frame.timestamp} differs from event timestamp {event_timestamp}"
                )

    return frames


def partition_frames(frames: List[Frame], frames_per_action: int) -> Tuple[List[Frame], List[Frame]]:
    """
    Divide i frame nelle due fasi dell'accesso.

    Args:
        frames: frame del batch, in ordine di upload
        frames_per_action: numero di frame attesi per ogni fase

    Returns:
        (frame verso il frigo, frame fuori dal frigo), ciascuna ordinata
        per indice di sequenza

    Raises:
        InputSizeError: se il totale o una delle due fasi non ha la dimensione attesa
    """
    expected = frames_per_action * 2
    if len(frames) != expected:
        logger.error(
            f"Invalid number of images passed to the upload-images endpoint: "
            f"expected {expected}, got {len(frames)}"
        )
        raise InputSizeError(expected, len(frames))

    groups = {direction: [] for direction in CaptureDirection}
    for frame in frames:
        groups[frame.direction].append(frame)

    into_fridge = sorted(groups[CaptureDirection.INTO_FRIDGE], key=lambda f: f.sequence_index)
    out_of_fridge = sorted(groups[CaptureDirection.OUT_OF_FRIDGE], key=lambda f: f.sequence_index)

    for phase in (into_fridge, out_of_fridge):
        if len(phase) != frames_per_action:
            logger.error(
                f"Unbalanced phases: {len(into_fridge)} IN / {len(out_of_fridge)} OUT "
                f"(expected {frames_per_action} each)"
            )
            raise InputSizeError(
                frames_per_action, len(phase),
                f"expected {frames_per_action} frames per phase, "
                f"got {len(into_fridge)} IN and {len(out_of_fridge)} OUT"
            )

    return into_fridge, out_of_fridge
