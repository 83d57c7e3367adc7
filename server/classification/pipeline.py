"""
EventPipeline: orchestratore della classificazione di un accesso al frigo.

Stadi:
    AWAIT_OCCUPANCY -> AWAIT_FOOD -> DONE
                  \\-> FAILED (input, consistenza o servizio)

1. Partiziona i frame nelle due fasi
2. Classifica "oggetto in mano" su tutti i frame, in parallelo
3. Decide l'occupazione per fase e ne verifica la consistenza
4. Solo se consistente, classifica il cibo sui frame della fase occupata
5. Compone l'AccessEvent e lo registra nello store (se presente)
"""

from concurrent.futures import ThreadPoolExecutor, wait, FIRST_EXCEPTION
from enum import Enum
from typing import List, Optional
from utils.logger import get_logger
from .decision import assemble_event, best_food, check_consistency, item_in_hand
from .exceptions import AccessEventError, ClassificationServiceError
from .models import AccessEvent, ClassPrediction, Frame
from .partitioner import partition_frames
from .prediction_client import ClassifierTarget


class PipelineStage(Enum):
    AWAIT_OCCUPANCY = "await_occupancy"
    AWAIT_FOOD = "await_food"
    DONE = "done"
    FAILED = "failed"


class EventPipeline:
    """
    Pipeline a due passate per un singolo evento.
    Un'istanza per richiesta: lo stato non è condiviso tra eventi.
    """

    def __init__(self, classifier, in_hand_target: ClassifierTarget, food_target: ClassifierTarget,
                 frames_per_action: int = 5, max_workers: int = 10, event_store=None):
        """
        Args:
            classifier: oggetto con classify(project_id, iteration_name, image) -> ClassPrediction
            in_hand_target: progetto/iterazione del classificatore Empty / Non-empty
            food_target: progetto/iterazione del classificatore cibo
            frames_per_action: frame attesi per fase
            max_workers: chiamate concorrenti massime per passata
            event_store: store opzionale con append(event)
        """
        self.classifier = classifier
        self.in_hand_target = in_hand_target
        self.food_target = food_target
        self.frames_per_action = frames_per_action
        self.max_workers = max_workers
        self.event_store = event_store

        self.stage = PipelineStage.AWAIT_OCCUPANCY
        self.error: Optional[AccessEventError] = None

        self.logger = get_logger('pipeline')

    def run(self, frames: List[Frame]) -> AccessEvent:
        """
        Esegue il pipeline completo.

        Raises:
            InputSizeError, MalformedFrameError, ConsistencyError, ClassificationServiceError
        """
        try:
            event = self._run(frames)
        except AccessEventError as e:
            self.stage = PipelineStage.FAILED
            self.error = e
            raise

        self.stage = PipelineStage.DONE
        if self.event_store is not None:
            self.event_store.append(event)
        return event

    def _run(self, frames: List[Frame]) -> AccessEvent:
        into_fridge, out_of_fridge = partition_frames(frames, self.frames_per_action)

        # Passata 1: oggetto in mano, tutti i frame insieme
        in_hand_preds = self._classify_all(into_fridge + out_of_fridge, self.in_hand_target)
        into_occupied = item_in_hand(in_hand_preds[:self.frames_per_action], "IN")
        out_occupied = item_in_hand(in_hand_preds[self.frames_per_action:], "OUT")

        check_consistency(into_occupied, out_occupied)
        self.stage = PipelineStage.AWAIT_FOOD

        # Passata 2: cibo, solo sulla fase occupata
        food_frames = into_fridge if into_occupied else out_of_fridge
        food = best_food(self._classify_all(food_frames, self.food_target))

        event = assemble_event(frames[0].timestamp, into_occupied, food)
        self.logger.info(f"{event.food_label} {event.action} at {event.captured_at.isoformat()}")
        return event

    def _classify_all(self, frames: List[Frame], target: ClassifierTarget) -> List[ClassPrediction]:
        """
        Classifica i frame in parallelo e restituisce le predizioni nello stesso ordine.
        Al primo errore le chiamate non ancora partite vengono annullate.
        """
        executor = ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(frames))))
        try:
            futures = [
                executor.submit(self._classify_one, target, frame)
                for frame in frames
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)

            for future in futures:
                if future in done and future.exception() is not None:
                    for other in pending:
                        other.cancel()
                    raise future.exception()

            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _classify_one(self, target: ClassifierTarget, frame: Frame) -> ClassPrediction:
        try:
            return self.classifier.classify(target.project_id, target.iteration_name, frame.image)
        except ClassificationServiceError:
            raise
        except Exception as e:
            raise ClassificationServiceError(f"classification of '{frame.name}' failed: {e}") from e


def classify_access_event(frames: List[Frame], classifier, in_hand_target: ClassifierTarget,
                          food_target: ClassifierTarget, frames_per_action: int = 5,
                          max_workers: int = 10, event_store=None) -> AccessEvent:
    """
    Shortcut: crea un EventPipeline ed esegue la classificazione.

    Usage:
        event = classify_access_event(frames, client, in_hand, food)
        print(event.describe())
    """
    pipeline = EventPipeline(
        classifier,
        in_hand_target,
        food_target,
        frames_per_action=frames_per_action,
        max_workers=max_workers,
        event_store=event_store
    )
    return pipeline.run(frames)
