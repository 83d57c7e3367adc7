"""
Logica decisionale dell'Event Classifier:
- occupazione della mano per fase (max per etichetta)
- controllo di consistenza tra le due fasi
- riduzione delle predizioni cibo alla singola etichetta migliore
- composizione dell'AccessEvent
"""

from typing import Dict, Iterable
from utils.logger import get_logger
from .exceptions import ClassificationServiceError, ConsistencyError
from .models import (
    AccessEvent, ClassPrediction, EventDirection, FoodDecision,
    EMPTY_LABEL, NON_EMPTY_LABEL, OCCUPANCY_LABELS
)

logger = get_logger('decision')


def occupancy_maxima(predictions: Iterable[ClassPrediction]) -> Dict[str, float]:
    """
    Probabilità massima per etichetta (Empty / Non-empty) sui frame di una fase.
    Un'etichetta mai vista vale 0.0.

    Raises:
        ClassificationServiceError: se il classificatore restituisce etichette sconosciute
    """
    maxima = {label: 0.0 for label in OCCUPANCY_LABELS}
    for prediction in predictions:
        for label, probability in prediction.probabilities:
            if label not in maxima:
                raise ClassificationServiceError(f"unexpected in-hand label '{label}'")
            maxima[label] = max(maxima[label], probability)
    return maxima


def item_in_hand(predictions: Iterable[ClassPrediction], phase: str = "") -> bool:
    """
    True se durante la fase la mano teneva un oggetto.
    Basta un frame chiaro: si confrontano i massimi, non le medie.
    A parità il risultato è False.
    """
    maxima = occupancy_maxima(predictions)
    logger.debug(f"IIH Max Predictions {phase}: {maxima}")
    return maxima[NON_EMPTY_LABEL] > maxima[EMPTY_LABEL]


def check_consistency(into_fridge: bool, out_of_fridge: bool) -> None:
    """Esattamente una delle due fasi deve essere occupata"""
    logger.debug(f"IIH IN: {into_fridge}  |  IIH OUT: {out_of_fridge}")
    if into_fridge == out_of_fridge:
        logger.error("IIH Classification is the same for both actions")
        raise ConsistencyError(into_fridge)


def best_food(predictions: Iterable[ClassPrediction]) -> FoodDecision:
    """
    Etichetta cibo con probabilità globalmente massima.
    Per ogni frame conta solo l'etichetta in testa; a parità vince la prima.
    """
    best = FoodDecision()
    for prediction in predictions:
        top = prediction.top()
        if top is None:
            continue
        label, probability = top
        if probability > best.probability:
            best = FoodDecision(label=label, probability=probability)
    return best


def assemble_event(timestamp: int, into_fridge_occupied: bool, food: FoodDecision) -> AccessEvent:
    return AccessEvent(
        timestamp=timestamp,
        direction=EventDirection.IN if into_fridge_occupied else EventDirection.OUT,
        food_label=food.label,
        probability=food.probability
    )
