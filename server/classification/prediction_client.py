"""
PredictionClient: client HTTP per il servizio di classificazione remoto
(Custom Vision prediction API).

Responsabilità:
- Inviare un'immagine a un progetto/iterazione pubblicata
- Convertire la risposta JSON in ClassPrediction
- Segnalare ogni errore come ClassificationServiceError (nessun retry)
"""

import requests
from typing import NamedTuple
from utils.logger import get_logger
from .exceptions import ClassificationServiceError
from .models import ClassPrediction


class ClassifierTarget(NamedTuple):
    """Progetto e iterazione pubblicata di un classificatore"""
    project_id: str
    iteration_name: str


class PredictionClient:
    """
    Client per la prediction API.
    Thread-safe: una requests.Session condivisa tra i worker del pipeline.
    """

    API_PATH = "/customvision/v3.0/Prediction/{project_id}/classify/iterations/{iteration_name}/image"

    def __init__(self, endpoint: str, prediction_key: str, timeout: float = 10,
                 session: requests.Session = None):
        """
        Args:
            endpoint: URL base del servizio (es. "https://xxx.cognitiveservices.azure.com/")
            prediction_key: chiave inviata nell'header Prediction-Key
            timeout: timeout in secondi per ogni chiamata
            session: sessione HTTP opzionale (per test)
        """
        self.endpoint = endpoint.rstrip('/')
        self.prediction_key = prediction_key
        self.timeout = timeout
        self.session = session or requests.Session()

        self.logger = get_logger('prediction_client')
        self.logger.info(f"PredictionClient initialized (endpoint: {self.endpoint})")

    def is_configured(self) -> bool:
        return bool(self.endpoint and self.prediction_key)

    def classify(self, project_id: str, iteration_name: str, image: bytes) -> ClassPrediction:
        """
        Classifica una singola immagine.

        Returns:
            ClassPrediction con le etichette nell'ordine restituito dal servizio

        Raises:
            ClassificationServiceError: rete, timeout, status non 2xx o risposta malformata
        """
        if not self.is_configured():
            raise ClassificationServiceError("prediction client not configured (missing key)")

        url = self.endpoint + self.API_PATH.format(project_id=project_id, iteration_name=iteration_name)
        headers = {
            'Prediction-Key': self.prediction_key,
            'Content-Type': 'application/octet-stream'
        }

        try:
            response = self.session.post(url, data=image, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            self.logger.error(f"Classification request failed ({iteration_name}): {e}")
            raise ClassificationServiceError(f"classification request failed: {e}") from e
        except ValueError as e:
            self.logger.error(f"Invalid JSON from classifier ({iteration_name}): {e}")
            raise ClassificationServiceError("invalid JSON in classification response") from e

        return self._parse_predictions(data)

    def classify_target(self, target: ClassifierTarget, image: bytes) -> ClassPrediction:
        return self.classify(target.project_id, target.iteration_name, image)

    @staticmethod
    def _parse_predictions(data) -> ClassPrediction:
        """Converte {"predictions": [{"tagName", "probability"}, ...]} in ClassPrediction"""
        try:
            pairs = [
                (item['tagName'], float(item['probability']))
                for item in data['predictions']
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise ClassificationServiceError(f"malformed classification response: {e}") from e

        for label, probability in pairs:
            if not 0.0 <= probability <= 1.0:
                raise ClassificationServiceError(
                    f"probability out of range for '{label}': {probability}"
                )

        return ClassPrediction.from_pairs(pairs)
