"""Shared fixtures for the fridge access event tests."""

import os
import tempfile

# Config legge l'ambiente all'import: va impostato prima di importare il server
os.environ.setdefault("PREDICTION_KEY", "test-key")
_LOG_DIR = tempfile.mkdtemp(prefix="fridge-logs-")
os.environ.setdefault("LOG_FILE", os.path.join(_LOG_DIR, "server.log"))
os.environ.setdefault("LOG_DIAGNOSTICS_FILE", os.path.join(_LOG_DIR, "diagnostics.log"))
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("RATE_LIMIT_UPLOAD_PER_MINUTE", "10000")

import threading

import pytest

from classification.models import ClassPrediction
from classification.partitioner import build_frames
from classification.prediction_client import ClassifierTarget

IN_HAND = ClassifierTarget("in-hand-project", "Iteration1")
FOOD = ClassifierTarget("food-project", "Iteration3")
TIMESTAMP = 1700000000


def frame_name(index, direction, timestamp=TIMESTAMP):
    return f"frame_{timestamp}_{index}_{direction}.jpg"


def image_for(direction, index):
    return f"{direction}-{index}".encode()


def occupancy(empty, non_empty):
    return ClassPrediction.from_pairs([("Empty", empty), ("Non-empty", non_empty)])


def food(*pairs):
    return ClassPrediction.from_pairs(pairs)


class StubClassifier:
    """
    Classificatore finto: risponde in base a (progetto, contenuto immagine).
    Registra ogni chiamata per verificare quali frame sono stati inviati.
    """

    def __init__(self, responses=None, failures=None):
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.calls = []
        self._lock = threading.Lock()

    def classify(self, project_id, iteration_name, image):
        with self._lock:
            self.calls.append((project_id, iteration_name, image))
        key = (project_id, image)
        if key in self.failures:
            raise self.failures[key]
        return self.responses[key]

    def calls_for(self, project_id):
        return [call for call in self.calls if call[0] == project_id]


def build_stub(in_preds, out_preds, food_preds=None, food_phase="IN"):
    """
    Prepara uno StubClassifier per un evento completo.

    Args:
        in_preds / out_preds: ClassPrediction in-hand per i frame IN / OUT
        food_preds: ClassPrediction cibo per i frame della fase indicata
        food_phase: "IN" o "OUT"
    """
    responses = {}
    for index, prediction in enumerate(in_preds):
        responses[(IN_HAND.project_id, image_for("IN", index))] = prediction
    for index, prediction in enumerate(out_preds):
        responses[(IN_HAND.project_id, image_for("OUT", index))] = prediction
    for index, prediction in enumerate(food_preds or []):
        responses[(FOOD.project_id, image_for(food_phase, index))] = prediction
    return StubClassifier(responses)


def make_uploads(in_count=5, out_count=5, timestamp=TIMESTAMP):
    uploads = [(frame_name(i, "IN", timestamp), image_for("IN", i)) for i in range(in_count)]
    uploads += [(frame_name(i, "OUT", timestamp), image_for("OUT", i)) for i in range(out_count)]
    return uploads


@pytest.fixture
def frames():
    return build_frames(make_uploads())


@pytest.fixture
def scenario_a():
    """IN occupato (0.8 > 0.3), OUT vuoto (0.7 > 0.2), cibo "milk" a 0.88"""
    in_preds = [occupancy(0.3, 0.8)] + [occupancy(0.2, 0.4)] * 4
    out_preds = [occupancy(0.7, 0.2)] + [occupancy(0.5, 0.1)] * 4
    food_preds = [
        food(("milk", 0.88), ("cheese", 0.1)),
        food(("milk", 0.7), ("cheese", 0.2)),
        food(("cheese", 0.5), ("milk", 0.4)),
        food(("milk", 0.6)),
        food(("milk", 0.1)),
    ]
    return build_stub(in_preds, out_preds, food_preds, "IN")
