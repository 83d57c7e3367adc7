"""
Classification package: dalla sequenza di frame all'AccessEvent
"""

from .models import (
    AccessEvent, CaptureDirection, ClassPrediction, EventDirection,
    FoodDecision, Frame, FrameHeader
)
from .exceptions import (
    AccessEventError, ClassificationServiceError, ConsistencyError,
    InputSizeError, MalformedFrameError
)
from .partitioner import build_frames, parse_frame_header, partition_frames
from .prediction_client import ClassifierTarget, PredictionClient
from .pipeline import EventPipeline, PipelineStage, classify_access_event

__all__ = [
    'AccessEvent', 'CaptureDirection', 'ClassPrediction', 'EventDirection',
    'FoodDecision', 'Frame', 'FrameHeader',
    'AccessEventError', 'ClassificationServiceError', 'ConsistencyError',
    'InputSizeError', 'MalformedFrameError',
    'build_frames', 'parse_frame_header', 'partition_frames',
    'ClassifierTarget', 'PredictionClient',
    'EventPipeline', 'PipelineStage', 'classify_access_event'
]
