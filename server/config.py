"""
Configurazione centralizzata per Fridge Access Event Server
Carica variabili da .env e le rende disponibili come costanti
"""

import os
from dotenv import load_dotenv

# Carica variabili da .env
load_dotenv()


class Config:
    """Configurazione generale applicazione"""

    # Flask
    FLASK_ENV = os.getenv('FLASK_ENV', 'production')
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv('FLASK_PORT', 3000))

    # Frame per ogni fase (mano verso il frigo / mano fuori dal frigo)
    FRAMES_PER_ACTION = int(os.getenv('FRAMES_PER_ACTION', 5))

    # Servizio di classificazione remoto (Custom Vision prediction)
    PREDICTION_ENDPOINT = os.getenv('PREDICTION_ENDPOINT', 'https://nvdfridge-prediction.cognitiveservices.azure.com/')
    PREDICTION_KEY = os.getenv('PREDICTION_KEY') or os.getenv('PRED_KEY')

    IN_HAND_PROJECT_ID = os.getenv('IN_HAND_PROJECT_ID', '38cfb8e8-1637-4159-bd63-a51a33f010dc')
    IN_HAND_ITERATION = os.getenv('IN_HAND_ITERATION', 'Iteration1')

    FOOD_PROJECT_ID = os.getenv('FOOD_PROJECT_ID', '9cbf7b7d-2aaf-4bd9-a24e-9ded611d4784')
    FOOD_ITERATION = os.getenv('FOOD_ITERATION', 'Iteration3')

    CLASSIFIER_TIMEOUT_SECONDS = float(os.getenv('CLASSIFIER_TIMEOUT_SECONDS', 10))
    CLASSIFIER_MAX_WORKERS = int(os.getenv('CLASSIFIER_MAX_WORKERS', 10))

    # Rate Limiting
    RATE_LIMIT_UPLOAD_PER_MINUTE = int(os.getenv('RATE_LIMIT_UPLOAD_PER_MINUTE', 30))

    # Storico eventi in memoria (nessuna persistenza)
    EVENT_HISTORY_SIZE = int(os.getenv('EVENT_HISTORY_SIZE', 100))

    # Logging
    LOG_FILE = os.getenv('LOG_FILE', 'logs/server.log')
    LOG_MAX_SIZE_MB = int(os.getenv('LOG_MAX_SIZE_MB', 10))
    LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', 5))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Diagnostica (massimi per etichetta, decisioni per fase): solo record DEBUG
    LOG_DIAGNOSTICS_FILE = os.getenv('LOG_DIAGNOSTICS_FILE', 'logs/diagnostics.log')
