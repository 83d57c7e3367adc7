"""
Fridge Access Event Server - Entry Point
Server Flask che classifica gli accessi al frigo (cibo inserito / prelevato)
"""

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from config import Config
from utils.logger import get_logger
from api.events.routes import events_bp, prediction_client

# Logger
logger = get_logger('main')

logger.info("Starting server...")

# Crea app Flask
app = Flask(__name__)
app.config.from_object(Config)

# Rate limiter
limiter = Limiter(
    app=app,
    key_func=get_remote_address,
    storage_uri="memory://"
)

# Applica rate limit alle route eventi
limiter.limit(f"{Config.RATE_LIMIT_UPLOAD_PER_MINUTE} per minute")(events_bp)

# Registra blueprint
app.register_blueprint(events_bp)


@app.route('/')
def index():
    """Health check endpoint"""
    return {
        "service": "Fridge Access Event Server",
        "status": "running",
        "version": "1.0.0"
    }, 200


@app.route('/health')
def health():
    """Health check dettagliato"""
    return {
        "status": "healthy",
        "classifier_configured": prediction_client.is_configured(),
        "frames_per_action": Config.FRAMES_PER_ACTION
    }, 200


if __name__ == '__main__':
    logger.info("=" * 60)
    logger.info("Fridge Access Event Server - Starting...")
    logger.info("=" * 60)
    logger.info(f"Environment: {Config.FLASK_ENV}")
    logger.info(f"Debug: {Config.FLASK_DEBUG}")
    logger.info(f"Host: {Config.FLASK_HOST}:{Config.FLASK_PORT}")
    logger.info(f"Frames per action: {Config.FRAMES_PER_ACTION}")
    if not prediction_client.is_configured():
        logger.warning("PREDICTION_KEY not set: /upload-images will fail until it is configured")
    logger.info("=" * 60)

    app.run(
        host=Config.FLASK_HOST,
        port=Config.FLASK_PORT,
        debug=Config.FLASK_DEBUG
    )
