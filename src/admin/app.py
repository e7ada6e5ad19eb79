"""Flask application for the rich media uploader."""

import logging

from flask import Flask

from src.admin.blueprints.creative_uploads import UPLOAD_SERVICE_EXTENSION, creative_uploads_bp
from src.core.config import load_upload_settings
from src.services.rich_media_upload_service import RichMediaUploadService

logger = logging.getLogger(__name__)


def create_app(upload_service: RichMediaUploadService | None = None) -> Flask:
    """Create the Flask app.

    Args:
        upload_service: Service to use; built from RICH_MEDIA_* settings if omitted
    """
    app = Flask(__name__)

    if upload_service is None:
        upload_service = RichMediaUploadService(load_upload_settings())

    app.extensions[UPLOAD_SERVICE_EXTENSION] = upload_service
    app.register_blueprint(creative_uploads_bp)

    logger.info("Rich media uploader app created")
    return app
