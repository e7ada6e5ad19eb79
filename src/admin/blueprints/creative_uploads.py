"""Rich media markup upload blueprint."""

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.core.bundles import BundleType, parse_bundle_type
from src.core.helpers.zip_validation import ZipValidationError
from src.services.bundle_extraction import BundleExtractionError
from src.services.publishing_service import BundlePublishError
from src.services.rich_media_upload_service import IncomingFile, RichMediaUploadService, UploadRequestError

logger = logging.getLogger(__name__)

UPLOAD_SERVICE_EXTENSION = "rich_media_upload_service"

# Create blueprint
creative_uploads_bp = Blueprint("creative_uploads", __name__)


class UploadFormFields(BaseModel):
    """Form fields submitted alongside the archives."""

    model_config = ConfigDict(extra="ignore")

    exporter: BundleType
    dimensions: str = Field(pattern=r"^\d+x\d+$", description="Creative size, e.g. '300x250'")

    @field_validator("exporter", mode="before")
    @classmethod
    def parse_exporter(cls, value):
        """Accept exporter names in any case, like the upload service does."""
        return parse_bundle_type(value)


def get_upload_service() -> RichMediaUploadService:
    return current_app.extensions[UPLOAD_SERVICE_EXTENSION]


@creative_uploads_bp.route("/campaigns/<campaign_id>/creatives/rich-media-markup", methods=["POST"])
def upload_rich_media_markup(campaign_id):
    """Validate and publish uploaded rich media ZIP bundles for a campaign."""
    try:
        fields = UploadFormFields(**request.form.to_dict())
    except ValidationError as e:
        details = e.errors(include_url=False, include_context=False)
        return jsonify({"error": "Invalid form fields", "details": details}), 400

    files = [
        IncomingFile(filename=upload.filename, stream=upload.stream)
        for _, upload in request.files.items(multi=True)
        if upload.filename
    ]

    try:
        summary = get_upload_service().process_upload(
            campaign_id=campaign_id,
            exporter=fields.exporter,
            files=files,
            dimensions=fields.dimensions,
        )
    except (UploadRequestError, ZipValidationError) as e:
        return jsonify({"error": str(e)}), 400
    except (BundleExtractionError, BundlePublishError) as e:
        logger.error("Rich media upload failed for campaign %s: %s", campaign_id, e, exc_info=True)
        return jsonify({"error": str(e)}), 500

    return jsonify(summary.model_dump())
