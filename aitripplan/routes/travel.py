# aitripplan/routes/travel.py
"""Trip suggestion routes and blueprint configuration."""

import logging
from typing import Optional

from flask import Blueprint, jsonify, request

from aitripplan.api.config import (
    ConfigurationError,
    GenerationConfig,
    get_generation_config,
    has_openai_api_key,
)
from aitripplan.api.llm import UpstreamError
from aitripplan.api.models import DecodeErr
from aitripplan.api.services.itinerary_service import ItineraryService

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-itinerary"


def create_travel_blueprint(config: Optional[GenerationConfig] = None):
    """Create and configure the travel blueprint.

    Args:
        config: Generation settings; read from the environment on every
            request when omitted

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__)

    def _config() -> GenerationConfig:
        return config if config is not None else get_generation_config()

    @travel_bp.route(GENERATE_PATH, methods=["GET"])
    def generate_itinerary_probe():
        """Liveness probe reporting which settings are present."""
        return jsonify({
            "ok": True,
            "method": "GET",
            "path": GENERATE_PATH,
            "hasOpenAIKey": has_openai_api_key(),
            "model": _config().model,
            "note": "AITripPlan generate-itinerary health-check",
        })

    @travel_bp.route(GENERATE_PATH, methods=["POST"])
    def generate_itinerary():
        """Generate suggestions for the posted prompt."""
        try:
            cfg = _config()
            if not has_openai_api_key():
                return jsonify({"error": "OPENAI_API_KEY is not configured in environment."}), 500

            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = {}

            prompt = ItineraryService.clean_prompt(data.get("prompt"), cfg)
            if prompt is None:
                return jsonify({"error": "Missing or invalid 'prompt' in request body."}), 400

            result = ItineraryService.generate_suggestions(prompt, data.get("mode"), cfg)
            if isinstance(result, DecodeErr):
                return jsonify(result.to_dict()), 502
            return jsonify(result.to_dict())

        except ConfigurationError as e:
            return jsonify({"error": str(e)}), 500
        except UpstreamError as e:
            if e.unavailable:
                return jsonify({"error": "UpstreamUnavailable", "detail": str(e)}), 502
            return jsonify({"error": "UpstreamError", "detail": str(e), "status": e.status}), 502
        except Exception:
            logger.exception("Unexpected error in %s", GENERATE_PATH)
            return jsonify({"error": "Unexpected server error."}), 500

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "aitripplan"})

    return travel_bp


__all__ = ["create_travel_blueprint"]
