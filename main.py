"""
AITripPlan – main application entry point

* Flask app serving ``/api/generate-itinerary`` (GET probe, POST generation).
* Every response is JSON, including 404/405 from Flask's routing.
* Run locally with ``python main.py``; in production hand ``main:app`` to any
  WSGI server.
"""

import os
import logging

from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from aitripplan.api.config import get_port
from aitripplan.routes import create_travel_blueprint

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
def create_app(config=None):
    """Build the Flask app; ``config`` is a GenerationConfig or None for env."""
    app = Flask(__name__)

    # The front end is served from a different origin
    CORS(app, origins="*", send_wildcard=True)

    app.register_blueprint(create_travel_blueprint(config))

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"error": "Method not allowed"}), 405

    # 404/405 keep their own handlers; anything else escaping a view lands here
    @app.errorhandler(Exception)
    def unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.name}), error.code
        logger.exception("Unhandled error")
        return jsonify({"error": "Unexpected server error."}), 500

    return app


app = create_app()

# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting trip suggestion app on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=False)

__all__ = ["app", "create_app"]
