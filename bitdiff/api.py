"""
JSON web API for uploading payloads and reading comparison results.

    POST /v1/diff/<id>/<side>   body {"data": "<base64>"}
    GET  /v1/diff/<id>

An unknown comparison id answers 404, as does an id outside the 32-bit
range. A comparison with one side missing is still a normal 200 result.
"""

from pathlib import Path

from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.routing import IntegerConverter

from .config import (
    API_PREFIX,
    DB_PATH,
    MAX_COMPARISON_ID,
    MAX_CONTENT_LENGTH,
    MIN_COMPARISON_ID,
)
from .exceptions import InvalidPayloadError, PayloadConflictError
from .models import EntryMissing, Side
from .serialization import outcome_to_dict
from .service import ComparisonService
from .store import PayloadStore, SqlitePayloadStore

diff_api = Blueprint("diff", __name__)


class ComparisonIdConverter(IntegerConverter):
    """Signed 32-bit ids. Values out of range don't match the route."""

    def __init__(self, url_map):
        super().__init__(url_map, min=MIN_COMPARISON_ID, max=MAX_COMPARISON_ID, signed=True)


def get_service() -> ComparisonService:
    return current_app.extensions["comparison_service"]


@diff_api.route("/<comparison_id:comparison_id>/<side_name>", methods=["POST"])
def save_payload(comparison_id, side_name):
    """Store base64 data as the left or right side of a comparison."""
    side = Side.parse(side_name)
    if side is None:
        return jsonify({"error": f"Unknown side: {side_name}"}), 404

    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}
    encoded = body.get("data", body.get("Data"))

    try:
        size = get_service().save_payload(comparison_id, side, encoded)
    except InvalidPayloadError as e:
        current_app.logger.warning("Rejected %s payload for diff %d: %s", side.value, comparison_id, e)
        return jsonify({"error": str(e)}), 400
    except PayloadConflictError as e:
        current_app.logger.warning(str(e))
        return jsonify({"error": str(e)}), 409

    current_app.logger.info("Stored %s payload for diff %d (%d bytes)", side.value, comparison_id, size)
    return jsonify(comparison_id), 201, {"Location": f"{API_PREFIX}/{comparison_id}"}


@diff_api.route("/<comparison_id:comparison_id>", methods=["GET"])
def get_comparison_result(comparison_id):
    """Compare the two sides of a comparison."""
    outcome = get_service().get_outcome(comparison_id)
    status = 404 if isinstance(outcome, EntryMissing) else 200
    return jsonify(outcome_to_dict(outcome)), status


def payload_too_large(error):
    limit = current_app.config["MAX_CONTENT_LENGTH"]
    return jsonify({"error": f"Request body exceeds {limit:,} bytes"}), 413


def create_app(
    db_path: Path = DB_PATH,
    store: PayloadStore | None = None,
    **config
) -> Flask:
    """
    Build the Flask application.

    Uses a SQLite store at db_path unless a store is passed in.
    Extra keyword arguments are applied to app.config.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
    app.config["DB_PATH"] = Path(db_path)
    app.config.update(config)
    app.url_map.converters["comparison_id"] = ComparisonIdConverter

    if store is None:
        store = SqlitePayloadStore(app.config["DB_PATH"])
    app.extensions["comparison_service"] = ComparisonService(store)

    app.register_blueprint(diff_api, url_prefix=API_PREFIX)
    app.register_error_handler(413, payload_too_large)
    return app
