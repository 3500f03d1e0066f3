# Overview: Health endpoint for deployment checks.

from flask import Blueprint, current_app, jsonify

from ..errors import BackendError
from ..providers import get_provider


system_bp = Blueprint("system", __name__, url_prefix="/api")


@system_bp.get("/health")
def health_route():
    provider = get_provider()
    try:
        return jsonify(provider.health()), 200
    except BackendError as e:
        current_app.logger.warning("Provider health check failed: %s", e.message)
        return jsonify({"provider": provider.name, "status": "unhealthy"}), 503
