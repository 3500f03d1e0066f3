# Overview: Page shells behind the authorization gate.

"""
Page routes.

The dashboard UI is a separate frontend; these endpoints only mark which
page paths exist so the gate (venuehub.gate) can allow or redirect them.
"""

from flask import Blueprint, jsonify, request


pages_bp = Blueprint("pages", __name__)


@pages_bp.get("/")
@pages_bp.get("/login")
@pages_bp.get("/dashboard")
@pages_bp.get("/dashboard/<path:subpath>")
@pages_bp.get("/admin")
@pages_bp.get("/admin/<path:subpath>")
def page_shell(subpath: str | None = None):
    return jsonify({"page": request.path}), 200
