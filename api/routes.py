"""
Flask API routes for the SFM interferometer designer.

Shared endpoints live here; each registered DesignerService mounts its
own endpoints on the same blueprint.

Endpoints:
  GET  /api/services             - list registered services
  GET  /api/constants            - model constants used by the engine
  POST /api/layout               - design result (LayoutService)
  GET  /api/layout/svg           - SVG download (LayoutService)
  GET  /api/layout/pdf           - PDF for printing (LayoutService)
  GET  /api/solutions            - placement catalog (SolutionsService)
  GET  /api/solutions/<n>        - candidates for n reflections
  POST /api/solutions/check      - demodulatability of a placement
"""

from flask import Blueprint, jsonify

from sfm import constants


def create_api_blueprint(registry):
    """
    Build the /api blueprint for a populated registry.

    Parameters
    ----------
    registry : DesignerRegistry

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for every registered service."""
        return jsonify(registry.list_all())

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the constants used by the engine."""
        return jsonify(constants.as_dict())

    for service in registry.all():
        service.register_routes(api)

    return api
