"""
Solutions Catalog Service.

Read-only access to the precomputed placement catalog, plus a checker
for arbitrary placements.

Endpoints:
    GET  /api/solutions          whole catalog keyed by reflection count
    GET  /api/solutions/<n>      candidate list for n reflections (404 if absent)
    POST /api/solutions/check    {"positions": [...]} -> OPDs + demodulatability
"""

import logging

from flask import jsonify, request

from data.solutions import get_catalog, get_solutions, supported_reflection_counts
from sfm.errors import DegenerateInput, UnsupportedReflectionCount
from sfm.services import DesignerService
from sfm.solver import (
    format_positions,
    is_demodulatable,
    is_valid_placement,
    normalized_opds,
)

log = logging.getLogger(__name__)


class SolutionsService(DesignerService):

    id = "solutions"
    name = "Solution Catalog"
    description = "Precomputed mirror placements with unique pairwise OPDs"
    route = "/solutions"

    def validate(self, config):
        positions = config.get("positions") if isinstance(config, dict) else None
        if not isinstance(positions, list) or not positions:
            raise DegenerateInput("positions must be a non-empty list of integers")
        for p in positions:
            if isinstance(p, bool) or not isinstance(p, int):
                raise DegenerateInput(
                    "positions must be integers, got {!r}".format(p))
        if not is_valid_placement(positions):
            raise DegenerateInput(
                "positions must be at least two distinct non-negative integers")
        return {"positions": sorted(positions)}

    def compute(self, config):
        positions = config["positions"]
        return {
            "positions": positions,
            "name": format_positions(positions),
            "opds": normalized_opds(positions),
            "demodulatable": is_demodulatable(positions),
        }

    def register_routes(self, bp):
        """Mount catalog endpoints."""
        service = self

        @bp.route("/solutions")
        def solutions_catalog():
            return jsonify({
                "supported": supported_reflection_counts(),
                "catalog": get_catalog(),
            })

        @bp.route("/solutions/<int:reflection_count>")
        def solutions_for(reflection_count):
            try:
                solutions = get_solutions(reflection_count)
            except UnsupportedReflectionCount as e:
                return jsonify({"error": str(e)}), 404
            return jsonify({
                "reflection_count": reflection_count,
                "solutions": [s.to_dict() for s in solutions],
            })

        @bp.route("/solutions/check", methods=["POST"])
        def solutions_check():
            try:
                config = service.validate(request.get_json(silent=True))
            except ValueError as e:
                log.warning("Rejected placement check: %s", e)
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute(config))
