"""
Interferometer Layout Service.

Resolves user input into a LayoutRequest, runs the DesignEngine, and
exposes the result as JSON, as an SVG download and as a print PDF.

Input keys (JSON body or query string):
    configuration      SHARED_REFERENCE | UNIQUE_REFERENCES
    num_measurements   int >= 1
    nu_a               optical modulation amplitude (Hz)
    f_m                modulation frequency (Hz)
    solution_index     index into the catalog for the reflection count
    axis_separation    optional override (m); derived from nu_a if absent
    max_stroke         optional override (m); derived if absent

The page form uses engineering units (GHz / kHz / mm); `form_config()`
converts them to the SI keys above.

Endpoints:
    POST     /api/layout       DesignResult JSON
    GET|POST /api/layout/svg   interferometer.svg attachment
    GET|POST /api/layout/pdf   interferometer.pdf (print)
"""

import io
import logging

from flask import jsonify, request, send_file

from sfm.configuration import Configuration
from sfm.constants import GHZ_TO_HZ, KHZ_TO_HZ, M_TO_MM
from sfm.engine import DesignEngine, LayoutRequest
from sfm.errors import DegenerateInput
from sfm.model import recommended_axis_separation, recommended_max_stroke
from sfm.overrides import resolve
from sfm.render import (
    PDF_FILENAME,
    PDF_MIMETYPE,
    SVG_FILENAME,
    SVG_MIMETYPE,
    render_pdf,
    render_svg,
)
from sfm.services import DesignerService

log = logging.getLogger(__name__)

DEFAULTS = {
    "configuration": Configuration.SHARED_REFERENCE.name,
    "num_measurements": 1,
    "nu_a": 1.0e9,
    "f_m": 10.0e3,
    "solution_index": 0,
}


def _int_field(config, key):
    value = config.get(key, DEFAULTS[key])
    if isinstance(value, bool):
        raise DegenerateInput("{} must be an integer, got {!r}".format(key, value))
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise DegenerateInput("{} must be an integer, got {!r}".format(key, value))


def _float_field(config, key):
    value = config.get(key, DEFAULTS.get(key))
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise DegenerateInput("{} must be a number, got {!r}".format(key, value))


class LayoutForm:
    """
    A validated layout request together with the provenance of the
    values the user may override.

    Parameters
    ----------
    request : LayoutRequest
    axis_separation : Derived or UserOverridden
    max_stroke : Derived or UserOverridden
    """

    def __init__(self, request, axis_separation, max_stroke):
        self.request = request
        self.axis_separation = axis_separation
        self.max_stroke = max_stroke

    def overrides(self):
        return {
            "axis_separation": self.axis_separation.to_dict(),
            "max_stroke": self.max_stroke.to_dict(),
        }


class LayoutService(DesignerService):

    id = "layout"
    name = "Interferometer Layout"
    description = "Optical layout, axis lengths and beat-frequency bands"
    route = "/"

    def __init__(self, engine=None):
        self.engine = engine or DesignEngine()

    def validate(self, config):
        """
        Resolve raw input into a LayoutForm.

        Derived values (axis separation, max stroke) are computed from
        the modulation parameters unless the user supplied an override.
        """
        if not isinstance(config, dict):
            raise DegenerateInput("Layout input must be an object")
        configuration = Configuration.parse(
            config.get("configuration", DEFAULTS["configuration"]))
        num_measurements = _int_field(config, "num_measurements")
        solution_index = _int_field(config, "solution_index")
        nu_a = _float_field(config, "nu_a")
        f_m = _float_field(config, "f_m")
        if nu_a is None or f_m is None:
            raise DegenerateInput("nu_a and f_m are required")

        recommended = recommended_axis_separation(nu_a)
        separation = resolve(recommended, _float_field(config, "axis_separation"))
        if separation.value <= 0:
            raise DegenerateInput(
                "Axis separation must be > 0, got {}".format(separation.value))
        stroke = resolve(
            recommended_max_stroke(separation.value, recommended),
            _float_field(config, "max_stroke"))

        layout_request = LayoutRequest(
            configuration=configuration,
            num_measurements=num_measurements,
            axis_separation=separation.value,
            solution_index=solution_index,
            nu_a=nu_a,
            f_m=f_m,
            max_stroke=stroke.value if stroke.is_overridden else None,
        )
        return LayoutForm(layout_request, separation, stroke)

    def design(self, form):
        """Run the engine for a validated LayoutForm -> DesignResult."""
        return self.engine.run(form.request)

    def compute(self, form):
        """Run the engine and return the JSON response body."""
        result = self.design(form).to_dict()
        result["overrides"] = form.overrides()
        return result

    @staticmethod
    def form_config(args):
        """
        Convert page form fields (GHz, kHz, mm) into service input keys.

        Empty override fields mean "use the derived value".
        """
        config = {}
        for key in ("configuration", "num_measurements", "solution_index"):
            if args.get(key):
                config[key] = args.get(key)
        scaled = (
            ("nu_a_ghz", "nu_a", GHZ_TO_HZ),
            ("f_m_khz", "f_m", KHZ_TO_HZ),
            ("axis_separation", "axis_separation", 1.0),
            ("max_stroke_mm", "max_stroke", 1.0 / M_TO_MM),
        )
        for form_key, key, factor in scaled:
            raw = args.get(form_key)
            if raw is None or str(raw).strip() == "":
                continue
            try:
                config[key] = float(raw) * factor
            except ValueError:
                raise DegenerateInput(
                    "{} must be a number, got {!r}".format(form_key, raw))
        return config

    def register_routes(self, bp):
        """Mount layout endpoints."""
        service = self

        def _input():
            if request.method == "POST":
                data = request.get_json(silent=True)
                if data is None:
                    raise DegenerateInput("Request body must be JSON")
                return data
            return service.form_config(request.args)

        @bp.route("/layout", methods=["POST"])
        def layout():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                form = service.validate(data)
                return jsonify(service.compute(form))
            except ValueError as e:
                log.warning("Rejected layout request: %s", e)
                return jsonify({"error": str(e)}), 400

        @bp.route("/layout/svg", methods=["GET", "POST"])
        def layout_svg():
            try:
                result = service.design(service.validate(_input()))
            except ValueError as e:
                log.warning("Rejected SVG export: %s", e)
                return jsonify({"error": str(e)}), 400
            svg = render_svg(result.scene)
            return send_file(io.BytesIO(svg.encode("utf-8")), mimetype=SVG_MIMETYPE,
                             as_attachment=True, download_name=SVG_FILENAME)

        @bp.route("/layout/pdf", methods=["GET", "POST"])
        def layout_pdf():
            try:
                result = service.design(service.validate(_input()))
            except ValueError as e:
                log.warning("Rejected PDF export: %s", e)
                return jsonify({"error": str(e)}), 400
            as_attachment = request.args.get("download", "1") != "0"
            return send_file(io.BytesIO(render_pdf(result.scene)),
                             mimetype=PDF_MIMETYPE, as_attachment=as_attachment,
                             download_name=PDF_FILENAME)
