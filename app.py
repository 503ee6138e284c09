"""
SFM Designer - Sinusoidal Frequency Modulation interferometer layout tool.
Flask application factory.

Serves the calculator page (Jinja2 templates) and the REST API for
layout, export and catalog computations via registered DesignerService
instances.

Usage:
    python app.py              # Development server on http://localhost:5000
    flask run                  # Same, via Flask CLI
"""

__version__ = "0.1.0"

import logging
import os

from flask import Flask, abort, render_template, request, send_from_directory, url_for

from data.solutions import get_solutions, max_reflection_count, supported_reflection_counts
from sfm.configuration import Configuration, max_measurements, reflection_count
from sfm.constants import HZ_TO_GHZ, HZ_TO_KHZ, M_TO_MM
from sfm.render import render_svg
from sfm.services import DesignerRegistry
from sfm.services.layout import LayoutService
from sfm.services.solutions import SolutionsService

log = logging.getLogger(__name__)


def create_registry():
    """Build and populate the service registry."""
    registry = DesignerRegistry()
    registry.register(LayoutService())
    registry.register(SolutionsService())
    return registry


def measurement_options(configuration):
    """Measurement counts the catalog can serve for a configuration."""
    top = max_measurements(configuration, max_reflection_count())
    return [n for n in range(1, top + 1)
            if reflection_count(configuration, n) in supported_reflection_counts()]


def _page_state(args, service):
    """
    Resolve the calculator form into template context.

    A bad value never raises here; the message is shown on the page next
    to the form the user typed it into.
    """
    state = {
        "form": dict(args.items()),
        "configurations": list(Configuration),
        "error": None,
        "result": None,
        "svg": None,
        "solutions": [],
        "measurements": [],
        "overrides": None,
    }
    try:
        config = service.form_config(args)
        configuration = Configuration.parse(
            config.get("configuration", Configuration.SHARED_REFERENCE.name))
        state["measurements"] = measurement_options(configuration)
        form = service.validate(config)
        state["solutions"] = get_solutions(form.request.reflection_count)
        result = service.design(form)
    except ValueError as e:
        log.info("Calculator input rejected: %s", e)
        state["error"] = str(e)
        if not state["measurements"]:
            state["measurements"] = measurement_options(Configuration.SHARED_REFERENCE)
        return state

    req = form.request
    state["form"].update({
        "configuration": req.configuration.name,
        "num_measurements": str(req.num_measurements),
        "solution_index": str(req.solution_index),
        "nu_a_ghz": "{:g}".format(req.nu_a * HZ_TO_GHZ),
        "f_m_khz": "{:g}".format(req.f_m * HZ_TO_KHZ),
    })
    state["result"] = result
    state["overrides"] = form
    state["svg"] = render_svg(result.scene, standalone=False)
    return state


def create_app():
    """Application factory for the SFM designer Flask app."""
    app = Flask(
        __name__,
        static_folder="static",
        template_folder="templates",
    )

    # Make app version available to all templates
    @app.context_processor
    def inject_version():
        return {"version": __version__}

    registry = create_registry()

    # Create and register API blueprint (shared + service-owned routes)
    from api.routes import create_api_blueprint
    api = create_api_blueprint(registry)
    app.register_blueprint(api)

    @app.route("/")
    def index():
        layout = registry.get("layout")
        state = _page_state(request.args, layout)
        query = {k: v for k, v in request.args.items() if v != ""}
        return render_template(
            "index.html",
            active_page="index",
            services=registry.list_all(),
            svg_url=url_for("api.layout_svg", **query),
            pdf_url=url_for("api.layout_pdf", **dict(query, download="0")),
            m_to_mm=M_TO_MM,
            **state
        )

    # Notes on the model, rendered from docs/
    @app.route("/docs")
    def docs():
        with open(os.path.join(app.root_path, "docs", "sfm.md"), encoding="utf-8") as f:
            text = f.read()
        return render_template("docs.html", active_page="docs", text=text)

    # Document viewer: serve raw markdown from docs/ folder
    @app.route("/api/doc/<path:name>")
    def serve_doc(name):
        docs_dir = os.path.join(app.root_path, "docs")
        if not name.endswith(".md"):
            name += ".md"
        filepath = os.path.join(docs_dir, name)
        if not os.path.isfile(filepath):
            abort(404)
        return send_from_directory(docs_dir, name, mimetype="text/markdown")

    @app.errorhandler(404)
    def not_found(e):
        return render_template("not_found.html", active_page=None), 404

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app = create_app()
    app.run(debug=True, host="127.0.0.1", port=5000)
