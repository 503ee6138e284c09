"""
SceneRenderer: serialize a Scene to SVG or PDF.

The renderer is a thin adapter. It never computes positions; it only
turns each SceneElement into drawing primitives. Both output formats
share the outline helpers below so the SVG download and the print PDF
show the same drawing.

SVG output wraps every element in a <g> that records its anchor and
points (data-kind, data-x, data-y, data-points, data-ref) at
COORD_PRECISION decimals, so `parse_svg()` can recover the layout.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import io
from xml.etree import ElementTree as ET

import svgwrite
from matplotlib.figure import Figure
from matplotlib.patches import FancyArrowPatch, PathPatch, Polygon
from matplotlib.path import Path

from sfm.scene import (
    KIND_BEAM,
    KIND_COLLIMATOR,
    KIND_COUPLER,
    KIND_FIBRE,
    KIND_INLINE_REFLECTOR,
    KIND_LABEL,
    KIND_MOTION,
    KIND_RETROREFLECTOR,
    STYLE_AXIS_TEXT,
    STYLE_BEAM,
    STYLE_FIBRE,
    STYLE_FILLED,
    STYLE_MOTION,
    STYLE_OUTLINE,
    STYLE_TEXT,
)

SVG_FILENAME = "interferometer.svg"
PDF_FILENAME = "interferometer.pdf"
SVG_MIMETYPE = "image/svg+xml"
PDF_MIMETYPE = "application/pdf"

COORD_PRECISION = 3

COLLIMATOR_BODY = 0.6    # body length as a fraction of the collimator width
REFLECTOR_RIDGE = -0.2   # where the ridge meets the flat face, fraction of height
ARROW_HEAD = 10.0
ARROW_HALF_WIDTH = 5.0
PDF_DPI = 100.0

SVG_STYLES = {
    STYLE_OUTLINE: {"fill": "none", "stroke": "#000000", "stroke_width": 2,
                    "stroke_linecap": "round", "stroke_linejoin": "round"},
    STYLE_FILLED: {"fill": "#000000", "stroke": "#000000", "stroke_width": 1},
    STYLE_FIBRE: {"fill": "none", "stroke": "#e6a700", "stroke_width": 3,
                  "stroke_linecap": "round"},
    STYLE_BEAM: {"fill": "none", "stroke": "#d62728", "stroke_width": 2,
                 "stroke_dasharray": "8,6"},
    STYLE_MOTION: {"fill": "#1f77b4", "stroke": "#1f77b4", "stroke_width": 2},
    STYLE_TEXT: {"fill": "#000000", "font_family": "sans-serif",
                 "text_anchor": "middle"},
    STYLE_AXIS_TEXT: {"fill": "#1f77b4", "font_family": "sans-serif",
                      "text_anchor": "middle"},
}

# matplotlib equivalents: (edgecolor, facecolor, linewidth, linestyle)
MPL_STYLES = {
    STYLE_OUTLINE: ("#000000", "none", 1.5, "-"),
    STYLE_FILLED: ("#000000", "#000000", 0.75, "-"),
    STYLE_FIBRE: ("#e6a700", "none", 2.25, "-"),
    STYLE_BEAM: ("#d62728", "none", 1.5, (0, (4, 3))),
    STYLE_MOTION: ("#1f77b4", "#1f77b4", 1.5, "-"),
    STYLE_TEXT: ("#000000", "#000000", 0.0, "-"),
    STYLE_AXIS_TEXT: ("#1f77b4", "#1f77b4", 0.0, "-"),
}


def fmt(value):
    """Canonical coordinate text: rounded to COORD_PRECISION decimals."""
    return repr(round(float(value), COORD_PRECISION))


# -----------------------------------------------------------------------
# Outlines shared by both renderers
# -----------------------------------------------------------------------
def coupler_outline(e):
    x0, x1 = e.x - 0.5 * e.width, e.x + 0.5 * e.width
    y0, y1 = e.y - 0.5 * e.height, e.y + 0.5 * e.height
    return [(x0, y1), (x0, y0), (x1, y0), (x1, y1)]


def collimator_outline(e):
    """Tapered lens end on the left, cylindrical body on the right."""
    body = COLLIMATOR_BODY * e.width
    x0 = e.x - 0.5 * e.width
    x_body = x0 + e.width - body
    x1 = e.x + 0.5 * e.width
    return [(x0, e.y), (x_body, e.y - 0.5 * e.height), (x1, e.y - 0.5 * e.height),
            (x1, e.y + 0.5 * e.height), (x_body, e.y + 0.5 * e.height)]


def retroreflector_outline(e):
    """Triangle with its flat face towards the beam and apex away."""
    apex = (e.x + 0.5 * e.width, e.y)
    return [apex,
            (e.x - 0.5 * e.width, e.y - 0.5 * e.height),
            (e.x - 0.5 * e.width, e.y + 0.5 * e.height)]


def retroreflector_ridge(e):
    apex = (e.x + 0.5 * e.width, e.y)
    return [apex, (e.x - 0.5 * e.width, e.y + REFLECTOR_RIDGE * e.height)]


def inline_outline(e):
    return coupler_outline(e)


def arrow_heads(e):
    """Two triangles for a bidirectional horizontal arrow from (x, y) to points[0]."""
    (x1, y1) = e.points[0]
    left = [(e.x, e.y), (e.x + ARROW_HEAD, e.y - ARROW_HALF_WIDTH),
            (e.x + ARROW_HEAD, e.y + ARROW_HALF_WIDTH)]
    right = [(x1, y1), (x1 - ARROW_HEAD, y1 - ARROW_HALF_WIDTH),
             (x1 - ARROW_HEAD, y1 + ARROW_HALF_WIDTH)]
    return left, right


def _polygon_path(vertices):
    return _polyline_path(vertices) + " Z"


def _polyline_path(vertices):
    (x0, y0), rest = vertices[0], vertices[1:]
    return "M{} {}".format(fmt(x0), fmt(y0)) + "".join(
        " L{} {}".format(fmt(x), fmt(y)) for x, y in rest)


def _fibre_path(e):
    """Cubic Bezier when the element carries two controls, else a polyline."""
    if len(e.points) == 3:
        return "M{} {} C".format(fmt(e.x), fmt(e.y)) + " ".join(
            "{} {}".format(fmt(x), fmt(y)) for x, y in e.points)
    return _polyline_path([(e.x, e.y)] + list(e.points))


# -----------------------------------------------------------------------
# SVG
# -----------------------------------------------------------------------
def _svg_shape(dwg, e):
    style = SVG_STYLES[e.style]
    if e.kind == KIND_COUPLER:
        return [dwg.path(d=_polygon_path(coupler_outline(e)), **style)]
    if e.kind == KIND_COLLIMATOR:
        return [dwg.path(d=_polygon_path(collimator_outline(e)), **style)]
    if e.kind == KIND_RETROREFLECTOR:
        return [dwg.path(d=_polygon_path(retroreflector_outline(e)), **style),
                dwg.path(d=_polyline_path(retroreflector_ridge(e)), **style)]
    if e.kind == KIND_INLINE_REFLECTOR:
        return [dwg.path(d=_polygon_path(inline_outline(e)), **style)]
    if e.kind in (KIND_FIBRE, KIND_BEAM):
        return [dwg.path(d=_fibre_path(e), **style)]
    if e.kind == KIND_MOTION:
        shaft = dwg.path(d=_fibre_path(e), **dict(style, fill="none"))
        heads = [dwg.path(d=_polygon_path(h), **style) for h in arrow_heads(e)]
        return [shaft] + heads
    if e.kind == KIND_LABEL:
        return [dwg.text(e.text, insert=(fmt(e.x), fmt(e.y)),
                         font_size=fmt(e.font_size), **style)]
    raise ValueError("Cannot render element kind {!r}".format(e.kind))


def render_svg(scene, title="SFM interferometer layout", standalone=True):
    """
    Serialize a scene to an SVG document.

    Parameters
    ----------
    scene : Scene
    title : str, optional
        Document title.
    standalone : bool, optional
        Include the XML declaration. False gives a fragment suitable for
        inlining in HTML.

    Returns
    -------
    str
        SVG text. Identical scenes give identical text.
    """
    width, height = fmt(scene.width), fmt(scene.height)
    dwg = svgwrite.Drawing(
        SVG_FILENAME, size=(width, height),
        viewBox="0 0 {} {}".format(width, height), debug=False)
    dwg.set_desc(title=title)
    for e in scene:
        group = dwg.g(
            class_=e.kind,
            data_kind=e.kind,
            data_x=fmt(e.x),
            data_y=fmt(e.y),
            data_points=" ".join("{},{}".format(fmt(x), fmt(y)) for x, y in e.points),
            data_ref=e.ref or "",
        )
        for shape in _svg_shape(dwg, e):
            group.add(shape)
        dwg.add(group)
    if not standalone:
        return dwg.tostring()
    buf = io.StringIO()
    dwg.write(buf)
    return buf.getvalue()


def parse_svg(svg_text):
    """
    Recover element anchors from an SVG produced by render_svg().

    Returns
    -------
    list of dict
        One dict per element in document order with keys kind, x, y,
        points (list of (x, y)), ref and text (labels only).
    """
    if isinstance(svg_text, str):
        svg_text = svg_text.encode("utf-8")
    root = ET.fromstring(svg_text)
    elements = []
    for node in root.iter():
        kind = node.get("data-kind")
        if kind is None:
            continue
        points = []
        for pair in node.get("data-points", "").split():
            px, py = pair.split(",")
            points.append((float(px), float(py)))
        text = None
        for child in node.iter():
            if child.tag.endswith("text"):
                text = child.text
        elements.append({
            "kind": kind,
            "x": float(node.get("data-x")),
            "y": float(node.get("data-y")),
            "points": points,
            "ref": node.get("data-ref"),
            "text": text,
        })
    return elements


# -----------------------------------------------------------------------
# PDF (print)
# -----------------------------------------------------------------------
def _mpl_patch(vertices, style, closed=True):
    edge, face, lw, ls = MPL_STYLES[style]
    return Polygon(vertices, closed=closed, edgecolor=edge, facecolor=face,
                   linewidth=lw, linestyle=ls, joinstyle="round")


def _draw_element(ax, e):
    edge, face, lw, ls = MPL_STYLES[e.style]
    if e.kind == KIND_COUPLER:
        ax.add_patch(_mpl_patch(coupler_outline(e), e.style))
    elif e.kind == KIND_COLLIMATOR:
        ax.add_patch(_mpl_patch(collimator_outline(e), e.style))
    elif e.kind == KIND_RETROREFLECTOR:
        ax.add_patch(_mpl_patch(retroreflector_outline(e), e.style))
        ax.add_patch(_mpl_patch(retroreflector_ridge(e), e.style, closed=False))
    elif e.kind == KIND_INLINE_REFLECTOR:
        ax.add_patch(_mpl_patch(inline_outline(e), e.style))
    elif e.kind == KIND_FIBRE:
        vertices = [(e.x, e.y)] + list(e.points)
        if len(e.points) == 3:
            codes = [Path.MOVETO, Path.CURVE4, Path.CURVE4, Path.CURVE4]
        else:
            codes = [Path.MOVETO] + [Path.LINETO] * len(e.points)
        ax.add_patch(PathPatch(Path(vertices, codes), edgecolor=edge,
                               facecolor=face, linewidth=lw, linestyle=ls))
    elif e.kind == KIND_BEAM:
        xs = [e.x] + [p[0] for p in e.points]
        ys = [e.y] + [p[1] for p in e.points]
        ax.plot(xs, ys, color=edge, linewidth=lw, linestyle=ls)
    elif e.kind == KIND_MOTION:
        ax.add_patch(FancyArrowPatch((e.x, e.y), e.points[0], arrowstyle="<|-|>",
                                     mutation_scale=ARROW_HEAD, color=edge,
                                     linewidth=lw))
    elif e.kind == KIND_LABEL:
        # canvas units -> points at PDF_DPI
        ax.text(e.x, e.y, e.text, ha="center", va="baseline", color=edge,
                fontsize=e.font_size * 72.0 / PDF_DPI)
    else:
        raise ValueError("Cannot render element kind {!r}".format(e.kind))


def render_figure(scene):
    """Draw a scene on a new matplotlib Figure (1 canvas unit = 1 pixel)."""
    fig = Figure(figsize=(scene.width / PDF_DPI, scene.height / PDF_DPI), dpi=PDF_DPI)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_xlim(0.0, scene.width)
    ax.set_ylim(scene.height, 0.0)
    ax.set_aspect("equal")
    ax.axis("off")
    for e in scene:
        _draw_element(ax, e)
    return fig


def render_pdf(scene, title="SFM interferometer layout"):
    """
    Render a scene to print-ready PDF bytes.

    The creation date is left out of the metadata so identical scenes
    give identical files.
    """
    fig = render_figure(scene)
    buf = io.BytesIO()
    fig.savefig(buf, format="pdf",
                metadata={"Title": title, "CreationDate": None})
    return buf.getvalue()
