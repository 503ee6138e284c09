"""
Abstract scene graph produced by the layout engine.

A Scene is a flat, ordered tuple of SceneElements plus the canvas size.
Order is paint order: earlier elements are drawn underneath later ones.
Coordinates are in canvas units with the origin at the top-left corner
and y pointing down (SVG convention).

Element kinds and their anchor (x, y):
    coupler, collimator,
    retroreflector, inline_reflector   centre of the component
    fibre                              start point; `points` holds the
                                       Bezier controls and end point
                                       (or just the end point if straight)
    beam, motion                       start point; `points` holds the end
    label                              text anchor (middle, baseline)
"""

KIND_COUPLER = "coupler"
KIND_COLLIMATOR = "collimator"
KIND_RETROREFLECTOR = "retroreflector"
KIND_INLINE_REFLECTOR = "inline_reflector"
KIND_FIBRE = "fibre"
KIND_BEAM = "beam"
KIND_MOTION = "motion"
KIND_LABEL = "label"

KINDS = (
    KIND_COUPLER,
    KIND_COLLIMATOR,
    KIND_RETROREFLECTOR,
    KIND_INLINE_REFLECTOR,
    KIND_FIBRE,
    KIND_BEAM,
    KIND_MOTION,
    KIND_LABEL,
)

STYLE_OUTLINE = "outline"
STYLE_FILLED = "filled"
STYLE_FIBRE = "fibre"
STYLE_BEAM = "beam"
STYLE_MOTION = "motion"
STYLE_TEXT = "text"
STYLE_AXIS_TEXT = "axis_text"


class SceneElement:
    """
    One positioned geometric primitive.

    Parameters
    ----------
    kind : str
        One of KINDS.
    x, y : float
        Anchor coordinates (see module docstring).
    width, height : float, optional
        Component extents. Zero for curves and labels.
    points : sequence of (float, float), optional
        Additional points for fibres, beams and motion arrows.
    style : str, optional
        Style tag resolved by the renderer.
    text : str, optional
        Label text.
    font_size : float, optional
        Label font size in canvas units.
    ref : str, optional
        Semantic reference: reflection letter, axis name or
        measurement index.
    """

    def __init__(self, kind, x, y, width=0.0, height=0.0, points=None,
                 style=STYLE_OUTLINE, text=None, font_size=None, ref=None):
        if kind not in KINDS:
            raise ValueError("Unknown scene element kind: {!r}".format(kind))
        self.kind = kind
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.points = tuple((float(px), float(py)) for px, py in (points or ()))
        self.style = style
        self.text = text
        self.font_size = font_size
        self.ref = ref

    def to_dict(self):
        result = {
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "points": [list(p) for p in self.points],
            "style": self.style,
        }
        if self.text is not None:
            result["text"] = self.text
        if self.font_size is not None:
            result["font_size"] = self.font_size
        if self.ref is not None:
            result["ref"] = self.ref
        return result

    def __eq__(self, other):
        return isinstance(other, SceneElement) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return "SceneElement({}, x={:g}, y={:g}, ref={!r})".format(
            self.kind, self.x, self.y, self.ref)


class Scene:
    """
    Ordered scene elements and canvas extents.

    Parameters
    ----------
    elements : sequence of SceneElement
        In paint order.
    width, height : float
        Canvas size.
    """

    def __init__(self, elements, width, height):
        self.elements = tuple(elements)
        self.width = float(width)
        self.height = float(height)

    def __iter__(self):
        return iter(self.elements)

    def __len__(self):
        return len(self.elements)

    def __eq__(self, other):
        return (isinstance(other, Scene)
                and self.width == other.width
                and self.height == other.height
                and self.elements == other.elements)

    def of_kind(self, kind):
        """Elements of one kind, in paint order."""
        return [e for e in self.elements if e.kind == kind]

    def to_dict(self):
        return {
            "width": self.width,
            "height": self.height,
            "elements": [e.to_dict() for e in self.elements],
        }
