"""
LayoutEngine: deterministic placement of the interferometer schematic.

Given a resolved request (configuration, number of measurements,
reflection count, solution, axis separation, modulation parameters)
the engine produces:

    scene()       Scene of positioned SceneElements in paint order
    axis_table()  one AxisRow per interference axis, lexicographic

Canvas layout (x to the right, y down):

    lead fibre -> coupler -> connecting fibres -> collimators
               -> free-space beams -> retroreflectors

Collimator/retroreflector rows are spaced VERTICAL_GAP apart and
centred on the coupler. Retroreflector m sits (m + 1) standoff units
right of its collimator, so rows read as increasing axis lengths.

All drawing constants are fixed (not user tunable) and shared with the
test fixtures. Width grows with n through the connecting fibre and the
standoff units, height through the vertical gaps.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from sfm.axes import (
    axis_label,
    enumerate_axes,
    measurement_axis_indices,
    normalized_length,
    reflection_label,
)
from sfm.configuration import (
    Configuration,
    check_num_measurements,
    reflection_count as expected_reflection_count,
)
from sfm.errors import DegenerateInput, InvalidConfiguration
from sfm.model import beat_frequency_bandwidth, optical_path_difference
from sfm.scene import (
    Scene,
    SceneElement,
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
    STYLE_TEXT,
)

log = logging.getLogger(__name__)

# Generic lengths
PADDING = 50.0

# Lengths in the x direction
LEAD_FIBRE_W = 100.0
COUPLER_W = 80.0
CONNECTING_FIBRE_UNIT = 100.0   # connecting fibre width = unit * (n + 1)
COLLIMATOR_W = 80.0
STANDOFF_UNIT = 200.0
REFLECTOR_W = 50.0
MOTION_W = 0.8 * STANDOFF_UNIT
INLINE_W = 8.0
INLINE_OFFSET = 20.0            # gap between inline reflector and collimator
FIBRE_BEND_UNIT = 40.0          # control point offset = unit * n

# Lengths in the y direction
COUPLER_H = 20.0
COLLIMATOR_H = 30.0
REFLECTOR_H = 50.0
INLINE_H = 30.0
VERTICAL_GAP = 150.0
MOTION_GAP = 15.0               # retroreflector bottom -> motion arrow
LABEL_GAP = 8.0                 # component top -> label baseline

# Text
FONT_BASE = 14.0
FONT_STEP = 4.0

LENGTH_DECIMALS = 3


def canvas_size(num_measurements):
    """Canvas (width, height) for n measurements."""
    n = num_measurements
    width = (
        2 * PADDING
        + LEAD_FIBRE_W
        + connecting_fibre_width(n)
        + STANDOFF_UNIT * n
        # the right half of the reflector or motion arrow, whichever is larger
        + 0.5 * max(REFLECTOR_W, MOTION_W)
    )
    height = (
        2 * PADDING
        + max(COUPLER_H, COLLIMATOR_H, REFLECTOR_H)
        + (n - 1) * VERTICAL_GAP
    )
    return width, height


def connecting_fibre_width(num_measurements):
    return CONNECTING_FIBRE_UNIT * (num_measurements + 1)


def font_size(num_measurements):
    return FONT_BASE + FONT_STEP * num_measurements


def row_positions(num_measurements, center_y):
    """
    Vertical centres of the collimator rows, symmetric about center_y.

    A single row collapses to center_y.
    """
    gaps = num_measurements - 1
    if gaps == 0:
        return [center_y]
    span = gaps * VERTICAL_GAP
    return [center_y + (m / gaps - 0.5) * span for m in range(num_measurements)]


class AxisRow:
    """
    One row of the axis characteristics table.

    Parameters
    ----------
    i, j : int
        Reflection indices, i < j.
    normalized_length : int
        |s[i] - s[j]|.
    mechanical_length : float
        normalized_length * axis separation (m).
    bandwidth : float
        Beat-frequency bandwidth (Hz).
    selected : bool
        True if the axis carries a measurement.
    """

    def __init__(self, i, j, normalized_length, mechanical_length, bandwidth,
                 selected):
        self.i = i
        self.j = j
        self.label = axis_label(i, j)
        self.normalized_length = normalized_length
        self.mechanical_length = mechanical_length
        self.bandwidth = bandwidth
        self.selected = selected

    @property
    def opd(self):
        return optical_path_difference(self.mechanical_length)

    def to_dict(self):
        return {
            "i": self.i,
            "j": self.j,
            "label": self.label,
            "normalized_length": self.normalized_length,
            "mechanical_length": round(self.mechanical_length, LENGTH_DECIMALS),
            "opd": round(self.opd, LENGTH_DECIMALS),
            "bandwidth": round(self.bandwidth, 6),
            "selected": self.selected,
        }

    def __eq__(self, other):
        return isinstance(other, AxisRow) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return "AxisRow({}, {}, {!r})".format(self.i, self.j, self.label)


class LayoutEngine:
    """
    Places every element of the schematic for one resolved request.

    The inputs must be consistent: reflection_count must match the
    configuration and measurement count, and the solution must have
    exactly reflection_count positions.

    Parameters
    ----------
    configuration : Configuration or str
    num_measurements : int
    reflection_count : int
    solution : Solution or sequence of int
    axis_separation : float
        Mechanical separation unit (m).
    nu_a, f_m : float
        Modulation amplitude and frequency (Hz), for the axis table.
    """

    def __init__(self, configuration, num_measurements, reflection_count,
                 solution, axis_separation, nu_a, f_m):
        self.configuration = Configuration.parse(configuration)
        self.num_measurements = check_num_measurements(num_measurements)
        expected = expected_reflection_count(self.configuration, self.num_measurements)
        if reflection_count != expected:
            raise DegenerateInput(
                "Reflection count {} does not match {} with {} measurements "
                "(expected {})".format(reflection_count, self.configuration.name,
                                       self.num_measurements, expected))
        if len(solution) != reflection_count:
            raise DegenerateInput(
                "Solution has {} positions, expected {}".format(
                    len(solution), reflection_count))
        if axis_separation <= 0:
            raise DegenerateInput(
                "Axis separation must be > 0, got {}".format(axis_separation))
        self.reflection_count = reflection_count
        self.solution = solution
        self.axis_separation = float(axis_separation)
        self.nu_a = nu_a
        self.f_m = f_m
        self.measurement_axes = measurement_axis_indices(
            self.configuration, self.num_measurements)

    # -------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------
    def _geometry(self):
        n = self.num_measurements
        width, height = canvas_size(n)
        coupler_x = PADDING + LEAD_FIBRE_W
        coupler_y = 0.5 * height
        collimator_x = coupler_x + connecting_fibre_width(n)
        rows = row_positions(n, coupler_y)
        reflector_xs = [collimator_x + (m + 1) * STANDOFF_UNIT for m in range(n)]
        return {
            "width": width,
            "height": height,
            "coupler": (coupler_x, coupler_y),
            "collimator_x": collimator_x,
            "rows": rows,
            "reflector_xs": reflector_xs,
        }

    def _inline_positions(self, geom):
        """(x, y) of each inline reference reflector."""
        cx, cy = geom["coupler"]
        if self.configuration is Configuration.SHARED_REFERENCE:
            return [(PADDING + 0.5 * LEAD_FIBRE_W, cy)]
        if self.configuration is Configuration.UNIQUE_REFERENCES:
            x = geom["collimator_x"] - 0.5 * COLLIMATOR_W - INLINE_OFFSET
            return [(x, y) for y in geom["rows"]]
        raise InvalidConfiguration(
            "Unhandled configuration: {}".format(self.configuration))

    def reflections(self):
        """
        Assign reflection indices to the physical reflectors.

        Inline reflectors and retroreflectors are sorted by (x, y) for
        SHARED_REFERENCE and by (y, x) for UNIQUE_REFERENCES; the k-th
        reflector in that order is reflection k.

        Returns
        -------
        list of dict
            One entry per reflection, ordered by index, with keys
            index, label, kind, measurement, x, y.
        """
        geom = self._geometry()
        entries = []
        for m, (x, y) in enumerate(self._inline_positions(geom)):
            entries.append({"kind": KIND_INLINE_REFLECTOR, "measurement": m,
                            "x": x, "y": y})
        for m, (x, y) in enumerate(zip(geom["reflector_xs"], geom["rows"])):
            entries.append({"kind": KIND_RETROREFLECTOR, "measurement": m,
                            "x": x, "y": y})

        if self.configuration is Configuration.SHARED_REFERENCE:
            entries.sort(key=lambda e: (e["x"], e["y"]))
        else:
            entries.sort(key=lambda e: (e["y"], e["x"]))

        if len(entries) != self.reflection_count:
            raise DegenerateInput(
                "Layout placed {} reflectors for {} reflections".format(
                    len(entries), self.reflection_count))
        for index, entry in enumerate(entries):
            entry["index"] = index
            entry["label"] = reflection_label(index)
            entry["position"] = self.solution[index]
        return entries

    def measurement_lengths(self):
        """Mechanical length (m) of each measurement axis, by measurement."""
        return [normalized_length(self.solution, i, j) * self.axis_separation
                for i, j in self.measurement_axes]

    # -------------------------------------------------------------------
    # Scene
    # -------------------------------------------------------------------
    def scene(self):
        """
        Build the scene graph.

        Returns
        -------
        Scene
            Elements in paint order: fibres and beams, coupler,
            collimators, retroreflectors, inline reflectors, reflection
            labels, motion indicators with their labels.
        """
        n = self.num_measurements
        geom = self._geometry()
        coupler_x, coupler_y = geom["coupler"]
        collimator_x = geom["collimator_x"]
        rows = geom["rows"]
        reflector_xs = geom["reflector_xs"]
        text_size = font_size(n)
        reflections = self.reflections()
        labels_by_slot = {(r["kind"], r["measurement"]): r["label"]
                          for r in reflections}

        fibres = [
            SceneElement(
                KIND_FIBRE, PADDING, coupler_y,
                points=[(coupler_x - 0.5 * COUPLER_W, coupler_y)],
                style=STYLE_FIBRE, ref="lead"),
        ]
        bend = FIBRE_BEND_UNIT * n
        start_x = coupler_x + 0.5 * COUPLER_W
        end_x = collimator_x - 0.5 * COLLIMATOR_W
        for m, y in enumerate(rows):
            fibres.append(SceneElement(
                KIND_FIBRE, start_x, coupler_y,
                points=[(start_x + bend, coupler_y), (end_x - bend, y), (end_x, y)],
                style=STYLE_FIBRE, ref=str(m)))
        beams = [
            SceneElement(
                KIND_BEAM, collimator_x + 0.5 * COLLIMATOR_W, y,
                points=[(rx - 0.5 * REFLECTOR_W, y)],
                style=STYLE_BEAM, ref=str(m))
            for m, (rx, y) in enumerate(zip(reflector_xs, rows))
        ]

        coupler = SceneElement(
            KIND_COUPLER, coupler_x, coupler_y, COUPLER_W, COUPLER_H)
        collimators = [
            SceneElement(KIND_COLLIMATOR, collimator_x, y, COLLIMATOR_W,
                         COLLIMATOR_H, ref=str(m))
            for m, y in enumerate(rows)
        ]
        retroreflectors = [
            SceneElement(KIND_RETROREFLECTOR, rx, y, REFLECTOR_W, REFLECTOR_H,
                         ref=labels_by_slot[(KIND_RETROREFLECTOR, m)])
            for m, (rx, y) in enumerate(zip(reflector_xs, rows))
        ]
        inline_reflectors = [
            SceneElement(KIND_INLINE_REFLECTOR, x, y, INLINE_W, INLINE_H,
                         style=STYLE_FILLED,
                         ref=labels_by_slot[(KIND_INLINE_REFLECTOR, m)])
            for m, (x, y) in enumerate(self._inline_positions(geom))
        ]

        reflection_labels = []
        for r in reflections:
            component_h = REFLECTOR_H if r["kind"] == KIND_RETROREFLECTOR else INLINE_H
            reflection_labels.append(SceneElement(
                KIND_LABEL, r["x"], r["y"] - 0.5 * component_h - LABEL_GAP,
                style=STYLE_TEXT, text=r["label"], font_size=text_size,
                ref=r["label"]))

        motions = []
        lengths = self.measurement_lengths()
        for m, ((i, j), rx, y) in enumerate(zip(self.measurement_axes,
                                                reflector_xs, rows)):
            name = axis_label(i, j)
            arrow_y = y + 0.5 * REFLECTOR_H + MOTION_GAP
            motions.append(SceneElement(
                KIND_MOTION, rx - 0.5 * MOTION_W, arrow_y,
                points=[(rx + 0.5 * MOTION_W, arrow_y)],
                style=STYLE_MOTION, ref=name))
            motions.append(SceneElement(
                KIND_LABEL, rx, arrow_y + 0.8 * text_size,
                style=STYLE_AXIS_TEXT,
                text="{} = {:.{}f} m".format(name, lengths[m], LENGTH_DECIMALS),
                font_size=text_size, ref=name))

        elements = (fibres + beams + [coupler] + collimators + retroreflectors
                    + inline_reflectors + reflection_labels + motions)
        log.debug("Laid out %d elements for %s, n=%d",
                  len(elements), self.configuration.name, n)
        return Scene(elements, geom["width"], geom["height"])

    # -------------------------------------------------------------------
    # Axis characteristics
    # -------------------------------------------------------------------
    def axis_table(self):
        """
        Lengths and bandwidths of every axis, in lexicographic order.

        Returns
        -------
        list of AxisRow
        """
        selected = set(self.measurement_axes)
        rows = []
        for i, j in enumerate_axes(self.reflection_count):
            normalized = normalized_length(self.solution, i, j)
            mechanical = normalized * self.axis_separation
            bandwidth = beat_frequency_bandwidth(
                self.nu_a, self.f_m, optical_path_difference(mechanical))
            rows.append(AxisRow(i, j, normalized, mechanical, bandwidth,
                                (i, j) in selected))
        return rows
