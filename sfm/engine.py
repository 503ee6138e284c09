"""
DesignEngine: the single-shot SFM design pipeline.

    LayoutRequest
      -> PhysicalModel       reflection count, recommended separation
      -> SolutionCatalog     candidate solutions, selected solution
      -> LayoutEngine        scene graph + axis characteristics table
      -> advisories          non-fatal warnings
      -> DesignResult

The pipeline is pure: no I/O, no shared state, and the same request
always yields an identical result. Every invariant of the request is
checked up front and violations raise a DesignError before any layout
is attempted.

This module provides:
    LayoutRequest  - Immutable, validated request
    DesignResult   - Complete output with serialization
    DesignEngine   - Runs the pipeline

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

from data.solutions import get_solution, get_solutions
from sfm.configuration import Configuration, check_num_measurements, reflection_count
from sfm.errors import DegenerateInput, OutOfRangeSolution
from sfm.layout import LayoutEngine
from sfm.model import recommended_axis_separation, recommended_max_stroke

log = logging.getLogger(__name__)


def _positive(value, name):
    if isinstance(value, bool):
        raise DegenerateInput("{} must be a number, got {!r}".format(name, value))
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise DegenerateInput("{} must be a number, got {!r}".format(name, value))
    if not math.isfinite(value) or value <= 0:
        raise DegenerateInput("{} must be > 0, got {}".format(name, value))
    return value


class LayoutRequest:
    """
    Resolved parameters of one design computation.

    Parameters
    ----------
    configuration : Configuration or str
        SHARED_REFERENCE or UNIQUE_REFERENCES.
    num_measurements : int
        Number of simultaneous measurements (>= 1).
    axis_separation : float
        Mechanical separation unit between axis lengths (m).
    solution_index : int
        Index into the catalog list for the derived reflection count.
    nu_a : float
        Optical frequency modulation amplitude (Hz).
    f_m : float
        Modulation frequency (Hz).
    max_stroke : float, optional
        Mechanical stroke the user intends to use (m). Defaults to the
        recommended maximum stroke.

    Raises
    ------
    InvalidConfiguration, DegenerateInput
        If any field violates its invariant.
    """

    __slots__ = ("configuration", "num_measurements", "axis_separation",
                 "solution_index", "nu_a", "f_m", "max_stroke")

    def __init__(self, configuration, num_measurements, axis_separation,
                 solution_index, nu_a, f_m, max_stroke=None):
        set_ = object.__setattr__
        set_(self, "configuration", Configuration.parse(configuration))
        set_(self, "num_measurements", check_num_measurements(num_measurements))
        set_(self, "axis_separation", _positive(axis_separation, "Axis separation"))
        if (isinstance(solution_index, bool) or not isinstance(solution_index, int)
                or solution_index < 0):
            raise OutOfRangeSolution(
                "Solution index must be a non-negative integer, got {!r}".format(
                    solution_index))
        set_(self, "solution_index", solution_index)
        set_(self, "nu_a", _positive(nu_a, "Modulation amplitude nuA"))
        set_(self, "f_m", _positive(f_m, "Modulation frequency fM"))
        if max_stroke is not None:
            max_stroke = _positive(max_stroke, "Max stroke")
        set_(self, "max_stroke", max_stroke)

    def __setattr__(self, name, value):
        raise AttributeError("LayoutRequest is immutable")

    @property
    def reflection_count(self):
        return reflection_count(self.configuration, self.num_measurements)

    def __eq__(self, other):
        return isinstance(other, LayoutRequest) and self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(tuple(sorted(self.to_dict().items(), key=lambda kv: kv[0])))

    def __repr__(self):
        return "LayoutRequest({})".format(
            ", ".join("{}={!r}".format(k, v) for k, v in self.to_dict().items()))

    def to_dict(self):
        return {
            "configuration": self.configuration.name,
            "num_measurements": self.num_measurements,
            "axis_separation": self.axis_separation,
            "solution_index": self.solution_index,
            "nu_a": self.nu_a,
            "f_m": self.f_m,
            "max_stroke": self.max_stroke,
        }


class DesignResult:
    """
    Complete pipeline output.

    Parameters
    ----------
    request : LayoutRequest
    solution : Solution
        The selected solution.
    candidates : list of Solution
        Every catalogued solution for the reflection count.
    recommended_separation : float
        Recommended axis separation for the request's nuA (m).
    recommended_stroke : float
        Recommended maximum stroke (m).
    max_stroke : float
        Stroke in use: the request's, or the recommended one.
    scene : Scene
    axis_table : list of AxisRow
    reflections : list of dict
        Reflection index -> physical reflector assignment.
    warnings : list of str
        Advisory messages. A non-empty list does not invalidate the result.
    """

    def __init__(self, request, solution, candidates, recommended_separation,
                 recommended_stroke, max_stroke, scene, axis_table, reflections,
                 warnings):
        self.request = request
        self.solution = solution
        self.candidates = candidates
        self.recommended_separation = recommended_separation
        self.recommended_stroke = recommended_stroke
        self.max_stroke = max_stroke
        self.scene = scene
        self.axis_table = axis_table
        self.reflections = reflections
        self.warnings = warnings

    @property
    def reflection_count(self):
        return len(self.solution)

    @property
    def selected_axes(self):
        return [row for row in self.axis_table if row.selected]

    def to_dict(self):
        """Serialize for the JSON API."""
        return {
            "request": self.request.to_dict(),
            "reflection_count": self.reflection_count,
            "solution": self.solution.to_dict(),
            "solutions": [s.to_dict() for s in self.candidates],
            "recommended_axis_separation": round(self.recommended_separation, 6),
            "recommended_max_stroke": round(self.recommended_stroke, 6),
            "max_stroke": round(self.max_stroke, 6),
            "axis_table": [row.to_dict() for row in self.axis_table],
            "reflections": [
                {k: r[k] for k in ("index", "label", "kind", "measurement", "position")}
                for r in self.reflections
            ],
            "warnings": list(self.warnings),
            "scene": self.scene.to_dict(),
        }


class DesignEngine:
    """
    Runs the design pipeline for one LayoutRequest.

    The engine holds no state between calls; one instance may serve any
    number of requests.
    """

    def run(self, request):
        """
        Compute the layout, axis table and advisories.

        Parameters
        ----------
        request : LayoutRequest

        Returns
        -------
        DesignResult

        Raises
        ------
        UnsupportedReflectionCount
            If the catalog does not cover the derived reflection count.
        OutOfRangeSolution
            If request.solution_index is not in the catalog list.
        """
        n_reflections = request.reflection_count
        candidates = get_solutions(n_reflections)
        solution = get_solution(n_reflections, request.solution_index)
        log.debug("Request %r -> %d reflections, solution %s",
                  request, n_reflections, solution.name)

        recommended_sep = recommended_axis_separation(request.nu_a)
        recommended_stroke = recommended_max_stroke(
            request.axis_separation, recommended_sep)
        max_stroke = request.max_stroke if request.max_stroke is not None \
            else recommended_stroke

        layout = LayoutEngine(
            request.configuration, request.num_measurements, n_reflections,
            solution, request.axis_separation, request.nu_a, request.f_m)
        scene = layout.scene()
        table = layout.axis_table()

        warnings = advisories(request, solution, recommended_sep,
                              recommended_stroke, max_stroke)
        for message in warnings:
            log.info("Advisory: %s", message)

        return DesignResult(
            request=request,
            solution=solution,
            candidates=candidates,
            recommended_separation=recommended_sep,
            recommended_stroke=recommended_stroke,
            max_stroke=max_stroke,
            scene=scene,
            axis_table=table,
            reflections=layout.reflections(),
            warnings=warnings,
        )


def advisories(request, solution, recommended_separation, recommended_stroke,
               max_stroke):
    """
    Non-fatal warnings for a valid request.

    Returns
    -------
    list of str
        Empty when the design is within all recommendations.
    """
    warnings = []
    if request.axis_separation < recommended_separation:
        warnings.append(
            "Axis separation {:.3f} m is below the recommended {:.3f} m: "
            "neighbouring beat-frequency bands may overlap (crosstalk).".format(
                request.axis_separation, recommended_separation))
    if max_stroke > recommended_stroke:
        warnings.append(
            "Max stroke {:.4f} m exceeds the recommended {:.4f} m: a target "
            "moving over the full stroke can leave its frequency band.".format(
                max_stroke, recommended_stroke))
    if not solution.is_demodulatable:
        warnings.append(
            "Solution {} has repeated axis lengths and cannot be fully "
            "demodulated.".format(solution.name))
    return warnings
