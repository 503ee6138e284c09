"""
Tests for the DesignEngine pipeline: request validation, advisories
and the serialized result.
"""

import pytest

from sfm.configuration import Configuration
from sfm.engine import DesignEngine, LayoutRequest, advisories
from sfm.errors import (
    DegenerateInput,
    InvalidConfiguration,
    OutOfRangeSolution,
    UnsupportedReflectionCount,
)
from sfm.model import recommended_axis_separation, recommended_max_stroke


def request_for(**overrides):
    params = dict(
        configuration=Configuration.SHARED_REFERENCE,
        num_measurements=1,
        axis_separation=1.0,
        solution_index=0,
        nu_a=1.0e9,
        f_m=10.0e3,
    )
    params.update(overrides)
    return LayoutRequest(**params)


class TestLayoutRequest:

    def test_immutable(self, default_request):
        with pytest.raises(AttributeError):
            default_request.num_measurements = 2

    def test_reflection_count(self):
        assert request_for(num_measurements=3).reflection_count == 4
        assert request_for(configuration="UNIQUE_REFERENCES",
                           num_measurements=3).reflection_count == 6

    def test_equality(self, default_request):
        assert default_request == request_for()
        assert hash(default_request) == hash(request_for())
        assert default_request != request_for(f_m=20e3)

    def test_to_dict(self, default_request):
        d = default_request.to_dict()
        assert d["configuration"] == "SHARED_REFERENCE"
        assert d["max_stroke"] is None

    @pytest.mark.parametrize("field, value", [
        ("num_measurements", 0),
        ("axis_separation", 0.0),
        ("axis_separation", -1.0),
        ("nu_a", 0),
        ("f_m", -5.0),
        ("max_stroke", 0.0),
    ])
    def test_degenerate(self, field, value):
        with pytest.raises(DegenerateInput):
            request_for(**{field: value})

    def test_bad_configuration(self):
        with pytest.raises(InvalidConfiguration):
            request_for(configuration="TRIPLE")

    @pytest.mark.parametrize("index", [-1, 0.5, True])
    def test_bad_solution_index(self, index):
        with pytest.raises(OutOfRangeSolution):
            request_for(solution_index=index)


class TestRun:

    def test_default(self, default_request):
        result = DesignEngine().run(default_request)
        assert result.reflection_count == 2
        assert result.solution.positions == (0, 1)
        assert len(result.axis_table) == 1
        assert [r.label for r in result.selected_axes] == [result.axis_table[0].label]
        assert result.recommended_separation == recommended_axis_separation(1e9)

    def test_candidates_listed(self):
        result = DesignEngine().run(request_for(num_measurements=4))
        assert len(result.candidates) == 4
        assert result.solution == result.candidates[0]

    def test_deterministic(self, default_request):
        engine = DesignEngine()
        assert engine.run(default_request).to_dict() == \
            engine.run(default_request).to_dict()

    def test_unsupported_reflection_count(self):
        with pytest.raises(UnsupportedReflectionCount):
            DesignEngine().run(request_for(num_measurements=6))

    def test_unique_too_many(self):
        with pytest.raises(UnsupportedReflectionCount):
            DesignEngine().run(request_for(
                configuration=Configuration.UNIQUE_REFERENCES, num_measurements=4))

    def test_index_out_of_range(self):
        with pytest.raises(OutOfRangeSolution):
            DesignEngine().run(request_for(num_measurements=2, solution_index=2))

    def test_default_max_stroke_is_recommended(self, default_request):
        result = DesignEngine().run(default_request)
        assert result.max_stroke == result.recommended_stroke
        assert result.recommended_stroke == recommended_max_stroke(
            1.0, recommended_axis_separation(1e9))


class TestAdvisories:

    def test_within_recommendations(self, default_request):
        """1 m is above the 0.597 m recommended for 1 GHz."""
        assert DesignEngine().run(default_request).warnings == []

    def test_separation_below_recommended(self):
        result = DesignEngine().run(request_for(axis_separation=0.1))
        assert len(result.warnings) == 1
        assert "crosstalk" in result.warnings[0]

    def test_stroke_above_recommended(self):
        result = DesignEngine().run(request_for(max_stroke=1.0))
        assert len(result.warnings) == 1
        assert "stroke" in result.warnings[0].lower()

    def test_non_demodulatable_solution(self, default_request):
        from sfm.solver import Solution
        warnings = advisories(default_request, Solution(0, [0, 1, 2]), 0.5, 0.125, 0.125)
        assert len(warnings) == 1
        assert "[0, 1, 2]" in warnings[0]

    def test_order(self):
        result = DesignEngine().run(request_for(axis_separation=0.1, max_stroke=1.0))
        assert "crosstalk" in result.warnings[0]
        assert "stroke" in result.warnings[1].lower()


class TestSerialization:

    def test_keys(self, default_request):
        d = DesignEngine().run(default_request).to_dict()
        assert set(d) == {
            "request", "reflection_count", "solution", "solutions",
            "recommended_axis_separation", "recommended_max_stroke",
            "max_stroke", "axis_table", "reflections", "warnings", "scene",
        }

    def test_reflections(self):
        d = DesignEngine().run(request_for(num_measurements=2)).to_dict()
        assert [r["index"] for r in d["reflections"]] == [0, 1, 2]
        assert [r["position"] for r in d["reflections"]] == [0, 1, 3]
        assert d["reflections"][0]["kind"] == "inline_reflector"

    def test_scene(self, default_request):
        scene = DesignEngine().run(default_request).to_dict()["scene"]
        assert scene["width"] == 680.0
        assert scene["height"] == 150.0
        assert len(scene["elements"]) > 0
