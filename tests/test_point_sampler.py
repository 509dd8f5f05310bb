"""Tests for seeded point sampling."""

import math

import numpy as np
import pytest
from py_voronoi.core.boundary import Circle, JaggedPolygon, NoBoundary, Polygon
from py_voronoi.core.geometry import ClipRect
from py_voronoi.core.point_sampler import (
    GenerationConfig, resolve_boundary, sample, sample_points
)
from py_voronoi.core.seeded_rng import SeededRNG


RECT = ClipRect(0, 0, 100, 100)


class TestNearGrid:
    """Scenario: seed 1, five points, no boundary, randomness 0."""

    def test_scenario_layout(self):
        points = sample_points(5, 1, RECT, NoBoundary(), randomness=0.0)
        assert points.shape == (5, 2)

        # 3 x 2 grid over the 60 x 60 margin-inset area, one jitter pair per slot
        rng = SeededRNG(1)
        expected = []
        for k in range(5):
            cx = 20 + (k % 3 + 0.5) * 20
            cy = 20 + (k // 3 + 0.5) * 30
            expected.append((cx + (rng.next() - 0.5) * 0.4 * 20,
                             cy + (rng.next() - 0.5) * 0.4 * 30))
        np.testing.assert_allclose(points, expected)

    def test_scenario_reproducible(self):
        points1 = sample_points(5, 1, RECT, NoBoundary(), randomness=0.0)
        points2 = sample_points(5, 1, RECT, NoBoundary(), randomness=0.0)
        np.testing.assert_array_equal(points1, points2)

    def test_jitter_bounded(self):
        points = sample_points(100, 8, RECT, randomness=0.05)
        assert len(points) == 100
        # 10 x 10 grid of 6-unit cells, jitter at most 20%
        for k, (x, y) in enumerate(points):
            cx = 20 + (k % 10 + 0.5) * 6
            cy = 20 + (k // 10 + 0.5) * 6
            assert abs(x - cx) <= 1.2 + 1e-9
            assert abs(y - cy) <= 1.2 + 1e-9


class TestBounds:
    @pytest.mark.parametrize("seed", [0, 1, 17, 4242, 1700000000000])
    @pytest.mark.parametrize("randomness", [0.0, 0.05, 0.1, 0.5, 1.0])
    def test_points_inside_margin(self, seed, randomness):
        """Without a boundary every point lies inside the margin-inset rectangle."""
        rect = ClipRect(0, 0, 800, 600)
        points = sample_points(60, seed, rect, randomness=randomness, margin=20)
        assert 0 < len(points) <= 60
        assert np.all(points[:, 0] >= 20) and np.all(points[:, 0] <= 780)
        assert np.all(points[:, 1] >= 20) and np.all(points[:, 1] <= 580)

    def test_unconstrained_fills_count(self):
        points = sample_points(200, 3, ClipRect(0, 0, 800, 600), randomness=0.7)
        assert len(points) == 200

    def test_margin_capped_for_small_rect(self):
        rect = ClipRect(0, 0, 10, 10)
        points = sample_points(4, 1, rect, randomness=1.0, margin=20)
        assert len(points) > 0
        assert np.all(points >= 2.5) and np.all(points <= 7.5)


class TestCircleBoundary:
    @pytest.mark.parametrize("randomness", [0.0, 0.3, 1.0])
    @pytest.mark.parametrize("seed", [1, 2, 99])
    def test_scenario_points_in_circle(self, randomness, seed):
        """All points are within the circle; fewer than requested is allowed."""
        circle = Circle((50, 50), 10)
        points = sample_points(50, seed, RECT, circle, randomness=randomness)
        assert 1 <= len(points) <= 50
        distances = np.hypot(points[:, 0] - 50, points[:, 1] - 50)
        assert np.all(distances <= 10 + 1e-9)

    def test_center_reserved_first(self):
        points = sample_points(20, 5, RECT, Circle((50, 50), 10), randomness=1.0)
        np.testing.assert_array_equal(points[0], [50, 50])

    def test_center_outside_area_not_reserved(self):
        """A center outside the margin-inset area is not used."""
        circle = Circle((5, 5), 30)
        points = sample_points(10, 5, RECT, circle, randomness=1.0)
        assert not np.any(np.all(points == [5, 5], axis=1))

    def test_single_point_is_center(self):
        points = sample_points(1, 5, RECT, Circle((40, 60), 5))
        np.testing.assert_array_equal(points, [[40, 60]])

    def test_tiny_boundary_terminates(self):
        """A boundary far smaller than the requested density under-delivers."""
        circle = Circle((50, 50), 0.01)
        points = sample_points(500, 3, RECT, circle, randomness=0.0)
        assert 1 <= len(points) < 500

    def test_boundary_outside_area(self):
        """A boundary that misses the sampling area yields no points."""
        circle = Circle((500, 500), 5)
        points = sample_points(10, 1, RECT, circle)
        assert points.shape == (0, 2)


class TestPolygonBoundary:
    def test_points_in_polygon(self):
        triangle = Polygon(((20, 20), (80, 20), (50, 80)))
        points = sample_points(40, 11, RECT, triangle, randomness=0.5)
        assert len(points) > 0
        for point in points:
            assert triangle.contains(point)

    def test_degenerate_polygon_unconstrained(self):
        region = Polygon(((10, 10), (20, 20)))
        points = sample_points(30, 11, RECT, region, randomness=0.5)
        reference = sample_points(30, 11, RECT, NoBoundary(), randomness=0.5)
        np.testing.assert_array_equal(points, reference)


class TestGenerationConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.point_count == 30
        assert isinstance(config.boundary, NoBoundary)
        assert config.clip_rect == ClipRect(0, 0, 800, 600)

    def test_frozen(self):
        config = GenerationConfig()
        with pytest.raises(Exception):
            config.point_count = 5

    @pytest.mark.parametrize("kwargs", [
        dict(point_count=0),
        dict(point_count=2.5),
        dict(randomness=1.5),
        dict(randomness=float("nan")),
        dict(jaggedness=-0.1),
        dict(jagged_resolution=2),
        dict(inset=-1),
        dict(inset=float("inf")),
        dict(corner_radius=-1),
        dict(margin=-5),
        dict(seed=float("nan")),
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GenerationConfig(**kwargs)

    @pytest.mark.parametrize("rect", [(0, 0, 0, 10), (0, 0, 10, -1), (0, float("nan"), 10, 10)])
    def test_invalid_clip_rect(self, rect):
        with pytest.raises(ValueError):
            ClipRect(*rect)

    @pytest.mark.parametrize("boundary", [None, (400, 300, 100), "circle"])
    def test_invalid_boundary_type(self, boundary):
        with pytest.raises(TypeError):
            GenerationConfig(boundary=boundary)

    def test_clip_rect_tuple_coerced(self):
        config = GenerationConfig(clip_rect=(0, 0, 200, 100))
        assert config.clip_rect == ClipRect(0, 0, 200, 100)

    @pytest.mark.parametrize("rect", [None, (0, 0, 200), "rect"])
    def test_invalid_clip_rect_type(self, rect):
        with pytest.raises(TypeError):
            GenerationConfig(clip_rect=rect)

    def test_sample_uses_config(self):
        config = GenerationConfig(point_count=25, seed=9, randomness=0.4,
                                  clip_rect=ClipRect(0, 0, 200, 100))
        np.testing.assert_array_equal(
            sample(config),
            sample_points(25, 9, ClipRect(0, 0, 200, 100), NoBoundary(), 0.4, 20.0),
        )


class TestResolveBoundary:
    def test_plain_circle_kept(self):
        config = GenerationConfig(boundary=Circle((400, 300), 100))
        assert resolve_boundary(config) == Circle((400, 300), 100)

    def test_jagged_circle(self):
        config = GenerationConfig(boundary=Circle((400, 300), 100), jaggedness=0.3,
                                  jagged_resolution=40, seed=77)
        region = resolve_boundary(config)
        assert isinstance(region, JaggedPolygon)
        assert len(region.vertices) == 40
        assert region.base_radius == 100
        assert resolve_boundary(config) == region

    def test_jagged_sampling_inside(self):
        config = GenerationConfig(point_count=80, boundary=Circle((400, 300), 150),
                                  jaggedness=0.5, seed=5)
        region = resolve_boundary(config)
        points = sample(config)
        assert len(points) > 1
        assert all(region.contains(p) for p in points)
        assert math.isclose(points[0][0], 400) and math.isclose(points[0][1], 300)
