"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere, including both roots behind the origin
- Ray starting inside sphere (back face)
- Ray tangent to sphere
- Interval bounds (closed interval, empty interval)
- Device-side hit_sphere agreeing with the host test
"""

import math

import pytest
import taichi as ti


class TestSphereBasics:
    """Tests for the device-side sphere types."""

    def test_make_sphere_data(self):
        """Test building a SphereData inside a kernel."""
        from src.raysphere.core.ray import vec3
        from src.raysphere.geometry.sphere import SphereData

        center_result = ti.Vector.field(3, dtype=ti.f64, shape=())
        radius_result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            sphere = SphereData(center=vec3(1.0, 2.0, 3.0), radius=0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert (c[0], c[1], c[2]) == (1.0, 2.0, 3.0)
        assert radius_result[None] == 0.5


class TestSphereHit:
    """Tests for Sphere.hit on host values."""

    def test_direct_hit_front_face(self):
        """Test a ray from the origin straight into the sphere."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, EPSILON, INFINITY)

        assert rec is not None
        assert rec.t == pytest.approx(0.5, abs=1e-12)
        assert rec.point == Point(0.0, 0.0, -0.5)
        assert rec.normal == Vector(0.0, 0.0, 1.0)
        assert rec.front_face is True

    def test_ray_pointing_away_misses(self):
        """Test that roots behind the origin are not reported."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 1.0))

        assert sphere.hit(ray, EPSILON, INFINITY) is None

    def test_offset_ray_misses(self):
        """Test a ray whose closest approach is farther than the radius."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.6, 0.0), Vector(0.0, 0.0, -1.0))

        assert sphere.hit(ray, EPSILON, INFINITY) is None

    def test_inside_hit_back_face(self):
        """Test a ray starting at the center: far root, flipped normal."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, -1.0), Vector(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, EPSILON, INFINITY)

        assert rec is not None
        assert rec.t == pytest.approx(0.5, abs=1e-12)
        assert rec.point == Point(0.0, 0.0, -1.5)
        # Outward normal is (0, 0, -1); the stored one faces the ray
        assert rec.normal == Vector(0.0, 0.0, 1.0)
        assert rec.front_face is False

    def test_tangent_ray_hits_once(self):
        """Test a ray grazing the sphere (zero discriminant)."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.5, 0.0), Vector(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, EPSILON, INFINITY)

        assert rec is not None
        assert rec.t == pytest.approx(1.0, abs=1e-12)
        assert rec.point == Point(0.0, 0.5, -1.0)
        assert abs(rec.normal.y) == pytest.approx(1.0)

    def test_unnormalized_direction(self):
        """Test that t is measured in units of the given direction."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -2.0))

        rec = sphere.hit(ray, EPSILON, INFINITY)

        assert rec is not None
        assert rec.t == pytest.approx(0.25, abs=1e-12)
        assert rec.point == Point(0.0, 0.0, -0.5)

    def test_normal_is_unit_length(self):
        """Test that off-axis hits still produce unit normals."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.3, -0.2, -2.0), 0.75)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.1, 0.05, -1.0))

        rec = sphere.hit(ray, EPSILON, INFINITY)

        assert rec is not None
        assert rec.normal.length() == pytest.approx(1.0, abs=1e-12)
        assert (rec.point - sphere.center).length() == pytest.approx(0.75, abs=1e-12)


    def test_zero_direction_raises(self):
        """Test that a zero-length direction is not guarded on the host."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, 0.0))

        with pytest.raises(ZeroDivisionError):
            sphere.hit(ray, EPSILON, INFINITY)


class TestSphereInterval:
    """Tests for the [t_min, t_max] interval handling."""

    def test_far_root_used_when_near_root_below_interval(self):
        """Test that the farther root is tried when the nearer is too small."""
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.6, 10.0)

        assert rec is not None
        assert rec.t == pytest.approx(1.5, abs=1e-12)
        assert rec.front_face is False

    def test_interval_excludes_both_roots(self):
        """Test that roots beyond t_max are rejected."""
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))

        assert sphere.hit(ray, 0.0, 0.4) is None

    def test_closed_interval_accepts_boundary(self):
        """Test that a root exactly at t_max is accepted."""
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.0, 0.5)

        assert rec is not None
        assert rec.t == 0.5

    @pytest.mark.parametrize("t_min, t_max", [(1.0, 1.0), (2.0, 1.0), (math.inf, math.inf)])
    def test_empty_interval_never_hits(self, t_min, t_max):
        """Test that t_min >= t_max reports no hit."""
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        sphere = Sphere(Point(0.0, 0.0, -1.0), 0.5)
        ray = Ray(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))

        assert sphere.hit(ray, t_min, t_max) is None


class TestHitSphereKernel:
    """Tests for the device-side hit_sphere."""

    def _run(self, origin, direction, center, radius, t_min, t_max):
        from src.raysphere.core.ray import vec3
        from src.raysphere.geometry.sphere import SphereData, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f64, shape=())
        point = ti.Vector.field(3, dtype=ti.f64, shape=())
        normal = ti.Vector.field(3, dtype=ti.f64, shape=())
        front_face = ti.field(dtype=ti.i32, shape=())

        ox, oy, oz = origin
        dx, dy, dz = direction
        cx, cy, cz = center

        @ti.kernel
        def test_kernel(lo: ti.f64, hi: ti.f64):
            sphere = SphereData(center=vec3(cx, cy, cz), radius=radius)
            record = hit_sphere(
                vec3(ox, oy, oz),
                vec3(dx, dy, dz),
                sphere,
                lo,
                hi,
            )
            hit[None] = record.hit
            t_val[None] = record.t
            point[None] = record.point
            normal[None] = record.normal
            front_face[None] = record.front_face

        test_kernel(t_min, t_max)
        return hit[None], t_val[None], point[None], normal[None], front_face[None]

    def test_direct_hit(self):
        """Test the head-on hit inside a kernel."""
        from src.raysphere.core.numeric import EPSILON

        hit, t, p, n, front = self._run(
            (0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -1.0), 0.5, EPSILON, math.inf
        )

        assert hit == 1
        assert t == pytest.approx(0.5, abs=1e-12)
        assert p[2] == pytest.approx(-0.5, abs=1e-12)
        assert n[0] == pytest.approx(0.0, abs=1e-12)
        assert n[1] == pytest.approx(0.0, abs=1e-12)
        assert n[2] == pytest.approx(1.0, abs=1e-12)
        assert front == 1

    def test_pointing_away_misses(self):
        """Test that both negative roots are rejected inside a kernel."""
        from src.raysphere.core.numeric import EPSILON

        hit, _, _, _, _ = self._run(
            (0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, -1.0), 0.5, EPSILON, math.inf
        )

        assert hit == 0

    def test_inside_back_face(self):
        """Test the back-face hit inside a kernel."""
        from src.raysphere.core.numeric import EPSILON

        hit, t, _, n, front = self._run(
            (0.0, 0.0, -1.0), (0.0, 0.0, -1.0), (0.0, 0.0, -1.0), 0.5, EPSILON, math.inf
        )

        assert hit == 1
        assert t == pytest.approx(0.5, abs=1e-12)
        assert n[2] == pytest.approx(1.0, abs=1e-12)
        assert front == 0

    def test_empty_interval(self):
        """Test that an empty interval reports no hit inside a kernel."""
        hit, _, _, _, _ = self._run(
            (0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -1.0), 0.5, 2.0, 1.0
        )

        assert hit == 0

    def test_matches_host(self):
        """Test that an off-axis hit agrees with Sphere.hit."""
        from src.raysphere.core.numeric import EPSILON, INFINITY
        from src.raysphere.core.ray import Ray
        from src.raysphere.core.vector import Point, Vector
        from src.raysphere.geometry.sphere import Sphere

        origin = (0.0, 0.0, 0.0)
        direction = (0.1, 0.05, -1.0)
        center = (0.3, -0.2, -2.0)
        radius = 0.75

        hit, t, p, n, front = self._run(origin, direction, center, radius, EPSILON, math.inf)
        rec = Sphere(Point(*center), radius).hit(
            Ray(Point(*origin), Vector(*direction)), EPSILON, INFINITY
        )

        assert hit == 1
        assert rec is not None
        assert t == pytest.approx(rec.t, rel=1e-12)
        for k in range(3):
            assert p[k] == pytest.approx(rec.point[k], abs=1e-12)
            assert n[k] == pytest.approx(rec.normal[k], abs=1e-12)
        assert front == int(rec.front_face)

