"""Unit tests for scene-level intersection.

Tests cover:
- Closest hit selection by distance from the eye
- Scene-order tie-breaking
- Shadow ray queries (any hit)
"""

import pytest
import taichi as ti


def _trace_closest(spheres, origin, direction, eye=(0.0, 0.0, 0.0)):
    """Run intersect_scene over a list of (center, radius) and return the record."""
    from spheretrace.scene.intersection import intersect_scene
    from spheretrace.scene.scene import Scene, SceneObject
    from spheretrace.core.ray import Ray, vec3

    scene = Scene.from_spheres(SceneObject(center=c, radius=r) for c, r in spheres)
    centers, radii, _ = scene.to_arrays()

    hit = ti.field(dtype=ti.i32, shape=())
    index = ti.field(dtype=ti.i32, shape=())
    dist = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(
        c: ti.types.ndarray(dtype=vec3, ndim=1),
        r: ti.types.ndarray(dtype=ti.f32, ndim=1),
        o: vec3,
        d: vec3,
        e: vec3,
    ):
        rec = intersect_scene(Ray(origin=o, direction=d), e, c, r)
        hit[None] = rec.hit
        index[None] = rec.object_index
        dist[None] = rec.distance
        point[None] = rec.point

    test_kernel(centers, radii, vec3(*origin), vec3(*direction), vec3(*eye))
    p = point[None]
    return hit[None], index[None], float(dist[None]), (float(p[0]), float(p[1]), float(p[2]))


def _shadowed(spheres, hit_point, light):
    """Run in_shadow over a list of (center, radius) and return 0 or 1."""
    from spheretrace.scene.intersection import in_shadow
    from spheretrace.scene.scene import Scene, SceneObject
    from spheretrace.core.ray import vec3

    scene = Scene.from_spheres(SceneObject(center=c, radius=r) for c, r in spheres)
    centers, radii, _ = scene.to_arrays()

    result = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(
        c: ti.types.ndarray(dtype=vec3, ndim=1),
        r: ti.types.ndarray(dtype=ti.f32, ndim=1),
        p: vec3,
        light_pos: vec3,
    ):
        result[None] = in_shadow(p, light_pos, c, r)

    test_kernel(centers, radii, vec3(*hit_point), vec3(*light))
    return result[None]


class TestSceneHitRecordBasics:
    """Tests for SceneHitRecord dataclass."""

    def test_miss_record_has_negative_index(self):
        """Test that miss records have object_index = -1."""
        from spheretrace.scene.intersection import NO_HIT_DISTANCE, _make_miss_record

        result_hit = ti.field(dtype=ti.i32, shape=())
        result_index = ti.field(dtype=ti.i32, shape=())
        result_distance = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            rec = _make_miss_record()
            result_hit[None] = rec.hit
            result_index[None] = rec.object_index
            result_distance[None] = rec.distance

        test_kernel()
        assert result_hit[None] == 0
        assert result_index[None] == -1
        assert result_distance[None] == pytest.approx(NO_HIT_DISTANCE, rel=1e-6)


class TestClosestHit:
    """Tests for closest-hit traversal."""

    def test_hit_single_sphere(self):
        """Test ray hitting the only sphere in the scene."""
        hit, index, dist, point = _trace_closest(
            [((0.0, 0.0, -5.0), 1.0)], (0.0, 0.0, 0.0), (0.0, 0.0, -1.0)
        )

        assert hit == 1
        assert index == 0
        assert dist == pytest.approx(4.0)
        assert point == pytest.approx((0.0, 0.0, -4.0))

    def test_miss_reports_no_hit(self):
        """Test that missing every sphere is a normal miss record."""
        hit, index, _, _ = _trace_closest(
            [((0.0, 0.0, -5.0), 1.0)], (0.0, 0.0, 0.0), (0.0, 0.0, 1.0)
        )

        assert hit == 0
        assert index == -1

    def test_closer_sphere_wins_regardless_of_order(self):
        """Test that a nearer sphere later in the scene is selected."""
        hit, index, dist, _ = _trace_closest(
            [((0.0, 0.0, -10.0), 1.0), ((0.0, 0.0, -5.0), 1.0)],
            (0.0, 0.0, 0.0),
            (0.0, 0.0, -1.0),
        )

        assert hit == 1
        assert index == 1
        assert dist == pytest.approx(4.0)

    def test_equal_distance_tie_goes_to_first(self):
        """Test that the earlier sphere wins an exact distance tie."""
        hit, index, _, _ = _trace_closest(
            [((0.0, 0.0, -5.0), 1.0), ((0.0, 0.0, -5.0), 1.0), ((0.0, 0.0, -5.0), 1.0)],
            (0.0, 0.0, 0.0),
            (0.0, 0.0, -1.0),
        )

        assert hit == 1
        assert index == 0

    def test_distance_measured_from_eye_not_ray_origin(self):
        """Test ranking by eye distance when the ray starts elsewhere.

        The ray starts at z=-10 heading toward +z. Along the ray, sphere 0
        (near surface z=-8.5) comes first, but sphere 1 (near surface z=-4)
        is closer to the eye at the origin.
        """
        hit, index, dist, point = _trace_closest(
            [((0.0, 0.0, -8.0), 0.5), ((0.0, 0.0, -3.0), 1.0)],
            (0.0, 0.0, -10.0),
            (0.0, 0.0, 1.0),
        )

        assert hit == 1
        assert index == 1
        assert dist == pytest.approx(4.0)
        assert point == pytest.approx((0.0, 0.0, -4.0))

    def test_sphere_containing_eye_is_skipped(self):
        """Test that a sphere around the eye is invisible (near root negative)."""
        hit, index, _, _ = _trace_closest(
            [((0.0, 0.0, 0.0), 100.0), ((0.0, 0.0, -5.0), 1.0)],
            (0.0, 0.0, 0.0),
            (0.0, 0.0, -1.0),
        )

        assert hit == 1
        assert index == 1


class TestShadowQuery:
    """Tests for shadow ray queries."""

    def test_clear_path_is_lit(self):
        """Test that the lit side of the only sphere is not self-shadowed."""
        shadowed = _shadowed([((0.0, 0.0, -5.0), 1.0)], (0.0, 0.0, -4.0), (10.0, 10.0, 10.0))

        assert shadowed == 0

    def test_blocker_between_point_and_light(self):
        """Test that a distinct sphere on the light path casts a shadow."""
        shadowed = _shadowed(
            [((0.0, 0.0, -5.0), 1.0), ((5.0, 5.0, 3.0), 1.0)],
            (0.0, 0.0, -4.0),
            (10.0, 10.0, 10.0),
        )

        assert shadowed == 1

    def test_blocker_beyond_light_still_shadows(self):
        """Test that occluders are not bounded by the light distance."""
        shadowed = _shadowed(
            [((0.0, 0.0, -5.0), 1.0), ((20.0, 20.0, 24.0), 2.0)],
            (0.0, 0.0, -4.0),
            (10.0, 10.0, 10.0),
        )

        assert shadowed == 1

    def test_sphere_off_the_light_path_does_not_shadow(self):
        """Test that a sphere away from the shadow ray is ignored."""
        shadowed = _shadowed(
            [((0.0, 0.0, -5.0), 1.0), ((-5.0, -5.0, -5.0), 1.0)],
            (0.0, 0.0, -4.0),
            (10.0, 10.0, 10.0),
        )

        assert shadowed == 0

    def test_any_hit_order_independent(self):
        """Test that the blocker's position in scene order does not matter."""
        blocker = ((5.0, 5.0, 3.0), 1.0)
        target = ((0.0, 0.0, -5.0), 1.0)

        first = _shadowed([blocker, target], (0.0, 0.0, -4.0), (10.0, 10.0, 10.0))
        last = _shadowed([target, blocker], (0.0, 0.0, -4.0), (10.0, 10.0, 10.0))

        assert first == last == 1

    def test_make_shadow_ray_points_at_light(self):
        """Test the shadow ray direction is light - hit point, unnormalized."""
        from spheretrace.scene.intersection import make_shadow_ray, vec3

        origin = ti.field(dtype=ti.math.vec3, shape=())
        direction = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_shadow_ray(vec3(0.0, 0.0, -4.0), vec3(10.0, 10.0, 10.0))
            origin[None] = ray.origin
            direction[None] = ray.direction

        test_kernel()
        o = origin[None]
        d = direction[None]
        assert (o[0], o[1], o[2]) == pytest.approx((0.0, 0.0, -4.0))
        assert (d[0], d[1], d[2]) == pytest.approx((10.0, 10.0, 14.0))
