import math

import numpy as np
import pytest

from robot_arena2d.render.robot_visual import (
    BODY_POINTS, BODY_WIDTH, INDICATOR_POINTS, INDICATOR_WIDTH,
    WHEELS_POINTS, WHEELS_WIDTH, RobotVisual,
)
from robot_arena2d.render.transform import Size

AUTHORED_POINTS = np.array([BODY_POINTS, INDICATOR_POINTS, WHEELS_POINTS])
AUTHORED_WIDTHS = np.array([BODY_WIDTH, INDICATOR_WIDTH, WHEELS_WIDTH])


def test_initial_state_matches_authored_geometry():
    visual = RobotVisual()
    assert visual.scale_ratio == 1.0
    assert visual.rotation_deg == 90.0
    assert np.array_equal(visual.points, AUTHORED_POINTS)
    assert np.array_equal(visual.stroke_widths, AUTHORED_WIDTHS)
    assert visual.pose_label.text == "(0, 0, 0)"
    assert len(visual.segments) == 3


def test_points_view_is_read_only():
    visual = RobotVisual()
    with pytest.raises(ValueError):
        visual.points[0, 0, 0] = 99.0


def test_rotate_to_current_angle_is_bit_for_bit_noop():
    visual = RobotVisual()
    visual.rotate(33.3)
    before = visual.points.copy()
    visual.rotate(33.3)
    assert np.array_equal(visual.points, before)
    assert visual.rotation_deg == 33.3


def test_rotate_zero_points_indicator_right():
    visual = RobotVisual()
    visual.rotate(0.0)
    tip = visual.segments[1].p2
    np.testing.assert_allclose(tip, (9.0, 0.0), atol=1e-9)


def test_rotate_180_points_indicator_left():
    visual = RobotVisual()
    visual.rotate(180.0)
    np.testing.assert_allclose(visual.segments[1].p2, (-9.0, 0.0), atol=1e-9)


def test_rotation_is_composable():
    stepped = RobotVisual()
    for theta in (30.0, -45.0, 200.0, 75.0):
        stepped.rotate(theta)

    direct = RobotVisual()
    direct.rotate(75.0)

    np.testing.assert_allclose(stepped.points, direct.points, rtol=1e-6, atol=1e-9)
    assert stepped.rotation_deg == direct.rotation_deg == 75.0


def test_rotation_does_not_touch_stroke_widths():
    visual = RobotVisual()
    visual.rotate(10.0)
    assert np.array_equal(visual.stroke_widths, AUTHORED_WIDTHS)


def test_rescale_is_composable():
    stepped = RobotVisual()
    for ratio in (0.3, 2.7, 1.9, 0.75):
        stepped.rescale(ratio)

    direct = RobotVisual()
    direct.rescale(0.75)

    np.testing.assert_allclose(stepped.points, direct.points, rtol=1e-6)
    np.testing.assert_allclose(stepped.stroke_widths, direct.stroke_widths, rtol=1e-6)
    assert stepped.scale_ratio == 0.75


def test_rescale_half_and_back_is_exact():
    visual = RobotVisual()
    visual.rescale(0.5)
    assert np.array_equal(visual.points, AUTHORED_POINTS / 2)
    assert np.array_equal(visual.stroke_widths, AUTHORED_WIDTHS / 2)

    visual.rescale(1.0)
    assert np.array_equal(visual.points, AUTHORED_POINTS)
    assert np.array_equal(visual.stroke_widths, AUTHORED_WIDTHS)


def test_rotate_and_rescale_commute():
    a = RobotVisual()
    a.rotate(60.0)
    a.rescale(1.6)

    b = RobotVisual()
    b.rescale(1.6)
    b.rotate(60.0)

    np.testing.assert_allclose(a.points, b.points, rtol=1e-6, atol=1e-9)


def test_set_pose_label_formats_integers_and_signals_refresh():
    calls = []
    visual = RobotVisual(on_refresh=lambda: calls.append(True))
    visual.set_pose_label(12, -40, 135)
    assert visual.pose_label.text == "(12, -40, 135)"
    assert calls == [True]


def test_pose_label_offset_is_not_scaled():
    visual = RobotVisual()
    visual.rescale(3.0)
    assert visual.pose_label.offset == (0.0, -20.0)


def test_min_size_is_largest_segment_extent():
    visual = RobotVisual()
    assert visual.min_size() == Size(20.0, 20.0)
    visual.rescale(0.5)
    assert visual.min_size() == Size(10.0, 10.0)


@pytest.mark.parametrize("theta", [math.nan, math.inf, -math.inf])
def test_rotate_non_finite_leaves_state_untouched(theta):
    visual = RobotVisual()
    visual.rotate(30.0)
    before = visual.points.copy()
    with pytest.raises(ValueError):
        visual.rotate(theta)
    assert np.array_equal(visual.points, before)
    assert visual.rotation_deg == 30.0


@pytest.mark.parametrize("ratio", [0.0, -1.0, math.nan, math.inf])
def test_rescale_rejects_invalid_ratio(ratio):
    visual = RobotVisual()
    with pytest.raises(ValueError):
        visual.rescale(ratio)
    assert visual.scale_ratio == 1.0
    assert np.array_equal(visual.points, AUTHORED_POINTS)
    # State tetap bisa di-rescale setelah error
    visual.rescale(2.0)
    assert np.array_equal(visual.stroke_widths, AUTHORED_WIDTHS * 2)
