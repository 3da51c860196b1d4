import math

import numpy as np
import pytest

from robot_arena2d.errors import DegenerateDisplaySizeError, OutOfRangeError
from robot_arena2d.objects.arena import ArenaConfig
from robot_arena2d.render.handle import MultiRobotHandle


@pytest.fixture
def handle():
    handle = MultiRobotHandle(ArenaConfig(map_size=100, map_center_x=50, map_center_y=50))
    for robot_id in (10, 11, 12):
        handle.add_robot(robot_id)
    return handle


def snapshot(handle):
    return [
        (group.position, group.visual.points.copy(), group.visual.stroke_widths.copy(),
         group.visual.rotation_deg, group.visual.pose_label.text)
        for group in handle.container
    ]


def assert_same(a, b):
    assert len(a) == len(b)
    for left, right in zip(a, b):
        assert left[0] == right[0]
        assert np.array_equal(left[1], right[1])
        assert np.array_equal(left[2], right[2])
        assert left[3:] == right[3:]


def test_add_robot_registers_group_and_id(handle):
    assert handle.num_robots() == 3
    assert len(handle.container) == 3
    assert [group.id_label for group in handle.container] == ["10", "11", "12"]
    assert handle.index_of(11) == 1
    assert handle.index_of(99) is None


def test_add_robot_duplicate_id_appends(handle):
    assert handle.add_robot(10) == 3
    assert handle.num_robots() == 4
    assert handle.container.objects[3].id_label == "10"
    # Lookup id tetap ke robot pertama
    assert handle.index_of(10) == 0


def test_move_only_changes_target_robot(handle):
    before = snapshot(handle)
    handle.move(1, (10.0, -20.0))
    after = snapshot(handle)

    assert after[1][0] == (60.0, 30.0)
    assert_same([after[0], after[2]], [before[0], before[2]])
    # Geometri ikon tidak berubah oleh move
    assert np.array_equal(after[1][1], before[1][1])


def test_move_applies_ratio_and_letterbox(handle):
    handle.resize(400, 200)
    handle.move(0, (10.0, 10.0))
    # ratio 2, offset (50*2 + 100, 50*2)
    assert handle.container.objects[0].position == (220.0, 120.0)


@pytest.mark.parametrize("index", [3, 5, -1])
def test_move_out_of_range_leaves_state_unchanged(handle, index):
    before = snapshot(handle)
    with pytest.raises(OutOfRangeError):
        handle.move(index, (1.0, 2.0))
    assert_same(snapshot(handle), before)


def test_rotate_and_label_out_of_range(handle):
    with pytest.raises(OutOfRangeError):
        handle.rotate(3, 45.0)
    with pytest.raises(OutOfRangeError):
        handle.set_pose_label(7, 1, 2, 3)


def test_rotate_delegates_to_visual(handle):
    handle.rotate(2, 0.0)
    assert handle.engine.robots[2].rotation_deg == 0.0
    assert handle.engine.robots[0].rotation_deg == 90.0


def test_set_pose_label_marks_container_dirty(handle):
    handle.container.needs_redraw = False
    handle.set_pose_label(0, 1, 2, 3)
    assert handle.engine.robots[0].pose_label.text == "(1, 2, 3)"
    assert handle.container.needs_redraw


def test_update_pose_rounds_label(handle):
    handle.update_pose(0, 12.6, -3.4, 44.5)
    group = handle.container.objects[0]
    assert group.position == pytest.approx((62.6, 46.6))
    assert group.visual.rotation_deg == 44.5
    assert group.visual.pose_label.text == "(13, -3, 44)"


def test_update_pose_out_of_range_is_atomic(handle):
    before = snapshot(handle)
    with pytest.raises(OutOfRangeError):
        handle.update_pose(3, 1.0, 1.0, 1.0)
    assert_same(snapshot(handle), before)


def test_resize_repositions_moved_robots(handle):
    handle.move(0, (10.0, 0.0))
    handle.resize(50, 50)
    assert handle.container.objects[0].position == (30.0, 25.0)
    # Robot yang belum pernah di-move tetap di posisi awal
    assert handle.container.objects[1].position == (0.0, 0.0)


def test_resize_degenerate(handle):
    with pytest.raises(DegenerateDisplaySizeError):
        handle.resize(0, 10)
    assert handle.engine.display_size == (100, 100)


@pytest.mark.parametrize("pose", [
    (10.0, 10.0, math.inf),
    (math.nan, 0.0, 0.0),
    (0.0, -math.inf, 45.0),
])
def test_update_pose_non_finite_is_atomic(handle, pose):
    before = snapshot(handle)
    with pytest.raises(ValueError):
        handle.update_pose(0, *pose)
    assert_same(snapshot(handle), before)


def test_move_non_finite_rejected(handle):
    before = snapshot(handle)
    with pytest.raises(ValueError):
        handle.move(0, (math.nan, 1.0))
    assert_same(snapshot(handle), before)
    assert handle.container.objects[0].logical_position is None


def test_rotate_nan_does_not_corrupt_geometry(handle):
    with pytest.raises(ValueError):
        handle.rotate(0, math.nan)
    handle.rotate(0, 0.0)
    points = handle.engine.robots[0].points
    assert np.isfinite(points).all()
    np.testing.assert_allclose(points[1, 1], (9.0, 0.0), atol=1e-9)
