import math

import pytest

from pose_geometry import (
    Landmark, compute_joint_angle, compute_limb_angle, normalize_point, side_angle,
)


def arm(side, shoulder, elbow, wrist):
    prefix = side.upper()
    return {
        Landmark[f"{prefix}_SHOULDER"]: shoulder,
        Landmark[f"{prefix}_ELBOW"]: elbow,
        Landmark[f"{prefix}_WRIST"]: wrist,
    }


STRAIGHT = ((0.0, 0.0), (0.0, 100.0), (0.0, 200.0))   # 180
RIGHT_ANGLE = ((0.0, 0.0), (0.0, 100.0), (100.0, 100.0))  # 90


def test_straight_limb_is_180():
    assert compute_joint_angle(*STRAIGHT) == pytest.approx(180.0)


def test_right_angle():
    assert compute_joint_angle(*RIGHT_ANGLE) == pytest.approx(90.0)


def test_folded_limb_is_zero():
    assert compute_joint_angle((10.0, 10.0), (50.0, 50.0), (10.0, 10.0)) == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize("p1,p2,p3", [
    ((5.0, 5.0), (5.0, 5.0), (9.0, 1.0)),
    ((3.0, 4.0), (0.0, 0.0), (0.0, 0.0)),
    ((0.0, 0.0), (0.0, 0.0), (0.0, 0.0)),
])
def test_zero_length_segment_returns_zero(p1, p2, p3):
    assert compute_joint_angle(p1, p2, p3) == 0.0


def test_outer_points_are_symmetric():
    a, b, c = (12.0, 80.0), (40.0, 33.0), (95.0, 61.0)
    assert compute_joint_angle(a, b, c) == pytest.approx(compute_joint_angle(c, b, a))


def test_angle_stays_in_range():
    vertex = (0.0, 0.0)
    for i in range(36):
        t = math.radians(i * 10 + 3)
        for j in range(36):
            u = math.radians(j * 10)
            angle = compute_joint_angle((math.cos(t), math.sin(t)), vertex, (2 * math.cos(u), 2 * math.sin(u)))
            assert 0.0 <= angle <= 180.0


def test_nearly_collinear_does_not_produce_nan():
    angle = compute_joint_angle((0.0, 0.0), (1e-9, 1.0), (0.0, 2.0))
    assert not math.isnan(angle)
    assert angle == pytest.approx(180.0, abs=1e-3)


def test_side_angle_needs_all_three_landmarks():
    lms = arm("left", *RIGHT_ANGLE)
    assert side_angle(lms, "left") == pytest.approx(90.0)
    del lms[Landmark.LEFT_WRIST]
    assert side_angle(lms, "left") is None
    assert side_angle(lms, "right") is None


def test_limb_angle_averages_both_sides():
    lms = {**arm("left", *STRAIGHT), **arm("right", *RIGHT_ANGLE)}
    assert compute_limb_angle(lms) == pytest.approx(135.0)


def test_limb_angle_uses_left_only():
    lms = {**arm("left", *RIGHT_ANGLE), Landmark.RIGHT_SHOULDER: (0.0, 0.0)}
    assert compute_limb_angle(lms) == pytest.approx(90.0)


def test_limb_angle_uses_right_only():
    lms = arm("right", *STRAIGHT)
    lms[Landmark.LEFT_ELBOW] = (3.0, 3.0)
    assert compute_limb_angle(lms) == pytest.approx(180.0)


def test_limb_angle_absent_when_no_arm_complete():
    lms = {
        Landmark.LEFT_SHOULDER: (0.0, 0.0),
        Landmark.RIGHT_WRIST: (1.0, 1.0),
        Landmark.LEFT_HIP: (0.0, 5.0),
    }
    assert compute_limb_angle(lms) is None
    assert compute_limb_angle({}) is None


def test_normalize_point():
    assert normalize_point((320.0, 120.0), 640, 480) == pytest.approx((0.5, 0.25))


def test_normalize_point_rejects_empty_frame():
    with pytest.raises(ValueError):
        normalize_point((1.0, 1.0), 0, 480)
