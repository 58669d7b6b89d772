"""Joint-angle geometry on 2D pose landmarks.

Everything here is a pure per-frame function: nothing is remembered between
frames. Landmark sets may be partial, so lookups go through explicit presence
checks instead of assuming a full skeleton.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

Point = Tuple[float, float]


class Landmark(Enum):
    """Tracked joints, valued by their MediaPipe Pose index."""

    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28


LandmarkSet = Dict[Landmark, Point]

# shoulder, elbow (vertex), wrist
ARM_CHAINS = {
    "left": (Landmark.LEFT_SHOULDER, Landmark.LEFT_ELBOW, Landmark.LEFT_WRIST),
    "right": (Landmark.RIGHT_SHOULDER, Landmark.RIGHT_ELBOW, Landmark.RIGHT_WRIST),
}


def compute_joint_angle(p1: Point, p2: Point, p3: Point) -> float:
    """Interior angle at ``p2`` in degrees, in [0, 180].

    Returns 0.0 when either segment has zero length.
    """
    a = np.asarray(p1, dtype=float)
    b = np.asarray(p2, dtype=float)
    c = np.asarray(p3, dtype=float)
    ba = a - b
    bc = c - b
    denom = np.linalg.norm(ba) * np.linalg.norm(bc)
    if denom == 0:
        return 0.0
    cosang = np.clip(np.dot(ba, bc) / denom, -1.0, 1.0)
    return float(np.degrees(np.arccos(cosang)))


def side_angle(landmarks: LandmarkSet, side: str) -> Optional[float]:
    """Elbow angle for one arm, or None if any of its three landmarks is missing."""
    shoulder, elbow, wrist = ARM_CHAINS[side]
    p1 = landmarks.get(shoulder)
    p2 = landmarks.get(elbow)
    p3 = landmarks.get(wrist)
    if p1 is None or p2 is None or p3 is None:
        return None
    return compute_joint_angle(p1, p2, p3)


def compute_limb_angle(landmarks: LandmarkSet) -> Optional[float]:
    """Elbow flexion angle for the subject.

    Both arms visible -> their mean; one arm -> that arm; none -> None.
    """
    left = side_angle(landmarks, "left")
    right = side_angle(landmarks, "right")
    if left is not None and right is not None:
        return (left + right) / 2.0
    if left is not None:
        return left
    if right is not None:
        return right
    return None


def normalize_point(point: Point, width: float, height: float) -> Point:
    """Pixel coordinates -> [0, 1] frame-relative coordinates."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Frame size must be positive, got {width}x{height}")
    return point[0] / float(width), point[1] / float(height)
