"""Skeleton overlay geometry and drawing."""

from dataclasses import dataclass, field
from typing import List, Tuple

import cv2
import numpy as np

from pose_geometry import Landmark, LandmarkSet, normalize_point

PixelPoint = Tuple[int, int]

POSE_CONNECTIONS = [
    (Landmark.LEFT_SHOULDER, Landmark.LEFT_ELBOW),
    (Landmark.LEFT_ELBOW, Landmark.LEFT_WRIST),
    (Landmark.RIGHT_SHOULDER, Landmark.RIGHT_ELBOW),
    (Landmark.RIGHT_ELBOW, Landmark.RIGHT_WRIST),
    (Landmark.LEFT_SHOULDER, Landmark.RIGHT_SHOULDER),
    (Landmark.LEFT_HIP, Landmark.LEFT_KNEE),
    (Landmark.LEFT_KNEE, Landmark.LEFT_ANKLE),
    (Landmark.RIGHT_HIP, Landmark.RIGHT_KNEE),
    (Landmark.RIGHT_KNEE, Landmark.RIGHT_ANKLE),
    (Landmark.LEFT_SHOULDER, Landmark.LEFT_HIP),
    (Landmark.RIGHT_SHOULDER, Landmark.RIGHT_HIP),
    (Landmark.LEFT_HIP, Landmark.RIGHT_HIP),
]


@dataclass
class Overlay:
    points: List[PixelPoint] = field(default_factory=list)
    lines: List[Tuple[PixelPoint, PixelPoint]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Overlay":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.points and not self.lines


def build_overlay(landmarks: LandmarkSet, frame_size: Tuple[int, int],
                  display_size: Tuple[int, int]) -> Overlay:
    """Map landmarks from frame pixels to display pixels.

    Sizes are ``(width, height)``. A segment is drawn only when both of its
    endpoints were detected.
    """
    fw, fh = frame_size
    dw, dh = display_size
    mapped = {}
    for lm_id, pt in landmarks.items():
        nx, ny = normalize_point(pt, fw, fh)
        mapped[lm_id] = (int(round(nx * dw)), int(round(ny * dh)))

    overlay = Overlay(points=list(mapped.values()))
    for start, end in POSE_CONNECTIONS:
        if start in mapped and end in mapped:
            overlay.lines.append((mapped[start], mapped[end]))
    return overlay


def draw_overlay(img: np.ndarray, overlay: Overlay) -> None:
    for p1, p2 in overlay.lines:
        cv2.line(img, p1, p2, (255, 255, 255), 2)
    for p in overlay.points:
        cv2.circle(img, p, 5, (0, 0, 255), -1)
