"""MediaPipe Pose adapter: BGR frame -> detected subjects as LandmarkSets."""

import logging
from typing import List, Sequence

import cv2
import mediapipe as mp
import numpy as np

from pose_geometry import Landmark, LandmarkSet
from pullup_settings import (
    MIN_DETECTION_CONFIDENCE, MIN_TRACKING_CONFIDENCE,
    MIN_VISIBILITY, MODEL_COMPLEXITY,
)

logger = logging.getLogger(__name__)

mp_pose = mp.solutions.pose


def landmarks_from_normalized(raw: Sequence, width: int, height: int,
                              min_visibility: float = MIN_VISIBILITY) -> LandmarkSet:
    """Scale MediaPipe's normalized landmarks to pixels, dropping low-visibility ones.

    ``raw`` is indexable by MediaPipe landmark index; each item has ``x``, ``y``
    and ``visibility``.
    """
    out: LandmarkSet = {}
    for lm_id in Landmark:
        if lm_id.value >= len(raw):
            continue
        pt = raw[lm_id.value]
        if pt.visibility < min_visibility:
            continue
        out[lm_id] = (pt.x * width, pt.y * height)
    return out


class PoseLandmarkExtractor:
    """Wraps ``mp.solutions.pose.Pose``. MediaPipe tracks a single person, so
    ``detect`` returns either no subjects or exactly one."""

    def __init__(self,
                 min_detection_confidence=MIN_DETECTION_CONFIDENCE,
                 min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
                 min_visibility=MIN_VISIBILITY,
                 model_complexity=MODEL_COMPLEXITY):
        self.min_visibility = min_visibility
        self.pose = mp_pose.Pose(
            static_image_mode=False,
            model_complexity=model_complexity,
            enable_segmentation=False,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
            smooth_landmarks=True,
        )

    def detect(self, frame_bgr: np.ndarray) -> List[LandmarkSet]:
        h, w = frame_bgr.shape[:2]
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        res = self.pose.process(rgb)
        if not res.pose_landmarks:
            return []
        subject = landmarks_from_normalized(res.pose_landmarks.landmark, w, h, self.min_visibility)
        if not subject:
            logger.debug("Pose found but no tracked landmark passed visibility %.2f", self.min_visibility)
            return []
        return [subject]

    def close(self):
        self.pose.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
