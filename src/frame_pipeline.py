"""Per-frame pipeline: extractor -> geometry -> rep counter -> overlay."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

import numpy as np

from pose_geometry import LandmarkSet, compute_limb_angle
from pose_overlay import Overlay, build_overlay
from rep_counter import RepCounter, RepPhase

logger = logging.getLogger(__name__)


class LandmarkExtractor(Protocol):
    def detect(self, frame: np.ndarray) -> List[LandmarkSet]: ...


@dataclass
class FrameResult:
    detected: bool
    angle: Optional[float]
    count: int
    phase: RepPhase
    counted: bool = False
    overlay: Overlay = field(default_factory=Overlay.empty)


class FramePipeline:
    """Runs one frame at a time through the counting chain.

    ``process`` may be called from capture or worker threads; calls are
    serialized so frames reach the counter in call order. ``on_overlay``
    receives the skeleton for each frame, or an empty overlay when nobody was
    detected.
    """

    def __init__(self, extractor: LandmarkExtractor, counter: RepCounter,
                 on_overlay: Optional[Callable[[Overlay], None]] = None):
        self.extractor = extractor
        self.counter = counter
        self.on_overlay = on_overlay
        self._lock = threading.Lock()

    def process(self, frame: np.ndarray,
                display_size: Optional[Tuple[int, int]] = None) -> FrameResult:
        """Run one frame. The overlay is mapped into ``display_size`` (width,
        height) when the caller shows the frame at another size."""
        h, w = frame.shape[:2]
        display_size = display_size or (w, h)
        with self._lock:
            subjects = self.extractor.detect(frame)
            if not subjects:
                state = self.counter.state
                result = FrameResult(False, None, state.count, state.phase)
            else:
                # first subject wins; no identity tracking across frames
                landmarks = subjects[0]
                angle = compute_limb_angle(landmarks)
                before = self.counter.count
                state = self.counter.update(angle)
                result = FrameResult(
                    detected=True,
                    angle=angle,
                    count=state.count,
                    phase=state.phase,
                    counted=state.count > before,
                    overlay=build_overlay(landmarks, (w, h), display_size),
                )
                if angle is None:
                    logger.debug("Subject detected but neither arm is fully visible")

        if self.on_overlay is not None:
            self.on_overlay(result.overlay)
        return result
