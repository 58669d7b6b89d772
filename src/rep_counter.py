"""Pull-up rep counting by elbow angle.

Two thresholds form a hysteresis band: a rep starts when the elbow angle
drops below ``up_threshold`` and is counted once when it rises back above
``down_threshold``. Readings inside the band never change anything.
"""

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional

from pullup_settings import DOWN_THRESHOLD, UP_THRESHOLD

logger = logging.getLogger(__name__)

CountListener = Callable[[int], None]


class RepPhase(Enum):
    RESTING = "RESTING"
    FLEXED = "FLEXED"


@dataclass(frozen=True)
class CounterConfig:
    up_threshold: float = UP_THRESHOLD
    down_threshold: float = DOWN_THRESHOLD

    def __post_init__(self):
        if not self.up_threshold < self.down_threshold:
            raise ValueError(
                f"up_threshold ({self.up_threshold}) must be below "
                f"down_threshold ({self.down_threshold})"
            )


@dataclass(frozen=True)
class RepState:
    count: int = 0
    phase: RepPhase = RepPhase.RESTING

    @property
    def in_progress(self) -> bool:
        return self.phase is RepPhase.FLEXED


def step(state: RepState, angle: Optional[float], config: CounterConfig) -> RepState:
    """Apply one angle reading. ``None`` (no measurement) leaves the state as is."""
    if angle is None:
        return state
    if state.phase is RepPhase.RESTING and angle < config.up_threshold:
        return replace(state, phase=RepPhase.FLEXED)
    if state.phase is RepPhase.FLEXED and angle > config.down_threshold:
        return RepState(count=state.count + 1, phase=RepPhase.RESTING)
    return state


class RepCounter:
    """Owns the RepState and is its only writer.

    ``update`` may be called from any thread; updates are applied one at a
    time. Listeners are called outside the state lock but under a publish
    lock taken before the state lock is released, so they see counts in
    mutation order. Listeners must not call back into the counter.
    """

    def __init__(self, config: Optional[CounterConfig] = None) -> None:
        self.config = config or CounterConfig()
        self._state = RepState()
        self._lock = threading.Lock()
        self._publish_lock = threading.Lock()
        self._listeners: List[CountListener] = []

    @property
    def state(self) -> RepState:
        return self._state

    @property
    def count(self) -> int:
        return self._state.count

    def add_listener(self, callback: CountListener) -> None:
        self._listeners.append(callback)

    def update(self, angle: Optional[float]) -> RepState:
        with self._lock:
            prev = self._state
            new = step(prev, angle, self.config)
            self._state = new
            changed = new.count != prev.count
            if changed:
                self._publish_lock.acquire()

        if new.phase is not prev.phase:
            logger.debug("Phase %s -> %s at %.1f deg", prev.phase.value, new.phase.value, angle)
        if changed:
            logger.info("Rep %d completed", new.count)
            self._publish_locked(new.count)
        return new

    def reset(self) -> None:
        with self._lock:
            prev = self._state
            self._state = RepState()
            changed = prev.count != 0
            if changed:
                self._publish_lock.acquire()

        logger.info("Counter reset (was %d)", prev.count)
        if changed:
            self._publish_locked(0)

    def _publish_locked(self, count: int) -> None:
        try:
            for callback in list(self._listeners):
                callback(count)
        finally:
            self._publish_lock.release()
