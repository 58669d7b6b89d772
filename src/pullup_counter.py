# Pull-up Counter
# - Count by elbow angle (MediaPipe Pose), both arms averaged when visible
# - Hysteresis between a flexed and an extended threshold, one rep per cycle
# - Beep on rep
# - Switch camera and reset from the keyboard

import logging
import time

import cv2

from pullup_settings import (
    UP_THRESHOLD, DOWN_THRESHOLD,
    CAM_INDEX, ALT_CAM_INDEX, MIRROR_VIEW, DRAW_SKELETON, PREVIEW_WIDTH,
    BEEP_ON_REP, LOG_LEVEL,
)
from rep_beeper import beep
from pose_landmarks import PoseLandmarkExtractor
from pose_overlay import draw_overlay
from frame_pipeline import FramePipeline
from rep_counter import CounterConfig, RepCounter

logger = logging.getLogger(__name__)


def open_camera(index):
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        return None
    logger.info("Using camera %d", index)
    return cap


def preview_size(frame, width=PREVIEW_WIDTH):
    h, w = frame.shape[:2]
    if not width:
        return w, h
    return int(width), int(round(h * width / float(w)))


def draw_header(frame, result, fps, show_debug):
    w = frame.shape[1]
    cv2.rectangle(frame, (0, 0), (w, 50), (0, 0, 0), -1)
    cv2.putText(frame, f"Pull-ups: {result.count}", (10, 36),
                cv2.FONT_HERSHEY_SIMPLEX, 1.0, (0, 255, 0), 3)
    if not show_debug:
        return
    cv2.putText(frame, f"Phase: {result.phase.value}   FPS: {int(fps)}",
                (10, 50 + 25), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (200, 200, 200), 2)
    if result.angle is not None:
        cv2.putText(frame, f"Elbow angle: {int(result.angle)} deg", (10, 50 + 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
    elif not result.detected:
        cv2.putText(frame, "No subject", (10, 50 + 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 0, 255), 2)


def beep_on_rep(count):
    if count > 0:  # reset publishes 0
        beep(990, 100)


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cam_index = CAM_INDEX
    cap = open_camera(cam_index)
    if cap is None:
        raise SystemExit(f"Could not access webcam (index {cam_index}).")

    counter = RepCounter(CounterConfig(UP_THRESHOLD, DOWN_THRESHOLD))
    if BEEP_ON_REP:
        counter.add_listener(beep_on_rep)

    extractor = PoseLandmarkExtractor()
    pipeline = FramePipeline(extractor, counter)

    prev_time = time.time()
    show_debug = True

    try:
        while True:
            ok, frame = cap.read()
            if not ok:
                logger.warning("Camera %d stopped delivering frames", cam_index)
                break
            if MIRROR_VIEW:
                frame = cv2.flip(frame, 1)

            display_size = preview_size(frame)
            result = pipeline.process(frame, display_size)
            if display_size != (frame.shape[1], frame.shape[0]):
                frame = cv2.resize(frame, display_size, interpolation=cv2.INTER_LINEAR)
            if DRAW_SKELETON:
                draw_overlay(frame, result.overlay)

            now = time.time()
            fps = 1.0 / (now - prev_time + 1e-8)
            prev_time = now

            draw_header(frame, result, fps, show_debug)
            if show_debug:
                h = frame.shape[0]
                cv2.putText(frame, "Controls: [q] quit  [r] reset  [c] switch camera  [s] debug on/off",
                            (10, h - 15), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)

            cv2.imshow("Pull-up Counter", frame)
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('r'):
                counter.reset()
            elif key == ord('s'):
                show_debug = not show_debug
            elif key == ord('c'):
                other = ALT_CAM_INDEX if cam_index == CAM_INDEX else CAM_INDEX
                new_cap = open_camera(other)
                if new_cap is None:
                    logger.warning("Camera %d unavailable, staying on %d", other, cam_index)
                else:
                    cap.release()
                    cap, cam_index = new_cap, other
    finally:
        cap.release()
        extractor.close()
        cv2.destroyAllWindows()

    print(f"\nSession finished: {counter.count} pull-ups")


if __name__ == "__main__":
    main()
