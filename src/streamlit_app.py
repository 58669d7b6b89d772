import logging
import threading

import av
import cv2
import streamlit as st
from streamlit import runtime
from streamlit_webrtc import webrtc_streamer, WebRtcMode, RTCConfiguration

from pullup_settings import (
    UP_THRESHOLD, DOWN_THRESHOLD, MIRROR_VIEW, DRAW_SKELETON, LOG_LEVEL, STUN_URLS,
)
from pose_landmarks import PoseLandmarkExtractor
from pose_overlay import draw_overlay
from frame_pipeline import FramePipeline
from rep_counter import CounterConfig, RepCounter, RepPhase

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# ------------- Shared state (video callback runs in another thread) -------------
class LiveSession:
    """Pipeline plus the values it last published for the UI thread.

    The counter is the only writer of the rep state; the UI reads the copies
    kept here, never the counter's internals mid-update.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.counter = RepCounter()
        self.counter.add_listener(self._on_count)
        self.pipeline = FramePipeline(PoseLandmarkExtractor(), self.counter)
        self.count = 0
        self.phase = RepPhase.RESTING
        self.angle = None
        self.detected = False

    def _on_count(self, count):
        with self.lock:
            self.count = count

    def publish(self, result):
        with self.lock:
            self.phase = result.phase
            self.angle = result.angle
            self.detected = result.detected

    def snapshot(self):
        with self.lock:
            return self.count, self.phase, self.angle, self.detected


@st.cache_resource
def get_session() -> LiveSession:
    """One MediaPipe graph and counter per server process, kept across reruns."""
    return LiveSession()


session = get_session()


def video_frame_callback(frame: av.VideoFrame) -> av.VideoFrame:
    """Process each video frame; must not use st.session_state (runs in worker thread)."""
    img = frame.to_ndarray(format="bgr24")
    if MIRROR_VIEW:
        img = cv2.flip(img, 1)
    w = img.shape[1]

    result = session.pipeline.process(img)
    if DRAW_SKELETON:
        draw_overlay(img, result.overlay)
    session.publish(result)

    cv2.rectangle(img, (0, 0), (w, 40), (0, 0, 0), -1)
    cv2.putText(img, f"Pull-ups {result.count}  |  {result.phase.value}",
                (10, 28), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
    if result.angle is not None:
        cv2.putText(img, f"Ang: {int(result.angle)}", (w - 110, 28),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

    return av.VideoFrame.from_ndarray(img, format="bgr24")


# ------------- Sidebar (UI) -------------
st.sidebar.title("⚙️ Settings")

up_threshold = st.sidebar.slider("Flexed angle (°)", 20, 90, int(UP_THRESHOLD), 1)
down_threshold = st.sidebar.slider("Extended angle (°)", 120, 180, int(DOWN_THRESHOLD), 1)
reset_btn = st.sidebar.button("🔁 Reset count")

try:
    # read by the counter on its next update
    session.counter.config = CounterConfig(float(up_threshold), float(down_threshold))
except ValueError as e:
    st.sidebar.error(str(e))

if reset_btn:
    session.counter.reset()

count, phase, angle, detected = session.snapshot()

# ------------- Header -------------
st.title("Pull-up Counter")

col1, col2, col3 = st.columns(3)
col1.metric("Reps", count)
col2.metric("Phase", phase.value)
col3.metric("Elbow angle", f"{int(angle)}°" if angle is not None else "-")

# Flex progress: 0 at full extension, 1 at full flexion
if angle is not None:
    span = down_threshold - up_threshold
    prog = min(1.0, max(0.0, (down_threshold - angle) / span)) if span > 0 else 0.0
else:
    prog = 0.0
st.progress(prog)

# ------------- WebRTC Video -------------
def start_camera_stream():
    """Browser camera -> ``video_frame_callback`` -> browser. Returns the
    streamer context, or None when the page isn't served by ``streamlit run``."""
    if not runtime.exists():
        st.error(
            "The camera stream needs a Streamlit server. Start it with "
            "`streamlit run src/streamlit_app.py` and open http://localhost:8501."
        )
        return None
    return webrtc_streamer(
        key="pullup-camera",
        mode=WebRtcMode.SENDRECV,
        rtc_configuration=RTCConfiguration({"iceServers": [{"urls": STUN_URLS}]}),
        media_stream_constraints={"video": True, "audio": False},
        video_frame_callback=video_frame_callback,
        async_processing=True,
    )


ctx = start_camera_stream()
if ctx is not None and not ctx.state.playing:
    st.caption("Press START to open the camera.")
else:
    st.caption("Subject detected" if detected else "No subject in view")
