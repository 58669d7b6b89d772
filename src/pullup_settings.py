# All config in one place

# Elbow angle thresholds (degrees); the gap between them is the hysteresis band
UP_THRESHOLD = 50.0           # below this the arms are fully flexed (chin up)
DOWN_THRESHOLD = 160.0        # above this the arms are fully extended (dead hang)

# Pose detector
MODEL_COMPLEXITY = 1
MIN_DETECTION_CONFIDENCE = 0.6
MIN_TRACKING_CONFIDENCE = 0.6
MIN_VISIBILITY = 0.5          # landmarks below this are treated as absent

# Video
CAM_INDEX = 0                 # webcam index
ALT_CAM_INDEX = 1             # camera used by the switch key
MIRROR_VIEW = True            # flip horizontally before processing
DRAW_SKELETON = True          # draw landmarks
PREVIEW_WIDTH = 960           # preview window width in pixels; None keeps the camera size

# Audio
BEEP_ON_REP = True            # beep on each rep

# Logging
LOG_LEVEL = "INFO"

# Streamlit / WebRTC
STUN_URLS = ["stun:stun.l.google.com:19302"]
