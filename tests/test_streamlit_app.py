import importlib

import pytest

pytest.importorskip("mediapipe")
pytest.importorskip("streamlit_webrtc")


@pytest.fixture(scope="module")
def app():
    # outside `streamlit run` the page renders in bare mode and skips the stream
    return importlib.import_module("streamlit_app")


def test_stream_not_started_without_server(app):
    assert app.start_camera_stream() is None


def test_display_values_follow_counter(app):
    counter = app.session.counter
    counter.reset()
    counter.update(40)
    counter.update(170)
    assert app.session.snapshot()[0] == 1
    counter.reset()
    assert app.session.snapshot()[0] == 0
