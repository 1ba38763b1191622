"""
Pytest configuration and shared fixtures.

Langfuse tracing is disabled before any test module imports the pipeline,
so traces are never sent during test runs.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

# Must be set before langfuse is imported
os.environ["LANGFUSE_TRACING_ENABLED"] = "false"

_langfuse_logger = logging.getLogger("langfuse")
_langfuse_logger.setLevel(logging.CRITICAL)
_langfuse_logger.propagate = False

import cv2  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("ReactionCaptionTest")


@pytest.fixture
def make_video(tmp_path: Path) -> Callable[..., bytes]:
    """
    Build a small MJPG/AVI clip and return its bytes.

    The opening eighth of the clip is black and the rest red, so a frame
    taken at 25% of the duration is red while the first frame is black.
    """

    def _make_video(
        frame_count: int = 40,
        width: int = 64,
        height: int = 48,
        fps: float = 10.0,
    ) -> bytes:
        path = tmp_path / f"clip_{frame_count}_{width}x{height}.avi"
        writer = cv2.VideoWriter(
            str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (width, height)
        )
        assert writer.isOpened(), "OpenCV build cannot write MJPG/AVI"
        try:
            for index in range(frame_count):
                frame = np.zeros((height, width, 3), dtype=np.uint8)
                if index >= frame_count // 8:
                    frame[:, :] = (0, 0, 255)
                writer.write(frame)
        finally:
            writer.release()
        return path.read_bytes()

    return _make_video
