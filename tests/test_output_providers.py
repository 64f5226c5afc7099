"""Tests for output providers."""

import pytest
from PIL import Image

from bar_race.output import GifOutputProvider, WebPOutputProvider, resolve_output_provider


def create_test_frame(color="red"):
    """Helper to create a test frame."""
    return Image.new("RGB", (10, 10), color)


def test_gif_provider_encodes_frames():
    """GIF provider produces GIF bytes."""
    provider = GifOutputProvider("test_output.gif")
    frames = [create_test_frame("red"), create_test_frame("blue")]

    result = provider.encode(iter(frames), frame_duration=100)

    assert result.startswith(b"GIF89")


def test_webp_provider_encodes_frames():
    """WebP provider produces WebP bytes."""
    provider = WebPOutputProvider("test_output.webp")
    frames = [create_test_frame("red"), create_test_frame("blue")]

    result = provider.encode(iter(frames), frame_duration=100)

    # WebP files start with RIFF....WEBP
    assert result.startswith(b"RIFF")
    assert b"WEBP" in result


@pytest.mark.parametrize("provider_class", [GifOutputProvider, WebPOutputProvider])
def test_empty_frames_encode_to_nothing(provider_class):
    """No frames encode to empty bytes."""
    assert provider_class().encode(iter([]), frame_duration=100) == b""


def test_write_requires_path():
    """Writing without a path fails."""
    with pytest.raises(ValueError, match="Output path not set"):
        GifOutputProvider().write(b"data")


def test_write_to_path(tmp_path):
    """write stores the encoded bytes at the provider's path."""
    path = tmp_path / "out.gif"

    GifOutputProvider(str(path)).write(b"GIF89a")

    assert path.read_bytes() == b"GIF89a"


def test_resolve_is_case_insensitive():
    """Extensions resolve regardless of case."""
    assert isinstance(resolve_output_provider("output.gif"), GifOutputProvider)
    assert isinstance(resolve_output_provider("output.WEBP"), WebPOutputProvider)


def test_resolve_unsupported_format():
    """Unknown extensions are rejected."""
    with pytest.raises(ValueError, match="Unsupported output format"):
        resolve_output_provider("output.mp4")
