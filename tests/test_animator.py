"""Tests for Animator, rendering and the encoding pipeline."""

from bar_race.animation_pipeline import build_engine, encode_animation
from bar_race.chart import Animator, BarChartEngine, BarChartOptions, generate_raster_frames
from bar_race.chart.colors import ColorPicker
from bar_race.chart.renderer import Renderer, measure_text

SAMPLE_ROWS = [
    {"id": "fr", "date": "2000-01-01", "value": 60},
    {"id": "de", "date": "2000-01-01", "value": 80},
    {"id": "it", "date": "2000-01-01", "value": 55},
    {"id": "fr", "date": "2010-01-01", "value": 66},
    {"id": "de", "date": "2010-01-01", "value": 81},
    {"id": "it", "date": "2010-01-01", "value": ""},
]
SAMPLE_META = [
    {"id": "fr", "name": "France"},
    {"id": "de", "name": "Germany"},
]
OPTIONS = BarChartOptions(item_count=2, fps=10, shape=(320, 180))


def test_animator_walks_scene_in_increasing_time():
    """Frames cover the scene at 1/fps steps without going back in time."""
    engine = BarChartEngine(SAMPLE_ROWS, SAMPLE_META, options=OPTIONS, scene_duration=6)
    animator = Animator(engine)

    frames = list(animator.iter_frame_timeline())

    assert len(frames) == 60
    times = [frame.time_sec for frame, _ in frames]
    assert times == sorted(times)
    assert [elapsed for _, elapsed in frames[:3]] == [0, 100, 200]
    assert engine.time_regressions == 0


def test_animator_respects_max_frames():
    """max_frames caps the number of frames yielded."""
    engine = BarChartEngine(SAMPLE_ROWS, options=OPTIONS, scene_duration=6)

    frames = list(Animator(engine).iter_frame_timeline(max_frames=5))

    assert len(frames) == 5


def test_generate_raster_frames_returns_images():
    """Each engine frame becomes an image of the chart's shape."""
    engine = build_engine(SAMPLE_ROWS, SAMPLE_META, OPTIONS, 6)

    frames = list(generate_raster_frames(Animator(engine, watermark=True), max_frames=4))

    assert len(frames) == 4
    assert all(frame.size == (320, 180) for frame in frames)


def test_renderer_draws_onto_background():
    """A rendered frame contains more than the background color."""
    engine = build_engine(SAMPLE_ROWS, SAMPLE_META, OPTIONS, 6)
    image = Renderer(engine).render_frame(engine.snapshot(3.0)).convert("RGB")

    assert len(image.getcolors(maxcolors=320 * 180)) > 1


def test_measure_text_grows_with_text():
    """Longer text measures wider."""
    assert measure_text("Germany", 12) > measure_text("de", 12) > 0


def test_color_picker_is_stable():
    """The same id always gets the same color."""
    picker = ColorPicker()

    assert picker.get_color("fr") == picker.get_color("fr")
    assert picker.get_color("fr") == ColorPicker().get_color("fr")


def test_encode_animation_to_gif():
    """The pipeline encodes a .gif path as GIF bytes."""
    encoded = encode_animation(
        SAMPLE_ROWS,
        SAMPLE_META,
        "race.gif",
        options=OPTIONS,
        scene_duration=6,
        max_frames=3,
    )

    assert encoded.startswith(b"GIF89")
