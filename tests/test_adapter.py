import pytest

from wavelines.adapter import InputAdapter, PageModel
from wavelines.canvas import WaveCanvas
from wavelines.core.driver import AnimationDriver, Phase


def make_adapter(surface, host, **page_kwargs):
    page = PageModel(**page_kwargs)
    driver = AnimationDriver(host, page.metrics)
    adapter = InputAdapter(page, surface, driver)
    driver.start()
    return adapter, driver


def test_page_metrics():
    page = PageModel(800, (1200, 3000, 900), scroll_offset=10)
    m = page.metrics()
    assert m.document_height == 3000
    assert not m.is_at_bottom()
    assert PageModel(800).metrics().is_at_bottom()


def test_resize_fixes_width_and_tracks_height(surface, host):
    adapter, driver = make_adapter(surface, host, viewport_height=800, document_heights=(3000,))
    adapter.resize(600)
    assert ("resize", 100, 600) in surface.calls
    assert driver.state.redraw


def test_scroll_and_wheel_reach_driver(surface, host):
    adapter, driver = make_adapter(surface, host, viewport_height=800, document_heights=(3000,))
    adapter.scroll(40)
    assert driver.state.scroll_velocity == pytest.approx(0.2)
    assert driver.state.last_scroll_offset == 40
    adapter.wheel(0, -50)
    assert driver.state.scroll_velocity == pytest.approx(-0.1)


def test_handle_json_events(surface, host):
    adapter, driver = make_adapter(surface, host, viewport_height=800, document_heights=(3000,))
    adapter.handle({"type": "resize", "height": 700, "document_heights": [700, 2000]})
    assert adapter.page.document_heights == (700.0, 2000.0)
    adapter.handle({"type": "scroll", "offset": 1300, "document_heights": [2000]})
    assert driver.state.at_bottom
    adapter.handle({"type": "wheel", "dy": 300})
    assert driver.state.scroll_velocity == pytest.approx(0.2)


@pytest.mark.parametrize(
    "event", [{"type": "teleport"}, {}, {"type": "scroll"}, {"type": "resize", "document_heights": [1]}]
)
def test_handle_rejects_bad_events(surface, host, event):
    adapter, _ = make_adapter(surface, host, viewport_height=800)
    with pytest.raises(ValueError):
        adapter.handle(event)


def test_canvas_session_end_to_end():
    canvas = WaveCanvas(400, (2000,))
    canvas.start()
    canvas.host.run(200)
    assert canvas.frames_rendered == 200
    assert canvas.driver.phase is Phase.IDLE
    assert len(canvas.sphere_positions) == 5

    canvas.adapter.scroll(1600)
    assert canvas.driver.state.at_bottom
    canvas.pump(3.0)
    assert canvas.driver.phase is Phase.AT_BOTTOM
    assert canvas.frames_rendered >= 370
    assert canvas.image().size == (100, 400)

    canvas.stop()
    rendered = canvas.frames_rendered
    canvas.pump(1.0)
    assert canvas.frames_rendered == rendered
