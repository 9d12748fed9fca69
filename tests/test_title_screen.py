import pytest

import run
from display.backend import HeadlessBackend
from display.screens import TitleScreen
from engine.data_loader import clear_caches
from engine.keys import VK_ESCAPE, VK_RIGHT, VK_SPACE
from engine.loop import GameEngine


class StepClock:
    def __init__(self, step=0.1):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture
def title_engine():
    backend = HeadlessBackend()
    screen = TitleScreen()
    engine = GameEngine(screen, backend, 60, 24, title="Test", clock=StepClock())
    return engine, screen, backend


def test_title_screen_draws_a_frame(title_engine):
    engine, screen, backend = title_engine
    engine.tick()
    rows = backend.frame_text()
    assert len(rows) == 24
    assert "GlyphEngine" in rows[2]
    assert "@ G E" in rows[5]
    assert any("[Space] pressed 0x" in row for row in rows)

def test_space_presses_are_counted_once_per_press(title_engine):
    engine, screen, backend = title_engine
    backend.press(VK_SPACE)
    engine.tick()
    engine.tick()
    backend.release(VK_SPACE)
    engine.tick()
    backend.press(VK_SPACE)
    engine.tick()
    assert screen.space_presses == 2

def test_held_arrow_moves_the_marker(title_engine):
    engine, screen, backend = title_engine
    engine.tick()
    start = screen.marker_x
    backend.press(VK_RIGHT)
    engine.tick()
    engine.tick()
    assert screen.marker_x > start

def test_marker_stays_inside_the_border(title_engine):
    engine, screen, backend = title_engine
    backend.press(VK_RIGHT)
    for _ in range(100):
        engine.tick()
    assert screen.marker_x == engine.canvas.width - 2.0

def test_escape_quits(title_engine):
    engine, screen, backend = title_engine
    backend.press(VK_ESCAPE)
    with pytest.raises(SystemExit):
        engine.tick()


@pytest.fixture
def headless_config(tmp_path, monkeypatch):
    monkeypatch.setattr(run, "configure_logging", lambda *args, **kwargs: None)
    clear_caches()
    path = tmp_path / "engine.toml"
    path.write_text('[display]\nwidth = 40\nheight = 16\nbackend = "headless"\n')
    return path


def test_main_runs_scripted_frames(headless_config):
    assert run.main(["--config", str(headless_config), "--frames", "3"]) == 0

def test_backend_flag_overrides_config(headless_config, monkeypatch):
    created = []

    def fake_make_backend(name, **options):
        backend = HeadlessBackend()
        created.append(name)
        return backend

    monkeypatch.setattr(run, "make_backend", fake_make_backend)
    headless_config.write_text('[display]\nwidth = 40\nheight = 16\nbackend = "tcod"\n')
    assert run.main(["--config", str(headless_config), "--backend", "headless", "--frames", "1"]) == 0
    assert created == ["headless"]

def test_backend_failure_exits_with_error(headless_config, monkeypatch):
    monkeypatch.setattr(run, "make_backend", lambda name, **options: HeadlessBackend(fail_on="open"))
    assert run.main(["--config", str(headless_config), "--frames", "1"]) == 1
