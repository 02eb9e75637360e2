import pygame
import pytest

from rasterdemo.app import RasterApp
from rasterdemo.surface import DirtyRect


@pytest.fixture
def app():
    app = RasterApp(120, 90)
    app._init_pygame()
    yield app
    pygame.quit()


def click(app, pos, button=1):
    app._handle_mouse_down(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)
    )


def key(app, k):
    app._handle_key(pygame.event.Event(pygame.KEYDOWN, key=k))


def test_defaults():
    app = RasterApp()
    assert (app.width, app.height) == (800, 600)
    assert app.surface.width == 800
    assert app.center == RasterApp.DEFAULT_CENTER


def test_initial_render_is_presented_in_full(app):
    app.renderer.render(app.surface, app.center, app.zoom)
    areas = app.present()
    assert areas == [pygame.Rect(0, 0, 120, 90)]
    assert app.surface.take_dirty_rects() == []
    assert app.present() == []


def test_two_clicks_draw_a_line(app):
    click(app, (10, 10))
    assert app.surface.get_pixel(10, 10) == 0
    click(app, (20, 10))
    assert all(app.surface.get_pixel(x, 10) == 255 for x in range(10, 21))
    assert app.gesture.points == []


def test_line_region_is_presented(app):
    rect = app.rasterizer.rasterize(app.surface, (0, 0), (1, 1))
    assert rect == DirtyRect(0, 0, 1, 1)
    assert app.present() == [pygame.Rect(0, 0, 2, 2)]
    assert app.gray_surface.get_at((1, 1))[:3] == (255, 255, 255)


def test_right_click_is_ignored(app):
    click(app, (5, 5), button=3)
    assert app.gesture.points == []


def test_keys(app):
    key(app, pygame.K_g)
    assert app.surface.get_pixel(60, 50) == 60
    key(app, pygame.K_c)
    assert not app.surface.pixels.any()
    click(app, (1, 1))
    key(app, pygame.K_r)
    assert app.gesture.points == []
    assert app.surface.pixels.any()
    app.running = True
    key(app, pygame.K_ESCAPE)
    assert not app.running


def test_quit_event_stops_loop(app):
    app.running = True
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    app._handle_events()
    assert not app.running


def test_run_renders_then_exits_on_quit(monkeypatch, capsys):
    app = RasterApp(60, 40)
    warmup = app._warmup_and_initial_render
    quit_calls = []
    real_quit = pygame.quit

    def warmup_then_close():
        warmup()
        pygame.event.post(pygame.event.Event(pygame.QUIT))

    def recording_quit():
        quit_calls.append(True)
        real_quit()

    monkeypatch.setattr(app, "_warmup_and_initial_render", warmup_then_close)
    monkeypatch.setattr(pygame, "quit", recording_quit)

    app.run()

    assert not app.running
    assert quit_calls == [True]
    assert app.surface.pixels.any()
    assert "Rendered 60x40 view" in capsys.readouterr().out
