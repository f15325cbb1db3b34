"""Unit tests for canvas fitting and display/pixel coordinate conversion."""

import pytest

from bbox_annotator.geometry import (
    CanvasGeometry,
    PixelBox,
    fit_canvas,
    pixel_to_screen,
    screen_to_pixel,
)


class TestFitCanvas:
    """Tests for aspect-fit letterboxing."""

    def test_square_image_in_wide_window(self):
        """Square image is fit to height and centered horizontally."""
        g = fit_canvas(1200, 800, 600, 600)

        assert g == CanvasGeometry(200.0, 0.0, 800.0, 800.0)

    def test_wide_image_in_window(self):
        """Image wider than the window is fit to width and centered vertically."""
        g = fit_canvas(1200, 800, 1000, 500)

        assert g.width == pytest.approx(1200.0)
        assert g.height == pytest.approx(600.0)
        assert g.origin == pytest.approx((0.0, 100.0))

    def test_offset_is_added(self):
        g = fit_canvas(300, 300, 600, 600, offset=(10.0, 20.0))

        assert g.origin == (10.0, 20.0)

    def test_degenerate_inputs(self):
        """Zero-sized image or window gives an empty canvas at the offset."""
        assert fit_canvas(0, 800, 600, 600).size == (0.0, 0.0)
        assert fit_canvas(1200, 800, 0, 600).size == (0.0, 0.0)


class TestCanvasGeometry:
    def test_contains_includes_borders(self):
        g = CanvasGeometry(10, 10, 100, 50)

        assert g.contains(10, 10)
        assert g.contains(110, 60)
        assert not g.contains(9.9, 30)
        assert not g.contains(50, 60.1)

    def test_clamp(self):
        g = CanvasGeometry(10, 10, 100, 50)

        assert g.clamp(-5, 200) == (10, 60)
        assert g.clamp(50, 30) == (50, 30)


class TestCoordinateMapper:
    """Tests for pixel_to_screen / screen_to_pixel."""

    canvas = CanvasGeometry(200.0, 0.0, 800.0, 800.0)
    image_size = (600, 600)

    def test_forward(self):
        assert pixel_to_screen((300, 150), self.canvas, self.image_size) == pytest.approx((600.0, 200.0))

    def test_inverse(self):
        assert screen_to_pixel((600.0, 200.0), self.canvas, self.image_size) == pytest.approx((300.0, 150.0))

    def test_inverse_clamps(self):
        """Points outside the canvas clamp to 0 or to the image dimension."""
        assert screen_to_pixel((0.0, -50.0), self.canvas, self.image_size) == (0.0, 0.0)
        assert screen_to_pixel((5000.0, 900.0), self.canvas, self.image_size) == (600.0, 600.0)

    def test_zero_canvas_returns_origin(self):
        flat = CanvasGeometry(5.0, 7.0, 0.0, 100.0)

        sx, sy = pixel_to_screen((40, 50), flat, (100, 100))
        px, py = screen_to_pixel((40.0, 50.0), flat, (100, 100))

        assert sx == 5.0
        assert sy == pytest.approx(57.0)
        assert px == 0.0
        assert py == pytest.approx(43.0)

    @pytest.mark.parametrize("x", [0, 1, 37, 299.5, 450, 600])
    @pytest.mark.parametrize("y", [0, 13, 333, 599, 600])
    def test_round_trip(self, x, y):
        """Screen -> pixel -> screen recovers the point within one unit."""
        screen = pixel_to_screen((x, y), self.canvas, self.image_size)
        back = pixel_to_screen(screen_to_pixel(screen, self.canvas, self.image_size),
                               self.canvas, self.image_size)

        assert back == pytest.approx(screen, abs=1.0)
        assert screen_to_pixel(screen, self.canvas, self.image_size) == pytest.approx((x, y), abs=1.0)


class TestPixelBox:
    """Tests for PixelBox construction and YOLO conversion."""

    canvas = CanvasGeometry(0.0, 0.0, 300.0, 300.0)
    image_size = (600, 600)

    def test_from_display(self):
        box = PixelBox.from_display(50, 50, 150, 120, self.canvas, self.image_size)

        assert box.as_tuple() == (100, 100, 300, 240)

    def test_from_display_any_direction(self):
        """Corners given in reverse order still produce min <= max."""
        box = PixelBox.from_display(150, 120, 50, 50, self.canvas, self.image_size)

        assert box.as_tuple() == (100, 100, 300, 240)

    def test_from_display_clamps(self):
        box = PixelBox.from_display(-20, -20, 400, 400, self.canvas, self.image_size)

        assert box.as_tuple() == (0, 0, 600, 600)

    def test_from_corners_clamps_and_orders(self):
        box = PixelBox.from_corners(700, 50, -10, 20, (600, 400))

        assert box.as_tuple() == (0, 20, 600, 50)

    def test_to_cxcywh(self):
        cx, cy, w, h = PixelBox(100, 100, 300, 240).to_cxcywh(self.image_size)

        assert (cx, cy, w, h) == pytest.approx((0.333, 0.283, 0.333, 0.233), abs=1e-3)
