import numpy as np
import pytest

from ryutai.graphics.color import alpha_fraction, hsb_to_rgb, hsv_to_rgb
from ryutai.graphics.primitives import (
    BlendMode,
    draw_text,
    fill_ellipse,
    fill_rect,
    measure_text,
    polyline_mask,
)
from ryutai.graphics.renderer import Canvas


class TestCompositeMode:

    def test_mode_restored_after_block(self, canvas):
        with canvas.composite_mode(BlendMode.ADDITIVE):
            assert canvas.blend_mode is BlendMode.ADDITIVE
        assert canvas.blend_mode is BlendMode.NORMAL

    def test_mode_restored_after_exception(self, canvas):
        with pytest.raises(ValueError):
            with canvas.composite_mode(BlendMode.ADDITIVE):
                raise ValueError("boom")
        assert canvas.blend_mode is BlendMode.NORMAL

    def test_nested_modes(self, canvas):
        with canvas.composite_mode(BlendMode.ADDITIVE):
            with canvas.composite_mode(BlendMode.NORMAL):
                assert canvas.blend_mode is BlendMode.NORMAL
            assert canvas.blend_mode is BlendMode.ADDITIVE
        assert canvas.blend_mode is BlendMode.NORMAL


class TestEllipse:

    def test_center_pixel_colored(self, canvas):
        canvas.fill_ellipse(32, 32, 10, 10, (255, 0, 0))
        assert tuple(canvas.buffer[32, 32]) == (255, 0, 0)
        assert tuple(canvas.buffer[0, 0]) == (0, 0, 0)

    def test_ellipse_respects_axes(self, canvas):
        canvas.fill_ellipse(32, 32, 20, 4, (255, 255, 255))
        assert canvas.buffer[32, 41].any()
        assert not canvas.buffer[41, 32].any()

    def test_additive_accumulates_and_saturates(self, canvas):
        with canvas.composite_mode(BlendMode.ADDITIVE):
            canvas.fill_ellipse(10, 10, 4, 4, (100, 100, 100))
            assert tuple(canvas.buffer[10, 10]) == (100, 100, 100)
            canvas.fill_ellipse(10, 10, 4, 4, (100, 100, 100))
            assert tuple(canvas.buffer[10, 10]) == (200, 200, 200)
            canvas.fill_ellipse(10, 10, 4, 4, (100, 100, 100))
            assert tuple(canvas.buffer[10, 10]) == (255, 255, 255)

    def test_normal_alpha_blend(self, canvas):
        canvas.buffer[:] = (200, 100, 50)
        canvas.fill_ellipse(10, 10, 4, 4, (0, 0, 0), alpha=0.5)
        assert tuple(canvas.buffer[10, 10]) == (100, 50, 25)

    def test_sub_pixel_lights_nearest(self, canvas):
        canvas.fill_ellipse(5.2, 7.8, 0.1, 0.1, (9, 9, 9))
        assert tuple(canvas.buffer[8, 5]) == (9, 9, 9)

    @pytest.mark.parametrize(
        "cx,cy,w,h",
        [
            (float("nan"), 10, 4, 4),
            (10, float("inf"), 4, 4),
            (-100, -100, 4, 4),
            (1e9, 1e9, 4, 4),
        ],
    )
    def test_bad_or_offscreen_input_is_ignored(self, canvas, cx, cy, w, h):
        canvas.fill_ellipse(cx, cy, w, h, (255, 255, 255))
        assert not canvas.buffer.any()

    def test_partially_offscreen_is_clipped(self, canvas):
        fill_ellipse(canvas.buffer, 0, 0, 10, 10, (255, 255, 255))
        assert canvas.buffer[0, 0].all()


class TestPolyline:

    def test_pixels_on_and_off_the_line(self, canvas):
        canvas.stroke_polyline([(5, 10), (50, 10)], (255, 255, 255), thickness=3)
        # buffer is indexed [y, x]
        assert canvas.buffer[10, 20].all()
        assert canvas.buffer[11, 20].all()
        assert not canvas.buffer[20, 20].any()
        assert not canvas.buffer[10, 60].any()

    def test_overlapping_segments_blend_once(self, canvas):
        canvas.buffer[:] = (200, 200, 200)
        canvas.stroke_polyline(
            [(10, 10), (40, 10), (10, 10), (40, 10)],
            (0, 0, 0),
            thickness=4,
            alpha=0.5,
        )
        assert tuple(canvas.buffer[10, 25]) == (100, 100, 100)

    def test_mask_ignores_non_finite_points(self):
        mask = polyline_mask((20, 20), [(2, 2), (float("nan"), 5), (10, 2)], 2)
        assert mask[2, 6]
        assert mask.shape == (20, 20)

    def test_single_point_draws_a_dot(self, canvas):
        canvas.stroke_polyline([(30, 30)], (255, 255, 255), thickness=4)
        assert canvas.buffer[30, 30].all()

    def test_empty_polyline(self, canvas):
        canvas.stroke_polyline([], (255, 255, 255), thickness=4)
        assert not canvas.buffer.any()


class TestFade:

    def test_fade_moves_toward_color(self, canvas):
        canvas.buffer[:] = 200
        canvas.fade((0, 0, 0), 0.25)
        assert tuple(canvas.buffer[0, 0]) == (150, 150, 150)

    def test_full_fade_clears(self, canvas):
        canvas.buffer[:] = 200
        canvas.fade((1, 2, 3), 1.0)
        assert tuple(canvas.buffer[5, 5]) == (1, 2, 3)

    def test_zero_fade_is_noop(self, canvas):
        canvas.buffer[:] = 77
        canvas.fade((0, 0, 0), 0.0)
        assert (canvas.buffer == 77).all()


class TestText:

    def test_measure(self):
        assert measure_text("12:34", 1) == (19, 5)
        assert measure_text("12:34", 3) == (57, 15)
        assert measure_text("", 2) == (0, 0)

    def test_draw_text_sets_pixels(self, canvas):
        size = draw_text(canvas.buffer, "8", 0, 0, (255, 255, 255))
        assert size == (3, 5)
        # '8' has a hollow center at row 1, col 1
        assert canvas.buffer[0, 0].all()
        assert not canvas.buffer[1, 1].any()

    def test_centered_text(self, canvas):
        canvas.draw_text_centered("00", 32, 32, (255, 255, 255), scale=2)
        assert canvas.buffer.any()
        assert not canvas.buffer[:20].any()

    def test_unknown_characters_fall_back(self, canvas):
        draw_text(canvas.buffer, "@", 0, 0, (255, 255, 255))
        assert canvas.buffer.any()

    def test_fill_rect_clamps(self, canvas):
        fill_rect(canvas.buffer, -5, -5, 10, 10, (10, 20, 30))
        assert tuple(canvas.buffer[4, 4]) == (10, 20, 30)
        assert not canvas.buffer[5, 5].any()


class TestCanvas:

    def test_size_and_background(self):
        canvas = Canvas(30, 20, background=(1, 2, 3))
        assert canvas.size == (30, 20)
        assert canvas.buffer.shape == (20, 30, 3)
        assert canvas.buffer.dtype == np.uint8
        assert tuple(canvas.buffer[0, 0]) == (1, 2, 3)

    def test_resize_reallocates(self):
        canvas = Canvas(30, 20, background=(5, 5, 5))
        canvas.buffer[:] = 200
        canvas.resize(50, 40)
        assert canvas.size == (50, 40)
        assert tuple(canvas.buffer[39, 49]) == (5, 5, 5)

    def test_zero_size(self):
        canvas = Canvas(0, 0)
        canvas.fill_ellipse(0, 0, 5, 5, (255, 255, 255))
        canvas.stroke_polyline([(0, 0), (3, 3)], (255, 255, 255), 2)
        assert canvas.size == (0, 0)


class TestColor:

    def test_hsv_primaries(self):
        assert hsv_to_rgb(0, 1, 1) == (255, 0, 0)
        assert hsv_to_rgb(120, 1, 1) == (0, 255, 0)
        assert hsv_to_rgb(240, 1, 1) == (0, 0, 255)

    def test_hsb_percent_scale(self):
        assert hsb_to_rgb((45, 80, 100)) == (255, 204, 51)
        assert hsb_to_rgb((0, 0, 0)) == (0, 0, 0)

    def test_alpha_fraction(self):
        assert alpha_fraction(80) == pytest.approx(0.8)
        assert alpha_fraction(150) == 1.0
        assert alpha_fraction(-3) == 0.0
