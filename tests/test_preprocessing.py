"""
Unit tests for the preprocessing module (behavioral tests only).

Covers: input normalization, image buffer immutability, each OCR stage,
step classes, configuration validation and end-to-end pipeline behavior.
"""

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from errors import ValidationError
from preprocessing import (
    NORMAL,
    BinarizeStep,
    ContrastStep,
    GrayscaleStep,
    High,
    ImageBuffer,
    Low,
    OCRConfig,
    Pipeline,
    RGBAImage,
    RotateStep,
    binarize,
    build_pipeline,
    contrast,
    contrast_lut,
    grayscale,
    prepare_ocr,
    rotate,
    run_pipeline,
)
from preprocessing.normalization import to_rgba


def uniform(rgba, width=4, height=3):
    return RGBAImage.filled(width, height, rgba)


class TestToRgba:
    """Tests for the to_rgba function."""

    def test_pure_function_no_mutation(self):
        rgb = np.full((10, 10, 3), 128, dtype=np.uint8)
        original_data = rgb.copy()
        _ = to_rgba(rgb)
        assert np.array_equal(rgb, original_data)

    def test_rgb_gets_opaque_alpha(self):
        result = to_rgba(np.zeros((5, 7, 3), dtype=np.uint8))
        assert result.shape == (5, 7, 4)
        assert np.all(result[:, :, 3] == 255)

    def test_grayscale_replicated(self):
        gray = np.full((4, 4), 77, dtype=np.uint8)
        result = to_rgba(gray)
        assert np.all(result[:, :, :3] == 77)
        assert np.all(result[:, :, 3] == 255)

    def test_rgba_is_copied(self):
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        result = to_rgba(rgba)
        assert np.array_equal(result, rgba)
        assert result is not rgba

    def test_wide_integers_clipped(self):
        result = to_rgba(np.array([[-5, 300]], dtype=np.int16))
        assert result[0, 0, 0] == 0
        assert result[0, 1, 0] == 255

    def test_invalid_type_raises(self):
        with pytest.raises(TypeError, match="Expected numpy.ndarray"):
            to_rgba([[1, 2], [3, 4]])

    def test_float_dtype_raises(self):
        with pytest.raises(TypeError, match="integer dtype"):
            to_rgba(np.zeros((2, 2, 3), dtype=np.float32))

    def test_empty_array_raises(self):
        with pytest.raises(ValueError):
            to_rgba(np.array([]))

    def test_1d_array_raises(self):
        with pytest.raises(ValueError, match="2D or 3D"):
            to_rgba(np.array([1, 2, 3]))

    def test_unsupported_channels_raises(self):
        with pytest.raises(ValueError, match="Unsupported number of channels"):
            to_rgba(np.zeros((10, 10, 5), dtype=np.uint8))


class TestRGBAImage:
    """Tests for the numpy-backed image buffer."""

    def test_implements_image_buffer(self, random_image):
        assert isinstance(random_image, ImageBuffer)

    def test_dimensions(self, random_image):
        assert random_image.width == 40
        assert random_image.height == 30
        assert random_image.size == (40, 30)

    def test_pixels_are_read_only(self, random_image):
        with pytest.raises(ValueError):
            random_image.pixels[0, 0, 0] = 1

    def test_caller_array_not_aliased(self):
        source = np.zeros((2, 2, 4), dtype=np.uint8)
        image = RGBAImage(source)
        source[0, 0] = (9, 9, 9, 9)
        assert image.get_pixel(0, 0) == (0, 0, 0, 0)

    def test_from_pixels_row_major(self):
        image = RGBAImage.from_pixels(2, 1, [(1, 2, 3, 4), (5, 6, 7, 8)])
        assert image.get_pixel(0, 0) == (1, 2, 3, 4)
        assert image.get_pixel(1, 0) == (5, 6, 7, 8)

    def test_from_pixels_wrong_count_raises(self):
        with pytest.raises(ValueError, match="Expected 4 RGBA pixels"):
            RGBAImage.from_pixels(2, 2, [(0, 0, 0, 0)])

    def test_from_pixels_out_of_range_raises(self):
        with pytest.raises(ValueError, match="within"):
            RGBAImage.from_pixels(1, 1, [(0, 0, 256, 0)])

    def test_get_pixel_out_of_bounds_raises(self, random_image):
        with pytest.raises(IndexError):
            random_image.get_pixel(40, 0)

    def test_map_pixels_must_preserve_shape(self, random_image):
        with pytest.raises(ValueError, match="preserve shape"):
            random_image.map_pixels(lambda p: p[:1])

    def test_equality_compares_pixels(self, random_image):
        assert random_image == RGBAImage(random_image.to_array())
        assert random_image != random_image.map_pixels(lambda p: 255 - p)

    def test_to_array_is_writable_copy(self, random_image):
        before = random_image.get_pixel(0, 0)
        copy = random_image.to_array()
        copy[0, 0] = (1, 2, 3, 4) if before != (1, 2, 3, 4) else (5, 6, 7, 8)
        assert copy.flags.writeable
        assert random_image.get_pixel(0, 0) == before


class TestRotate:

    def test_zero_returns_same_image(self, wide_image):
        assert rotate(wide_image, 0.0) is wide_image

    def test_quarter_turn_swaps_dimensions(self, wide_image):
        rotated = rotate(wide_image, math.pi / 2)
        assert rotated.size == (50, 100)

    def test_small_angle_expands_canvas(self, wide_image):
        rotated = rotate(wide_image, math.radians(10))
        assert rotated.width > wide_image.width
        assert rotated.height > wide_image.height

    def test_uncovered_corners_are_transparent(self, wide_image):
        rotated = rotate(wide_image, math.radians(30))
        assert rotated.get_pixel(0, 0)[3] == 0

    def test_input_unchanged(self, wide_image):
        before = wide_image.to_array()
        rotate(wide_image, 1.0)
        assert np.array_equal(wide_image.pixels, before)


class TestGrayscale:

    def test_channels_equal_and_dimensions_kept(self, random_image):
        gray = grayscale(random_image)
        assert gray.size == random_image.size
        pixels = gray.pixels
        assert np.array_equal(pixels[:, :, 0], pixels[:, :, 1])
        assert np.array_equal(pixels[:, :, 1], pixels[:, :, 2])

    def test_alpha_preserved(self, random_image):
        gray = grayscale(random_image)
        assert np.array_equal(gray.pixels[:, :, 3], random_image.pixels[:, :, 3])

    def test_white_and_black_unchanged(self):
        assert grayscale(uniform((255, 255, 255, 255))) == uniform((255, 255, 255, 255))
        assert grayscale(uniform((0, 0, 0, 255))) == uniform((0, 0, 0, 255))

    def test_green_brighter_than_blue(self):
        green = grayscale(uniform((0, 255, 0, 255))).get_pixel(0, 0)[0]
        blue = grayscale(uniform((0, 0, 255, 255))).get_pixel(0, 0)[0]
        assert green > blue


class TestContrast:

    def test_normal_is_bit_identical(self, random_image):
        assert contrast(random_image, NORMAL) == random_image

    def test_high_contrast_values(self):
        image = RGBAImage.from_pixels(4, 1, [
            (138, 138, 138, 10),
            (100, 100, 100, 20),
            (0, 0, 0, 30),
            (255, 255, 255, 40),
        ])
        result = contrast(image, High(2.0))
        assert result.get_pixel(0, 0) == (148, 148, 148, 10)
        assert result.get_pixel(1, 0) == (72, 72, 72, 20)
        assert result.get_pixel(2, 0) == (0, 0, 0, 30)
        assert result.get_pixel(3, 0) == (255, 255, 255, 40)

    def test_rounds_to_nearest(self):
        result = contrast(uniform((130, 130, 130, 255)), High(1.4))
        # (130 - 128) * 1.4 + 128 = 130.8
        assert result.get_pixel(0, 0)[:3] == (131, 131, 131)

    def test_ties_round_half_to_even(self):
        image = RGBAImage.from_pixels(2, 1, [(129, 129, 129, 255), (131, 131, 131, 255)])
        result = contrast(image, High(1.5))
        # 129.5 -> 130, 132.5 -> 132
        assert result.get_pixel(0, 0)[0] == 130
        assert result.get_pixel(1, 0)[0] == 132

    def test_low_contrast_pulls_toward_midpoint(self):
        image = RGBAImage.from_pixels(2, 1, [(0, 0, 0, 255), (255, 255, 255, 255)])
        result = contrast(image, Low(0.5))
        assert result.get_pixel(0, 0)[0] == 64
        # 191.5 -> 192
        assert result.get_pixel(1, 0)[0] == 192

    def test_channels_adjusted_independently(self):
        result = contrast(uniform((0, 128, 255, 7)), High(3.0))
        assert result.get_pixel(0, 0) == (0, 128, 255, 7)

    def test_lut_matches_formula(self):
        lut = contrast_lut(1.3)
        for value in (0, 1, 64, 127, 128, 200, 255):
            expected = min(255, max(0, round((value - 128) * 1.3 + 128)))
            assert lut[value] == expected

    def test_input_unchanged(self, random_image):
        before = random_image.to_array()
        contrast(random_image, High(1.8))
        assert np.array_equal(random_image.pixels, before)


class TestBinarize:

    def test_output_only_black_or_white(self, random_image):
        result = binarize(random_image)
        rgb = result.pixels[:, :, :3]
        assert np.all((rgb == 0) | (rgb == 255))
        assert np.array_equal(rgb[:, :, 0], rgb[:, :, 2])

    def test_alpha_preserved(self, random_image):
        result = binarize(random_image)
        assert np.array_equal(result.pixels[:, :, 3], random_image.pixels[:, :, 3])

    def test_threshold_equality_is_black(self):
        image = RGBAImage.from_pixels(2, 1, [(128, 128, 128, 255), (129, 129, 129, 255)])
        result = binarize(image, threshold=128)
        assert result.get_pixel(0, 0) == (0, 0, 0, 255)
        assert result.get_pixel(1, 0) == (255, 255, 255, 255)

    def test_brightness_is_floored_mean(self):
        image = RGBAImage.from_pixels(2, 1, [(255, 0, 131, 255), (255, 1, 131, 255)])
        result = binarize(image, threshold=128)
        # 386 // 3 = 128 -> black, 387 // 3 = 129 -> white
        assert result.get_pixel(0, 0)[0] == 0
        assert result.get_pixel(1, 0)[0] == 255

    def test_custom_threshold(self):
        result = binarize(uniform((50, 50, 50, 255)), threshold=10)
        assert result.get_pixel(0, 0) == (255, 255, 255, 255)


class TestOCRConfig:
    """Tests for OCRConfig validation."""

    def test_defaults_are_valid(self):
        config = OCRConfig()
        config.validate()
        assert config.contrast_factor == 1.4
        assert config.threshold == 128
        assert config.binarize is True

    def test_threshold_out_of_range_raises(self):
        with pytest.raises(ValidationError, match="threshold"):
            OCRConfig(threshold=300).validate()

    def test_threshold_must_be_int(self):
        with pytest.raises(ValidationError, match="must be int"):
            OCRConfig(threshold=12.5).validate()

    def test_nan_contrast_raises(self):
        with pytest.raises(ValidationError):
            OCRConfig(contrast_factor=float("nan")).validate()

    def test_infinite_tilt_raises(self):
        with pytest.raises(ValidationError, match="tilt_degrees"):
            OCRConfig(tilt_degrees=float("inf")).validate()

    def test_radians_conversion(self):
        assert OCRConfig(tilt_degrees=180).radians == pytest.approx(math.pi)

    def test_contrast_level(self):
        assert OCRConfig(contrast_factor=1.0).contrast_level is NORMAL
        assert OCRConfig(contrast_factor=0.7).contrast_level == Low(0.7)


class TestSteps:

    def test_rotate_step_zero_reports_skipped(self):
        assert RotateStep(0.0).get_metadata()["step_status"] == "skipped"
        assert RotateStep(0.1).get_metadata()["step_status"] == "applied"

    def test_step_names(self):
        assert RotateStep(0.0).name == "rotate(0)"
        assert GrayscaleStep().name == "grayscale"
        assert ContrastStep(High(1.4)).name == "contrast(1.4)"
        assert BinarizeStep(100).name == "binarize(100)"

    def test_contrast_step_metadata(self):
        metrics = ContrastStep(Low(0.5)).get_metadata()["step_metrics"]
        assert metrics == {"level": "low", "factor": 0.5}

    def test_steps_are_pure(self, random_image):
        before = random_image.to_array()
        for step in (RotateStep(0.3), GrayscaleStep(), ContrastStep(High(2.0)), BinarizeStep()):
            step.apply(random_image)
        assert np.array_equal(random_image.pixels, before)


class TestPipeline:
    """Tests for the Pipeline class."""

    def test_empty_pipeline_returns_original(self, random_image):
        result = Pipeline(steps=[]).run(random_image)
        assert result.final is random_image

    def test_tracks_intermediates(self, random_image):
        pipeline = Pipeline(steps=[GrayscaleStep(), BinarizeStep(threshold=100)])
        result = pipeline.run(random_image)
        assert len(result.steps) == 2
        assert result.steps[0].name == "grayscale"
        assert result.steps[1].name == "binarize(100)"
        assert result.get_intermediate("grayscale") == grayscale(random_image)
        assert result.get_intermediate("binarize") == result.final
        assert result.get_intermediate("unknown") is None

    def test_aggregates_metadata(self, random_image):
        pipeline = Pipeline(steps=[ContrastStep(High(2.0)), BinarizeStep(threshold=90)])
        result = pipeline.run(random_image)
        assert result.get_metadata("step_metrics") == {"level": "high", "factor": 2.0}
        assert result.all_metadata["step_metrics"] == {"threshold": 90}
        assert result.step_metadata["contrast"]["status"] == "applied"

    def test_len_and_iter(self):
        steps = [GrayscaleStep(), BinarizeStep()]
        pipeline = Pipeline(steps=steps)
        assert len(pipeline) == 2
        assert list(pipeline) == steps


class TestBuildPipeline:

    def test_default_order(self):
        names = [step.name for step in build_pipeline(OCRConfig())]
        assert names == ["rotate(0)", "grayscale", "contrast(1.4)", "binarize(128)"]

    def test_binarize_omitted_when_disabled(self):
        names = [step.name for step in build_pipeline(OCRConfig(binarize=False))]
        assert names == ["rotate(0)", "grayscale", "contrast(1.4)"]

    def test_tilt_converted_to_radians(self):
        rotate_step = build_pipeline(OCRConfig(tilt_degrees=90)).steps[0]
        assert rotate_step.radians == pytest.approx(math.pi / 2)


class TestRunPipeline:

    def test_basic_pipeline(self, random_image):
        result = run_pipeline(random_image)
        assert result.original is random_image
        assert result.final.size == random_image.size
        assert result.step_metadata["rotate"]["status"] == "skipped"

    def test_invalid_config_raises(self, random_image):
        with pytest.raises(ValidationError):
            run_pipeline(random_image, OCRConfig(threshold=-1))

    def test_invalid_input_raises(self):
        with pytest.raises(TypeError):
            run_pipeline("not an image")


class TestPrepareOcr:

    def test_default_output_is_binary(self, random_image):
        result = prepare_ocr(random_image)
        rgb = result.pixels[:, :, :3]
        assert np.all((rgb == 0) | (rgb == 255))
        assert np.array_equal(result.pixels[:, :, 3], random_image.pixels[:, :, 3])

    def test_neutral_settings_equal_grayscale(self, random_image):
        result = prepare_ocr(
            random_image, tilt_degrees=0.0, contrast_factor=1.0, do_binarize=False
        )
        assert result == grayscale(random_image)

    def test_fixed_stage_order(self, random_image):
        expected = binarize(contrast(grayscale(random_image), High(1.4)), 128)
        assert prepare_ocr(random_image) == expected

    def test_tilt_is_in_degrees(self, wide_image):
        result = prepare_ocr(wide_image, tilt_degrees=90.0)
        assert result.size == (50, 100)

    def test_deterministic(self, random_image):
        first = prepare_ocr(random_image, tilt_degrees=7.5, contrast_factor=1.3)
        second = prepare_ocr(random_image, tilt_degrees=7.5, contrast_factor=1.3)
        assert first == second

    def test_concurrent_calls_agree(self, random_image):
        expected = prepare_ocr(random_image, tilt_degrees=3.0)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: prepare_ocr(random_image, tilt_degrees=3.0), range(8)))
        assert all(result == expected for result in results)

    def test_input_unchanged(self, random_image):
        before = random_image.to_array()
        prepare_ocr(random_image, tilt_degrees=12.0, contrast_factor=0.6)
        assert np.array_equal(random_image.pixels, before)
