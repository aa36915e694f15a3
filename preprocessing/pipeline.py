"""
OCR preprocessing pipeline that applies all steps in order.

The pipeline is the main entry point for preparing an image for OCR. It
always runs the same fixed order and returns all intermediate results for
debugging and visualization.

This module provides two APIs:
1. prepare_ocr() - returns only the final image
2. run_pipeline() - returns every intermediate image and step metadata

Both build the same step sequence through build_pipeline():
Rotate → Grayscale → Contrast → (Binarize if enabled)
"""

from config import (
    OCR_BINARIZE,
    OCR_BINARIZE_THRESHOLD,
    OCR_CONTRAST_FACTOR,
    OCR_TILT_DEGREES,
)

from .buffer import ImageBuffer
from .config import OCRConfig
from .steps import (
    BinarizeStep,
    ContrastStep,
    GrayscaleStep,
    Pipeline,
    PipelineStepResults,
    PreprocessStep,
    RotateStep,
)


def _validate_input(image: ImageBuffer) -> None:
    """Validate the input image buffer.

    Raises:
        TypeError: If image does not implement the ImageBuffer protocol.
    """
    if not isinstance(image, ImageBuffer):
        raise TypeError(f"Expected an image buffer, got {type(image).__name__}")


def build_pipeline(config: OCRConfig) -> Pipeline:
    """Build a Pipeline from an OCRConfig.

    Creates the fixed OCR preprocessing order:
    1. RotateStep - tilt correction (no-op at 0 degrees)
    2. GrayscaleStep - weighted-luminance grayscale
    3. ContrastStep - contrast level classified from the factor
    4. BinarizeStep - only when config.binarize is set

    Args:
        config: Preprocessing configuration.

    Returns:
        Pipeline configured according to the config.
    """
    steps: list[PreprocessStep] = [
        RotateStep(radians=config.radians),
        GrayscaleStep(),
        ContrastStep(level=config.contrast_level),
    ]

    if config.binarize:
        steps.append(BinarizeStep(threshold=config.threshold))

    return Pipeline(steps=steps)


def run_pipeline(
    image: ImageBuffer,
    config: OCRConfig | None = None,
) -> PipelineStepResults:
    """Apply the full OCR preprocessing pipeline to an image.

    All operations are pure and non-mutating. The original image is preserved
    as ``result.original``.

    Args:
        image: Input image buffer.
        config: Preprocessing configuration. If None, uses default settings.

    Returns:
        PipelineStepResults with the original, each intermediate and the final image.

    Raises:
        ValidationError: If configuration is invalid.
        TypeError: If image is not an image buffer.
    """
    if config is None:
        config = OCRConfig()

    config.validate()
    _validate_input(image)

    return build_pipeline(config).run(image)


def prepare_ocr(
    image: ImageBuffer,
    tilt_degrees: float = OCR_TILT_DEGREES,
    contrast_factor: float = OCR_CONTRAST_FACTOR,
    threshold: int = OCR_BINARIZE_THRESHOLD,
    do_binarize: bool = OCR_BINARIZE,
) -> ImageBuffer:
    """Prepare an image for OCR: rotate, grayscale, contrast, optional binarize.

    A pure function of its inputs: identical arguments always give identical
    output, and independent calls may run concurrently.

    Args:
        image: Input image buffer.
        tilt_degrees: Rotation angle in degrees (default: 0.0).
        contrast_factor: Contrast multiplier (default: 1.4).
        threshold: Binarization threshold (default: 128).
        do_binarize: Whether to binarize (default: True).

    Returns:
        The processed image.

    Examples:
        >>> img = RGBAImage(np.zeros((10, 20, 3), dtype=np.uint8))
        >>> prepare_ocr(img).size
        (20, 10)
    """
    config = OCRConfig(
        tilt_degrees=tilt_degrees,
        contrast_factor=contrast_factor,
        threshold=threshold,
        binarize=do_binarize,
    )
    return run_pipeline(image, config).final
