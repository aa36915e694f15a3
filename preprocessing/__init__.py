"""
Image preprocessing module for OCR.

This module provides pure, deterministic functions for preparing images
before OCR. All functions follow the pattern: input -> output with no mutation
of the original image, and none of them touch the filesystem.

Key components:
- buffer: ImageBuffer protocol and the numpy-backed RGBAImage
- contrast: ContrastLevel classification (Normal, High, Low)
- ocr: the individual stages (rotate, grayscale, contrast, binarize)
- config: OCRConfig dataclass for parameterizing the pipeline
- pipeline: prepare_ocr() and run_pipeline() applying the stages in order
- steps: Class-based steps with common PreprocessStep interface

Two APIs are available:
1. Function-based: prepare_ocr(image, ...) -> image
2. Class-based: Pipeline(steps=[...]).run(image) -> PipelineStepResults
"""

from .buffer import ImageBuffer, Pixel, RGBAImage
from .config import OCRConfig
from .contrast import (
    NORMAL,
    ContrastLevel,
    High,
    Low,
    Normal,
    contrast_level_from_factor,
)
from .ocr import binarize, contrast, contrast_lut, grayscale, rotate
from .pipeline import build_pipeline, prepare_ocr, run_pipeline
from .steps import (
    BinarizeStep,
    ContrastStep,
    GrayscaleStep,
    Pipeline,
    PipelineStepResults,
    PreprocessStep,
    RotateStep,
    StepResult,
)

__all__ = [
    # Image buffers
    "ImageBuffer",
    "Pixel",
    "RGBAImage",
    # Contrast levels
    "ContrastLevel",
    "Normal",
    "High",
    "Low",
    "NORMAL",
    "contrast_level_from_factor",
    # Stages
    "rotate",
    "grayscale",
    "contrast",
    "contrast_lut",
    "binarize",
    # Config and function API
    "OCRConfig",
    "prepare_ocr",
    "run_pipeline",
    "build_pipeline",
    # Class-based API
    "PreprocessStep",
    "RotateStep",
    "GrayscaleStep",
    "ContrastStep",
    "BinarizeStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
