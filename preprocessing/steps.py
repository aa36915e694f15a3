"""
Preprocessing step classes with a common interface.

Each step is a frozen dataclass that implements the PreprocessStep interface.
Steps are pure: they take an input image and return a new image without
mutating the original, and hold no state between runs.

Usage:
    from preprocessing.steps import GrayscaleStep, ContrastStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        ContrastStep(level=High(1.4)),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from config import OCR_BINARIZE_THRESHOLD

from .buffer import ImageBuffer
from .contrast import NORMAL, ContrastLevel
from .ocr import binarize, contrast, grayscale, rotate


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    All preprocessing steps must implement this interface. Steps should be
    pure functions: they take an input image and return a new output without
    mutating the original.

    Steps can optionally describe themselves through metadata (status and
    parameters) for logging and debugging.
    """

    @abstractmethod
    def apply(self, image: ImageBuffer) -> ImageBuffer:
        """Apply this preprocessing step to an image.

        Must be pure: never mutates the input image.

        Args:
            image: Input image buffer.

        Returns:
            Processed image buffer.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return metadata describing this step.

        Returns:
            Dictionary of metadata. Empty by default.
        """
        return {}


@dataclass(frozen=True)
class RotateStep(PreprocessStep):
    """Rotate the image about its center.

    A zero angle is a no-op and is reported with status "skipped".

    Attributes:
        radians: Rotation angle in radians (positive = counterclockwise).
    """

    radians: float = 0.0

    def apply(self, image: ImageBuffer) -> ImageBuffer:
        return rotate(image, self.radians)

    @property
    def name(self) -> str:
        return f"rotate({self.radians:g})"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "step_status": "skipped" if self.radians == 0.0 else "applied",
            "step_metrics": {"radians": self.radians},
        }


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert image to grayscale with a weighted-luminance filter."""

    def apply(self, image: ImageBuffer) -> ImageBuffer:
        return grayscale(image)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass(frozen=True)
class ContrastStep(PreprocessStep):
    """Scale channel distances from the midpoint.

    Attributes:
        level: Contrast level; NORMAL leaves RGB unchanged.
    """

    level: ContrastLevel = NORMAL

    def apply(self, image: ImageBuffer) -> ImageBuffer:
        return contrast(image, self.level)

    @property
    def name(self) -> str:
        return f"contrast({self.level.factor:g})"

    def get_metadata(self) -> dict[str, Any]:
        return {
            "step_metrics": {
                "level": type(self.level).__name__.lower(),
                "factor": self.level.factor,
            },
        }


@dataclass(frozen=True)
class BinarizeStep(PreprocessStep):
    """Threshold pixels to black or white.

    Attributes:
        threshold: Brightness cutoff; values at or below it become black.
    """

    threshold: int = OCR_BINARIZE_THRESHOLD

    def apply(self, image: ImageBuffer) -> ImageBuffer:
        return binarize(image, self.threshold)

    @property
    def name(self) -> str:
        return f"binarize({self.threshold})"

    def get_metadata(self) -> dict[str, Any]:
        return {"step_metrics": {"threshold": self.threshold}}


@dataclass
class StepResult:
    """Result of applying a single preprocessing step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step.
    """

    name: str
    image: ImageBuffer
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Step name without parameters, e.g. "contrast" for "contrast(1.4)"."""
        return self.name.split("(")[0]


@dataclass
class PipelineStepResults:
    """Results from running a preprocessing pipeline.

    Provides access to all intermediate images and aggregated metadata.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
        step_metadata: Status and metrics keyed by step name without parameters.
    """

    original: ImageBuffer
    steps: list[StepResult] = field(default_factory=list)
    step_metadata: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def final(self) -> ImageBuffer:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_intermediate(self, step_name: str) -> ImageBuffer | None:
        """Get intermediate image by step name.

        Args:
            step_name: Full name ("contrast(1.4)") or key ("contrast").

        Returns:
            The image produced by that step, or None if not found.
        """
        for step in self.steps:
            if step.name == step_name or step.key == step_name:
                return step.image
        return None

    def get_metadata(self, key: str) -> Any | None:
        """Get metadata value from any step.

        Searches steps in order and returns the first match.
        """
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def all_metadata(self) -> dict[str, Any]:
        """Get all metadata from all steps, merged into one dict.

        Later steps override earlier ones if keys conflict.
        """
        result = {}
        for step in self.steps:
            result.update(step.metadata)
        return result


@dataclass
class Pipeline:
    """A sequence of preprocessing steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved.
    A Pipeline holds no per-run state, so one instance may run many images
    concurrently.

    Attributes:
        steps: List of PreprocessStep instances to apply in order.
    """

    steps: list[PreprocessStep]

    def run(self, image: ImageBuffer) -> PipelineStepResults:
        """Run the pipeline on an image.

        Args:
            image: Input image buffer. It is never modified.

        Returns:
            PipelineStepResults containing all intermediate images and metadata.
        """
        result = PipelineStepResults(original=image)
        current = image

        for step in self.steps:
            output = step.apply(current)
            metadata = step.get_metadata()
            step_result = StepResult(name=step.name, image=output, metadata=metadata)
            result.step_metadata[step_result.key] = {
                "status": metadata.get("step_status", "applied"),
                "metrics": metadata.get("step_metrics", {}),
            }
            result.steps.append(step_result)
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
