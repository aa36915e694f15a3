"""
Image file handling around the preprocessing core.

Key components:
- io: decoding/encoding with Pillow, folder listing, pipeline artifacts
- convert: batch conversions (WebP, thumbnails, placeholders, metadata
  stripping, auto-cropping, OCR preparation) returning ConversionResult
"""

from .convert import (
    ConversionResult,
    autocrop,
    blur,
    convert_file_to_webp,
    convert_to_webp,
    create_file_thumbnail,
    create_thumbnails,
    crop_to_content,
    generate_placeholders,
    prepare_ocr_file,
    scale_to,
    strip_metadata,
    thumbnail_dimension,
)
from .io import (
    IMAGE_EXTENSIONS,
    list_images,
    load_image,
    save_as_jpeg,
    save_image,
    save_step_artifacts,
    to_pil,
)

__all__ = [
    "ConversionResult",
    "IMAGE_EXTENSIONS",
    "autocrop",
    "blur",
    "convert_file_to_webp",
    "convert_to_webp",
    "create_file_thumbnail",
    "create_thumbnails",
    "crop_to_content",
    "generate_placeholders",
    "list_images",
    "load_image",
    "prepare_ocr_file",
    "save_as_jpeg",
    "save_image",
    "save_step_artifacts",
    "scale_to",
    "strip_metadata",
    "thumbnail_dimension",
    "to_pil",
]
