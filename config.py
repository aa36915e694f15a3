"""Central configuration for image preparation.

All tunable parameters are defined here with descriptive names.
These values can be adjusted without touching the processing code.
"""

# =============================================================================
# FOLDERS
# =============================================================================

# Default folders used by the CLI when none are given
DEFAULT_INPUT_DIR = "input"
DEFAULT_OUTPUT_DIR = "output"

# Extensions accepted as batch input (compared case-insensitively)
SUPPORTED_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "bmp")

# =============================================================================
# OCR PREPROCESSING
# =============================================================================

# Rotation applied before grayscale, in degrees (positive = counterclockwise)
OCR_TILT_DEGREES = 0.0

# Multiplier applied to each channel's distance from the midpoint
OCR_CONTRAST_FACTOR = 1.4

# Midpoint around which contrast is scaled
CONTRAST_MIDPOINT = 128

# Brightness cutoff for binarization; brightness equal to this maps to black
OCR_BINARIZE_THRESHOLD = 128

# Whether prepare_ocr finishes with binarization
OCR_BINARIZE = True

# =============================================================================
# ENCODING
# =============================================================================

# Default JPEG quality (0-100)
JPEG_QUALITY = 90

# WebP quality used for lossy output (thumbnails)
WEBP_QUALITY = 80

# WebP encoder effort (0-6); 6 is the slowest, smallest lossless output
WEBP_METHOD = 6

# =============================================================================
# THUMBNAILS
# =============================================================================

# Guideline entry providing thumbnail dimensions (desktop 300x300, mobile 150x150)
THUMBNAIL_GUIDELINE = "product_thumbnail"

# Accepted thumbnail variants
THUMBNAIL_TYPES = ("desktop", "mobile")

# =============================================================================
# PLACEHOLDERS
# =============================================================================

PLACEHOLDER_COUNT = 3
PLACEHOLDER_WIDTH = 200
PLACEHOLDER_HEIGHT = 200

# Gaussian blur radius in pixels for blurred placeholders
PLACEHOLDER_BLUR_RADIUS = 2.0
