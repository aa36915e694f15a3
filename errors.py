"""Exception types shared by the color, preprocessing and imaging modules."""


class ValidationError(ValueError):
    """A caller passed a value that violates a documented precondition.

    Raised for blend ratios outside [0, 1], contrast factors that do not fit
    the requested contrast level, and invalid preprocessing configuration.
    """


class ImageIOError(OSError):
    """Decoding or encoding an image file failed.

    Only raised by the imaging I/O boundary, never by the pixel transforms.
    """

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
