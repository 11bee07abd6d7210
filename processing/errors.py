"""
Error types raised by the processing modules.
"""


class PipelineError(Exception):
    """Base class for frame pipeline errors."""


class InvalidBufferShape(PipelineError, ValueError):
    """Declared width/height do not match the pixel data."""

    def __init__(self, width, height, length):
        self.width = width
        self.height = height
        self.length = length
        super().__init__(
            f"Buffer of {length} samples does not match {width}x{height} RGBA "
            f"(expected {self.expected_length})"
        )

    @property
    def expected_length(self):
        try:
            return 4 * int(self.width) * int(self.height)
        except (TypeError, ValueError):
            return None


class UnknownEffect(PipelineError, ValueError):
    """Effect selector outside the supported vocabulary."""

    def __init__(self, effect):
        self.effect = effect
        super().__init__(f"Unknown effect: {effect!r}")
