"""
Effects Module

Routes a pixel buffer to exactly one filter from a closed set of effects.
"""

import logging
from enum import Enum
from typing import Union

from .canny_detection import CannyDetector
from .errors import UnknownEffect
from .pixel_buffer import PixelBuffer
from .point_filters import grayscale, invert
from .sobel_detection import SobelDetector

logger = logging.getLogger(__name__)


class Effect(str, Enum):
    """Supported effects, keyed by their selector string."""
    GRAYSCALE = 'grayscale'
    INVERT = 'invert'
    SOBEL = 'edge-detection'
    CANNY = 'canny-edge-detection'

    @classmethod
    def parse(cls, tag: Union['Effect', str]) -> 'Effect':
        """Resolve a selector string; anything outside the vocabulary raises UnknownEffect."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownEffect(tag) from None

    @classmethod
    def names(cls):
        return [effect.value for effect in cls]


class EffectDispatcher:
    """Applies one effect to a buffer in place."""

    def __init__(self):
        self.sobel_detector = SobelDetector()
        self.canny_detector = CannyDetector()
        self._filters = {
            Effect.GRAYSCALE: grayscale,
            Effect.INVERT: invert,
            Effect.SOBEL: self.sobel_detector.apply,
            Effect.CANNY: self.canny_detector.apply,
        }

    def apply(self, effect: Union[Effect, str], buffer: PixelBuffer) -> PixelBuffer:
        """
        Apply an effect to a buffer.

        The selector and buffer shape are both checked before any pixel is written.

        Args:
            effect: Effect member or selector string
            buffer: RGBA frame, modified in place

        Returns:
            The same buffer
        """
        effect = Effect.parse(effect)
        buffer.validate()
        logger.debug("Applying %s to %s frame", effect.value, buffer.resolution)
        return self._filters[effect](buffer)


_default_dispatcher = None


def apply_effect(effect: Union[Effect, str], buffer: PixelBuffer) -> PixelBuffer:
    """Apply an effect with a shared dispatcher."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = EffectDispatcher()
    return _default_dispatcher.apply(effect, buffer)
