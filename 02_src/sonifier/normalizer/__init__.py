"""Protocol normalizer module."""

from .normalizer import (
    DEFAULT_DECODERS,
    BinaryDecoder,
    INormalizer,
    NormalizedPayload,
    ProtocolNormalizer,
    classify_document,
)

__all__ = [
    "BinaryDecoder",
    "DEFAULT_DECODERS",
    "INormalizer",
    "NormalizedPayload",
    "ProtocolNormalizer",
    "classify_document",
]
