from __future__ import annotations
from typing import Optional

from .primitives import JpegComponent, JpegDirectory

# Index = SOFn marker minus SOF0; None for the DHT and DAC code points
COMPRESSION_TYPES = (
    "Baseline",
    "Extended sequential, Huffman",
    "Progressive, Huffman",
    "Lossless, Huffman",
    None,
    "Differential sequential, Huffman",
    "Differential progressive, Huffman",
    "Differential lossless, Huffman",
    "Reserved for JPEG extensions",
    "Extended sequential, arithmetic",
    "Progressive, arithmetic",
    "Lossless, arithmetic",
    None,
    "Differential sequential, arithmetic",
    "Differential progressive, arithmetic",
    "Differential lossless, arithmetic",
)


def compression_type_description(directory: JpegDirectory) -> Optional[str]:
    value = directory.get_int(JpegDirectory.TAG_COMPRESSION_TYPE)
    if value is None or not 0 <= value < len(COMPRESSION_TYPES):
        return None
    return COMPRESSION_TYPES[value]


def component_description(component: JpegComponent) -> str:
    """e.g. 'Y component: Quantization table 0, Sampling factors 2 horiz/2 vert'"""
    name = component.component_name or f"Unknown ({component.component_id})"
    return (
        f"{name} component: Quantization table {component.quantization_table_number}, "
        f"Sampling factors {component.horizontal_sampling_factor} horiz/"
        f"{component.vertical_sampling_factor} vert"
    )


def describe(directory: JpegDirectory, tag: int) -> Optional[str]:
    """Human-readable text for one tag, or None when the tag is absent."""
    value = directory.get(tag)
    if value is None:
        return None

    if isinstance(value, JpegComponent):
        return component_description(value)
    if tag == JpegDirectory.TAG_COMPRESSION_TYPE:
        return compression_type_description(directory)
    if tag == JpegDirectory.TAG_DATA_PRECISION:
        return f"{value} bits"
    if tag in (JpegDirectory.TAG_IMAGE_HEIGHT, JpegDirectory.TAG_IMAGE_WIDTH):
        return f"{value} pixels"
    return str(value)
