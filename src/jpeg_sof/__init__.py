from .decoder import extract, read_jpeg_segments, segment_types
from .marker import JpegProcessingError, read_metadata, read_segments
from .primitives import (
    Directory,
    JpegComponent,
    JpegDirectory,
    JpegSegmentType,
    Metadata,
    SOF_SEGMENT_TYPES,
)
from .reader import BufferUnderrunError, SequentialByteReader

__all__ = [
    "BufferUnderrunError",
    "Directory",
    "JpegComponent",
    "JpegDirectory",
    "JpegProcessingError",
    "JpegSegmentType",
    "Metadata",
    "SOF_SEGMENT_TYPES",
    "SequentialByteReader",
    "extract",
    "read_jpeg_segments",
    "read_metadata",
    "read_segments",
    "segment_types",
]
