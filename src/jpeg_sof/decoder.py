from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .primitives import (
    JpegComponent,
    JpegDirectory,
    JpegSegmentType,
    Metadata,
    SOF_SEGMENT_TYPES,
)
from .reader import BufferUnderrunError, BytesLike, SequentialByteReader

logger = logging.getLogger(__name__)


def segment_types() -> Tuple[JpegSegmentType, ...]:
    """The SOFn segment types this decoder handles."""
    return SOF_SEGMENT_TYPES


def extract(
    segment_bytes: BytesLike,
    segment_type: JpegSegmentType,
    metadata: Optional[Metadata] = None,
) -> JpegDirectory:
    """
    Decode one SOFn segment payload (length field already stripped).

    A truncated payload never raises: decoding stops at the first short read
    and the directory keeps what was read so far plus one error message.
    """
    directory = JpegDirectory()
    if metadata is not None:
        metadata.add_directory(directory)

    # Compression type comes from the marker, not from the payload
    directory.set(JpegDirectory.TAG_COMPRESSION_TYPE, int(segment_type) - int(JpegSegmentType.SOF0))

    reader = SequentialByteReader(segment_bytes)
    try:
        directory.set(JpegDirectory.TAG_DATA_PRECISION, reader.read_u8())
        directory.set(JpegDirectory.TAG_IMAGE_HEIGHT, reader.read_u16())
        directory.set(JpegDirectory.TAG_IMAGE_WIDTH, reader.read_u16())
        component_count = reader.read_u8()
        directory.set(JpegDirectory.TAG_NUMBER_OF_COMPONENTS, component_count)

        # Per component: id (1=Y, 2=Cb, 3=Cr, 4=I, 5=Q),
        # sampling factors (high nibble horizontal, low nibble vertical),
        # quantization table number
        for i in range(component_count):
            component_id = reader.read_u8()
            sampling_factor_byte = reader.read_u8()
            quantization_table_number = reader.read_u8()
            component = JpegComponent(component_id, sampling_factor_byte, quantization_table_number)
            directory.set(JpegDirectory.TAG_COMPONENT_DATA_1 + i, component)
    except BufferUnderrunError as e:
        logger.warning("Truncated SOF segment (marker 0x%02X): %s", int(segment_type), e)
        directory.add_error(str(e))

    return directory


def read_jpeg_segments(
    segments: Iterable[BytesLike],
    metadata: Metadata,
    segment_type: JpegSegmentType,
) -> List[JpegDirectory]:
    """Decode each segment in order, adding every directory to ``metadata``."""
    return [extract(segment_bytes, segment_type, metadata) for segment_bytes in segments]
