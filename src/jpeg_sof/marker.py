# --------------------------------------------------------
# |segment name|marker value|has data|description        |
# --------------------------------------------------------
# |SOI         |0xFFD8      |No      | start of image    |
# |EOI         |0xFFD9      |No      | end of image      |
# |RSTn        |0xFFD0-D7   |No      | restart interval  |
# |SOFn        |0xFFC0-CF   |Yes     | frame header      |
# |SOS         |0xFFDA      |Yes     | start of scan     |
# |APPn        |0xFFE0-EF   |Yes     | application data  |
# --------------------------------------------------------
# Segments with data carry a 2-byte length right after the marker. The length
# counts itself, so the payload is length - 2 bytes.
from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .decoder import read_jpeg_segments
from .primitives import JpegSegmentType, Metadata, SOF_SEGMENT_TYPES

logger = logging.getLogger(__name__)

PathOrStream = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]

MARKER_PREFIX = 0xFF
SOI_MARKER = 0xD8
EOI_MARKER = 0xD9
SOS_MARKER = 0xDA
TEM_MARKER = 0x01
RST_MARKERS = range(0xD0, 0xD8)


class JpegProcessingError(Exception):
    pass


def marker_info(marker: int) -> str:
    marker_dict = {
        0xD8: "Start of Image (SOI)",
        0xD9: "End of Image (EOI)",
        0xDA: "Start of Scan (SOS)",
        0xDB: "Define Quantization Table (DQT)",
        0xC4: "Define Huffman Table (DHT)",
        0xCC: "Define Arithmetic Coding Conditioning (DAC)",
        0xDD: "Define Restart Interval (DRI)",
        0xFE: "Comment (COM)",
        0xC0: "Start of Frame 0 (SOF0) - Baseline DCT",
        0xC1: "Start of Frame 1 (SOF1) - Extended sequential DCT, Huffman",
        0xC2: "Start of Frame 2 (SOF2) - Progressive DCT, Huffman",
        0xC3: "Start of Frame 3 (SOF3) - Lossless, Huffman",
        0xC5: "Start of Frame 5 (SOF5) - Differential sequential DCT, Huffman",
        0xC6: "Start of Frame 6 (SOF6) - Differential progressive DCT, Huffman",
        0xC7: "Start of Frame 7 (SOF7) - Differential lossless, Huffman",
        0xC8: "Start of Frame 8 (SOF8) - Reserved for JPEG extensions",
        0xC9: "Start of Frame 9 (SOF9) - Extended sequential DCT, arithmetic",
        0xCA: "Start of Frame 10 (SOF10) - Progressive DCT, arithmetic",
        0xCB: "Start of Frame 11 (SOF11) - Lossless, arithmetic",
        0xCD: "Start of Frame 13 (SOF13) - Differential sequential DCT, arithmetic",
        0xCE: "Start of Frame 14 (SOF14) - Differential progressive DCT, arithmetic",
        0xCF: "Start of Frame 15 (SOF15) - Differential lossless, arithmetic",
    }
    if marker in marker_dict:
        return marker_dict[marker]
    if 0xE0 <= marker <= 0xEF:
        return f"Application Segment {marker - 0xE0} (APP{marker - 0xE0})"
    if marker in RST_MARKERS:
        return f"Restart {marker - 0xD0} (RST{marker - 0xD0})"
    return "Unknown Marker"


def _read_exact(f: BinaryIO, n: int, what: str) -> bytes:
    data = f.read(n)
    if len(data) != n:
        raise JpegProcessingError(f"Unexpected end of data while reading {what}: wanted {n} byte(s), got {len(data)}")
    return data


def iter_segments(f: BinaryIO) -> Iterator[Tuple[int, bytes]]:
    """
    Yield (marker, payload) for every segment up to the first SOS or EOI.

    SOI, EOI and SOS are yielded too (with empty payload for the first two and
    the scan header for SOS) so callers can list the full marker sequence.
    """
    if _read_exact(f, 2, "SOI marker") != bytes([MARKER_PREFIX, SOI_MARKER]):
        raise JpegProcessingError("JPEG data is expected to begin with 0xFFD8 (SOI)")
    yield SOI_MARKER, b""

    while True:
        b = f.read(1)
        if not b:
            logger.debug("Reached end of data without EOI")
            return
        if b[0] != MARKER_PREFIX:
            logger.debug("Skipping stray byte 0x%02x at offset %d", b[0], f.tell() - 1)
            continue

        # Any number of 0xFF fill bytes may precede the marker
        marker = MARKER_PREFIX
        while marker == MARKER_PREFIX:
            m = f.read(1)
            if not m:
                return
            marker = m[0]

        if marker == 0x00:
            continue  # stuffed byte, not a marker
        if marker == EOI_MARKER:
            yield marker, b""
            return
        if marker == TEM_MARKER or marker in RST_MARKERS:
            yield marker, b""
            continue

        raw_length = _read_exact(f, 2, f"length of segment 0x{marker:02X}")
        length = (raw_length[0] << 8) | raw_length[1]
        if length < 2:
            raise JpegProcessingError(f"Invalid length {length} for segment 0x{marker:02X}")
        payload = _read_exact(f, length - 2, f"payload of segment 0x{marker:02X}")
        logger.debug("Found %s with length %d bytes", marker_info(marker), length)
        yield marker, payload

        if marker == SOS_MARKER:
            # Entropy-coded data follows; no further metadata segments of interest
            return


def read_segments(
    f: BinaryIO,
    segment_types: Optional[Iterable[JpegSegmentType]] = None,
) -> Dict[JpegSegmentType, List[bytes]]:
    """Collect payloads of the wanted segment types (all known types when None)."""
    wanted = None if segment_types is None else set(segment_types)
    segments: Dict[JpegSegmentType, List[bytes]] = {}
    for marker, payload in iter_segments(f):
        if marker in (SOI_MARKER, EOI_MARKER):
            continue
        segment_type = JpegSegmentType.from_marker(marker)
        if segment_type is None:
            continue
        if wanted is not None and segment_type not in wanted:
            continue
        segments.setdefault(segment_type, []).append(payload)
    return segments


def _open(inp: PathOrStream) -> BinaryIO:
    if isinstance(inp, (str, Path)):
        return open(inp, "rb")
    return inp


def read_metadata(inp: PathOrStream, metadata: Optional[Metadata] = None) -> Metadata:
    """Split a JPEG into segments and decode every SOFn segment found."""
    if metadata is None:
        metadata = Metadata()

    if isinstance(inp, (bytes, bytearray, memoryview)):
        inp = io.BytesIO(inp)
    f = _open(inp)
    try:
        segments = read_segments(f, SOF_SEGMENT_TYPES)
    finally:
        if f is not inp:
            f.close()

    for segment_type in SOF_SEGMENT_TYPES:
        if segment_type in segments:
            read_jpeg_segments(segments[segment_type], metadata, segment_type)
    return metadata
