from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Dict, List, Optional, Tuple, Type, TypeVar, Union


class JpegSegmentType(IntEnum):
    """JPEG marker byte (the one following 0xFF)."""
    SOF0 = 0xC0   # baseline DCT
    SOF1 = 0xC1
    SOF2 = 0xC2
    SOF3 = 0xC3
    DHT = 0xC4    # the SOF4 code point
    SOF5 = 0xC5
    SOF6 = 0xC6
    SOF7 = 0xC7
    SOF8 = 0xC8
    SOF9 = 0xC9
    SOF10 = 0xCA
    SOF11 = 0xCB
    DAC = 0xCC    # the SOF12 code point
    SOF13 = 0xCD
    SOF14 = 0xCE
    SOF15 = 0xCF
    SOI = 0xD8
    EOI = 0xD9
    SOS = 0xDA
    DQT = 0xDB
    DNL = 0xDC
    DRI = 0xDD
    DHP = 0xDE
    EXP = 0xDF
    APP0 = 0xE0
    APP1 = 0xE1
    APP2 = 0xE2
    APP3 = 0xE3
    APP4 = 0xE4
    APP5 = 0xE5
    APP6 = 0xE6
    APP7 = 0xE7
    APP8 = 0xE8
    APP9 = 0xE9
    APPA = 0xEA
    APPB = 0xEB
    APPC = 0xEC
    APPD = 0xED
    APPE = 0xEE
    APPF = 0xEF
    COM = 0xFE

    @classmethod
    def from_marker(cls, marker: int) -> Optional["JpegSegmentType"]:
        try:
            return cls(marker)
        except ValueError:
            return None


# SOF4 and SOF12 are DHT and DAC, so they are never frame headers
SOF_SEGMENT_TYPES: Tuple[JpegSegmentType, ...] = (
    JpegSegmentType.SOF0, JpegSegmentType.SOF1, JpegSegmentType.SOF2, JpegSegmentType.SOF3,
    JpegSegmentType.SOF5, JpegSegmentType.SOF6, JpegSegmentType.SOF7, JpegSegmentType.SOF8,
    JpegSegmentType.SOF9, JpegSegmentType.SOF10, JpegSegmentType.SOF11, JpegSegmentType.SOF13,
    JpegSegmentType.SOF14, JpegSegmentType.SOF15,
)

_COMPONENT_NAMES = {1: "Y", 2: "Cb", 3: "Cr", 4: "I", 5: "Q"}


@dataclass(frozen=True)
class JpegComponent:
    """One colour component of a frame header, three bytes on disk."""
    component_id: int
    sampling_factor_byte: int
    quantization_table_number: int

    @property
    def horizontal_sampling_factor(self) -> int:
        # upper 4 bits
        return (self.sampling_factor_byte >> 4) & 0x0F

    @property
    def vertical_sampling_factor(self) -> int:
        return self.sampling_factor_byte & 0x0F

    @property
    def component_name(self) -> Optional[str]:
        return _COMPONENT_NAMES.get(self.component_id)


TagValue = Union[int, JpegComponent]


@dataclass
class Directory:
    """Tag id -> value store with an ordered error log."""
    name: ClassVar[str] = "Unknown"
    tag_names: ClassVar[Dict[int, str]] = {}

    _values: Dict[int, TagValue] = field(default_factory=dict, repr=False)
    errors: List[str] = field(default_factory=list)

    def set(self, tag: int, value: TagValue) -> None:
        self._values[tag] = value

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def has_error(self) -> bool:
        return len(self.errors) > 0

    def contains(self, tag: int) -> bool:
        return tag in self._values

    def get(self, tag: int) -> Optional[TagValue]:
        return self._values.get(tag)

    def get_int(self, tag: int) -> Optional[int]:
        value = self._values.get(tag)
        if isinstance(value, int):
            return value
        return None

    @property
    def tags(self) -> List[int]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_tag_name(self, tag: int) -> str:
        return self.tag_names.get(tag, f"Unknown tag (0x{tag & 0xFFFF:04x})")

    def get_description(self, tag: int) -> Optional[str]:
        value = self._values.get(tag)
        return None if value is None else str(value)


class JpegDirectory(Directory):
    """Tags decoded from one SOFn segment."""
    name = "JPEG"

    TAG_COMPRESSION_TYPE = -3
    TAG_DATA_PRECISION = 0
    TAG_IMAGE_HEIGHT = 1
    TAG_IMAGE_WIDTH = 3
    TAG_NUMBER_OF_COMPONENTS = 5
    # component i (0-based) lives at TAG_COMPONENT_DATA_1 + i
    TAG_COMPONENT_DATA_1 = 6
    TAG_COMPONENT_DATA_2 = 7
    TAG_COMPONENT_DATA_3 = 8
    TAG_COMPONENT_DATA_4 = 9

    tag_names = {
        TAG_COMPRESSION_TYPE: "Compression Type",
        TAG_DATA_PRECISION: "Data Precision",
        TAG_IMAGE_HEIGHT: "Image Height",
        TAG_IMAGE_WIDTH: "Image Width",
        TAG_NUMBER_OF_COMPONENTS: "Number of Components",
        TAG_COMPONENT_DATA_1: "Component 1",
        TAG_COMPONENT_DATA_2: "Component 2",
        TAG_COMPONENT_DATA_3: "Component 3",
        TAG_COMPONENT_DATA_4: "Component 4",
    }

    def get_description(self, tag: int) -> Optional[str]:
        from .descriptor import describe
        return describe(self, tag)

    @property
    def image_width(self) -> Optional[int]:
        return self.get_int(self.TAG_IMAGE_WIDTH)

    @property
    def image_height(self) -> Optional[int]:
        return self.get_int(self.TAG_IMAGE_HEIGHT)

    @property
    def number_of_components(self) -> Optional[int]:
        return self.get_int(self.TAG_NUMBER_OF_COMPONENTS)

    def get_component(self, index: int) -> Optional[JpegComponent]:
        """Component at a 0-based index, or None if it was never decoded."""
        value = self.get(self.TAG_COMPONENT_DATA_1 + index)
        return value if isinstance(value, JpegComponent) else None

    @property
    def components(self) -> List[JpegComponent]:
        out = []
        index = 0
        while True:
            component = self.get_component(index)
            if component is None:
                return out
            out.append(component)
            index += 1


D = TypeVar("D", bound=Directory)


@dataclass
class Metadata:
    """Caller-owned collection of directories from any number of decoders."""
    directories: List[Directory] = field(default_factory=list)

    def add_directory(self, directory: Directory) -> None:
        self.directories.append(directory)

    def get_directories_of_type(self, kind: Type[D]) -> List[D]:
        return [d for d in self.directories if isinstance(d, kind)]

    def get_first_directory_of_type(self, kind: Type[D]) -> Optional[D]:
        found = self.get_directories_of_type(kind)
        return found[0] if found else None

    @property
    def has_errors(self) -> bool:
        return any(d.has_error for d in self.directories)
