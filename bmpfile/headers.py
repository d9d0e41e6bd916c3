from dataclasses import dataclass, field, fields
from enum import Enum

from . import numeric
from .Exceptions import TruncatedBufferError

## Reads exactly `length` bytes from the stream.
## \param[in] what - Names the structure being read, for the error message.
def read_exactly(stream, length: int, what: str) -> bytes:
    data = stream.read(length)
    if len(data) != length:
        raise TruncatedBufferError(f'Expected {length} bytes of {what}, but only {len(data)} remain.')
    return data

## A header field stored as its exact little-endian bytes.
## The numeric value is computed only when asked for, so fields
## that are never changed are written back exactly as they were read.
class Field(bytes):
    @classmethod
    def from_value(cls, value, width: int) -> 'Field':
        if isinstance(value, int):
            value = numeric.encode(value, width)
        if len(value) != width:
            raise ValueError(f'Expected a {width}-byte field, got {len(value)} bytes.')
        return cls(value)

    @property
    def value(self) -> int:
        return numeric.decode(self)

    def __repr__(self):
        return f'Field({bytes(self).hex(" ")})'

## Declares a header field of the given width in bytes.
def header_field(width: int, default = 0):
    return field(default = Field.from_value(default, width), metadata = {'width': width})

## Shared behaviour for the fixed-layout headers.
## Fields are declared in file order, so reading and writing
## just walks the dataclass fields.
class Header:
    def __post_init__(self):
        # NORMALIZE THE FIELDS.
        # Integers and plain bytes are both accepted by the constructor,
        # but only exact-width Fields are stored.
        for dataclass_field in fields(self):
            width = dataclass_field.metadata['width']
            value = Field.from_value(getattr(self, dataclass_field.name), width)
            object.__setattr__(self, dataclass_field.name, value)

    ## Reads this header from a binary stream positioned at its first byte.
    @classmethod
    def decode(cls, stream):
        values = {}
        for dataclass_field in fields(cls):
            width = dataclass_field.metadata['width']
            values[dataclass_field.name] = read_exactly(stream, width, f'{cls.__name__}.{dataclass_field.name}')
        return cls(**values)

    def encode(self, stream):
        for dataclass_field in fields(self):
            stream.write(getattr(self, dataclass_field.name))

## Models the 14-byte BITMAPFILEHEADER.
@dataclass(frozen = True)
class FileHeader(Header):
    LENGTH_IN_BYTES = 0x0e
    WINDOWS_BITMAP_FILE_SIGNATURE = b'BM'

    signature: Field = header_field(2, WINDOWS_BITMAP_FILE_SIGNATURE)
    # This is the size of the entire file, including all headers.
    file_size: Field = header_field(4)
    reserved: Field = header_field(4)
    # Builder output never has a palette, so the pixels always start right
    # after the two headers.
    data_offset: Field = header_field(4, 0x36)

## Models the 40-byte BITMAPINFOHEADER.
@dataclass(frozen = True)
class InfoHeader(Header):
    LENGTH_IN_BYTES = 0x28
    SUPPORTED_COLOR_DEPTHS = (1, 4, 8, 16, 24)
    BYTES_PER_PALETTE_ENTRY = 4

    class Compression(Enum):
        BI_RGB = 0
        BI_RLE8 = 1
        BI_RLE4 = 2

        ## Returns true if the provided value is in this enum; false otherwise.
        @classmethod
        def has_value(cls, value):
            return value in (val.value for val in cls.__members__.values())

    info_header_size: Field = header_field(4, LENGTH_IN_BYTES)
    width: Field = header_field(4)
    height: Field = header_field(4)
    planes: Field = header_field(2, 1)
    color_depth: Field = header_field(2, 24)
    compression: Field = header_field(4, 0)
    # This is the length of the raster data, padding included.
    compressed_size: Field = header_field(4)
    x_pixels_per_m: Field = header_field(4, 0xff)
    y_pixels_per_m: Field = header_field(4, 0xff)
    used_colors: Field = header_field(4)
    important_colors: Field = header_field(4)

    ## Returns the compression type, or the raw code if it is not a known type.
    @property
    def compression_method(self):
        code = self.compression.value
        return self.Compression(code) if self.Compression.has_value(code) else code

    ## Only indexed bitmaps (8 bits per pixel or fewer) have a color table,
    ## and it always holds an entry for every possible index.
    @property
    def color_table_length_in_bytes(self) -> int:
        color_depth = self.color_depth.value
        if color_depth > 8:
            return 0
        return (2 ** color_depth) * self.BYTES_PER_PALETTE_ENTRY

    ## Each scanline is padded to a multiple of four bytes.
    @property
    def row_length_in_bytes(self) -> int:
        return ((self.color_depth.value * self.width.value + 31) // 32) * 4
