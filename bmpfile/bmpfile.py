import logging
import os
from dataclasses import dataclass, field, replace
from io import BytesIO
from typing import Optional

from . import numeric
from .color import resolve_color
from .dump import dump
from .headers import FileHeader, InfoHeader, read_exactly
from .Exceptions import (
    NotABitmapError,
    UnsupportedColorDepthError,
    UnsupportedInfoHeaderError,
    SizeMismatchError,
    InvalidDimensionsError,
    FileReadError,
    FileWriteError,
)

logger = logging.getLogger(__name__)

## Models a complete Windows bitmap file.
## Bitmaps are immutable; they are either built from a fill color
## with Bitmap.new or decoded from existing data with Bitmap.parse.
@dataclass(frozen = True)
class Bitmap:
    HEADERS_LENGTH_IN_BYTES = FileHeader.LENGTH_IN_BYTES + InfoHeader.LENGTH_IN_BYTES

    file_header: FileHeader = field(default_factory = FileHeader)
    info_header: InfoHeader = field(default_factory = InfoHeader)
    color_table: bytes = field(default = b'', repr = False)
    raster_data: bytes = field(default = b'', repr = False)
    # The name only records where the bitmap came from,
    # so it is not part of the file and not compared.
    name: Optional[str] = field(default = None, compare = False)

    def __post_init__(self):
        # STORE IMMUTABLE COPIES OF THE BUFFERS.
        object.__setattr__(self, 'color_table', bytes(self.color_table))
        object.__setattr__(self, 'raster_data', bytes(self.raster_data))

    ## Creates a new bitmap filled with one color.
    ## \param[in] dimensions - The (width, height) of the bitmap in pixels.
    ## \param[in] color_depth - The bits per pixel: 1, 4, 8, 16, or 24.
    ## \param[in] fill - Either a "#RRGGBB" string or three bytes in R, G, B order.
    ## Indexed bitmaps (8 bits per pixel or fewer) are not fully supported:
    ## every pixel is index 0, but no color table is written.
    @classmethod
    def new(cls, dimensions, color_depth: int, fill) -> 'Bitmap':
        # VERIFY THE PARAMETERS.
        width, height = dimensions
        if width < 0 or height < 0:
            raise InvalidDimensionsError(f'Bitmap dimensions must not be negative, got {width}x{height}.')
        if color_depth not in InfoHeader.SUPPORTED_COLOR_DEPTHS:
            raise UnsupportedColorDepthError(f'Cannot build a bitmap with {color_depth} bits per pixel.')
        color = resolve_color(fill)
        if color_depth <= 8:
            logger.warning(f'Building a {color_depth}-bit bitmap without a color table; '
                           'the palette is not populated.')

        # ENCODE ONE ROW.
        # Every row is identical, so the raster data is just the row repeated.
        info_header = InfoHeader(width = width, height = height, color_depth = color_depth)
        row_length_in_bytes = info_header.row_length_in_bytes
        if color_depth == 24:
            pixels = color.bgr * width
        elif color_depth == 16:
            pixels = numeric.encode(color.rgb555, 2) * width
        else:
            # All pixels refer to the first palette entry.
            pixels = bytes((color_depth * width + 7) // 8)
        padding = bytes(row_length_in_bytes - len(pixels))
        raster_data = (pixels + padding) * height

        # SET THE SIZES.
        raster_length_in_bytes = row_length_in_bytes * height
        file_header = FileHeader(file_size = cls.HEADERS_LENGTH_IN_BYTES + raster_length_in_bytes)
        info_header = replace(info_header, compressed_size = raster_length_in_bytes)
        logger.debug(f'Built a {width}x{height} {color_depth}-bit bitmap ({len(raster_data)} bytes of raster data).')
        return cls(file_header = file_header, info_header = info_header, raster_data = raster_data)

    ## Decodes a complete bitmap file from a byte buffer.
    ## \param[in] name - An optional label for where the data came from.
    @classmethod
    def parse(cls, data: bytes, name: Optional[str] = None) -> 'Bitmap':
        bitmap = cls.decode(BytesIO(data), name = name)

        # VERIFY NOTHING FOLLOWS THE RASTER DATA.
        # Anything left over would be lost when the bitmap is written again.
        encoded_length = cls.HEADERS_LENGTH_IN_BYTES + len(bitmap.color_table) + len(bitmap.raster_data)
        if encoded_length != len(data):
            if bitmap.info_header.compressed_size.value == 0:
                raise SizeMismatchError(f'The header declares a compressed size of 0, but {len(data) - encoded_length} bytes '
                                        'follow the color table. Bitmaps that leave the compressed size unset are not supported.')
            raise SizeMismatchError(f'{len(data) - encoded_length} bytes follow the declared raster data.')
        if bitmap.file_header.file_size.value != len(data):
            raise SizeMismatchError(f'The header declares a {bitmap.file_header.file_size.value}-byte file, '
                                    f'but there are {len(data)} bytes.')
        return bitmap

    ## Reads a bitmap from a binary stream positioned at the "BM" signature.
    ## The stream is left just after the raster data.
    @classmethod
    def decode(cls, stream, name: Optional[str] = None) -> 'Bitmap':
        # VERIFY THE SIGNATURE.
        start_offset = stream.tell()
        signature = stream.read(len(FileHeader.WINDOWS_BITMAP_FILE_SIGNATURE))
        if signature != FileHeader.WINDOWS_BITMAP_FILE_SIGNATURE:
            raise NotABitmapError(f'Expected the signature {FileHeader.WINDOWS_BITMAP_FILE_SIGNATURE!r}, got {signature!r}.')
        stream.seek(start_offset)

        # READ THE HEADERS.
        file_header = FileHeader.decode(stream)
        info_header = InfoHeader.decode(stream)
        if info_header.info_header_size.value != InfoHeader.LENGTH_IN_BYTES:
            raise UnsupportedInfoHeaderError(
                f'Only {InfoHeader.LENGTH_IN_BYTES}-byte info headers are supported, '
                f'got {info_header.info_header_size.value} bytes.')
        color_depth = info_header.color_depth.value
        if color_depth not in InfoHeader.SUPPORTED_COLOR_DEPTHS:
            raise UnsupportedColorDepthError(f'Unsupported color depth: {color_depth} bits per pixel.')

        # READ THE COLOR TABLE.
        # The color table directly follows the info header and is kept as raw bytes.
        color_table = read_exactly(stream, info_header.color_table_length_in_bytes, 'color table')

        # READ THE RASTER DATA.
        raster_data = read_exactly(stream, info_header.compressed_size.value, 'raster data')
        logger.debug(f'Parsed a {info_header.width.value}x{info_header.height.value} {color_depth}-bit bitmap '
                     f'({len(color_table)} bytes of color table, {len(raster_data)} bytes of raster data).')
        return cls(file_header, info_header, color_table, raster_data, name)

    ## Reads a bitmap file from the filesystem.
    ## The base name of the file becomes the name of the bitmap.
    @classmethod
    def read_file(cls, filepath) -> 'Bitmap':
        try:
            with open(filepath, mode = 'rb') as file:
                data = file.read()
        except OSError as error:
            raise FileReadError(filepath, error.strerror or str(error)) from error
        return cls.parse(data, name = os.path.basename(filepath))

    ## Writes this bitmap to a binary stream, in file order.
    ## No sizes are checked; call validate() first for that.
    def encode(self, stream):
        self.file_header.encode(stream)
        self.info_header.encode(stream)
        stream.write(self.color_table)
        stream.write(self.raster_data)

    ## Returns the complete file as bytes.
    def serialize(self) -> bytes:
        stream = BytesIO()
        self.encode(stream)
        return stream.getvalue()

    ## Writes this bitmap to the filesystem.
    def write_file(self, filepath):
        try:
            with open(filepath, mode = 'wb') as file:
                self.encode(file)
        except OSError as error:
            raise FileWriteError(filepath, error.strerror or str(error)) from error

    ## Raises a SizeMismatchError if the sizes declared in the headers
    ## don't match the color table and raster data.
    def validate(self):
        expected_color_table_length = self.info_header.color_table_length_in_bytes
        if len(self.color_table) not in (0, expected_color_table_length):
            raise SizeMismatchError(f'The color table is {len(self.color_table)} bytes, '
                                    f'expected {expected_color_table_length} bytes.')
        if self.info_header.compressed_size.value != len(self.raster_data):
            raise SizeMismatchError(f'The header declares {self.info_header.compressed_size.value} bytes of raster data, '
                                    f'but there are {len(self.raster_data)} bytes.')
        data_offset = self.HEADERS_LENGTH_IN_BYTES + len(self.color_table)
        if self.file_header.data_offset.value != data_offset:
            raise SizeMismatchError(f'The header declares the raster data at offset {self.file_header.data_offset.value}, '
                                    f'but it is at offset {data_offset}.')
        file_size = data_offset + len(self.raster_data)
        if self.file_header.file_size.value != file_size:
            raise SizeMismatchError(f'The header declares a {self.file_header.file_size.value}-byte file, '
                                    f'but the file is {file_size} bytes.')

    def __str__(self):
        return dump(self)

## Creates a new bitmap filled with one color. See Bitmap.new.
def new(dimensions, color_depth: int, fill) -> Bitmap:
    return Bitmap.new(dimensions, color_depth, fill)

## Decodes a complete bitmap file from a byte buffer. See Bitmap.parse.
def parse(data: bytes, name: Optional[str] = None) -> Bitmap:
    return Bitmap.parse(data, name)

def serialize(bitmap: Bitmap) -> bytes:
    return bitmap.serialize()

def read_file(filepath) -> Bitmap:
    return Bitmap.read_file(filepath)

def write_file(bitmap: Bitmap, filepath):
    bitmap.write_file(filepath)
