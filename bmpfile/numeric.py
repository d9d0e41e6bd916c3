from io import BytesIO

import self_documenting_struct as struct

from .Exceptions import FieldOverflowError

## These are the widths of every integer field in the bitmap headers.
## They are packed and unpacked with the struct helpers; any other
## width falls back to the plain integer conversions.
PACKERS = {
    1: struct.pack.uint8,
    2: struct.pack.uint16_le,
    4: struct.pack.uint32_le,
}
UNPACKERS = {
    1: struct.unpack.uint8,
    2: struct.unpack.uint16_le,
    4: struct.unpack.uint32_le,
}

## Encodes an unsigned integer as exactly `width` little-endian bytes.
## Values that do not fit are rejected rather than truncated, so
## encode(256, 1) raises a FieldOverflowError.
## \param[in] n - The non-negative integer to encode.
## \param[in] width - The number of bytes in the result.
def encode(n: int, width: int) -> bytes:
    if width < 1:
        raise ValueError(f'Field width must be at least one byte, got {width}.')
    if n < 0 or n >= 1 << (8 * width):
        raise FieldOverflowError(f'{n} does not fit in a {width}-byte unsigned field.')

    packer = PACKERS.get(width)
    if packer is not None:
        return packer(n)
    return n.to_bytes(width, 'little')

## Decodes little-endian bytes of any length as an unsigned integer.
## An empty byte sequence decodes to zero.
def decode(data: bytes) -> int:
    unpacker = UNPACKERS.get(len(data))
    if unpacker is not None:
        return unpacker(BytesIO(data))
    return int.from_bytes(data, 'little')
