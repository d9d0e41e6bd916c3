import re
from dataclasses import dataclass

from .Exceptions import InvalidColorError

## A color given as three raw bytes in red, green, blue order.
## This is the canonical form every fill color is resolved to.
@dataclass(frozen = True)
class RawColor:
    rgb: bytes

    def __post_init__(self):
        if not isinstance(self.rgb, (bytes, bytearray)) or len(self.rgb) != 3:
            raise InvalidColorError(f'A raw color must be exactly three bytes, got {self.rgb!r}.')
        object.__setattr__(self, 'rgb', bytes(self.rgb))

    @property
    def red(self) -> int:
        return self.rgb[0]

    @property
    def green(self) -> int:
        return self.rgb[1]

    @property
    def blue(self) -> int:
        return self.rgb[2]

    ## Returns the pixel as stored in 24-bit raster data.
    ## Bitmaps store the components in reverse order.
    @property
    def bgr(self) -> bytes:
        return bytes((self.blue, self.green, self.red))

    ## Returns the pixel as a 16-bit RGB555 value.
    ## The top bit is unused and each component keeps its five high bits.
    @property
    def rgb555(self) -> int:
        return ((self.red >> 3) << 10) | ((self.green >> 3) << 5) | (self.blue >> 3)

## A color given as a "#RRGGBB" string.
@dataclass(frozen = True)
class HexColor:
    PATTERN = re.compile(r'#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})')

    string: str

    def to_raw(self) -> RawColor:
        match = self.PATTERN.fullmatch(self.string)
        if match is None:
            raise InvalidColorError(f'Expected a color like "#RRGGBB", got {self.string!r}.')
        return RawColor(bytes(int(component, 16) for component in match.groups()))

## Resolves any accepted fill color to its canonical RawColor.
## \param[in] fill - A "#RRGGBB" string, three bytes (R, G, B), a HexColor, or a RawColor.
def resolve_color(fill) -> RawColor:
    if isinstance(fill, RawColor):
        return fill
    if isinstance(fill, HexColor):
        return fill.to_raw()
    if isinstance(fill, str):
        return HexColor(fill).to_raw()
    if isinstance(fill, (bytes, bytearray)):
        return RawColor(fill)
    raise InvalidColorError(f'Unsupported fill color type: {type(fill).__name__}.')
