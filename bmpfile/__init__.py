from . import Exceptions
from .bmpfile import Bitmap, new, parse, serialize, read_file, write_file
from .color import HexColor, RawColor
from .dump import dump
from .headers import Field, FileHeader, InfoHeader
from .numeric import encode, decode
