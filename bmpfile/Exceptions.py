## The base class for any error found while decoding or building a bitmap.
class BitmapError(ValueError):
    pass

## Raised when the data does not start with the "BM" signature.
## This is the error to catch when probing files that might not be bitmaps.
class NotABitmapError(BitmapError):
    pass

## Raised when the data ends before a header field, the color table,
## or the raster data it declares has been read.
class TruncatedBufferError(BitmapError):
    pass

## Raised when the color depth is not one of the depths this codec understands.
class UnsupportedColorDepthError(BitmapError):
    pass

## Raised when the info header is not a 40-byte BITMAPINFOHEADER.
## (The V4 and V5 headers are longer and move the palette.)
class UnsupportedInfoHeaderError(BitmapError):
    pass

## Raised when the declared file or raster sizes don't agree with the data.
class SizeMismatchError(BitmapError):
    pass

## Raised when an integer doesn't fit in the width of the field it is written to.
class FieldOverflowError(BitmapError):
    pass

## Raised when a fill color is neither a "#RRGGBB" string nor three bytes.
class InvalidColorError(BitmapError):
    pass

## Raised when a new bitmap is given a negative width or height.
class InvalidDimensionsError(BitmapError):
    pass

## The base class for errors reading or writing bitmap files.
## The message of the underlying error is kept alongside the path.
class BitmapFileError(OSError):
    ACTION = 'accessing'

    def __init__(self, path, message):
        self.path = path
        self.message = message
        super().__init__(f'error {self.ACTION} file "{path}": {message}')

class FileReadError(BitmapFileError):
    ACTION = 'reading'

class FileWriteError(BitmapFileError):
    ACTION = 'writing'
