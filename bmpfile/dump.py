## Renders a human-readable listing of a bitmap's headers and data.
## This is a debugging aid; nothing here is part of the file format.

# Only this many bytes of the color table and raster data are previewed.
PREVIEW_LENGTH_IN_BYTES = 12

# ANSI escape sequences used when color output is requested.
RESET = '\033[0m'
BOLD_RED = '\033[91m\033[1m'
BOLD_MAGENTA = '\033[95m\033[1m'
GREEN = '\033[92m'
YELLOW = '\033[93m'

## Formats a byte count with binary units.
def format_size(number_of_bytes: int) -> str:
    if number_of_bytes >= 1024 ** 2:
        return f'{round(number_of_bytes / 1024 ** 2, 2)} MiB'
    if number_of_bytes >= 1024:
        return f'{round(number_of_bytes / 1024, 2)} KiB'
    return f'{number_of_bytes} B'

class Renderer:
    def __init__(self, color: bool = False):
        self.color = color

    def _paint(self, text, style):
        return f'{style}{text}{RESET}' if self.color else text

    ## Shows the leading bytes in hex, followed by the total byte count.
    def _bytes(self, data) -> str:
        if len(data) == 0:
            return '0 B'
        preview = ' '.join(f'{byte:02X}' for byte in data[:PREVIEW_LENGTH_IN_BYTES])
        if len(data) > PREVIEW_LENGTH_IN_BYTES:
            preview += ' ...'
        return f'{preview:<23} {self._paint("|", YELLOW)} {self._paint(len(data), GREEN)}'

    def _line(self, label, value, data) -> str:
        label = self._paint(f'{label + ":":<20}', BOLD_MAGENTA)
        value = self._paint(f'{value:<15}', GREEN)
        return f'  {label}{value} {self._paint("|", YELLOW)} {self._bytes(data)}'

    ## Shows a field that has no meaningful value, like the reserved bytes.
    def _bare_line(self, label, data) -> str:
        label = self._paint(f'{label:<35}', BOLD_MAGENTA)
        return f'  {label} {self._paint("|", YELLOW)} {self._bytes(data)}'

    def _section(self, title, data) -> str:
        return f'{self._paint(f"{title:<22}", BOLD_RED)}{self._bytes(data)}'

    def render(self, bitmap) -> str:
        file_header = bitmap.file_header
        info_header = bitmap.info_header
        lines = [
            self._paint('file header:', BOLD_RED),
            self._line('signature', file_header.signature.decode('latin-1'), file_header.signature),
            self._line('file size', format_size(file_header.file_size.value), file_header.file_size),
            self._bare_line('reserved', file_header.reserved),
            self._line('data offset', format_size(file_header.data_offset.value), file_header.data_offset),
            '',
            self._paint('info header:', BOLD_RED),
            self._line('header size', format_size(info_header.info_header_size.value), info_header.info_header_size),
            self._line('image size', f'{info_header.width.value}x{info_header.height.value}', info_header.width + info_header.height),
            self._line('planes', info_header.planes.value, info_header.planes),
            self._line('color depth', f'{info_header.color_depth.value} bit', info_header.color_depth),
            self._line('compression', f'type {info_header.compression.value}', info_header.compression),
            self._line('compressed size', format_size(info_header.compressed_size.value), info_header.compressed_size),
            self._line('x resolution', f'{info_header.x_pixels_per_m.value} px/m', info_header.x_pixels_per_m),
            self._line('y resolution', f'{info_header.y_pixels_per_m.value} px/m', info_header.y_pixels_per_m),
            self._line('used colors', info_header.used_colors.value, info_header.used_colors),
            self._line('important colors', info_header.important_colors.value, info_header.important_colors),
            '',
            self._section('color table:', bitmap.color_table),
            '',
            self._section('raster data:', bitmap.raster_data),
        ]

        # ADD THE NAME OF THE FILE, IF THERE IS ONE.
        if bitmap.name:
            lines = [self._paint(bitmap.name, GREEN), self._paint('-' * len(bitmap.name), YELLOW)] + lines
        return '\n'.join(lines) + '\n'

## Renders the bitmap as text.
## \param[in] color - Whether to include ANSI color escape sequences.
def dump(bitmap, color: bool = False) -> str:
    return Renderer(color).render(bitmap)
