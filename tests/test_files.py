#! python3

import os

import pytest

import bmpfile
from bmpfile.cli import main
from bmpfile.dump import format_size
from bmpfile.Exceptions import FileReadError, FileWriteError, NotABitmapError

def test_write_then_read(tmp_path):
    bitmap = bmpfile.new((32, 32), 24, '#F5ABB9')
    filepath = tmp_path / 'pink.bmp'
    bitmap.write_file(filepath)
    assert filepath.stat().st_size == bitmap.file_header.file_size.value

    read_bitmap = bmpfile.read_file(filepath)
    assert read_bitmap == bitmap
    assert read_bitmap.name == 'pink.bmp'

def test_module_level_write_file(tmp_path):
    bitmap = bmpfile.new((3, 3), 16, b'\x00\x80\xff')
    filepath = os.path.join(tmp_path, 'blue.bmp')
    bmpfile.write_file(bitmap, filepath)
    with open(filepath, 'rb') as file:
        assert file.read() == bitmap.serialize()

def test_read_file_reports_the_path(tmp_path):
    filepath = tmp_path / 'missing.bmp'
    with pytest.raises(FileReadError) as error:
        bmpfile.read_file(filepath)
    assert isinstance(error.value, OSError)
    assert error.value.path == filepath
    assert str(error.value).startswith(f'error reading file "{filepath}": ')

def test_write_file_reports_the_path(tmp_path):
    filepath = tmp_path / 'no' / 'such' / 'directory.bmp'
    with pytest.raises(FileWriteError) as error:
        bmpfile.new((1, 1), 24, '#000000').write_file(filepath)
    assert error.value.path == filepath

def test_read_file_rejects_other_formats(tmp_path):
    filepath = tmp_path / 'xeon.jpg'
    filepath.write_bytes(b'\xff\xd8\xff\xe0\x00\x10JFIF\x00')
    with pytest.raises(NotABitmapError):
        bmpfile.read_file(filepath)

@pytest.mark.parametrize("number_of_bytes, expected", [
    (0, '0 B'),
    (54, '54 B'),
    (3072, '3.0 KiB'),
    (3126, '3.05 KiB'),
    (6220854, '5.93 MiB'),
])
def test_format_size(number_of_bytes, expected):
    assert format_size(number_of_bytes) == expected

def test_dump_shows_headers_and_data():
    bitmap = bmpfile.new((1920, 1080), 24, '#F5ABB9')
    lines = bmpfile.dump(bitmap).splitlines()
    assert lines[0] == 'file header:'
    assert 'signature:' in lines[1] and 'BM' in lines[1] and '42 4D' in lines[1]
    assert '5.93 MiB' in lines[2] and '36 EC 5E 00' in lines[2]
    assert '1920x1080' in lines[8] and '80 07 00 00 38 04 00 00' in lines[8]
    assert '24 bit' in lines[10]
    assert '255 px/m' in lines[13]
    assert lines[-3].startswith('color table:') and lines[-3].endswith('0 B')
    assert 'B9 AB F5 B9 AB F5 B9 AB F5 B9 AB F5 ...' in lines[-1]
    assert lines[-1].endswith('6220800')
    assert '\033[' not in bmpfile.dump(bitmap)
    assert str(bitmap) == bmpfile.dump(bitmap)

def test_dump_shows_the_name(tmp_path):
    filepath = tmp_path / 'mew.bmp'
    bmpfile.new((2, 2), 24, '#FFFFFF').write_file(filepath)
    lines = bmpfile.dump(bmpfile.read_file(filepath)).splitlines()
    assert lines[0] == 'mew.bmp'
    assert lines[1] == '-------'
    assert lines[2] == 'file header:'

def test_dump_can_use_color():
    output = bmpfile.dump(bmpfile.new((2, 2), 24, '#FFFFFF'), color = True)
    assert '\033[91m\033[1mfile header:\033[0m' in output

def test_cli_new_and_inspect(tmp_path, capsys):
    filepath = tmp_path / 'green.bmp'
    assert main(['new', '4', '2', '#00FF00', str(filepath)]) == 0
    assert bmpfile.read_file(filepath) == bmpfile.new((4, 2), 24, '#00FF00')

    assert main(['inspect', str(filepath)]) == 0
    output = capsys.readouterr().out
    assert output.startswith('green.bmp\n')
    assert '4x2' in output

def test_cli_new_with_depth(tmp_path):
    filepath = tmp_path / 'red.bmp'
    assert main(['new', '3', '1', '#FF0000', str(filepath), '--depth', '16']) == 0
    assert bmpfile.read_file(filepath).info_header.color_depth.value == 16

def test_cli_reports_errors(tmp_path, caplog):
    filepath = tmp_path / 'missing.bmp'
    assert main(['inspect', str(filepath)]) == 1
    assert 'error reading file' in caplog.text
    assert main(['new', '1', '1', 'pink', str(tmp_path / 'pink.bmp')]) == 1
    assert main(['new', '-1', '1', '#000000', str(tmp_path / 'negative.bmp')]) == 1
    assert 'must not be negative' in caplog.text
    assert not (tmp_path / 'negative.bmp').exists()

if __name__ == "__main__":
    pytest.main()
