"""
Decoding of the fundamental datatypes: unsigned integers of 1, 2, 4 or 8 bytes
with a given byte order.

Reads out of the buffer are programming errors and are never silently
truncated: the caller must know the extent of the header it is looking at.
"""
import logging
import struct

from .enum import Endianess


logger = logging.getLogger(__name__)

MAP_WIDTH_FORMAT = {
    1: 'B',
    2: 'H',
    4: 'I',
    8: 'Q',
}

MAP_ENDIANESS_PREFIX = {
    Endianess.LITTLE_ENDIAN: '<',
    Endianess.BIG_ENDIAN: '>',
}


def _check_bounds(buffer, offset: int, width: int) -> None:
    if offset < 0 or offset + width > len(buffer):
        raise IndexError(
            f'reading {width} bytes at offset 0x{offset:x} overflows a buffer of {len(buffer)} bytes')


def get_format(width: int, endianess: Endianess) -> str:
    '''Return the struct format for an unsigned integer of the given width.'''
    try:
        fmt = MAP_WIDTH_FORMAT[width]
    except KeyError:
        raise ValueError(f'unsupported width {width}, it must be one of {sorted(MAP_WIDTH_FORMAT)}') from None

    # a single byte has no order
    if width == 1:
        return fmt

    if endianess not in MAP_ENDIANESS_PREFIX:
        raise ValueError(f'cannot read {width} bytes with endianess {endianess}')

    return '%s%s' % (MAP_ENDIANESS_PREFIX[endianess], fmt)


def read(buffer, offset: int, width: int, endianess: Endianess) -> int:
    '''Read an unsigned integer of "width" bytes starting at "offset".'''
    fmt = get_format(width, endianess)
    _check_bounds(buffer, offset, width)

    value = struct.unpack_from(fmt, buffer, offset)[0]
    logger.debug('read %s at 0x%02x -> 0x%x', fmt, offset, value)

    return value


def read_bytes(buffer, offset: int, width: int) -> bytes:
    _check_bounds(buffer, offset, width)

    return bytes(buffer[offset:offset + width])
