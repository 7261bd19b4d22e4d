"""
Core module for the read-only views over a header.

A View is the read-only sibling of a Chunk: it is made of fields, each one
identified by an offset and a size, but the layout is not negotiated with
the fields, it's given as a table selected once when the view is built.
The view only decodes, it never packs.
"""
import logging
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from .enum import Endianess
from .exceptions import UnpackException
from .fields import read, read_bytes


class View:
    """
    Immutable accessor over the bytes of a fixed-size header.

    The buffer is copied at construction so that nothing can change it
    under the view: every accessor is a pure read and can be repeated.

    A field missing from the layout table is a field that cannot be decoded
    with what the view knows (e.g. the class of the file is unknown): reading
    it returns None, it doesn't raise.
    """

    # fields that are byte strings and not integers
    RAW_FIELDS: Tuple[Enum, ...] = ()

    def __init__(self, data, layout: Mapping[Enum, Tuple[int, int]], endianess: Endianess, required: int):
        self.logger = logging.getLogger(f'{self.__module__}.{self.__class__.__name__}')

        if len(data) < required:
            raise UnpackException(
                chain=[self.__class__.__name__],
                message=f'{self.__class__.__name__} needs {required} bytes, {len(data)} given')

        self.data = bytes(data[:required])
        self.endianess = endianess
        self._layout = layout

        self.logger.debug('built %s over %d bytes (%s)', self.__class__.__name__, required, endianess)

    def locate(self, field: Enum) -> Optional[Tuple[int, int]]:
        return self._layout.get(field)

    def read(self, field: Enum) -> Optional[int]:
        '''Decode the field as an unsigned integer, None if it can't be decoded.'''
        location = self.locate(field)
        if location is None:
            self.logger.debug('field \'%s\' has no layout', field.name)
            return None

        offset, size = location
        if size > 1 and self.endianess == Endianess.UNKNOWN:
            self.logger.debug('field \'%s\' needs an endianess', field.name)
            return None

        return read(self.data, offset, size, self.endianess)

    def raw(self, field: Enum) -> Optional[bytes]:
        location = self.locate(field)
        if location is None:
            return None

        return read_bytes(self.data, *location)

    def get_value(self, field: Enum):
        return self.raw(field) if field in self.RAW_FIELDS else self.read(field)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        return {field.name: location for field, location in self._layout.items()}

    def get_fields(self):
        '''It returns a list of couples (name, value) for each decodable field.'''
        return [(field.name, self.get_value(field)) for field in self._layout]

    def __repr__(self):
        msg = []
        for field_name, value in self.get_fields():
            msg.append('%s=%s' % (field_name, value if not isinstance(value, int) else hex(value)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, value in self.get_fields():
            msg += '%s: %r\n' % (field_name, value)
        return msg
