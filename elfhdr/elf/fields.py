'''
# Elf layout

The position and the width of every field of the ELF header and of a section
header entry. Both structures are made of a handful of fundamental datatypes
whose size depends on the EI_CLASS (see "Data Representation" in the gABI),
so the layouts are derived once for each class by laying out the fields in
order, and then used as plain lookup tables.
'''
import struct
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Type

from .enum import ElfEIClass


Location = Tuple[int, int]


class ElfHeaderField(Enum):
    # e_ident
    ei_mag        = auto()
    ei_class      = auto()
    ei_data       = auto()
    ei_version    = auto()
    ei_osabi      = auto()
    ei_abiversion = auto()
    ei_pad        = auto()

    e_type      = auto()
    e_machine   = auto()
    e_version   = auto()
    e_entry     = auto()
    e_phoff     = auto()
    e_shoff     = auto()
    e_flags     = auto()
    e_ehsize    = auto()
    e_phentsize = auto()
    e_phnum     = auto()
    e_shentsize = auto()
    e_shnum     = auto()
    e_shstrndx  = auto()


class SectionHeaderField(Enum):
    sh_name      = auto()
    sh_type      = auto()
    sh_flags     = auto()
    sh_addr      = auto()
    sh_offset    = auto()
    sh_size      = auto()
    sh_link      = auto()
    sh_info      = auto()
    sh_addralign = auto()
    sh_entsize   = auto()


class Elf_DataType:
    '''Wrapper for all the datatype that resolves internally to the EI_CLASS'''

    MAP_CLASS_TYPE: Dict[ElfEIClass, str] = {}

    @classmethod
    def get_size(cls, elf_class: ElfEIClass) -> int:
        # standard sizes, no native alignment
        return struct.calcsize('<%s' % cls.MAP_CLASS_TYPE[elf_class])


class Elf_Byte(Elf_DataType):
    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'B',
        ElfEIClass.ELFCLASS64: 'B',
    }


class Elf_Magic(Elf_DataType):
    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: '4s',
        ElfEIClass.ELFCLASS64: '4s',
    }


class Elf_Pad(Elf_DataType):
    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: '7s',
        ElfEIClass.ELFCLASS64: '7s',
    }


class Elf_Half(Elf_DataType):
    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'H',
        ElfEIClass.ELFCLASS64: 'H',
    }


class Elf_Word(Elf_DataType):
    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'I',
    }


class Elf_Addr(Elf_DataType):
    '''Unsigned program address'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


class Elf_Off(Elf_DataType):
    '''Unsigned file offset'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


class Elf_Xword(Elf_DataType):
    '''Elf32_Word for 32 bits, Elf64_Xword for 64 bits'''

    MAP_CLASS_TYPE = {
        ElfEIClass.ELFCLASS32: 'I',
        ElfEIClass.ELFCLASS64: 'Q',
    }


Declaration = List[Tuple[Enum, Type[Elf_DataType]]]

ELF_IDENT: Declaration = [
    (ElfHeaderField.ei_mag,        Elf_Magic),
    (ElfHeaderField.ei_class,      Elf_Byte),  # determines the architecture
    (ElfHeaderField.ei_data,       Elf_Byte),  # determines the endianess of the binary data
    (ElfHeaderField.ei_version,    Elf_Byte),
    (ElfHeaderField.ei_osabi,      Elf_Byte),
    (ElfHeaderField.ei_abiversion, Elf_Byte),
    (ElfHeaderField.ei_pad,        Elf_Pad),
]

ELF_HEADER: Declaration = ELF_IDENT + [
    (ElfHeaderField.e_type,      Elf_Half),
    (ElfHeaderField.e_machine,   Elf_Half),
    (ElfHeaderField.e_version,   Elf_Word),
    (ElfHeaderField.e_entry,     Elf_Addr),
    (ElfHeaderField.e_phoff,     Elf_Off),
    (ElfHeaderField.e_shoff,     Elf_Off),
    (ElfHeaderField.e_flags,     Elf_Word),
    (ElfHeaderField.e_ehsize,    Elf_Half),
    (ElfHeaderField.e_phentsize, Elf_Half),
    (ElfHeaderField.e_phnum,     Elf_Half),
    (ElfHeaderField.e_shentsize, Elf_Half),
    (ElfHeaderField.e_shnum,     Elf_Half),
    (ElfHeaderField.e_shstrndx,  Elf_Half),
]

SECTION_HEADER: Declaration = [
    (SectionHeaderField.sh_name,      Elf_Word),
    (SectionHeaderField.sh_type,      Elf_Word),
    (SectionHeaderField.sh_flags,     Elf_Xword),
    (SectionHeaderField.sh_addr,      Elf_Addr),
    (SectionHeaderField.sh_offset,    Elf_Off),
    (SectionHeaderField.sh_size,      Elf_Xword),
    (SectionHeaderField.sh_link,      Elf_Word),
    (SectionHeaderField.sh_info,      Elf_Word),
    (SectionHeaderField.sh_addralign, Elf_Xword),
    (SectionHeaderField.sh_entsize,   Elf_Xword),
]

CLASSES = (ElfEIClass.ELFCLASS32, ElfEIClass.ELFCLASS64)


def relayout(declaration: Declaration, elf_class: ElfEIClass, expected=None) -> Mapping[Enum, Location]:
    '''Place the declared fields one after the other and return the mapping
    field -> (offset, size).

    If "expected" is given (an iterable of fields, usually the enum itself)
    every one of its members must be declared exactly once.'''
    result: Dict[Enum, Location] = {}

    position = 0
    for field, datatype in declaration:
        if field in result:
            raise AttributeError(f'field named "{field.name}" is declared twice')

        width = datatype.get_size(elf_class)
        result[field] = (position, width)
        position += width

    if expected is not None:
        missing = [_.name for _ in expected if _ not in result]
        if missing:
            raise AttributeError(f'no layout defined for the fields {missing}')

    return MappingProxyType(result)


# the identification bytes don't depend on the class
IDENT_LAYOUT = relayout(ELF_IDENT, ElfEIClass.ELFCLASS32)

ELF_HEADER_LAYOUTS = {
    _: relayout(ELF_HEADER, _, expected=ElfHeaderField) for _ in CLASSES
}

SECTION_HEADER_LAYOUTS = {
    _: relayout(SECTION_HEADER, _, expected=SectionHeaderField) for _ in CLASSES
}

_MAP_FIELDS_LAYOUTS = {
    ElfHeaderField: ELF_HEADER_LAYOUTS,
    SectionHeaderField: SECTION_HEADER_LAYOUTS,
}


def get_layout(fields: Type[Enum], elf_class: ElfEIClass) -> Mapping[Enum, Location]:
    '''Return the table for the header described by "fields" with the given class.'''
    if elf_class not in CLASSES:
        raise ValueError(f'no layout exists for class {elf_class}')

    return _MAP_FIELDS_LAYOUTS[fields][elf_class]


def extent(layout: Mapping[Enum, Location]) -> int:
    '''Number of bytes covered by the layout.'''
    return max(position + width for position, width in layout.values())


def location(field: Enum, elf_class: ElfEIClass) -> Location:
    return get_layout(type(field), elf_class)[field]


def offset(field: Enum, elf_class: ElfEIClass) -> int:
    return location(field, elf_class)[0]


def size(field: Enum, elf_class: ElfEIClass) -> int:
    return location(field, elf_class)[1]
