import pytest

from elfhdr.enum import Endianess
from elfhdr.exceptions import UnpackException
from elfhdr.elf import SectionHeaderView, SectionFlags
from elfhdr.elf.enum import ElfEIClass, ElfSectionType, ElfSectionFlag


def test_text_section_64(section_header):
    section = SectionHeaderView(section_header(), ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)

    assert section.name_offset() == 0x1b
    assert section.type() == ElfSectionType.SHT_PROGBITS
    assert section.flags() == 0x6
    assert section.address() == 0x401000
    assert section.file_offset() == 0x1000
    assert section.size() == 0x185
    assert section.link() == 0
    assert section.info() == 0
    assert section.address_alignment() == 16
    assert section.entry_size() == 0


def test_symtab_section_32_big_endian(section_header):
    raw = section_header(
        elf_class=1,
        data=2,
        sh_name=1,
        sh_type=2,
        sh_flags=0,
        sh_addr=0,
        sh_offset=0x3040,
        sh_size=0x4a0,
        sh_link=28,
        sh_info=45,
        sh_addralign=4,
        sh_entsize=16,
    )
    section = SectionHeaderView(raw, ElfEIClass.ELFCLASS32, Endianess.BIG_ENDIAN)

    assert len(raw) == 40
    assert section.name_offset() == 1
    assert section.type() == ElfSectionType.SHT_SYMTAB
    assert section.file_offset() == 0x3040
    assert section.size() == 0x4a0
    assert section.link() == 28
    assert section.info() == 45
    assert section.address_alignment() == 4
    assert section.entry_size() == 16


@pytest.mark.parametrize('value,expected', [
    (0, ElfSectionType.SHT_NULL),
    (8, ElfSectionType.SHT_NOBITS),
    (11, ElfSectionType.SHT_DYNSYM),
    (14, ElfSectionType.SHT_INIT_ARRAY),
    (18, ElfSectionType.SHT_SYMTAB_SHNDX),
    (0x60000000, ElfSectionType.SHT_LOOS),
    (0x6ffffff6, ElfSectionType.SHT_GNU_HASH),
    (0x70000000, ElfSectionType.SHT_LOPROC),
    (0x0c, ElfSectionType.UNKNOWN),
    (0x60000001, ElfSectionType.UNKNOWN),
])
def test_section_type(section_header, value, expected):
    section = SectionHeaderView(section_header(sh_type=value), ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)

    assert section.type() == expected
    # the numeric value is never lost
    assert section.raw_type() == value


def test_flags_are_raw(section_header):
    value = 0x80000000 | 0x00100000 | 0x400 | 0x3
    section = SectionHeaderView(section_header(sh_flags=value), ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)

    assert section.flags() == value

    flags = section.section_flags()
    assert flags == value
    assert flags.write
    assert flags.alloc
    assert not flags.execinstr
    assert flags.tls
    assert flags.exclude
    assert not flags.ordered
    assert flags.os_bits == 0x00100000
    assert flags.processor_bits == 0x80000000
    assert flags.names() == ['SHF_WRITE', 'SHF_ALLOC', 'SHF_TLS', 'SHF_EXCLUDE']


def test_section_flags():
    flags = SectionFlags(0x32)

    assert flags.alloc
    assert flags.merge
    assert flags.strings
    assert not flags.write
    assert flags.has(ElfSectionFlag.SHF_MERGE | ElfSectionFlag.SHF_STRINGS)
    assert not flags.has(ElfSectionFlag.SHF_MERGE | ElfSectionFlag.SHF_WRITE)
    assert int(flags) == 0x32
    assert flags == SectionFlags(0x32)
    assert repr(flags) == '<SectionFlags(0x32: SHF_ALLOC|SHF_MERGE|SHF_STRINGS)>'


def test_short_buffer(section_header):
    with pytest.raises(UnpackException):
        SectionHeaderView(section_header(elf_class=1)[:39], ElfEIClass.ELFCLASS32, Endianess.LITTLE_ENDIAN)

    with pytest.raises(UnpackException):
        SectionHeaderView(section_header()[:63], ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)

    # an entry of the 32 bits table is not enough for 64 bits
    with pytest.raises(UnpackException):
        SectionHeaderView(section_header(elf_class=1), ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)


def test_longer_buffer(section_header):
    raw = section_header(elf_class=1) + section_header(elf_class=1, sh_type=3)
    section = SectionHeaderView(raw, ElfEIClass.ELFCLASS32, Endianess.LITTLE_ENDIAN)

    assert len(section.data) == 40
    assert section.type() == ElfSectionType.SHT_PROGBITS


def test_unknown_class(section_header):
    section = SectionHeaderView(section_header(elf_class=1), ElfEIClass.UNKNOWN, Endianess.LITTLE_ENDIAN)

    assert section.type() == ElfSectionType.UNKNOWN
    assert section.raw_type() is None
    assert section.flags() is None
    assert section.section_flags() is None
    assert section.size() is None
    assert section.layout == {}


def test_unknown_endianess(section_header):
    section = SectionHeaderView(section_header(), ElfEIClass.ELFCLASS64, Endianess.UNKNOWN)

    assert section.type() == ElfSectionType.UNKNOWN
    assert section.address() is None
    assert section.layout['sh_addr'] == (0x10, 8)


def test_reads_are_repeatable(section_header):
    section = SectionHeaderView(section_header(), ElfEIClass.ELFCLASS64, Endianess.LITTLE_ENDIAN)

    assert [section.type(), section.size()] == [section.type(), section.size()]
    assert 'sh_addr=0x401000' in repr(section)
