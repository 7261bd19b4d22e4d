import struct

import pytest


def build_file_header(elf_class=2, data=1, e_type=2, e_machine=0x3e, e_entry=0x401000,
                      e_phoff=0x40, e_shoff=0x3a30, e_flags=0, e_ehsize=None,
                      e_phentsize=None, e_phnum=13, e_shentsize=None, e_shnum=31,
                      e_shstrndx=30, magic=b'\x7fELF', osabi=0, abiversion=0, version=1):
    '''Return the 64 bytes of an ELF header with the given values.

    For a class that is neither 1 nor 2 the 64 bits layout is used, for an
    encoding that is neither 1 nor 2 the little endian one.'''
    is_32 = elf_class == 1
    prefix = '>' if data == 2 else '<'

    e_ident = magic + bytes([elf_class, data, 1, osabi, abiversion]) + b'\x00' * 7

    if is_32:
        fmt = prefix + 'HHIIIIIHHHHHH'
        defaults = (52, 32, 40)
    else:
        fmt = prefix + 'HHIQQQIHHHHHH'
        defaults = (64, 56, 64)

    body = struct.pack(
        fmt,
        e_type,
        e_machine,
        version,
        e_entry,
        e_phoff,
        e_shoff,
        e_flags,
        defaults[0] if e_ehsize is None else e_ehsize,
        defaults[1] if e_phentsize is None else e_phentsize,
        e_phnum,
        defaults[2] if e_shentsize is None else e_shentsize,
        e_shnum,
        e_shstrndx,
    )

    raw = e_ident + body

    return raw + b'\x00' * (64 - len(raw))


def build_section_header(elf_class=2, data=1, sh_name=0x1b, sh_type=1, sh_flags=0x6,
                         sh_addr=0x401000, sh_offset=0x1000, sh_size=0x185, sh_link=0,
                         sh_info=0, sh_addralign=16, sh_entsize=0):
    prefix = '>' if data == 2 else '<'
    fmt = prefix + ('IIIIIIIIII' if elf_class == 1 else 'IIQQQQIIQQ')

    return struct.pack(
        fmt,
        sh_name,
        sh_type,
        sh_flags,
        sh_addr,
        sh_offset,
        sh_size,
        sh_link,
        sh_info,
        sh_addralign,
        sh_entsize,
    )


@pytest.fixture
def file_header():
    return build_file_header


@pytest.fixture
def section_header():
    return build_section_header
