'''
This module selects the decoder for the machine instructions of the file
described by an ELF header, so that who consumes the header (an emulator, a
disassembler) doesn't have to map e_machine by itself.

Some examples here: <https://www.capstone-engine.org/lang_python.html>.
'''
import logging

from capstone import (
    Cs,
    CS_ARCH_ARM,
    CS_ARCH_MIPS,
    CS_ARCH_RISCV,
    CS_ARCH_X86,
    CS_MODE_32,
    CS_MODE_64,
    CS_MODE_ARM,
    CS_MODE_BIG_ENDIAN,
    CS_MODE_LITTLE_ENDIAN,
    CS_MODE_MIPS32,
    CS_MODE_MIPS64,
    CS_MODE_RISCV32,
    CS_MODE_RISCV64,
)

from ..enum import Endianess
from ..exceptions import UnrecoverableException
from . import FileHeaderView
from .enum import ElfEIClass, ElfMachine


logger = logging.getLogger(__name__)

_map = {
    (ElfMachine.EM_386, ElfEIClass.ELFCLASS32): (CS_ARCH_X86, CS_MODE_32),
    (ElfMachine.EM_X86_64, ElfEIClass.ELFCLASS64): (CS_ARCH_X86, CS_MODE_64),
    (ElfMachine.EM_ARM, ElfEIClass.ELFCLASS32): (CS_ARCH_ARM, CS_MODE_ARM),
    (ElfMachine.EM_MIPS, ElfEIClass.ELFCLASS32): (CS_ARCH_MIPS, CS_MODE_MIPS32),
    (ElfMachine.EM_MIPS, ElfEIClass.ELFCLASS64): (CS_ARCH_MIPS, CS_MODE_MIPS64),
    (ElfMachine.EM_RISCV, ElfEIClass.ELFCLASS32): (CS_ARCH_RISCV, CS_MODE_RISCV32),
    (ElfMachine.EM_RISCV, ElfEIClass.ELFCLASS64): (CS_ARCH_RISCV, CS_MODE_RISCV64),
}

# architectures where the byte order is part of the mode
_BI_ENDIAN = (CS_ARCH_ARM, CS_ARCH_MIPS)

_MAP_ENDIANESS_MODE = {
    Endianess.LITTLE_ENDIAN: CS_MODE_LITTLE_ENDIAN,
    Endianess.BIG_ENDIAN: CS_MODE_BIG_ENDIAN,
}


def capstone_target(header: FileHeaderView):
    '''Return the couple (arch, mode) to pass to capstone.Cs().'''
    machine = header.machine()
    key = (machine, header.bit_class())

    if key not in _map:
        raise UnrecoverableException(
            chain=['e_machine'],
            message=f'no disassembler for {machine.name} ({header.bit_class().name})')

    arch, mode = _map[key]
    endianess = header.endianness()

    if endianess not in _MAP_ENDIANESS_MODE:
        raise UnrecoverableException(chain=['e_ident', 'ei_data'], message='the endianess is unknown')

    if arch in _BI_ENDIAN:
        mode |= _MAP_ENDIANESS_MODE[endianess]
    elif endianess == Endianess.BIG_ENDIAN:
        raise UnrecoverableException(chain=['e_ident', 'ei_data'], message=f'{machine.name} is little endian only')

    logger.debug('capstone target for %s: arch=%d mode=%d', machine.name, arch, mode)

    return arch, mode


def disassembler(header: FileHeaderView, detail: bool = False) -> Cs:
    arch, mode = capstone_target(header)

    md = Cs(arch, mode)
    md.detail = detail

    return md
