'''
# ELF headers

Read-only views over the two fixed-size structures of the Executable and
Linkable Format: the ELF header, found at the start of the file, and a single
entry of the section header table.

Reference to <http://www.sco.com/developers/gabi/latest/contents.html>.

The views don't read files: the caller slices the bytes (the first 64 bytes
of the file for the ELF header, e_shoff + index * e_shentsize for a section
header) and wraps them.

If the class or the data encoding of the file are not understood every field
that depends on them decodes to None (or to the UNKNOWN member for the
enumerated fields): the bytes of e_ident are still accessible so the caller
can see what went wrong.
'''
from ..core import View
from ..enum import Compliant, Endianess
from ..exceptions import MagicException
from ..fields import read_bytes
from .enum import (
    ElfEIClass,
    ElfEIData,
    ElfOsABI,
    ElfType,
    ElfMachine,
    ElfSectionType,
    ElfSectionFlag,
    classify,
)
from .fields import (
    CLASSES,
    IDENT_LAYOUT,
    ElfHeaderField,
    SectionHeaderField,
    extent,
    get_layout,
)


ELF_MAGIC = b'\x7fELF'
ELF_HEADER_SIZE = 0x40

MAP_DATA_ENDIANESS = {
    ElfEIData.ELFDATA2LSB: Endianess.LITTLE_ENDIAN,
    ElfEIData.ELFDATA2MSB: Endianess.BIG_ENDIAN,
    ElfEIData.UNKNOWN: Endianess.UNKNOWN,
}


class FileHeaderView(View):
    '''The ELF header.

    The class and the endianess are decoded from e_ident at construction
    and the corresponding layout is used for every other field.'''

    RAW_FIELDS = (ElfHeaderField.ei_mag, ElfHeaderField.ei_pad)

    def __init__(self, data, compliant=Compliant.NONE):
        # e_ident is the only part we can read before knowing class and endianess
        super().__init__(data, IDENT_LAYOUT, Endianess.UNKNOWN, required=ELF_HEADER_SIZE)
        self.compliant = compliant

        if not self.is_elf_file():
            self.logger.warning(f'the magic doesn\'t correspond: {self.raw(ElfHeaderField.ei_mag)!r}')
            if self.compliant & Compliant.MAGIC:
                raise MagicException(chain=['e_ident', 'ei_mag'], message='not an ELF file')

        self.elf_class = classify(ElfEIClass, self.read(ElfHeaderField.ei_class))
        self.endianess = MAP_DATA_ENDIANESS[classify(ElfEIData, self.read(ElfHeaderField.ei_data))]

        if self.elf_class in CLASSES:
            self._layout = get_layout(ElfHeaderField, self.elf_class)
        else:
            self.logger.warning('EI_CLASS has not a value useful, only e_ident can be decoded')

        if self.endianess == Endianess.UNKNOWN:
            self.logger.warning('EI_DATA has not a value useful, multi-byte fields can\'t be decoded')

        self.logger.debug('ELF header: %s %s', self.elf_class.name, self.endianess.name)

    def is_elf_file(self) -> bool:
        return self.raw(ElfHeaderField.ei_mag) == ELF_MAGIC

    def bit_class(self) -> ElfEIClass:
        return self.elf_class

    def endianness(self) -> Endianess:
        return self.endianess

    def ident(self) -> bytes:
        return read_bytes(self.data, 0, extent(IDENT_LAYOUT))

    def elf_version(self):
        '''EI_VERSION, always 1'''
        return self.read(ElfHeaderField.ei_version)

    def os_abi(self) -> ElfOsABI:
        return classify(ElfOsABI, self.read(ElfHeaderField.ei_osabi))

    def abi_version(self):
        return self.read(ElfHeaderField.ei_abiversion)

    def object_type(self) -> ElfType:
        return classify(ElfType, self.read(ElfHeaderField.e_type))

    def machine(self) -> ElfMachine:
        return classify(ElfMachine, self.read(ElfHeaderField.e_machine))

    def version(self):
        return self.read(ElfHeaderField.e_version)

    def entry(self):
        return self.read(ElfHeaderField.e_entry)

    def program_header_offset(self):
        return self.read(ElfHeaderField.e_phoff)

    def section_header_offset(self):
        return self.read(ElfHeaderField.e_shoff)

    def flags(self):
        '''Processor specific flags, returned as they are'''
        return self.read(ElfHeaderField.e_flags)

    def header_size(self):
        return self.read(ElfHeaderField.e_ehsize)

    def program_header_entry_size(self):
        return self.read(ElfHeaderField.e_phentsize)

    def program_header_count(self):
        return self.read(ElfHeaderField.e_phnum)

    def section_header_entry_size(self):
        return self.read(ElfHeaderField.e_shentsize)

    def section_header_count(self):
        return self.read(ElfHeaderField.e_shnum)

    def section_header_string_table_index(self):
        return self.read(ElfHeaderField.e_shstrndx)

    def section_header(self, data) -> 'SectionHeaderView':
        '''Wrap an entry of the section header table of this same file.'''
        return SectionHeaderView(data, self.elf_class, self.endianess)


# named bits of sh_flags, the masks are excluded
SECTION_FLAG_BITS = (
    ElfSectionFlag.SHF_WRITE,
    ElfSectionFlag.SHF_ALLOC,
    ElfSectionFlag.SHF_EXECINSTR,
    ElfSectionFlag.SHF_MERGE,
    ElfSectionFlag.SHF_STRINGS,
    ElfSectionFlag.SHF_INFO_LINK,
    ElfSectionFlag.SHF_LINK_ORDER,
    ElfSectionFlag.SHF_OS_NONCONFORMING,
    ElfSectionFlag.SHF_GROUP,
    ElfSectionFlag.SHF_TLS,
    ElfSectionFlag.SHF_COMPRESSED,
    ElfSectionFlag.SHF_ORDERED,
    ElfSectionFlag.SHF_EXCLUDE,
)


class SectionFlags:
    '''The raw value of sh_flags with an accessor for each named bit.

    The value is kept as an integer: the bits are meaningful in combination
    and the OS/processor specific ones have no name at all.'''

    def __init__(self, value: int):
        self.value = value

    def has(self, flag: ElfSectionFlag) -> bool:
        return self.value & int(flag) == int(flag)

    write            = property(fget=lambda self: self.has(ElfSectionFlag.SHF_WRITE))
    alloc            = property(fget=lambda self: self.has(ElfSectionFlag.SHF_ALLOC))
    execinstr        = property(fget=lambda self: self.has(ElfSectionFlag.SHF_EXECINSTR))
    merge            = property(fget=lambda self: self.has(ElfSectionFlag.SHF_MERGE))
    strings          = property(fget=lambda self: self.has(ElfSectionFlag.SHF_STRINGS))
    info_link        = property(fget=lambda self: self.has(ElfSectionFlag.SHF_INFO_LINK))
    link_order       = property(fget=lambda self: self.has(ElfSectionFlag.SHF_LINK_ORDER))
    os_nonconforming = property(fget=lambda self: self.has(ElfSectionFlag.SHF_OS_NONCONFORMING))
    group            = property(fget=lambda self: self.has(ElfSectionFlag.SHF_GROUP))
    tls              = property(fget=lambda self: self.has(ElfSectionFlag.SHF_TLS))
    compressed       = property(fget=lambda self: self.has(ElfSectionFlag.SHF_COMPRESSED))
    ordered          = property(fget=lambda self: self.has(ElfSectionFlag.SHF_ORDERED))
    exclude          = property(fget=lambda self: self.has(ElfSectionFlag.SHF_EXCLUDE))

    @property
    def os_bits(self) -> int:
        return self.value & int(ElfSectionFlag.SHF_MASKOS)

    @property
    def processor_bits(self) -> int:
        return self.value & int(ElfSectionFlag.SHF_MASKPROC)

    def names(self):
        return [_.name for _ in SECTION_FLAG_BITS if self.has(_)]

    def __int__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, SectionFlags):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f'<{self.__class__.__name__}(0x{self.value:x}: {"|".join(self.names())})>'


class SectionHeaderView(View):
    '''A single entry of the section header table.

    The entry doesn't carry its own class and endianess, they come from the
    ELF header of the file (see FileHeaderView.section_header()).'''

    def __init__(self, data, elf_class: ElfEIClass, endianess: Endianess):
        if elf_class in CLASSES:
            layout = get_layout(SectionHeaderField, elf_class)
            required = extent(layout)
        else:
            # nothing can be decoded but the entry is at least this long
            layout = {}
            required = extent(get_layout(SectionHeaderField, ElfEIClass.ELFCLASS32))

        super().__init__(data, layout, endianess, required=required)
        self.elf_class = elf_class

    def name_offset(self):
        '''Offset of the name into the section header string table'''
        return self.read(SectionHeaderField.sh_name)

    def raw_type(self):
        return self.read(SectionHeaderField.sh_type)

    def type(self) -> ElfSectionType:
        return classify(ElfSectionType, self.raw_type())

    def flags(self):
        return self.read(SectionHeaderField.sh_flags)

    def section_flags(self):
        value = self.flags()
        return SectionFlags(value) if value is not None else None

    def address(self):
        return self.read(SectionHeaderField.sh_addr)

    def file_offset(self):
        return self.read(SectionHeaderField.sh_offset)

    def size(self):
        return self.read(SectionHeaderField.sh_size)

    def link(self):
        return self.read(SectionHeaderField.sh_link)

    def info(self):
        return self.read(SectionHeaderField.sh_info)

    def address_alignment(self):
        return self.read(SectionHeaderField.sh_addralign)

    def entry_size(self):
        return self.read(SectionHeaderField.sh_entsize)
