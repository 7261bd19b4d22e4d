"""
# elfhdr: ELF headers for humans.

Decoding of the two fixed-size structures of an ELF file, the ELF header and
an entry of the section header table, for both 32 and 64 bits and both byte
orders.

Everything is built from three pieces:

 1. the layout: for each field, and for each class, the offset and the size
    of the field (elfhdr.elf.fields)
 2. the decoding: an unsigned integer of 1, 2, 4 or 8 bytes read with the
    byte order declared by the file (elfhdr.fields)
 3. the classification: the enumerated fields are mapped to their constants,
    falling back to UNKNOWN (elfhdr.elf.enum)

A view (elfhdr.elf.FileHeaderView, elfhdr.elf.SectionHeaderView) glues the
three together over a buffer the caller already has in memory: no file is
ever opened here.

    from elfhdr.elf import FileHeaderView

    with open(path, 'rb') as f:
        header = FileHeaderView(f.read(64))

    if header.is_elf_file():
        print(header.machine(), hex(header.entry()))
"""
