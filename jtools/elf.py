"""Reading and summarising little-endian ELF64 files."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

ELF_MAGIC = b"\x7fELF"

_EHDR = struct.Struct("<4sBBBBB7sHHIQQQIHHHHHH")
_PHDR = struct.Struct("<IIQQQQQQ")
_SHDR = struct.Struct("<IIQQQQIIQQ")

EHDR_SIZE = _EHDR.size
PHDR_SIZE = _PHDR.size
SHDR_SIZE = _SHDR.size


class ElfError(Exception):
    """Raised when a file is not a supported ELF64 image."""


class ElfClass(IntEnum):
    NONE = 0
    A32 = 1
    A64 = 2


class ElfData(IntEnum):
    NONE = 0
    LSB = 1
    MSB = 2


class OsAbi(IntEnum):
    NONE = 0
    SYSV = 1


class ElfType(IntEnum):
    NONE = 0
    REL = 1
    EXEC = 2
    DYN = 3
    CORE = 4


class Machine(IntEnum):
    NONE = 0
    X86_64 = 0x3E


class ProgramType(IntEnum):
    NONE = 0
    LOAD = 1
    DYNAMIC = 2
    INTERP = 3
    NOTE = 4
    SHLIB = 5
    PHDR = 6
    TLS = 7
    LOOS = 0x60000000
    HIOS = 0x6FFFFFFF
    LOPROC = 0x70000000
    HIPROC = 0x7FFFFFFF


class ProgramFlag(IntFlag):
    X = 0x1
    W = 0x2
    R = 0x4


class SectionType(IntEnum):
    NONE = 0
    PROGBITS = 1
    SYMTAB = 2
    STRTAB = 3
    RELA = 4
    HASH = 5
    DYNAMIC = 6
    NOTE = 7
    NOBITS = 8
    REL = 9
    SHLIB = 10
    DYNSYM = 11
    INIT_ARRAY = 12
    FINI_ARRAY = 13
    PREINIT_ARRAY = 14
    GROUP = 15
    SYMTAB_SHNDX = 16
    NUM = 17
    LOOS = 18


_PROGRAM_TYPE_NAMES = ("NONE", "LOAD", "DYNAMIC", "INTERP", "NOTE", "SHLIB", "PHDR", "TLS")


def program_type_name(value):
    """Return the display name of a program header type."""
    if value < ProgramType.LOOS:
        return _PROGRAM_TYPE_NAMES[value] if value < len(_PROGRAM_TYPE_NAMES) else "UNKNOWN"
    if value < ProgramType.LOPROC:
        return "OS"
    return "PROC"


def _unpack_at(layout, data, offset, what):
    if offset < 0 or offset + layout.size > len(data):
        raise ElfError(f"{what} at offset {offset:#x} lies outside the file")
    return layout.unpack_from(data, offset)


@dataclass(frozen=True)
class ElfHeader:
    magic: bytes
    elf_class: int
    data_encoding: int
    ident_version: int
    osabi: int
    abi_version: int
    padding: bytes
    type: int
    machine: int
    version: int
    entry: int
    phoff: int
    shoff: int
    flags: int
    ehsize: int
    phentsize: int
    phnum: int
    shentsize: int
    shnum: int
    shstrndx: int

    @classmethod
    def unpack(cls, data):
        """Decode the ELF header at the start of ``data``."""
        if len(data) < EHDR_SIZE:
            raise ElfError(f"file too small for an ELF header: {len(data)} bytes")
        return cls(*_EHDR.unpack_from(data, 0))


@dataclass(frozen=True)
class ProgramHeader:
    type: int
    flags: int
    offset: int
    vaddr: int
    paddr: int
    filesz: int
    memsz: int
    align: int

    @classmethod
    def unpack(cls, data, offset):
        """Decode a program header located at ``offset``."""
        return cls(*_unpack_at(_PHDR, data, offset, "program header"))


@dataclass(frozen=True)
class SectionHeader:
    name: int
    type: int
    flags: int
    addr: int
    offset: int
    size: int
    link: int
    info: int
    addralign: int
    entsize: int

    @classmethod
    def unpack(cls, data, offset):
        """Decode a section header located at ``offset``."""
        return cls(*_unpack_at(_SHDR, data, offset, "section header"))


@dataclass
class ElfFile:
    data: bytes
    header: ElfHeader
    program_headers: list[ProgramHeader] = field(default_factory=list)
    section_headers: list[SectionHeader] = field(default_factory=list)

    @classmethod
    def parse(cls, data):
        """Validate and decode an ELF64 little-endian image."""
        data = bytes(data)
        size = len(data)
        eh = ElfHeader.unpack(data)
        if eh.magic != ELF_MAGIC:
            raise ElfError("bad ELF magic")
        if eh.version != 1:
            raise ElfError(f"unsupported ELF version {eh.version}")
        if eh.data_encoding != ElfData.LSB:
            raise ElfError("only little-endian files are supported")
        if eh.ehsize != EHDR_SIZE:
            raise ElfError(f"unexpected ELF header size {eh.ehsize}")

        programs = []
        if eh.phentsize and eh.phnum and eh.phoff:
            if size < eh.phoff + EHDR_SIZE:
                raise ElfError("program header table lies outside the file")
            if eh.phentsize != PHDR_SIZE:
                raise ElfError(f"unexpected program header size {eh.phentsize}")
            programs = [
                ProgramHeader.unpack(data, eh.phoff + i * PHDR_SIZE) for i in range(eh.phnum)
            ]

        sections = []
        if eh.shentsize and eh.shnum and eh.shoff:
            if size < eh.shoff + SHDR_SIZE:
                raise ElfError("section header table lies outside the file")
            if eh.shentsize != SHDR_SIZE:
                raise ElfError(f"unexpected section header size {eh.shentsize}")
            if eh.shstrndx >= eh.shnum:
                raise ElfError("section name table index out of range")
            sections = [
                SectionHeader.unpack(data, eh.shoff + i * SHDR_SIZE) for i in range(eh.shnum)
            ]

        return cls(data, eh, programs, sections)

    def section_name(self, section):
        """Return the name of ``section`` from the section name table."""
        if not self.section_headers:
            raise ElfError("file has no section headers")
        table = self.section_headers[self.header.shstrndx]
        start = table.offset + section.name
        if start >= len(self.data):
            raise ElfError("section name lies outside the file")
        end = self.data.find(b"\0", start)
        if end < 0:
            raise ElfError("unterminated section name")
        return self.data[start:end].decode("utf-8", errors="replace")

    def report(self):
        """Return a textual summary of the headers."""
        lines = [f"size = {len(self.data)}"]
        for i, ph in enumerate(self.program_headers):
            lines += [
                f"program header: {i}",
                f"  type = {ph.type:#x} ({program_type_name(ph.type)})",
                f"  memsz = {ph.memsz:#x}",
                f"  offset = {ph.offset:#x}",
            ]
        for i, sh in enumerate(self.section_headers):
            size = 0 if sh.type == SectionType.NOBITS else sh.size
            lines += [
                f"section: {i}",
                f"  type = {sh.type:#x}",
                f"  name = {self.section_name(sh)}",
                f"  size = {size:#x}",
                f"  offset = {sh.offset:#x}",
            ]
        return "\n".join(lines)


def read_file(path):
    """Return the whole content of ``path`` as bytes."""
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as exc:
        raise ElfError("could not open file") from exc


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("ERROR: usage: elf <file>", file=sys.stderr)
        return 1
    try:
        elf = ElfFile.parse(read_file(args[0]))
        text = elf.report()
    except ElfError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())