import struct

import pytest

from jtools.elf import (
    ElfError,
    ElfFile,
    ElfHeader,
    ProgramHeader,
    SectionHeader,
    SectionType,
    main,
    program_type_name,
    read_file,
)

STRTAB = b"\0.bss\0.shstrtab\0"


def build_elf(version=1, data_enc=1, ehsize=64, phentsize=56, shstrndx=2, magic=b"\x7fELF"):
    phoff = 64
    strtab_off = phoff + 56
    shoff = strtab_off + len(STRTAB)
    header = struct.pack(
        "<4sBBBBB7sHHIQQQIHHHHHH",
        magic, 2, data_enc, 1, 0, 0, b"\0" * 7,
        2, 0x3E, version, 0x401000, phoff, shoff, 0, ehsize, phentsize, 1, 64, 3, shstrndx,
    )
    ph = struct.pack("<IIQQQQQQ", 1, 5, 0, 0x400000, 0x400000, 0x1000, 0x2000, 0x1000)
    null = bytes(64)
    bss = struct.pack("<IIQQQQIIQQ", STRTAB.index(b".bss"), 8, 3, 0x402000, 0, 0x100, 0, 0, 8, 0)
    shstr = struct.pack(
        "<IIQQQQIIQQ", STRTAB.index(b".shstrtab"), 3, 0, 0, strtab_off, len(STRTAB), 0, 0, 1, 0
    )
    return header + ph + STRTAB + null + bss + shstr


def test_header_fields():
    data = build_elf()
    eh = ElfHeader.unpack(data)
    assert eh.magic == b"\x7fELF"
    assert eh.machine == 0x3E
    assert eh.entry == 0x401000
    assert eh.shnum == 3


def test_parse_headers():
    elf = ElfFile.parse(build_elf())
    assert len(elf.program_headers) == 1
    assert elf.program_headers[0].memsz == 0x2000
    assert len(elf.section_headers) == 3
    assert elf.section_headers[1].type == SectionType.NOBITS


def test_section_names():
    elf = ElfFile.parse(build_elf())
    names = [elf.section_name(sh) for sh in elf.section_headers]
    assert names == ["", ".bss", ".shstrtab"]


def test_report_lines():
    data = build_elf()
    lines = ElfFile.parse(data).report().splitlines()
    assert lines[0] == f"size = {len(data)}"
    assert lines[1:5] == [
        "program header: 0",
        "  type = 0x1 (LOAD)",
        "  memsz = 0x2000",
        "  offset = 0x0",
    ]
    start = lines.index("section: 1")
    assert lines[start + 1] == "  type = 0x8"
    assert lines[start + 2] == "  name = .bss"
    assert lines[start + 3] == "  size = 0x0"


def test_report_non_nobits_size():
    lines = ElfFile.parse(build_elf()).report().splitlines()
    start = lines.index("section: 2")
    assert lines[start + 3] == f"  size = {len(STRTAB):#x}"


@pytest.mark.parametrize(
    "value,name",
    [(0, "NONE"), (1, "LOAD"), (7, "TLS"), (0x60000000, "OS"), (0x6FFFFFFF, "OS"), (0x70000000, "PROC")],
)
def test_program_type_name(value, name):
    assert program_type_name(value) == name


@pytest.mark.parametrize(
    "kwargs",
    [
        {"magic": b"\x7fELG"},
        {"version": 2},
        {"data_enc": 2},
        {"ehsize": 52},
        {"phentsize": 32},
        {"shstrndx": 3},
    ],
)
def test_invalid_files(kwargs):
    with pytest.raises(ElfError):
        ElfFile.parse(build_elf(**kwargs))


def test_too_short():
    with pytest.raises(ElfError):
        ElfFile.parse(build_elf()[:40])


def test_header_out_of_bounds():
    with pytest.raises(ElfError):
        ProgramHeader.unpack(b"\0" * 10, 0)
    with pytest.raises(ElfError):
        SectionHeader.unpack(b"\0" * 100, 50)


def test_read_file(tmp_path):
    path = tmp_path / "a.elf"
    data = build_elf()
    path.write_bytes(data)
    assert read_file(str(path)) == data
    with pytest.raises(ElfError):
        read_file(str(tmp_path / "missing"))


def test_main(tmp_path, capsys):
    path = tmp_path / "a.elf"
    data = build_elf()
    path.write_bytes(data)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == f"size = {len(data)}"
    assert "  name = .shstrtab" in out


def test_main_usage_and_errors(tmp_path, capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err
    assert main([str(tmp_path / "missing")]) == 1
    assert "could not open file" in capsys.readouterr().err