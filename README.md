# jtools

Two small command-line tools for low-level work:

- **jtools-elf** reads an ELF64 little-endian file and prints a summary of
  its program headers and section headers.
- **jtools-jas** splits an AT&T-style assembly source file into tokens and
  prints each one with its file and line.

## Installation

```
pip install .
```

## Inspecting an ELF file

```
jtools-elf /bin/true
```

The output begins with `size = <bytes>`, then one block per program header
(type with its name, memory size, offset) and one block per section (type,
name, size, offset). Sizes of `NOBITS` sections are shown as `0x0`.

The file must have the `\x7fELF` magic, version 1, little-endian data
encoding and a 64-byte ELF header; the header tables must lie inside the file
and have the ELF64 entry sizes. Otherwise the command prints `ERROR: ...` to
standard error and exits with status 1. Without an argument it prints a usage
line and exits with status 1.

From Python:

```python
from jtools.elf import ElfFile, read_file

elf = ElfFile.parse(read_file("/bin/true"))
print(hex(elf.header.entry))
for program in elf.program_headers:
    print(hex(program.type), hex(program.memsz))
for section in elf.section_headers:
    print(elf.section_name(section), hex(section.size))
print(elf.report())
```

`ElfFile.parse` and `read_file` raise `ElfError` on invalid input or an
unreadable file. `program_type_name` gives the display name of a program
header type (`LOAD`, `DYNAMIC`, ..., `OS` or `PROC` for the reserved ranges).
The enums `ElfClass`, `ElfData`, `OsAbi`, `ElfType`, `Machine`,
`ProgramType`, `ProgramFlag` and `SectionType` hold the numeric constants.

## Lexing assembly source

```
jtools-jas hello.s
```

The command first prints `<file>: <n> bytes`, then each token as
`file:line: [TYPE] text`. The token types are `IDN` (identifiers and
mnemonics), `DIR` (`.directives`), `REG` (`%registers`), `IMM`
(`$immediates`), `PAL`/`PAR` (parentheses), `COM` (comma), `COL` (colon) and
`STR` (quoted strings). The leading `.`, `%` or `$` and the quotes are not
part of the token text. Comments start with `#` and run to the end of the
line. A NUL character ends the input.

From Python:

```python
from jtools.jas import Lexer, lex_tokens, opcode_from_name

for token in lex_tokens("mov %rax, $1\n", "example.s"):
    print(token.format())

for token in Lexer("ret\n").tokens():
    print(token.type, token.text, token.row)

print(opcode_from_name("MOV"))
```

An unterminated string, or a `.`, `%` or `$` inside a token, raises
`LexError`; the command reports it as `ERROR: ...` and exits with status 1.
`section_from_name`, `opcode_from_name` and `register_from_name` map names to
the `Section`, `OpCode` and `Register` enums and raise `ValueError` for
unknown names. `Token.matches` compares two tokens by type and text.

## What it does not do

`jtools.jas` only tokenizes. It does not parse instructions, encode machine
code or write object files; the `Section`, `OpCode` and `Register` tables are
name lookups only. `jtools.elf` only reads headers; it does not decode
symbols, relocations or code, and it does not handle 32-bit or big-endian
files.

## Running the tests

```
pip install .[test]
pytest
```