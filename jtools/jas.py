"""Tokenizer for a small AT&T-style assembly language."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum


class LexError(Exception):
    """Raised on malformed assembly input."""


class TokenType(Enum):
    IDN = 0
    DIR = 1
    REG = 2
    IMM = 3
    PAL = 4
    PAR = 5
    COM = 6
    COL = 7
    STR = 8
    NONE = 9


class Section(Enum):
    text = 0
    data = 1
    bss = 2


class OpCode(Enum):
    XOR = 0
    MOVB = 1
    TEST = 2
    JE = 3
    INC = 4
    JMP = 5
    RET = 6
    LEA = 7
    CALL = 8
    MOV = 9
    SYSCALL = 10


class Register(Enum):
    rax = 0
    rbx = 1
    rcx = 2
    rsp = 3
    rbp = 4
    rdi = 5
    rsi = 6
    rdx = 7


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    file_path: str | None = None
    row: int = 0

    def matches(self, other):
        """Tell whether two tokens have the same type and text."""
        return self.type == other.type and self.text == other.text

    def format(self):
        return f"{self.file_path}:{self.row}: [{self.type.name}] {self.text}"


_END = "\0"
_TERMINATORS = frozenset("#:,()\n \r\t\0")
_PUNCTUATION = {":": TokenType.COL, ",": TokenType.COM, "(": TokenType.PAL, ")": TokenType.PAR}
_PREFIXES = {".": TokenType.DIR, "%": TokenType.REG, "$": TokenType.IMM}


class Lexer:
    """Splits source text into tokens; a NUL character ends the input."""

    def __init__(self, text, file_path="-"):
        self.text = text
        self.file_path = file_path
        self.row = 1
        self.pos = 0
        self.start = None

    def _peek(self):
        return self.text[self.pos] if self.pos < len(self.text) else _END

    def _make(self, type_, start, end):
        text = "" if start is None else self.text[start:end]
        return Token(type_, text, self.file_path, self.row)

    def next_token(self):
        """Return the next token; its type is NONE when nothing was read."""
        type_ = TokenType.NONE
        while True:
            c = self._peek()
            if c in _TERMINATORS and (self.start is not None or c == _END):
                start, self.start = self.start, None
                return self._make(type_, start, self.pos)

            if c == "#":
                while self._peek() not in (_END, "\n"):
                    self.pos += 1
            elif c == '"':
                self.pos += 1
                self.start = self.pos
                while self._peek() not in (_END, '"'):
                    self.pos += 1
                if self._peek() == _END:
                    raise LexError(
                        "lex_token: encountered EOF while parsing string "
                        f"starting in line {self.row}"
                    )
                start, self.start = self.start, None
                token = self._make(TokenType.STR, start, self.pos)
                self.pos += 1
                return token
            elif c in _PUNCTUATION:
                self.start = None
                self.pos += 1
                return Token(_PUNCTUATION[c], c, self.file_path, self.row)
            elif c in _PREFIXES:
                if self.start is not None:
                    raise LexError(
                        f"lex_token: unexpected char '{c}' in token at line {self.row}"
                    )
                type_ = _PREFIXES[c]
                self.pos += 1
                self.start = self.pos
            elif c in "\n \r\t":
                if c == "\n":
                    self.row += 1
                self.pos += 1
            else:
                if self.start is None:
                    self.start = self.pos
                    type_ = TokenType.IDN
                self.pos += 1

    def tokens(self):
        """Yield every meaningful token until the end of the input."""
        while self._peek() != _END:
            token = self.next_token()
            if token.type is not TokenType.NONE:
                yield token


def lex_tokens(text, file_path="-"):
    """Return the list of tokens in ``text``."""
    return list(Lexer(text, file_path).tokens())


def _lookup(enum_cls, name, what):
    try:
        return enum_cls[name]
    except KeyError:
        raise ValueError(f"unknown {what}: {name!r}") from None


def section_from_name(name):
    return _lookup(Section, name, "section")


def opcode_from_name(name):
    return _lookup(OpCode, name, "opcode")


def register_from_name(name):
    return _lookup(Register, name, "register")


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("ERROR: usage: jas <file>", file=sys.stderr)
        return 1
    path = args[0]
    try:
        with open(path, "rb") as fh:
            raw = fh.read()
    except OSError:
        print("ERROR: could not open file", file=sys.stderr)
        return 1
    print(f"{path}: {len(raw)} bytes")
    try:
        tokens = lex_tokens(raw.decode("utf-8", errors="replace"), path)
    except LexError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    for token in tokens:
        print(token.format())
    return 0


if __name__ == "__main__":
    sys.exit(main())