"""Utilities for inspecting ELF64 file headers and lexing assembly source."""

__version__ = "0.1.0"
__all__ = ["elf", "jas"]