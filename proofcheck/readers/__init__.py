"""Manuscript and data-file reading."""

from proofcheck.readers.text_reader import (
    BOM,
    load_dictionary,
    parse_hebe_lines,
    read_buffer,
    read_good_words,
    read_hebe_tables,
    read_text,
    read_word_list,
)

__all__ = [
    "BOM",
    "read_text",
    "read_buffer",
    "read_word_list",
    "read_good_words",
    "load_dictionary",
    "parse_hebe_lines",
    "read_hebe_tables",
]
