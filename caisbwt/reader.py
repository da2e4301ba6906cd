"""Loaders for FASTA, FASTQ and plain-text inputs."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

SEPARATOR = 1
"""Byte appended after each sequence when a collection is concatenated."""

NARROW_LIMIT = 2**32 - 1
"""Largest input size, in bytes, accepted when 64-bit positions are not used."""

PathLike = str | os.PathLike


class InputTooLargeError(ValueError):
    """Raised when an input exceeds what 32-bit positions can address."""


@dataclass(frozen=True)
class Collection:
    """A string collection laid out as one text.

    ``onsets`` starts with 0 and holds the offset just past each stored
    sequence, so consecutive onsets delimit the strings of ``text``.
    ``sequences`` counts the header lines seen in the input.
    """

    text: bytes
    onsets: tuple[int, ...]
    sequences: int

    def __len__(self) -> int:
        return len(self.text)


def _read_lines(path: PathLike, wide: bool) -> list[bytes]:
    with open(path, "rb") as handle:
        if not wide and os.path.getsize(path) > NARROW_LIMIT:
            raise InputTooLargeError(
                f"{Path(path)}: the file size is > 4.29 GB, use 64-bit positions"
            )
        data = handle.read()
    return data.split(b"\n")


def _fasta_segments(lines: Iterable[bytes]) -> tuple[list[bytes], int]:
    """Return the sequence text preceding each header, the final sequence, and the header count."""
    segments: list[bytes] = []
    current = bytearray()
    headers = 0
    for line in lines:
        if not line:
            continue
        if line.startswith(b">"):
            headers += 1
            segments.append(bytes(current))
            current.clear()
        else:
            current += line
    segments.append(bytes(current))
    return segments, headers


def _fastq_segments(lines: Iterable[bytes]) -> tuple[list[bytes], int]:
    """Like the FASTA splitter, keeping only lines between ``@`` and ``+`` lines."""
    segments: list[bytes] = []
    current = bytearray()
    headers = 0
    in_sequence = False
    for line in lines:
        if not line:
            continue
        if line.startswith(b"@"):
            in_sequence = True
            headers += 1
            segments.append(bytes(current))
            current.clear()
        elif line.startswith(b"+"):
            in_sequence = False
        elif in_sequence:
            current += line
    segments.append(bytes(current))
    return segments, headers


def _build(segments: list[bytes], headers: int, concat: bool) -> Collection:
    text = bytearray()
    onsets = [0]
    *earlier, last = segments
    for segment in earlier:
        if not segment:
            continue
        text += segment
        if concat:
            text.append(SEPARATOR)
        onsets.append(len(text))
    text += last
    if concat:
        text.append(SEPARATOR)
    onsets.append(len(text))
    return Collection(bytes(text), tuple(onsets), headers)


def load_fasta(path: PathLike, concat: bool = False, wide: bool = False) -> Collection:
    """Load a FASTA file as a collection of sequences.

    With ``concat`` every sequence is followed by the separator byte.
    Empty sequences between two headers are dropped.
    """
    segments, headers = _fasta_segments(_read_lines(path, wide))
    return _build(segments, headers, concat)


def load_fastq(path: PathLike, concat: bool = False, wide: bool = False) -> Collection:
    """Load the sequence lines of a FASTQ file as a collection."""
    segments, headers = _fastq_segments(_read_lines(path, wide))
    return _build(segments, headers, concat)


def load_fasta_conc(path: PathLike, wide: bool = False) -> Collection:
    """Load a FASTA file with every sequence terminated by the separator byte."""
    return load_fasta(path, concat=True, wide=wide)


def load_fastq_conc(path: PathLike, wide: bool = False) -> Collection:
    """Load a FASTQ file with every sequence terminated by the separator byte."""
    return load_fastq(path, concat=True, wide=wide)


def load_text(path: PathLike, wide: bool = False) -> bytes:
    """Return the whole content of a file as one text."""
    with open(path, "rb") as handle:
        if not wide and os.path.getsize(path) > NARROW_LIMIT:
            raise InputTooLargeError(
                f"{Path(path)}: the file size is > 4.29 GB, use 64-bit positions"
            )
        return handle.read()