"""Compute a BWT variant from an input file and write its output files."""

from __future__ import annotations

import struct
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from caisbwt.reader import load_fasta, load_fastq, load_text
from caisbwt.transforms import (
    BWTResult,
    bijective_bwt,
    bwt_without_dollar,
    document_array,
    extended_bwt,
)


class Variant(IntEnum):
    """The BWT variants that can be computed."""

    EBWT = 0
    DOLLAR_EBWT = 1
    BWT = 2
    BBWT = 3


class InputFormat(IntEnum):
    """Layout of the input file."""

    TEXT = 0
    FASTA = 1
    FASTQ = 2


@dataclass
class Options:
    """Settings for one run.

    ``ca`` writes the conjugate array, ``doc`` also splits it into offsets
    and a document array, ``wide`` stores positions on 64 bits instead of 32.
    ``sparse`` selects the sparse boundary representation; both give the same
    output.
    """

    filename: str = ""
    outname: str = ""
    format: InputFormat = InputFormat.TEXT
    variant: Variant | None = None
    ca: bool = False
    sparse: bool = False
    doc: bool = False
    verbose: bool = False
    wide: bool = False

    @property
    def basename(self) -> str:
        """Base path of the output files."""
        return self.outname or self.filename


@contextmanager
def _timed(label: str, verbose: bool) -> Iterator[None]:
    start = time.monotonic()
    yield
    if verbose:
        elapsed = int(time.monotonic() - start)
        print(f"{label}: Elapsed time in seconds: {elapsed} s")


def _write_ints(path: str, values: Sequence[int], wide: bool) -> None:
    code = "Q" if wide else "I"
    Path(path).write_bytes(struct.pack(f"<{len(values)}{code}", *values))


def compute_ebwt(options: Options, concat: bool = False) -> BWTResult:
    """Compute the eBWT (or, with ``concat``, the dollar eBWT) of a FASTA/FASTQ collection."""
    if options.format is InputFormat.FASTA:
        if options.verbose:
            print("load fasta file")
        collection = load_fasta(options.filename, concat, options.wide)
    else:
        if options.verbose:
            print("load fastq file")
        collection = load_fastq(options.filename, concat, options.wide)

    with _timed("gCA construction", options.verbose):
        result = extended_bwt(collection.text, collection.onsets)

    base = options.basename
    bwt_ext, i_ext = (".dolebwt", ".di") if concat else (".ebwt", ".ei")
    with _timed("Writing the eBWT (and gCA)", options.verbose):
        Path(base + bwt_ext).write_bytes(result.bwt)
        _write_ints(base + i_ext, result.starts, options.wide)
        if options.ca:
            if options.doc:
                assert result.boundaries is not None
                offsets, documents = document_array(result.conjugates, result.boundaries)
                _write_ints(base + ".gca", offsets, options.wide)
                _write_ints(base + ".da", documents, options.wide)
            else:
                _write_ints(base + ".gca", result.conjugates, options.wide)
    return result


def compute_bwt_wo_dol(options: Options) -> BWTResult:
    """Compute the BWT of a whole file read as one circular text."""
    text = load_text(options.filename, options.wide)
    with _timed("CA construction", options.verbose):
        result = bwt_without_dollar(text)

    base = options.basename
    with _timed("Write the BWT", options.verbose):
        Path(base + ".bwt").write_bytes(result.bwt)
        _write_ints(base + ".i", result.starts, options.wide)
        if options.ca:
            _write_ints(base + ".ca", result.conjugates, options.wide)
    return result


def compute_bbwt(options: Options) -> BWTResult:
    """Compute the bijective BWT of a whole file."""
    text = load_text(options.filename, options.wide)
    with _timed("gCA construction", options.verbose):
        result = bijective_bwt(text)

    base = options.basename
    with _timed("write BBWT", options.verbose):
        Path(base + ".bbwt").write_bytes(result.bwt)
        _write_ints(base + ".bbi", result.starts, options.wide)
        if options.ca:
            _write_ints(base + ".gca", result.conjugates, options.wide)
    return result