"""BWT variants built from conjugate arrays: eBWT, dollar eBWT, BWT and BBWT."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from caisbwt.boundaries import Boundaries
from caisbwt.cais import cais
from caisbwt.circular import cais_bwt

ALPHABET_SIZE = 128
"""Number of symbols the sorting algorithms accept."""


@dataclass(frozen=True)
class BWTResult:
    """The output of a transform.

    ``bwt`` holds one symbol per conjugate, in conjugate order. ``starts``
    lists the ranks whose conjugate begins a string (the I vector).
    ``conjugates`` is the (generalized) conjugate array, and ``boundaries``
    marks the strings of the collection, or is ``None`` for a single text.
    """

    bwt: bytes
    starts: tuple[int, ...]
    conjugates: tuple[int, ...]
    boundaries: Boundaries | None = None

    def __len__(self) -> int:
        return len(self.bwt)


def lyndon_factorization(text: Sequence[int]) -> list[int]:
    """Return the start positions of the Lyndon factors of ``text``.

    The factors are Lyndon words in non-increasing order; their
    concatenation is ``text``.
    """
    n = len(text)
    starts: list[int] = []
    i = 0
    while i < n:
        j, k = i + 1, i
        while j < n and text[k] <= text[j]:
            k = i if text[k] < text[j] else k + 1
            j += 1
        while i <= k:
            starts.append(i)
            i += j - k
    return starts


def _collection_bwt(text: bytes, boundaries: Boundaries) -> BWTResult:
    conjugates = cais(text, boundaries, ALPHABET_SIZE)
    out = bytearray()
    starts: list[int] = []
    for rank, pos in enumerate(conjugates):
        if boundaries.is_start(pos):
            end = boundaries.select(boundaries.rank(pos + 1) + 1) - 1
            out.append(text[end])
            starts.append(rank)
        else:
            out.append(text[pos - 1])
    return BWTResult(bytes(out), tuple(starts), tuple(conjugates), boundaries)


def extended_bwt(text: bytes | Sequence[int], onsets: Iterable[int]) -> BWTResult:
    """Return the extended BWT of the strings of ``text`` delimited by ``onsets``.

    ``onsets`` must contain 0 and ``len(text)``; each consecutive pair marks
    one string. With separator-terminated strings this gives the dollar eBWT.
    """
    data = bytes(text)
    return _collection_bwt(data, Boundaries(onsets, len(data) + 1))


def bwt_without_dollar(text: bytes | Sequence[int]) -> BWTResult:
    """Return the BWT of ``text`` taken as one circular string, with no end marker."""
    data = bytes(text)
    conjugates = cais_bwt(data, ALPHABET_SIZE)
    n = len(data)
    out = bytearray()
    starts: list[int] = []
    for rank, pos in enumerate(conjugates):
        if pos > 0:
            out.append(data[pos - 1])
        else:
            out.append(data[n - 1])
            starts.append(rank)
    return BWTResult(bytes(out), tuple(starts), tuple(conjugates), None)


def bijective_bwt(text: bytes | Sequence[int]) -> BWTResult:
    """Return the bijective BWT: the eBWT of the Lyndon factors of ``text``."""
    data = bytes(text)
    onsets = lyndon_factorization(data)
    onsets.append(len(data))
    return _collection_bwt(data, Boundaries(onsets, len(data) + 1))


def document_array(
    conjugates: Iterable[int], boundaries: Boundaries
) -> tuple[list[int], list[int]]:
    """Split each conjugate position into an offset and a string index.

    Returns the offsets of the conjugates within their own strings and the
    0-based index of the string each conjugate belongs to.
    """
    offsets: list[int] = []
    documents: list[int] = []
    for pos in conjugates:
        rank = boundaries.rank(pos + 1)
        offsets.append(pos - boundaries.select(rank))
        documents.append(rank - 1)
    return offsets, documents