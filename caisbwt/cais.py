"""Conjugate array induced sorting over a collection of circular strings."""

from __future__ import annotations

from collections.abc import Sequence

from caisbwt.boundaries import Boundaries

EMPTY = -1


class EmptyInputError(ValueError):
    """Raised when the text to sort is empty."""


def get_buckets(s: Sequence[int], n: int, alphabet_size: int, end: bool) -> list[int]:
    """Return the head (or, with ``end``, the last) index of each symbol's bucket."""
    counts = [0] * alphabet_size
    for i in range(n):
        counts[s[i]] += 1
    buckets = []
    total = 0
    for size in counts:
        total += size
        buckets.append(total - 1 if end else total - size)
    return buckets


def lms_length(s: Sequence[int], start: int, end: int, x: int) -> int:
    """Return the length of the circular LMS substring starting at ``x``.

    ``start`` and ``end`` are the first and last positions of the circular
    string holding ``x``; the string must not be a power of one symbol.
    """

    def step(p: int) -> int:
        return start if p == end else p + 1

    length = 1
    i = 1
    prev = x
    pos = step(x)
    while s[pos] >= s[prev]:
        i += 1
        pos = step(pos)
        prev = step(prev)
    while s[pos] <= s[prev]:
        if s[pos] < s[prev]:
            length = i
        i += 1
        pos = step(pos)
        prev = step(prev)
    return length + 1


def _string_end(bv: Boundaries, j: int) -> int:
    return bv.select(bv.rank(j + 1) + 1) - 1


def _predecessor(bv: Boundaries, j: int) -> int:
    """Circular predecessor of ``j`` within its own string."""
    return _string_end(bv, j) if bv.is_start(j) else j - 1


def _induce_l(ca: list[int], s: Sequence[int], bv: Boundaries, n: int, k: int, phase: bool) -> None:
    bkt = get_buckets(s, n, k, False)
    for i in range(n):
        j = ca[i]
        if j == EMPTY:
            continue
        m = _predecessor(bv, j)
        c = s[m]
        if c >= s[j]:
            ca[bkt[c]] = m
            bkt[c] += 1
            if phase:
                ca[i] = EMPTY


def _induce_s(
    ca: list[int],
    s: Sequence[int],
    singletons: list[int],
    bv: Boundaries,
    n: int,
    k: int,
    phase: bool,
) -> None:
    bkt = get_buckets(s, n, k, True)
    for ni in range(n - 1, -1, -1):
        j = ca[ni]
        if j == EMPTY:
            continue
        m = _predecessor(bv, j)
        c = s[m]
        if c <= s[j] and 0 <= bkt[c] < ni:
            ca[bkt[c]] = m
            bkt[c] -= 1
            if phase:
                ca[ni] = EMPTY
    if not phase:
        for curr in singletons:
            span = curr - bv.select(bv.rank(curr + 1)) + 1
            for j in range(span):
                c = s[curr - j]
                ca[bkt[c]] = curr - j
                bkt[c] -= 1


def _place_lms(s: Sequence[int], bv: Boundaries, n: int, k: int) -> tuple[list[int], list[int]]:
    """Put the circular LMS positions into their buckets; return CA and S* counts per string."""
    ca = [EMPTY] * n
    bkt = get_buckets(s, n, k, True)
    onset = [0]
    placed = 0
    for i in range(bv.rank(n)):
        sb = bv.select(i + 1)
        eb = bv.select(i + 2) - 1
        if eb == sb:
            continue
        first = eb + 1
        is_s = False
        for j in range(eb, sb, -1):
            if s[j] != s[j - 1]:
                first = j if s[j] > s[j - 1] else j - 1
                break
        if first > eb:
            continue
        prev = first
        pos = eb if prev == sb else first - 1
        while pos != first:
            if s[pos] > s[prev]:
                if is_s:
                    ca[bkt[s[prev]]] = prev
                    bkt[s[prev]] -= 1
                    placed += 1
                    is_s = False
            elif s[pos] < s[prev]:
                is_s = True
            prev = eb if prev == sb else prev - 1
            pos = eb if pos == sb else pos - 1
        if s[pos] > s[prev] and is_s:
            ca[bkt[s[prev]]] = prev
            bkt[s[prev]] -= 1
            placed += 1
        onset.append(placed)
    return ca, onset


def _name_lms(s: Sequence[int], bv: Boundaries, n: int, lms_sorted: list[int]) -> tuple[list[int], int]:
    """Name the sorted LMS substrings; return names in text order and the name count."""
    names = [EMPTY] * n
    name = 1
    if lms_sorted:
        pos = lms_sorted[0]
        names[pos] = 0
        rank = bv.rank(pos + 1)
        pre_sb, pre_eb = bv.select(rank), bv.select(rank + 1) - 1
        pre_len = lms_length(s, pre_sb, pre_eb, pos)
        prev = pos
        for pos in lms_sorted[1:]:
            rank = bv.rank(pos + 1)
            sb, eb = bv.select(rank), bv.select(rank + 1) - 1
            length = lms_length(s, sb, eb, pos)
            diff = length != pre_len
            if not diff:
                tp, pre_tp = pos, prev
                for _ in range(length):
                    if s[pre_tp] != s[tp]:
                        diff = True
                        break
                    tp = sb if tp == eb else tp + 1
                    pre_tp = pre_sb if pre_tp == pre_eb else pre_tp + 1
            if diff:
                name += 1
                prev, pre_len, pre_sb, pre_eb = pos, length, sb, eb
            names[pos] = name - 1
    return [v for v in names if v != EMPTY], name


def _collect_lms(s: Sequence[int], bv: Boundaries, count: int) -> tuple[list[int], list[int]]:
    """Return the LMS positions in text order and the ends of power strings."""
    lms = [0] * count
    j = count - 1
    singletons: list[int] = []
    for ni in range(bv.rank(len(s)) if False else bv.count() - 1, 0, -1):
        sb = bv.select(ni)
        eb = bv.select(ni + 1) - 1
        length = eb - sb + 1
        if length == 1:
            singletons.append(sb)
            continue
        is_s = False
        mismatch = False
        for m in range(length - 1):
            if s[sb + m] != s[sb + m + 1]:
                is_s = s[sb + m] < s[sb + m + 1]
                mismatch = True
                break
        if s[eb] != s[sb]:
            is_s = s[eb] < s[sb]
        if not mismatch:
            singletons.append(eb)
            continue
        for m in range(length - 1):
            nx = eb - m - 1
            if s[nx] > s[nx + 1]:
                if is_s:
                    lms[j] = nx + 1
                    j -= 1
                    is_s = False
            elif s[nx] < s[nx + 1]:
                is_s = True
        if s[sb] < s[eb] and is_s:
            lms[j] = sb
            j -= 1
    assert j == -1, "LMS count differs between stages"
    return lms, singletons


def _cais(s: Sequence[int], n: int, k: int, bv: Boundaries) -> list[int]:
    ca, onset = _place_lms(s, bv, n, k)
    _induce_l(ca, s, bv, n, k, True)
    _induce_s(ca, s, [], bv, n, k, True)

    lms_sorted = [p for p in ca if p != EMPTY]
    n1 = len(lms_sorted)
    reduced, name = _name_lms(s, bv, n, lms_sorted)

    if name < n1:
        ca1 = _cais(reduced, n1, name, Boundaries(onset, n1 + 1))
    else:
        ca1 = [0] * n1
        for i, v in enumerate(reduced):
            ca1[v] = i

    lms, singletons = _collect_lms(s, bv, n1)
    ordered = [lms[r] for r in ca1]

    ca = [EMPTY] * n
    bkt = get_buckets(s, n, k, True)
    for j in reversed(ordered):
        ca[bkt[s[j]]] = j
        bkt[s[j]] -= 1

    _induce_l(ca, s, bv, n, k, False)
    _induce_s(ca, s, singletons, bv, n, k, False)
    return ca


def cais(text: Sequence[int], boundaries: Boundaries, alphabet_size: int = 128) -> list[int]:
    """Return the generalized conjugate array of a string collection.

    ``text`` is the concatenation of the strings; ``boundaries`` marks the
    start of each string and the position ``len(text)``. Conjugates are
    ordered by the infinite repetition of each rotation.
    """
    n = len(text)
    if n == 0:
        raise EmptyInputError("Empty input given.")
    if boundaries.length != n + 1 or not boundaries.is_start(0) or not boundaries.is_start(n):
        raise ValueError("boundaries must span the text and mark positions 0 and len(text)")
    if any(not 0 <= c < alphabet_size for c in text):
        raise ValueError(f"text symbols must lie in [0, {alphabet_size})")
    return _cais(text, n, alphabet_size, boundaries)