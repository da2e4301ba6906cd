"""Conjugate array of a single circular text, without an end marker."""

from __future__ import annotations

from collections.abc import Sequence

from caisbwt.cais import EMPTY, EmptyInputError, get_buckets, lms_length


def _predecessor(n: int, j: int) -> int:
    return n - 1 if j == 0 else j - 1


def _induce_l(ca: list[int], s: Sequence[int], n: int, k: int, phase: bool) -> None:
    bkt = get_buckets(s, n, k, False)
    for i in range(n):
        j = ca[i]
        if j == EMPTY:
            continue
        m = _predecessor(n, j)
        c = s[m]
        if c >= s[j]:
            ca[bkt[c]] = m
            bkt[c] += 1
            if phase:
                ca[i] = EMPTY


def _induce_s(ca: list[int], s: Sequence[int], n: int, k: int, phase: bool) -> None:
    bkt = get_buckets(s, n, k, True)
    for ni in range(n - 1, -1, -1):
        j = ca[ni]
        if j == EMPTY:
            continue
        m = _predecessor(n, j)
        c = s[m]
        if c <= s[j] and 0 <= bkt[c] < ni:
            ca[bkt[c]] = m
            bkt[c] -= 1
            if phase:
                ca[ni] = EMPTY


def _first_boundary(s: Sequence[int], n: int) -> int:
    """Return a position where the symbol changes, or ``n`` if all symbols agree."""
    for j in range(n - 1, 0, -1):
        if s[j] != s[j - 1]:
            return j if s[j] > s[j - 1] else j - 1
    return n


def _place_lms(s: Sequence[int], n: int, k: int, fl: int) -> list[int]:
    ca = [EMPTY] * n
    bkt = get_buckets(s, n, k, True)
    is_s = False

    def place(j: int) -> None:
        ca[bkt[s[j]]] = j
        bkt[s[j]] -= 1

    for j in range(fl, 0, -1):
        if s[j - 1] > s[j]:
            if is_s:
                place(j)
                is_s = False
        elif s[j - 1] < s[j]:
            is_s = True
    if s[n - 1] > s[0]:
        if is_s:
            place(0)
            is_s = False
    elif s[n - 1] < s[0]:
        is_s = True
    for j in range(n - 1, fl, -1):
        if s[j - 1] > s[j]:
            if is_s:
                place(j)
                is_s = False
        elif s[j - 1] < s[j]:
            is_s = True
    return ca


def _name_lms(s: Sequence[int], n: int, lms_sorted: list[int]) -> tuple[list[int], int]:
    """Name the sorted circular LMS substrings; return names in text order and the count."""
    names = [EMPTY] * n
    name = 1
    if lms_sorted:
        prev = lms_sorted[0]
        names[prev] = 0
        pre_len = lms_length(s, 0, n - 1, prev)
        for pos in lms_sorted[1:]:
            length = lms_length(s, 0, n - 1, pos)
            diff = length != pre_len
            if not diff:
                tp, pre_tp = pos, prev
                for _ in range(length):
                    if s[pre_tp] != s[tp]:
                        diff = True
                        break
                    tp = 0 if tp == n - 1 else tp + 1
                    pre_tp = 0 if pre_tp == n - 1 else pre_tp + 1
            if diff:
                name += 1
                prev, pre_len = pos, length
            names[pos] = name - 1
    return [v for v in names if v != EMPTY], name


def _collect_lms(s: Sequence[int], n: int, count: int) -> list[int]:
    """Return the circular LMS positions in text order."""
    lms = [0] * count
    j = count - 1
    is_s = False
    if s[0] != s[1]:
        is_s = s[0] < s[1]
    else:
        for m in range(1, n - 1):
            if s[m] != s[m + 1]:
                is_s = s[m] < s[m + 1]
                break
    if s[n - 1] != s[0]:
        is_s = s[n - 1] < s[0]
    for nx in range(n - 2, -1, -1):
        if s[nx] > s[nx + 1]:
            if is_s:
                lms[j] = nx + 1
                j -= 1
                is_s = False
        elif s[nx] < s[nx + 1]:
            is_s = True
    if s[0] < s[n - 1] and is_s:
        lms[j] = 0
        j -= 1
    assert j == -1, "LMS count differs between stages"
    return lms


def _cais_bwt(s: Sequence[int], k: int) -> list[int]:
    n = len(s)
    fl = _first_boundary(s, n)
    if fl == n:
        return list(range(n))

    ca = _place_lms(s, n, k, fl)
    _induce_l(ca, s, n, k, True)
    _induce_s(ca, s, n, k, True)

    lms_sorted = [p for p in ca if p != EMPTY]
    n1 = len(lms_sorted)
    reduced, name = _name_lms(s, n, lms_sorted)

    if name < n1:
        ca1 = _cais_bwt(reduced, name)
    else:
        ca1 = [0] * n1
        for i, v in enumerate(reduced):
            ca1[v] = i

    lms = _collect_lms(s, n, n1)
    ordered = [lms[r] for r in ca1]

    ca = [EMPTY] * n
    bkt = get_buckets(s, n, k, True)
    for j in reversed(ordered):
        ca[bkt[s[j]]] = j
        bkt[s[j]] -= 1

    _induce_l(ca, s, n, k, False)
    _induce_s(ca, s, n, k, False)
    return ca


def cais_bwt(text: Sequence[int], alphabet_size: int = 128) -> list[int]:
    """Return the conjugate array of ``text`` read as a circular string.

    The result lists the starting positions of the rotations of ``text``
    in lexicographic order. A text made of one repeated symbol yields the
    identity order.
    """
    if len(text) == 0:
        raise EmptyInputError("Empty input given.")
    if any(not 0 <= c < alphabet_size for c in text):
        raise ValueError(f"text symbols must lie in [0, {alphabet_size})")
    return _cais_bwt(text, alphabet_size)