import pytest

from caisbwt.boundaries import Boundaries
from caisbwt.cais import EmptyInputError
from caisbwt.transforms import (
    BWTResult,
    bijective_bwt,
    bwt_without_dollar,
    document_array,
    extended_bwt,
    lyndon_factorization,
)


def _rotation(text: bytes, start: int, end: int, pos: int) -> bytes:
    word = text[start:end]
    k = pos - start
    return word[k:] + word[:k]


def _omega_le(u: bytes, v: bytes) -> bool:
    size = len(u) + len(v)
    uu = (u * (size // len(u) + 1))[:size]
    vv = (v * (size // len(v) + 1))[:size]
    return uu <= vv


def _is_lyndon(word: bytes) -> bool:
    return all(word < word[k:] + word[:k] for k in range(1, len(word)))


def _string_of(onsets, pos):
    for a, b in zip(onsets, onsets[1:]):
        if a <= pos < b:
            return a, b
    raise AssertionError(pos)


def test_bwt_without_dollar_banana():
    result = bwt_without_dollar(b"banana")
    assert result.bwt == b"nnbaaa"
    assert result.starts == (3,)
    assert result.conjugates[3] == 0


@pytest.mark.parametrize(
    "text", [b"banana", b"mississippi", b"abracadabra", b"ACGTACGTTGCA", b"zyxwvu"]
)
def test_bwt_without_dollar_invariants(text):
    result = bwt_without_dollar(text)
    assert isinstance(result, BWTResult)
    assert sorted(result.conjugates) == list(range(len(text)))
    assert sorted(result.bwt) == sorted(text)
    rotations = [text[p:] + text[:p] for p in result.conjugates]
    assert rotations == sorted(rotations)
    assert len(result.starts) == 1
    assert result.bwt[result.starts[0]] == text[-1]
    assert result.boundaries is None


def test_bwt_without_dollar_power_is_identity():
    result = bwt_without_dollar(b"aaaa")
    assert result.conjugates == (0, 1, 2, 3)
    assert result.bwt == b"aaaa"


def test_bwt_without_dollar_empty():
    with pytest.raises(EmptyInputError):
        bwt_without_dollar(b"")


def test_symbols_outside_alphabet_rejected():
    with pytest.raises(ValueError):
        bwt_without_dollar(bytes([200, 3]))


def test_lyndon_factorization_banana():
    assert lyndon_factorization(b"banana") == [0, 1, 3, 5]


@pytest.mark.parametrize("text", [b"mississippi", b"abracadabra", b"ccbbaa", b"aaa"])
def test_lyndon_factorization_invariants(text):
    starts = lyndon_factorization(text)
    assert starts[0] == 0
    bounds = starts + [len(text)]
    factors = [text[a:b] for a, b in zip(bounds, bounds[1:])]
    assert b"".join(factors) == text
    assert all(_is_lyndon(f) for f in factors)
    assert all(x >= y for x, y in zip(factors, factors[1:]))


def test_lyndon_factorization_empty():
    assert lyndon_factorization(b"") == []


def test_extended_bwt_invariants():
    text = b"CGATTAAAAC"
    onsets = [0, 3, 6, 7, 9, 10]
    result = extended_bwt(text, onsets)
    assert sorted(result.conjugates) == list(range(len(text)))
    assert sorted(result.bwt) == sorted(text)
    assert len(result.starts) == len(onsets) - 1
    rotations = []
    for pos in result.conjugates:
        a, b = _string_of(onsets, pos)
        rotations.append(_rotation(text, a, b, pos))
    assert all(_omega_le(u, v) for u, v in zip(rotations, rotations[1:]))
    for rank in result.starts:
        a, b = _string_of(onsets, result.conjugates[rank])
        assert result.bwt[rank] == text[b - 1]


def test_extended_bwt_with_separators():
    text = b"AC\x01GT\x01"
    result = extended_bwt(text, [0, 3, 6])
    assert sorted(result.bwt) == sorted(text)
    assert len(result.starts) == 2
    assert {result.bwt[r] for r in result.starts} == {1}


def test_extended_bwt_requires_full_span():
    with pytest.raises(ValueError):
        extended_bwt(b"ACGT", [0, 2])


def test_bijective_bwt_invariants():
    text = b"mississippi"
    result = bijective_bwt(text)
    factors = lyndon_factorization(text)
    assert sorted(result.conjugates) == list(range(len(text)))
    assert sorted(result.bwt) == sorted(text)
    assert len(result.starts) == len(factors)
    assert result.boundaries.starts == tuple(factors + [len(text)])


def test_bijective_bwt_of_lyndon_word_matches_plain_bwt():
    text = b"aabab"
    assert bijective_bwt(text).bwt == bwt_without_dollar(text).bwt


def test_document_array_reconstructs_positions():
    text = b"CGATTAAAAC"
    onsets = [0, 3, 6, 7, 9, 10]
    result = extended_bwt(text, onsets)
    offsets, documents = document_array(result.conjugates, result.boundaries)
    assert len(offsets) == len(documents) == len(text)
    for pos, off, doc in zip(result.conjugates, offsets, documents):
        assert onsets[doc] + off == pos
        assert 0 <= off < onsets[doc + 1] - onsets[doc]


def test_document_array_simple():
    bounds = Boundaries([0, 2, 5], 6)
    offsets, documents = document_array([4, 0, 2, 1], bounds)
    assert offsets == [2, 0, 0, 1]
    assert documents == [1, 0, 1, 0]