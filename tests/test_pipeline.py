import struct
from collections import Counter

import pytest

from caisbwt.cais import EmptyInputError
from caisbwt.pipeline import (
    InputFormat,
    Options,
    compute_bbwt,
    compute_bwt_wo_dol,
    compute_ebwt,
)


def _read_ints(path, wide=False):
    data = path.read_bytes()
    code = "Q" if wide else "I"
    size = struct.calcsize("<" + code)
    return list(struct.unpack(f"<{len(data) // size}{code}", data))


@pytest.fixture
def fasta(tmp_path):
    path = tmp_path / "reads.fa"
    path.write_bytes(b">one\nACG\nTA\n>two\nGGC\n>three\nTTAC\n")
    return path


def test_basename_defaults_to_filename():
    assert Options(filename="in.txt").basename == "in.txt"
    assert Options(filename="in.txt", outname="out").basename == "out"


def test_bwt_without_dollar_banana(tmp_path):
    src = tmp_path / "banana.txt"
    src.write_bytes(b"banana")
    result = compute_bwt_wo_dol(Options(filename=str(src), ca=True))
    assert (tmp_path / "banana.txt.bwt").read_bytes() == b"nnbaaa"
    assert _read_ints(tmp_path / "banana.txt.i") == [3]
    assert _read_ints(tmp_path / "banana.txt.ca") == [5, 3, 1, 0, 4, 2]
    assert result.bwt == b"nnbaaa"


def test_bwt_wide_positions(tmp_path):
    src = tmp_path / "t.txt"
    src.write_bytes(b"mississippi")
    result = compute_bwt_wo_dol(Options(filename=str(src), ca=True, wide=True))
    assert _read_ints(tmp_path / "t.txt.ca", wide=True) == list(result.conjugates)
    assert _read_ints(tmp_path / "t.txt.i", wide=True) == list(result.starts)


def test_bwt_without_ca_writes_no_ca_file(tmp_path):
    src = tmp_path / "t.txt"
    src.write_bytes(b"abracadabra")
    result = compute_bwt_wo_dol(Options(filename=str(src)))
    assert not (tmp_path / "t.txt.ca").exists()
    assert Counter(result.bwt) == Counter(b"abracadabra")


def test_bwt_empty_file_raises(tmp_path):
    src = tmp_path / "empty.txt"
    src.write_bytes(b"")
    with pytest.raises(EmptyInputError):
        compute_bwt_wo_dol(Options(filename=str(src)))


def test_missing_input_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        compute_bwt_wo_dol(Options(filename=str(tmp_path / "nope.txt")))


def test_ebwt_files(fasta, tmp_path):
    out = tmp_path / "out"
    options = Options(filename=str(fasta), outname=str(out), format=InputFormat.FASTA, ca=True)
    result = compute_ebwt(options, False)
    assert (tmp_path / "out.ebwt").read_bytes() == result.bwt
    assert Counter(result.bwt) == Counter(b"ACGTAGGCTTAC")
    assert _read_ints(tmp_path / "out.ei") == list(result.starts)
    assert len(result.starts) == 3
    assert _read_ints(tmp_path / "out.gca") == list(result.conjugates)
    assert sorted(result.conjugates) == list(range(len(result.bwt)))


def test_ebwt_document_array(fasta, tmp_path):
    out = tmp_path / "out"
    options = Options(
        filename=str(fasta), outname=str(out), format=InputFormat.FASTA, ca=True, doc=True
    )
    result = compute_ebwt(options, False)
    assert (tmp_path / "out.ebwt").read_bytes() == result.bwt
    offsets = _read_ints(tmp_path / "out.gca")
    documents = _read_ints(tmp_path / "out.da")
    lengths = [len(b"ACGTA"), len(b"GGC"), len(b"TTAC")]
    string_starts = [0, 5, 8]
    assert Counter(documents) == Counter({0: lengths[0], 1: lengths[1], 2: lengths[2]})
    for off, doc in zip(offsets, documents):
        assert 0 <= off < lengths[doc]
    pairs = set(zip(documents, offsets))
    assert len(pairs) == sum(lengths)
    assert [pos - off for pos, off in zip(result.conjugates, offsets)] == [
        string_starts[doc] for doc in documents
    ]


def test_dollar_ebwt_files(fasta, tmp_path):
    out = tmp_path / "out"
    options = Options(filename=str(fasta), outname=str(out), format=InputFormat.FASTA)
    result = compute_ebwt(options, True)
    data = (tmp_path / "out.dolebwt").read_bytes()
    assert data == result.bwt
    assert data.count(b"\x01") == 3
    assert _read_ints(tmp_path / "out.di") == list(result.starts)
    assert not (tmp_path / "out.ebwt").exists()


def test_ebwt_fastq(tmp_path):
    src = tmp_path / "reads.fq"
    src.write_bytes(b"@r1\nACGT\n+\nIIII\n@r2\nGGA\n+\n!!!\n")
    options = Options(filename=str(src), format=InputFormat.FASTQ)
    result = compute_ebwt(options, False)
    assert Counter(result.bwt) == Counter(b"ACGTGGA")
    assert (tmp_path / "reads.fq.ebwt").read_bytes() == result.bwt
    assert len(result.starts) == 2


def test_ebwt_verbose_messages(fasta, capsys):
    options = Options(filename=str(fasta), format=InputFormat.FASTA, verbose=True)
    compute_ebwt(options, False)
    out = capsys.readouterr().out
    assert "load fasta file" in out
    assert "gCA construction: Elapsed time in seconds:" in out


def test_bbwt_files(tmp_path):
    src = tmp_path / "b.txt"
    src.write_bytes(b"banana")
    result = compute_bbwt(Options(filename=str(src), ca=True))
    assert (tmp_path / "b.txt.bbwt").read_bytes() == result.bwt
    assert Counter(result.bwt) == Counter(b"banana")
    assert _read_ints(tmp_path / "b.txt.bbi") == list(result.starts)
    assert _read_ints(tmp_path / "b.txt.gca") == list(result.conjugates)
    assert len(result.starts) == result.boundaries.count() - 1


def test_bbwt_of_lyndon_word_matches_bwt(tmp_path):
    src = tmp_path / "l.txt"
    src.write_bytes(b"aabab")
    bbwt = compute_bbwt(Options(filename=str(src)))
    bwt = compute_bwt_wo_dol(Options(filename=str(src)))
    assert bbwt.bwt == bwt.bwt