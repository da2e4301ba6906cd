# caisbwt

Computes Burrows-Wheeler transform variants through conjugate array induced sorting (cais):

- the **extended BWT** (eBWT) of a string collection,
- the **dollar eBWT** (dolEBWT), where every string is followed by the separator byte `1`,
- the **BWT of a text without an end marker**, built from the conjugate array of the text read as a circular string,
- the **bijective BWT** (BBWT), the eBWT of the Lyndon factors of a text.

It can also write the generalized conjugate array of a collection, the conjugate array of a text, and the document array.

The sorting accepts symbols in the range 0 to 127; a byte of 128 or more in the input raises `ValueError`. Since byte `1` serves as the dollar eBWT separator, inputs should not contain bytes below 2.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
caisbwt [options] <input filename>
```

| Option | Meaning |
|--------|---------|
| `-e` | build the extended BWT (eBWT) |
| `-d` | build the dollar eBWT (dolEBWT) |
| `-b` | build the BWT of the text without dollar |
| `-t` | build the bijective BWT (BBWT) |
| `-f` | input is a FASTA file (eBWT and dolEBWT only; their default) |
| `-q` | input is a FASTQ file (eBWT and dolEBWT only) |
| `-s` | select the sparse boundary representation (the output is the same) |
| `-c` | write the conjugate array |
| `-a` | with `-c`, write offsets and the document array (eBWT and dolEBWT only) |
| `-v` | verbose output, with timings |
| `-o O` | basename for the output files (default: the input filename) |
| `-h` | print help |

A variant must be selected; if several variant flags are given, the last one wins. The BWT and BBWT variants read the whole input file as raw bytes. In FASTA input, lines starting with `>` begin a new sequence and empty sequences are dropped; in FASTQ input, only lines between an `@` header and the following `+` line are kept.

The command first echoes its command line. A bad command line (including `-h`) prints a message to standard error and exits with status 255, or 1 when no variant is selected; errors while reading or computing exit with status 1.

### Output files

| Variant | Transform | Index vector | Conjugate array | Document array |
|---------|-----------|--------------|-----------------|----------------|
| eBWT | `.ebwt` | `.ei` | `.gca` | `.da` |
| dolEBWT | `.dolebwt` | `.di` | `.gca` | `.da` |
| BWT | `.bwt` | `.i` | `.ca` | — |
| BBWT | `.bbwt` | `.bbi` | `.gca` | — |

The index vector lists the ranks whose conjugate starts a string. Index and array files hold little-endian unsigned 32-bit integers (64-bit when `Options.wide` is set). With `-c -a`, `.gca` holds the offset of each conjugate inside its own string and `.da` holds the 0-based string index.

Example:

```
caisbwt -e -c -a -o reads reads.fasta
caisbwt -t text.txt
```

## Library

```python
from caisbwt.transforms import bwt_without_dollar, bijective_bwt, lyndon_factorization

result = bwt_without_dollar(b"banana")
print(result.bwt, result.starts, result.conjugates)

print(lyndon_factorization(b"banana"))
print(bijective_bwt(b"banana").bwt)
```

Each transform returns a `BWTResult` with `bwt`, `starts` (the index vector), `conjugates` and `boundaries`.

Modules:

- `caisbwt.boundaries` — `Boundaries`, marked string starts with `rank`, `select`, `is_start` and `count`,
- `caisbwt.cais` — `cais`, the generalized conjugate array of a collection; raises `EmptyInputError` on empty text,
- `caisbwt.circular` — `cais_bwt`, the conjugate array of a single circular text,
- `caisbwt.reader` — `load_fasta`, `load_fastq`, `load_fasta_conc`, `load_fastq_conc` (returning a `Collection`) and `load_text`; inputs over 2^32 − 1 bytes raise `InputTooLargeError` unless `wide` is set,
- `caisbwt.transforms` — `extended_bwt`, `bwt_without_dollar`, `bijective_bwt`, `lyndon_factorization`, `document_array`,
- `caisbwt.pipeline` — `Options`, `Variant`, `InputFormat`, and `compute_ebwt`, `compute_bwt_wo_dol`, `compute_bbwt`, which load an input and write the output files,
- `caisbwt.cli` — `parse_args`, `run`, `usage` and `main`.

## What it does not do

- It only builds transforms; it does not invert any of them or query the results.
- 64-bit output integers are available only through `Options.wide`; the command line has no flag for them.
- Everything is held in Python lists in memory, so very large inputs are slow and memory-hungry.