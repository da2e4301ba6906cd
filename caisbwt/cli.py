"""Command-line entry point."""

from __future__ import annotations

import getopt
import sys
from collections.abc import Sequence

from caisbwt.pipeline import (
    InputFormat,
    Options,
    Variant,
    compute_bbwt,
    compute_bwt_wo_dol,
    compute_ebwt,
)
from caisbwt.transforms import BWTResult

PROG = "caisbwt"


class UsageError(Exception):
    """Raised for a bad command line; ``status`` is the exit status to use."""

    def __init__(self, message: str, status: int = 255) -> None:
        super().__init__(message)
        self.status = status


def usage(prog: str) -> str:
    """Return the help text."""
    lines = [
        f"Usage: {prog} [options] <input filename>",
        "  Options: ",
        "\t-e \tconstruct the extended BWT (eBWT), def. True ",
        "\t-d \tconstruct the dollar eBWT (dolEBWT), def. False ",
        "\t-b \tconstruct the BWT of the text without dollar (BWT), def. False ",
        "\t-t \tconstruct the bijective BWT (BBWT), def. False ",
        "\t-f \ttake in input a fasta file (only for eBWT and dolEBWT), def. True ",
        "\t-q \ttake in input a fastq file (only for eBWT and dolEBWT), def. False ",
        "\t-s \tuse sparse bitvector (less space with long strings), def. False ",
        "\t-c \twrite the conjugate array, def. False ",
        "\t-a \twrite the document array (only for eBWT and dolEBWT), def. False ",
        "\t-v \tset verbose mode, def. False ",
        "\t-o O\tbasename for the output files, def. <input filename>",
    ]
    return "\n".join(lines)


_VARIANT_FLAGS = {
    "-e": Variant.EBWT,
    "-d": Variant.DOLLAR_EBWT,
    "-b": Variant.BWT,
    "-t": Variant.BBWT,
}


def parse_args(argv: Sequence[str]) -> Options:
    """Build the options from the command-line arguments (program name excluded)."""
    try:
        opts, rest = getopt.gnu_getopt(list(argv), "edbtfqscao:vh")
    except getopt.GetoptError as exc:
        raise UsageError("Unknown option. Use -h for help.") from exc

    options = Options()
    for flag, value in opts:
        if flag in _VARIANT_FLAGS:
            options.variant = _VARIANT_FLAGS[flag]
        elif flag == "-f":
            options.format = InputFormat.FASTA
        elif flag == "-q":
            options.format = InputFormat.FASTQ
        elif flag == "-v":
            options.verbose = True
        elif flag == "-s":
            options.sparse = True
        elif flag == "-c":
            options.ca = True
        elif flag == "-a":
            options.doc = True
        elif flag == "-o":
            options.outname = value
        elif flag == "-h":
            raise UsageError(usage(PROG))

    if len(rest) != 1:
        raise UsageError("Invalid number of arguments\n" + usage(PROG))
    options.filename = rest[0]
    if not options.outname:
        options.outname = options.filename
    if options.variant is None:
        raise UsageError("Error, select a BWT variant.", status=1)
    if options.variant > Variant.DOLLAR_EBWT:
        options.format = InputFormat.TEXT
    elif options.format is InputFormat.TEXT:
        options.format = InputFormat.FASTA
    return options


def run(options: Options) -> BWTResult:
    """Compute the variant selected in ``options`` and write its files."""
    variant = options.variant
    if variant is Variant.EBWT:
        if options.verbose:
            print(f"Computing the eBWT of: {options.filename}")
        return compute_ebwt(options, False)
    if variant is Variant.DOLLAR_EBWT:
        if options.verbose:
            print(f"Computing the dollar eBWT of: {options.filename}")
        return compute_ebwt(options, True)
    if variant is Variant.BWT:
        if options.verbose:
            print(f"Computing the BWT of: {options.filename}")
        return compute_bwt_wo_dol(options)
    if variant is Variant.BBWT:
        if options.verbose:
            print(f"Computing the BBWT of: {options.filename}")
        return compute_bbwt(options)
    raise ValueError("Error, select a valid BWT variant... exiting.")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    print("==== Command line:")
    print("".join(f" {a}" for a in [PROG, *args]))
    try:
        options = parse_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return exc.status
    try:
        run(options)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())