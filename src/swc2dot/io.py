# src/swc2dot/io.py
from __future__ import annotations

# General imports (stdlib)
import os
from pathlib import Path
from typing import Iterator, List

# Local imports
from .exceptions import DataNotFound, IOFailure
from .swc import Morphology, parse_lines


def read_lines(filepath: Path, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield the lines of a text file, without line terminators.

    Args:
        filepath (Path): File to read.
        encoding (str): Text encoding, default UTF-8.

    Yields:
        str: One line at a time.

    Raises:
        DataNotFound: If the file does not exist.
        IOFailure: If the file cannot be opened, read or decoded.
    """
    path = Path(filepath)
    if not path.is_file():
        raise DataNotFound(f"File not found: {path}")

    try:
        with open(path, "r", encoding=encoding, newline=None) as fh:
            for line in fh:
                yield line.rstrip("\n")
    except UnicodeDecodeError as exc:
        raise IOFailure(f"Could not decode {path} as {encoding}: {exc}") from exc
    except OSError as exc:
        raise IOFailure(f"Error reading line from {path}: {exc}") from exc


def read_swc_file(filepath: Path) -> Morphology:
    """
    Read an SWC file into a Morphology.

    Raises:
        DataNotFound: If the file does not exist.
        IOFailure: If the file cannot be read.
        SWCParseError: If a line is malformed (with its line number attached).
        DuplicateIdentifier: If two compartments share an id.
    """
    return parse_lines(read_lines(filepath))


def write_text_atomic(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Write `text` to `filepath` via a temporary file and an atomic rename.

    Use:
        The output appears complete or not at all; a failed write leaves no
        partial file behind. Parent directories are created as needed.

    Raises:
        IOFailure: If the file cannot be written.
    """
    path = Path(filepath)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding=encoding) as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        # Never leave a half-written temporary file around
        tmp.unlink(missing_ok=True)
        raise IOFailure(f"Could not write output file {path}: {exc}") from exc


def discover_swc(directory: Path, extension: str = ".swc") -> List[Path]:
    """
    Recursively collect SWC files under a directory.

    Args:
        directory (Path): Root directory to search.
        extension (str): File extension to match, default ".swc".

    Returns:
        List[Path]: Matching files, sorted by path.

    Raises:
        DataNotFound: If the directory does not exist or contains no matching files.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DataNotFound(f"Directory not found: {root}")

    # Normalize extension
    if extension and not extension.startswith("."):
        extension = "." + extension

    files = sorted(p for p in root.rglob(f"*{extension}") if p.is_file())
    if not files:
        raise DataNotFound(f"No '*{extension}' files found under: '{root}'")
    return files


def write_table(filepath: Path, morphology: Morphology) -> None:
    """
    Write the SWC table of `morphology` as CSV, atomically.

    Raises:
        IOFailure: If the file cannot be written.
    """
    write_text_atomic(filepath, morphology.to_dataframe().to_csv(index=False))
