# src/swc2dot/core.py
from __future__ import annotations

# General imports (stdlib)
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

# Third-party imports
from tqdm import tqdm

# Local imports
from .config import Config
from .exceptions import Swc2DotError
from .graph import Graph
from .io import discover_swc, read_lines, write_table, write_text_atomic
from .swc import Morphology, parse_lines
from .writer import render_graph

OUTPUT_SUFFIX = ".dot"


@contextmanager
def timed(label: str, quiet: bool = False) -> Iterator[None]:
    """
    Context manager that prints a timing log when the block completes.

    Args:
        label (str): Label printed in the log line.
        quiet (bool): Print nothing.
    """
    t0 = time.time()
    yield
    if not quiet:
        dt_ms = (time.time() - t0) * 1000.0
        print(f"[ok] {label} ({dt_ms:,.0f} ms)")


@dataclass
class BatchResult:
    """Outcome of a directory conversion."""
    converted: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failed: Dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class Converter:
    """SWC → DOT conversion for single files and directories."""

    def __init__(self, cfg: Config) -> None:
        """
        Args:
            cfg (Config): Layout, styles and runtime toggles.
        """
        self.cfg = cfg

    def render(self, morphology: Morphology) -> str:
        """Build the graph of `morphology` and render it as DOT text."""
        graph = Graph.from_morphology(morphology)
        return render_graph(graph, self.cfg.style, line_width=self.cfg.layout.line_width)

    def convert_lines(self, lines: Iterable[str]) -> str:
        """Parse SWC lines and return the DOT document."""
        return self.render(parse_lines(lines))

    def convert_file(self, input_path: Path, output_path: Path, table_path: Optional[Path] = None) -> Path:
        """
        Convert one SWC file and write the DOT document.

        Use:
            The whole input is parsed and rendered before anything is
            written, so a failed conversion produces no output file.

        Args:
            input_path (Path): SWC file to read.
            output_path (Path): Destination of the DOT document.
            table_path (Optional[Path]): Also write the parsed SWC table as CSV.

        Returns:
            Path: `output_path`.

        Raises:
            Swc2DotError: If reading, parsing, graph construction or writing fails.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        quiet = self.cfg.processing.quiet

        with timed(f"parsed {input_path.name}", quiet):
            morphology = parse_lines(read_lines(input_path))

        with timed(f"rendered {len(morphology)} compartments", quiet):
            text = self.render(morphology)

        with timed(f"wrote {output_path}", quiet):
            write_text_atomic(output_path, text)

        if table_path is not None:
            with timed(f"wrote {table_path}", quiet):
                write_table(Path(table_path), morphology)

        return output_path

    def output_path_for(self, input_path: Path, input_dir: Path, output_dir: Path) -> Path:
        """Mirror `input_path`'s location under `output_dir`, with a .dot suffix."""
        rel = Path(input_path).relative_to(input_dir)
        return Path(output_dir) / rel.with_suffix(OUTPUT_SUFFIX)

    def convert_directory(self, input_dir: Path, output_dir: Path) -> BatchResult:
        """
        Convert every SWC file under `input_dir`.

        Use:
            Files are converted in sorted order and written to the same
            relative location under `output_dir`. Existing outputs are kept
            when overwriting is disabled. The first failure aborts the batch
            unless `processing.keep_going` is set, in which case failures are
            collected in the result.

        Returns:
            BatchResult: Converted, skipped and failed files.

        Raises:
            DataNotFound: If `input_dir` holds no SWC files.
            Swc2DotError: On the first failed file, unless keep_going is set.
        """
        input_dir = Path(input_dir)
        files = discover_swc(input_dir)
        result = BatchResult()

        # Per-file status lines would interleave with the progress bar
        file_converter = Converter(replace(self.cfg, processing=replace(self.cfg.processing, quiet=True)))

        with tqdm(total=len(files), desc="Converting", unit="file", disable=self.cfg.processing.quiet) as pbar:
            for swc_path in files:
                out = self.output_path_for(swc_path, input_dir, output_dir)

                if out.exists() and not self.cfg.processing.overwrite:
                    result.skipped.append(swc_path)
                    pbar.update(1)
                    continue

                try:
                    file_converter.convert_file(swc_path, out)
                except Swc2DotError as exc:
                    if not self.cfg.processing.keep_going:
                        raise
                    result.failed[swc_path] = str(exc)
                else:
                    result.converted.append(swc_path)
                pbar.update(1)

        if not self.cfg.processing.quiet:
            print(
                f"[ok] converted {len(result.converted)}, skipped {len(result.skipped)}, "
                f"failed {len(result.failed)} of {len(files)} files"
            )
        return result
