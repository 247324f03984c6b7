# src/swc2dot/__init__.py
"""Convert SWC neuron morphologies to the DOT graph language."""
from __future__ import annotations

__version__ = "0.2.0"

from .buffer import Indent, StringBuffer
from .config import Config, StyleConfig, make_config
from .core import BatchResult, Converter
from .exceptions import (
    ConfigError,
    ConfigStructureError,
    DataNotFound,
    DuplicateIdentifier,
    InvalidField,
    InvalidParentOrdering,
    IOFailure,
    MalformedRecord,
    MissingParent,
    SWCParseError,
    Swc2DotError,
    ValidationError,
)
from .graph import Graph, ShortTree, Vertex
from .io import discover_swc, read_lines, read_swc_file, write_table, write_text_atomic
from .swc import Compartment, CompartmentKind, Morphology, Point, parse_line, parse_line_as_compartment, parse_lines
from .writer import render_graph

__all__ = [
    "__version__",
    "BatchResult",
    "Compartment",
    "CompartmentKind",
    "Config",
    "ConfigError",
    "ConfigStructureError",
    "Converter",
    "DataNotFound",
    "DuplicateIdentifier",
    "Graph",
    "IOFailure",
    "Indent",
    "InvalidField",
    "InvalidParentOrdering",
    "MalformedRecord",
    "MissingParent",
    "Morphology",
    "Point",
    "SWCParseError",
    "ShortTree",
    "StringBuffer",
    "StyleConfig",
    "Swc2DotError",
    "ValidationError",
    "Vertex",
    "discover_swc",
    "make_config",
    "parse_line",
    "parse_line_as_compartment",
    "parse_lines",
    "read_lines",
    "read_swc_file",
    "render_graph",
    "write_table",
    "write_text_atomic",
]
