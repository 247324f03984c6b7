# src/swc2dot/swc.py
from __future__ import annotations

# General imports (stdlib)
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

# Third-party imports
import numpy as np
import pandas as pd

# Local imports
from .exceptions import (
    DuplicateIdentifier,
    InvalidField,
    InvalidParentOrdering,
    MalformedRecord,
    SWCParseError,
)

# Standard SWC columns, in file order
SWC_COLUMNS = ["ID", "Type", "X", "Y", "Z", "Radius", "Parent"]

_UNSIGNED = re.compile(r"\+?[0-9]+")


class CompartmentKind(Enum):
    """Compartment types defined by the most basic version of the SWC standard."""

    UNDEFINED = 0
    SOMA = 1
    AXON = 2
    DENDRITE = 3
    APICAL_DENDRITE = 4
    CUSTOM = 5

    @classmethod
    def from_code(cls, code: int) -> "CompartmentKind":
        """
        Map an SWC type code onto a CompartmentKind.

        Codes 0-4 map one-to-one onto the standard kinds, every code >= 5 is CUSTOM.

        Raises:
            ValueError: If `code` is negative.
        """
        if code < 0:
            raise ValueError(f"SWC type code must be non-negative, got {code}")
        return cls(min(code, cls.CUSTOM.value))

    @property
    def config_key(self) -> str:
        """Key of this kind's option group in the style configuration."""
        return _CONFIG_KEYS[self]

    @property
    def label(self) -> str:
        """Adjective used to describe vertices of this kind."""
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_CONFIG_KEYS: Dict[CompartmentKind, str] = {
    CompartmentKind.UNDEFINED: "undefined",
    CompartmentKind.SOMA: "soma",
    CompartmentKind.AXON: "axon",
    CompartmentKind.DENDRITE: "dendrite",
    CompartmentKind.APICAL_DENDRITE: "apicaldendrite",
    CompartmentKind.CUSTOM: "custom",
}

_LABELS: Dict[CompartmentKind, str] = {
    CompartmentKind.UNDEFINED: "undefined",
    CompartmentKind.SOMA: "somatic",
    CompartmentKind.AXON: "axonal",
    CompartmentKind.DENDRITE: "(basal) dendritic",
    CompartmentKind.APICAL_DENDRITE: "apical dendritic",
    CompartmentKind.CUSTOM: "custom",
}


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class Compartment:
    """
    A single morphology sample.

    Attributes:
        id (int): Compartment id, unique within a morphology.
        kind (CompartmentKind): Tissue type of the compartment.
        position (Point): Position in 3D.
        radius (float): Non-negative radius.
        parent_id (Optional[int]): Id of the parent compartment, None for roots.
            When present it is strictly less than `id`.
        type_code (Optional[int]): Raw SWC type code as read from the file.
            Kept so CUSTOM compartments do not lose their original code.
    """
    id: int
    kind: CompartmentKind
    position: Point
    radius: float
    parent_id: Optional[int] = None
    type_code: Optional[int] = None

    @property
    def code(self) -> int:
        """SWC type code, falling back to the kind's own code."""
        return self.kind.value if self.type_code is None else self.type_code

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    COMPARTMENT = "compartment"


@dataclass(frozen=True)
class SWCLine:
    """One classified line of an SWC file."""
    kind: LineKind
    text: str = ""
    compartment: Optional[Compartment] = None


def parse_line(line: str) -> SWCLine:
    """
    Classify one SWC line as blank, comment or compartment.

    Use:
        Whitespace is trimmed before classification. Empty lines are blank,
        lines starting with '#' are comments, everything else must be a
        compartment record.

    Args:
        line (str): A single line, with or without its line terminator.

    Returns:
        SWCLine: The classified line; `compartment` is set for records.

    Raises:
        SWCParseError: If the line is a malformed compartment record.
    """
    trimmed = line.strip()

    if not trimmed:
        return SWCLine(LineKind.BLANK)

    if trimmed.startswith("#"):
        return SWCLine(LineKind.COMMENT, text=trimmed)

    return SWCLine(LineKind.COMPARTMENT, text=trimmed, compartment=parse_line_as_compartment(trimmed))


def parse_line_as_compartment(line: str) -> Compartment:
    """
    Parse a single SWC record into a Compartment.

    Use:
        A record has exactly seven whitespace-separated fields:
            id  type  x  y  z  radius  parent
        A parent field starting with '-' marks a root compartment. Any other
        parent must be smaller than the compartment's own id.

    Args:
        line (str): Record text.

    Returns:
        Compartment: The parsed compartment.

    Raises:
        MalformedRecord: If the line does not hold exactly seven fields.
        InvalidField: If a field does not parse as its expected type.
        InvalidParentOrdering: If the parent id is not smaller than the id.
    """
    specs = line.split()

    # Check number of whitespace-delimited items
    if len(specs) != 7:
        raise MalformedRecord(
            f"Expected 7 space-delimited items in compartment line, got {len(specs)} items instead."
        )

    compartment_id = _parse_unsigned(specs[0], "compartment id")
    type_code = _parse_unsigned(specs[1], "compartment type")
    position = Point(
        _parse_float(specs[2], "x position"),
        _parse_float(specs[3], "y position"),
        _parse_float(specs[4], "z position"),
    )
    radius = _parse_float(specs[5], "radius")
    if not radius >= 0:
        raise InvalidField(f"Could not parse {specs[5]!r} as a radius: expected a non-negative float.")

    # A negative parent id means there is no parent; this is a root of the morphology
    parent_id: Optional[int] = None
    if not specs[6].startswith("-"):
        parent_id = _parse_unsigned(specs[6], "parent id")
        if parent_id >= compartment_id:
            raise InvalidParentOrdering(
                f"Expected parent id for compartment {compartment_id} to be less than "
                f"{compartment_id}, got {parent_id} instead."
            )

    return Compartment(
        id=compartment_id,
        kind=CompartmentKind.from_code(type_code),
        position=position,
        radius=radius,
        parent_id=parent_id,
        type_code=type_code,
    )


def _parse_unsigned(text: str, what: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise InvalidField(f"Could not parse {text!r} as a {what}: expected a non-negative integer.")
    return int(text)


def _parse_float(text: str, what: str) -> float:
    # float() also accepts digit separators such as "1_0"
    if "_" in text:
        raise InvalidField(f"Could not parse {text!r} as a {what}: expected a float.")
    try:
        return float(text)
    except ValueError:
        raise InvalidField(f"Could not parse {text!r} as a {what}: expected a float.") from None


class Morphology:
    """
    Compartments of one neuron, keyed by id.

    Iteration yields compartments in ascending id order, regardless of the
    order in which they were inserted.
    """

    def __init__(self, compartments: Iterable[Compartment] = ()) -> None:
        self._compartments: Dict[int, Compartment] = {}
        for compartment in compartments:
            self.try_insert(compartment)

    def try_insert(self, compartment: Compartment) -> None:
        """
        Insert a compartment under its id.

        Raises:
            DuplicateIdentifier: If a compartment with the same id is already
                present. The stored compartment is left unchanged.
        """
        if compartment.id in self._compartments:
            raise DuplicateIdentifier(compartment.id)
        self._compartments[compartment.id] = compartment

    def __iter__(self) -> Iterator[Compartment]:
        for compartment_id in sorted(self._compartments):
            yield self._compartments[compartment_id]

    def __len__(self) -> int:
        return len(self._compartments)

    def __contains__(self, compartment_id: object) -> bool:
        return compartment_id in self._compartments

    def __getitem__(self, compartment_id: int) -> Compartment:
        return self._compartments[compartment_id]

    def ids(self) -> List[int]:
        return sorted(self._compartments)

    def positions(self) -> Dict[int, np.ndarray]:
        """Map compartment ids to np.array([X, Y, Z]) positions."""
        return {c.id: c.position.as_array() for c in self}

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the morphology as an SWC table.

        Returns:
            pd.DataFrame: One row per compartment in id order, with the
            standard SWC columns. Roots get Parent == -1.
        """
        compartments = list(self)
        positions = self.positions()
        xyz = np.array([positions[c.id] for c in compartments], dtype=float).reshape(-1, 3)

        df = pd.DataFrame(
            {
                "ID": np.array([c.id for c in compartments], dtype=np.int64),
                "Type": np.array([c.code for c in compartments], dtype=np.int64),
                "X": xyz[:, 0],
                "Y": xyz[:, 1],
                "Z": xyz[:, 2],
                "Radius": np.array([c.radius for c in compartments], dtype=float),
                "Parent": np.array([-1 if c.parent_id is None else c.parent_id for c in compartments], dtype=np.int64),
            },
            columns=SWC_COLUMNS,
        )
        return df


def parse_lines(lines: Iterable[str]) -> Morphology:
    """
    Assemble a Morphology from SWC lines.

    Use:
        Lines are consumed in order; blank and comment lines are skipped and
        every compartment is inserted under its id. The first error aborts the
        whole assembly; no partial morphology is returned.

    Args:
        lines (Iterable[str]): SWC lines, e.g. from `io.read_lines`.

    Returns:
        Morphology: All compartments of the input.

    Raises:
        SWCParseError: If a line is malformed; `lineno` and `line` are set.
        DuplicateIdentifier: If two compartments share an id.
        IOFailure: If the underlying line source fails.
    """
    morphology = Morphology()

    for lineno, raw in enumerate(lines, start=1):
        try:
            parsed = parse_line(raw)
        except SWCParseError as exc:
            # Attach the location so users can find the offending record
            exc.lineno = lineno
            exc.line = raw.rstrip("\r\n")
            raise

        if parsed.kind is LineKind.COMPARTMENT:
            morphology.try_insert(parsed.compartment)

    return morphology
