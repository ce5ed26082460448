"""Grouping of BED rows into named regions of interval midpoints."""

import logging

from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import BinaryIO, Optional, Union

import numpy as np

from numpy.typing import NDArray

from .bed_io import open_bed
from .errors import BedParseError, LineStateError
from .line_reader import LineReader
from .text import parse_int, split, trim

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class RegionRecord:
    """A finalized region.

    **Attributes**

    - `name`: Region name, taken from the first BED column.
    - `points`: Read-only `int64` array of interval midpoints, sorted ascending.
    """

    name: str
    points: NDArray[np.int64]

    def __len__(self) -> int:
        return len(self.points)


class ParserState(Enum):
    NO_ACTIVE_REGION = "no_active_region"
    ACCUMULATING = "accumulating"


class RegionGroupingParser:
    """State machine grouping consecutive rows with the same name into regions.

    Rows are grouped only while their name stays the same from one row to the
    next. A name that comes back after a different one starts a new region, so
    `A, B, A` produces three records. Points are collected unsorted and sorted
    once, when the region is finalized.

    A region is finalized when a row with a different name arrives (returned by
    `feed`) and when input ends (returned by `finish`). `parse` does both.

    **Arguments:**

    - `encoding`: Text encoding used to decode lines in `parse`.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._state = ParserState.NO_ACTIVE_REGION
        self._name = ""
        self._points: list[int] = []

    @property
    def state(self) -> ParserState:
        return self._state

    def feed(self, line: str) -> Optional[RegionRecord]:
        """Process one line of text.

        **Returns:**

        - The region finalized because this row started a new one, else `None`.

        **Raises:**

        - `ValueError`: If the row is malformed.
        """
        line = trim(line)
        if line.startswith(COMMENT_PREFIX):
            return None

        fields = split("\t", line)
        if len(fields) < 3:
            raise ValueError("row must contain at least 3 fields: (region, start, end)")
        name = fields[0]
        start = parse_int(fields[1], "interval_start")
        end = parse_int(fields[2], "interval_end")
        if not start < end:
            raise ValueError("interval bounds are invalid")

        finished = None
        if self._state is ParserState.NO_ACTIVE_REGION or name != self._name:
            if not name:
                raise ValueError("empty string as a region name")
            finished = self.finish()
            self._name = name
            self._state = ParserState.ACCUMULATING

        self._points.append((end - start) // 2)
        return finished

    def finish(self) -> Optional[RegionRecord]:
        """Finalize the active region, if any, and return to `NO_ACTIVE_REGION`."""
        if self._state is ParserState.NO_ACTIVE_REGION:
            return None

        points = np.sort(np.asarray(self._points, dtype=np.int64))
        points.flags.writeable = False
        record = RegionRecord(self._name, points)

        self._points.clear()
        self._name = ""
        self._state = ParserState.NO_ACTIVE_REGION
        return record

    def parse(self, reader: LineReader) -> list[RegionRecord]:
        """Read every line from `reader` and return the regions in input order.

        **Raises:**

        - `BedParseError`: If a row is malformed. The message is
            `"parsing input at line N: <reason>"` with `N` counted from 1.
        - `OSError`: If reading fails, unchanged.
        """
        regions = []
        while reader.read_next_line():
            try:
                record = self.feed(str(reader.current_line(), self.encoding))
            except (ValueError, LineStateError) as e:
                # add some context to the error
                line_number = reader.current_line_number() + 1
                raise BedParseError(f"parsing input at line {line_number}: {e}", line_number) from e
            if record is not None:
                regions.append(record)

        record = self.finish()
        if record is not None:
            regions.append(record)
        return regions


def read_points_from_bed_file(stream: BinaryIO, encoding: str = "utf-8") -> list[RegionRecord]:
    """Read midpoints per region from an open binary BED stream."""
    return RegionGroupingParser(encoding=encoding).parse(LineReader(stream))


def read_points_from_bed(path: Union[str, PathLike], encoding: str = "utf-8") -> list[RegionRecord]:
    """Read midpoints per region from a BED file.

    !!! info

        Only the first three columns are used. For a row `[start, end)` the
        point is `(end - start) // 2`.

    **Arguments:**

    - `path`: Path to a tab-separated BED file, optionally gzip-compressed
        (`.gz`).
    - `encoding`: Text encoding of the file.

    **Returns:**

    - List of `RegionRecord`, one per contiguous run of rows sharing a name,
        in the order they appear.

    **Raises:**

    - `BedParseError`: If a row is malformed.
    - `OSError`: If the file cannot be opened or read.
    """
    with open_bed(path) as stream:
        reader = LineReader(stream)
        regions = RegionGroupingParser(encoding=encoding).parse(reader)

    logger.info(f"Read {sum(len(r) for r in regions)} intervals in {len(regions)} regions from {path}")
    return regions
