"""I/O utilities for BED input and region point tables."""

import gzip

from contextlib import contextmanager
from os import PathLike
from typing import BinaryIO, Iterator, Sequence, TYPE_CHECKING, Union

import polars as pl

if TYPE_CHECKING:
    from .regions import RegionRecord


@contextmanager
def open_bed(path: Union[str, PathLike]) -> Iterator[BinaryIO]:
    """Open a BED file for binary reading, closing it on every exit path.

    Files ending in `.gz` are decompressed on the fly.

    **Raises:**

    - `OSError`: If the file cannot be opened, unchanged (e.g. `FileNotFoundError`).
    """
    open_f = gzip.open if str(path).endswith(".gz") else open
    with open_f(path, "rb") as stream:
        yield stream


def regions_to_frame(records: Sequence["RegionRecord"]) -> pl.DataFrame:
    """Flatten regions into a long Polars table, one row per point.

    **Returns:**

    - `polars.DataFrame` with columns `region`, `region_index` and `point`.
        `region_index` is the position of the record in `records`, which keeps
        apart regions that share a name but were not contiguous in the input.
    """
    names = []
    indices = []
    points = []
    for i, record in enumerate(records):
        names.extend([record.name] * len(record))
        indices.extend([i] * len(record))
        points.extend(record.points.tolist())

    return pl.DataFrame(
        {"region": names, "region_index": indices, "point": points},
        schema={"region": pl.Utf8, "region_index": pl.UInt32, "point": pl.Int64},
    )


def write_regions(records: Sequence["RegionRecord"], path: Union[str, PathLike]):
    """Write regions to `.parquet`, or to tab-separated text for any other suffix."""
    df = regions_to_frame(records)
    if str(path).endswith(".parquet"):
        df.write_parquet(path)
    else:
        df.write_csv(path, separator="\t")
    return
