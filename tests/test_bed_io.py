"""Tests for BED file opening and region table export."""

import gzip

import polars as pl
import pytest

from region_points.bed_io import open_bed, regions_to_frame, write_regions
from region_points.regions import read_points_from_bed


def test_open_bed_reads_gzip(tmp_path, regions_bed_path):
    gz_path = tmp_path / "regions.bed.gz"
    with gzip.open(gz_path, "wb") as f:
        f.write(regions_bed_path.read_bytes())

    with open_bed(gz_path) as stream:
        assert stream.read() == regions_bed_path.read_bytes()

    plain = read_points_from_bed(regions_bed_path)
    compressed = read_points_from_bed(gz_path)
    assert [(r.name, r.points.tolist()) for r in compressed] == [(r.name, r.points.tolist()) for r in plain]


def test_open_bed_closes_stream_on_error(regions_bed_path):
    with pytest.raises(RuntimeError):
        with open_bed(regions_bed_path) as stream:
            raise RuntimeError("boom")
    assert stream.closed


def test_open_bed_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        with open_bed(tmp_path / "missing.bed"):
            pass


def test_regions_to_frame(regions_bed_path):
    df = regions_to_frame(read_points_from_bed(regions_bed_path))

    assert df.columns == ["region", "region_index", "point"]
    assert df.schema["point"] == pl.Int64
    assert df["region"].to_list() == ["chr1", "chr1", "chr1", "chr2", "chr2", "chr1"]
    assert df["region_index"].to_list() == [0, 0, 0, 1, 1, 2]
    assert df["point"].to_list() == [4, 25, 50, 0, 5, 50]


def test_regions_to_frame_empty():
    df = regions_to_frame([])

    assert df.shape == (0, 3)


@pytest.mark.parametrize("suffix", ["tsv", "parquet"])
def test_write_regions(tmp_path, regions_bed_path, suffix):
    regions = read_points_from_bed(regions_bed_path)
    out_path = tmp_path / f"points.{suffix}"

    write_regions(regions, out_path)

    if suffix == "parquet":
        df = pl.read_parquet(out_path)
    else:
        df = pl.read_csv(out_path, separator="\t")
    assert df["point"].to_list() == [4, 25, 50, 0, 5, 50]
    assert df["region_index"].to_list() == [0, 0, 0, 1, 1, 2]


def test_truncated_gzip_raises_os_error(tmp_path):
    data = gzip.compress(b"chr1\t0\t10\n" * 1000)
    gz_path = tmp_path / "truncated.bed.gz"
    gz_path.write_bytes(data[: len(data) // 2])

    with pytest.raises(OSError):
        read_points_from_bed(gz_path)
