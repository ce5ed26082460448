import gzip
from pathlib import Path

import polars as pl

from region_points import cli


def test_cli_midpoints_smoke(tmp_path: Path, regions_bed_path: Path, capsys):
    out_prefix = tmp_path / "points_out"

    args = [
        "-v",
        "midpoints",
        str(regions_bed_path),
        "--out",
        str(out_prefix),
    ]
    rc = cli._main(args)
    assert rc == 0

    df = pl.read_csv(f"{out_prefix}.tsv", separator="\t")
    assert df["region"].to_list() == ["chr1", "chr1", "chr1", "chr2", "chr2", "chr1"]
    assert df["point"].to_list() == [4, 25, 50, 0, 5, 50]

    stdout = capsys.readouterr().out
    assert "region-points midpoints" in stdout
    assert "Starting log..." in stdout
    assert "Read 6 intervals in 3 regions" in stdout

    log_text = Path(f"{out_prefix}.log").read_text()
    assert "Starting log..." in log_text
    assert "Finished in" in log_text


def test_cli_midpoints_parquet_quiet(tmp_path: Path, regions_bed_path: Path, capsys):
    out_prefix = tmp_path / "points_out"

    rc = cli._main(["-q", "midpoints", str(regions_bed_path), "--out", str(out_prefix), "--format", "parquet"])
    assert rc == 0

    df = pl.read_parquet(f"{out_prefix}.parquet")
    assert df["region_index"].to_list() == [0, 0, 0, 1, 1, 2]
    assert capsys.readouterr().out == ""
    assert "Writing 3 regions" in Path(f"{out_prefix}.log").read_text()


def test_cli_midpoints_reports_parse_error(tmp_path: Path):
    bed_path = tmp_path / "bad.bed"
    bed_path.write_text("chr1\t1\t5\nchr1\t9\t3\n")
    out_prefix = tmp_path / "bad_out"

    rc = cli._main(["-q", "midpoints", str(bed_path), "--out", str(out_prefix)])
    assert rc == 1

    assert not Path(f"{out_prefix}.tsv").exists()
    log_text = Path(f"{out_prefix}.log").read_text()
    assert "ERROR" in log_text
    assert "parsing input at line 2: interval bounds are invalid" in log_text


def test_cli_midpoints_reports_truncated_gzip(tmp_path: Path):
    data = gzip.compress(b"chr1\t0\t10\n" * 1000)
    bed_path = tmp_path / "truncated.bed.gz"
    bed_path.write_bytes(data[: len(data) // 2])
    out_prefix = tmp_path / "truncated_out"

    rc = cli._main(["-q", "midpoints", str(bed_path), "--out", str(out_prefix)])
    assert rc == 1

    assert not Path(f"{out_prefix}.tsv").exists()
    log_text = Path(f"{out_prefix}.log").read_text()
    assert "ERROR" in log_text
    assert "Failed to read" in log_text
