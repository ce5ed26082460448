import argparse
import logging
import os
import sys
import time

from importlib import metadata

from .bed_io import write_regions
from .errors import BedParseError
from .memory_logger import configure_memory_logger, MemoryLogger, remove_managed_memory_handlers
from .regions import read_points_from_bed

title = "region-points: interval midpoints per BED region"


def _construct_cmd_string(args, parser):
    """internal helper function to construct a visually pleasing string of the command line arguments"""

    options = []
    sub_args = []
    sub_options = []
    NUM_SPACE = 4

    def _add(name, value, action, args, options, level=1):
        spacer = " " * NUM_SPACE * level
        if isinstance(action, argparse._StoreAction):
            if action.option_strings:
                if value is not None and value != action.default:
                    options.append(spacer + f"--{name} {value}")
            else:
                args.append(spacer + str(value))
        elif isinstance(action, argparse._StoreTrueAction):
            if value:
                options.append(spacer + f"--{name}")

        return args, options

    sub_cmd = ""
    for action in parser._actions:
        if isinstance(action, argparse._HelpAction):
            continue
        name = action.dest
        if isinstance(action, argparse._SubParsersAction):
            sub_cmd = getattr(args, name)
            subp = action.choices[sub_cmd]
            for sub_action in subp._actions:
                if isinstance(sub_action, argparse._HelpAction):
                    continue
                sub_value = getattr(args, sub_action.dest)
                sub_args, sub_options = _add(sub_action.dest, sub_value, sub_action, sub_args, sub_options, level=2)
        else:
            _, options = _add(name, getattr(args, name), action, [], options, level=1)

    fmt_options = os.linesep.join(options)
    fmt_sub_args = os.linesep.join(sub_args + sub_options)

    return f"region-points {sub_cmd}" + os.linesep + os.linesep.join([fmt_sub_args, fmt_options])


def _midpoints(args):
    logger = MemoryLogger(__name__)
    t = time.time()

    logger.info(f"Reading intervals from {args.bed}")
    try:
        regions = read_points_from_bed(args.bed, encoding=args.encoding)
    except (BedParseError, OSError) as e:
        logger.error(f"Failed to read {args.bed}: {e}")
        return 1

    out_path = f"{args.out}.{args.format}"
    logger.info(f"Writing {len(regions)} regions to {out_path}")
    write_regions(regions, out_path)

    logger.info(f"Finished in {time.time() - t:.2f} seconds")
    return 0


def _main(args):
    argp = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    argp.add_argument("-v", "--verbose", action="store_true", default=False)
    argp.add_argument("-q", "--quiet", action="store_true", default=False)

    subp = argp.add_subparsers(dest="cmd", required=True, help="Subcommands for region-points")

    mid_p = subp.add_parser("midpoints", help="Compute interval midpoints per contiguous BED region.")
    mid_p.add_argument("bed", help="Path to BED file (tab-delimited, optionally .gz). Only the first 3 columns are used.")
    mid_p.add_argument("--out", default="region_points", help="Location to save result files.")
    mid_p.add_argument(
        "--format",
        choices=["tsv", "parquet"],
        default="tsv",
        help="Output table format.",
    )
    mid_p.add_argument("--encoding", default="utf-8", help="Text encoding of the BED file.")
    mid_p.set_defaults(func=_midpoints)

    # parse arguments
    args = argp.parse_args(args)

    # pull passed arguments/options as a string for printing
    cmd_str = _construct_cmd_string(args, argp)
    version = f"v{metadata.version('region-points')}"
    masthead = f"{title} {version}" + os.linesep

    # setup logging on the package logger so library modules log through it too
    log = logging.getLogger(__package__)
    level = logging.DEBUG if args.verbose else logging.INFO
    log.propagate = False
    remove_managed_memory_handlers(log)

    if not args.quiet:
        sys.stdout.write(masthead)
        sys.stdout.write(cmd_str + os.linesep)
        sys.stdout.write("Starting log..." + os.linesep)
        configure_memory_logger(log, stream=sys.stdout, level=level)

    # setup log file, but write PLINK-style command first
    log_path = f"{args.out}.log"
    with open(log_path, "w") as disk_log_stream:
        disk_log_stream.write(masthead)
        disk_log_stream.write(cmd_str + os.linesep)
        disk_log_stream.write("Starting log..." + os.linesep)
    configure_memory_logger(log, stream=None, log_file=log_path, file_mode="a", level=level)

    # launch w/e task was selected
    try:
        if hasattr(args, "func"):
            return args.func(args)
        argp.print_help()
        return 0
    finally:
        remove_managed_memory_handlers(log)


def run_cli():
    return _main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(_main(sys.argv[1:]))
