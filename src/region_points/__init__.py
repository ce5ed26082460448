from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

# annoying 'as' notation to avoid warnings/errors about unused imports...
from .bed_io import (
    open_bed as open_bed,
    regions_to_frame as regions_to_frame,
    write_regions as write_regions,
)
from .errors import (
    BedParseError as BedParseError,
    LineStateError as LineStateError,
)
from .line_reader import LineReader as LineReader
from .regions import (
    ParserState as ParserState,
    read_points_from_bed as read_points_from_bed,
    read_points_from_bed_file as read_points_from_bed_file,
    RegionGroupingParser as RegionGroupingParser,
    RegionRecord as RegionRecord,
)

try:
    # distribution name differs from the package name
    dist_name = "region-points"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError
