import re

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# tabs separate fields, so a leading tab marks an empty first field
_WHITESPACE = " \r\n\v\f"


def trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def split(delimiter: str, text: str) -> list[str]:
    # empty fields are kept, "a\t\tb" has three fields
    return text.split(delimiter)


def parse_int(text: str, field_label: str) -> int:
    """Parse a base-10 integer field.

    Only an optional sign followed by ASCII digits is accepted; `int` on its own
    would also take surrounding whitespace, underscores and non-ASCII digits.

    **Arguments:**

    - `text`: Field text, already split out of its row.
    - `field_label`: Name of the field, used in the error message.

    **Raises:**

    - `ValueError`: If `text` is not a base-10 integer.
    """
    if _INTEGER_RE.fullmatch(text) is None:
        raise ValueError(f"{field_label}: cannot parse {text!r} as an integer")
    return int(text)
