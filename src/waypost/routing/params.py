"""Path parameter converters.

Typed named segments like ``{id:int}`` restrict what a segment may
match. Captured values stay strings; the converter only shapes the regex.
"""


# regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

# Characters a bare ``:name`` segment may capture.
SEGMENT_VALUE = r"[A-Za-z0-9\-_~ %]+"


def converter_regex(param_type: str) -> str:
    """Return the regex fragment for *param_type*.

    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    return CONVERTERS[param_type]
