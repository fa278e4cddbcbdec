"""Query string codec.

A flat key -> value parser. Unlike ``urllib.parse.parse_qs`` there is one
value per key (the last occurrence wins) and ``+`` is left alone.
"""

from urllib.parse import unquote


def parse_query(query: str | None) -> dict[str, str]:
    """Parse *query* (without its leading ``?``) into a flat mapping.

    Empty segments are skipped, each segment splits on its first ``=``,
    both halves are percent-decoded, and segments whose decoded key is
    empty are dropped::

        parse_query("a=1&b=2&a=3")  # {"a": "3", "b": "2"}
        parse_query("&=x&flag")     # {"flag": ""}
    """
    args: dict[str, str] = {}
    if not query:
        return args
    for segment in query.split("&"):
        if segment == "":
            continue
        key, _, value = segment.partition("=")
        key = unquote(key)
        if key != "":
            args[key] = unquote(value)
    return args
