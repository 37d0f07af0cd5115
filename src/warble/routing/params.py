"""Path parameter converters for segments like ``{id:int}``."""

# Converter name -> (segment regex, Python type used for handler kwargs)
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
}
