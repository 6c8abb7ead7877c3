LoxValue = None | bool | float | str


def stringify(val: LoxValue) -> str:
    """
    Canonical text of a literal payload. Integral numbers drop their
    trailing ".0", strings are returned without quotes.
    """
    if val is None:
        return "nil"
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, float):
        text = repr(val)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return val
