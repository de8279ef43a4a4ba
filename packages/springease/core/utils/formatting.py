import numpy as np


def format_decimal(value: float, precision: int | None = None) -> str:
    """
    Render a float as a plain positional decimal, the way CSS expects numbers.

    Never uses exponent notation, drops trailing zeros (1.0 -> "1") and
    prints negative zero as "0". With ``precision`` the value is rounded to
    at most that many fractional digits.
    """
    value = float(value)
    if value == 0:
        # Avoid "-0"
        value = 0.0
    text = np.format_float_positional(value, precision=precision, unique=True, trim="-")
    if text == "-0":
        return "0"
    return text
