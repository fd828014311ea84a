"""Checked fixed-point integer arithmetic at WAD (1e18) and RAY (1e27) precision.

Values are plain ints. Signed quantities must fit an int256 and unsigned
ones a uint256; anything outside raises ArithmeticOverflow instead of
wrapping. Division truncates toward zero.
"""
from .errors import ArithmeticOverflow

EIGHTEEN_DECIMAL_NUMBER     = 10 ** 18
TWENTY_SEVEN_DECIMAL_NUMBER = 10 ** 27

WAD = EIGHTEEN_DECIMAL_NUMBER
RAY = TWENTY_SEVEN_DECIMAL_NUMBER
WAD_TO_RAY = 10 ** 9

INT256_MAX = 2 ** 255 - 1
INT256_MIN = -(2 ** 255)
UINT256_MAX = 2 ** 256 - 1


def check_int(x, what="value"):
    if not isinstance(x, int) or isinstance(x, bool):
        raise ArithmeticOverflow(f"{what}-not-integer")
    if x < INT256_MIN or x > INT256_MAX:
        raise ArithmeticOverflow(f"{what}-overflow")
    return x


def check_uint(x, what="value"):
    if not isinstance(x, int) or isinstance(x, bool):
        raise ArithmeticOverflow(f"{what}-not-integer")
    if x < 0:
        raise ArithmeticOverflow(f"{what}-underflow")
    if x > UINT256_MAX:
        raise ArithmeticOverflow(f"{what}-overflow")
    return x


def _checked(x, signed):
    return check_int(x) if signed else check_uint(x)


def add(x, y, signed=True):
    return _checked(x + y, signed)


def subtract(x, y, signed=True):
    return _checked(x - y, signed)


def multiply(x, y, signed=True):
    return _checked(x * y, signed)


def divide(x, y, signed=True):
    if y == 0:
        raise ArithmeticOverflow("division-by-zero")
    # int(x / y) would go through a float
    q = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        q = -q
    return _checked(q, signed)


def absolute(x):
    return check_uint(-x if x < 0 else x)


def wmultiply(x, y, signed=True):
    return divide(multiply(x, y, signed), WAD, signed)


def rmultiply(x, y, signed=True):
    return divide(multiply(x, y, signed), RAY, signed)


def wad_to_ray(x, signed=False):
    return multiply(x, WAD_TO_RAY, signed)


def ray_to_wad(x, signed=False):
    return divide(x, WAD_TO_RAY, signed)
