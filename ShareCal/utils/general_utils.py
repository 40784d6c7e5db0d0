import re

# Tolerances used throughout the share and calibration arithmetic
SMALL_NUM = 1e-6
VERY_SMALL_NUM = 1e-8
TINY_NUM = 1e-10

# Share-weights above this value are reported as runaway weights
LARGE_SHARE_WEIGHT = 1e4


def is_year(val) -> bool:
    """ Determines whether `val` is a year

    Parameters
    ----------
    val : int or str
        The value to check to determine if it is a year.

    Returns
    -------
    bool
        True if `val` is made entirely of digits [0-9] and is 4 characters in length. False
        otherwise.

    Examples
    --------
    >>> is_year(1990)
    True

    >>> is_year('2010')
    True
    """
    re_year = re.compile(r'^\d{4}$')

    return bool(re_year.match(str(val)))


def infer_type(d):
    """
    `d` is a value assumed to be a string. Booleans ("true"/"false") become Python booleans,
    percentages become fractions, thousands separators are stripped, and anything else that parses
    as a float is returned as one. Strings which can't be converted are returned unchanged.
    """
    if not isinstance(d, str):
        return d

    if d.lower() == "true":
        return True

    if d.lower() == "false":
        return False

    if '%' in d:
        try:
            return float(d.replace("%", "")) / 100.0
        except ValueError:
            return d

    if ',' in d:
        try:
            return float(d.replace(",", ""))
        except ValueError:
            return d

    try:
        return float(d)
    except ValueError:
        return d


def within_tolerance(a, b, tolerance=SMALL_NUM):
    return abs(a - b) <= tolerance
