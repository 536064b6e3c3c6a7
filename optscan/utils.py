"""
optscan utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the scanner, matcher and dispatcher.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- ordinal(number)
  • Human-friendly ordinal label for a 1-based argument position ("first", "12th", ...).

- progname()
  • Program name shown in front of user-facing messages (host `__prog__`, else argv[0]).

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> ordinal(3)
    'third'
"""
import functools
import os.path
import sys
from typing import final


@final
class UnsetType:
    """
    sentinel type for "not provided", distinct from None.

    optscan uses it where None is a meaningful value: an Option built without a short or
    long name, a Declined consumer result that records nothing (Declined().value is
    Unset), and Parser.process() called without an explicit argument list.

    - bool(Unset) is False and repr(Unset) is "Unset".
    - UnsetType() always returns the same instance; the type cannot be subclassed.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """make `str | Unset` a type union, as Option uses in isinstance() checks."""
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is replaced.
    """
    return default if object is Unset else object


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return (
            "first", "second", "third", "fourth", "fifth",
            "sixth", "seventh", "eighth", "ninth", "tenth",
        )[number - 1] if number > 0 else f"{number}th"
    except IndexError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def progname():
    """
    Return the program name used as a prefix for printed faults.

    The host application may expose `__prog__` in __main__; otherwise the basename of
    sys.argv[0] is used (or "prog" when the interpreter has no argv).
    """
    try:
        return getattr(__import__("__main__"), "__prog__")
    except AttributeError:
        pass
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return "prog"


__all__ = (
    # Functions
    "coalesce",
    "ordinal",
    "progname",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
