"""
optscan standard argument consumers.

Every consumer follows the protocol described in optscan.options:

    consumer(parser, option, as_entered, connection, argument) -> Accepted | Declined

Shared policy
- argument None (nothing attached, vector exhausted) → Declined().
- an unforced NEXT_ARGUMENT connection on an optional option is declined, so that
  '-v file' with an optional-valued -v never swallows 'file'. Required options and the
  catch-all take the next argument.
- conversion failures are reported through the parser as ValueConversionError and the
  consumer declines.

Kinds
- String():       the text as-is.
- Integer():      int, with 0x/0o/0b prefixes and an optional sign (no spaces or underscores).
- Float():        float.
- Constant(v):    a flag that records `v` without consuming anything.
- Collect(conv):  append conv(text) to a list kept in option.value.

In ADJACENT mode the numeric consumers only claim their numeric prefix, so '-j4v'
gives -j the value 4 and leaves 'v' to the rest of the bundle. With no numeric prefix at
all an optional -j declines, so '-jv' is -j without a value followed by -v.
"""
import re

from .faults import ValueConversionError
from .options import Accepted, Connection, Declined


def _unforced(option, connection, argument):
    if argument is None:
        return True
    return connection is Connection.NEXT_ARGUMENT and not option.required and not option.catchall


class String:
    def __call__(self, parser, option, as_entered, connection, argument):
        if _unforced(option, connection, argument):
            return Declined()
        return Accepted(argument)

    def __repr__(self):
        return "String()"


class _Numeric:
    kind = "number"
    pattern = re.compile(r"")

    def convert(self, text):
        """convert `text`, which must match `pattern` as a whole."""
        if not self.pattern.fullmatch(text):
            raise ValueError(f"invalid {self.kind} literal {text!r}")
        return self.parse(text)

    def parse(self, text):
        raise NotImplementedError

    def __call__(self, parser, option, as_entered, connection, argument):
        if _unforced(option, connection, argument):
            return Declined()

        text, used = argument, None
        if connection is Connection.ADJACENT:
            # claim the numeric prefix only; what follows continues the bundle
            if (match := self.pattern.match(argument)) is None:
                if not option.required:
                    return Declined()
            elif match.end() < len(argument):
                text, used = match.group(), match.end()

        try:
            value = self.convert(text)
        except ValueError:
            parser.report(ValueConversionError(
                "invalid %s value %r" % (self.kind, argument),
                input=as_entered,
                index=parser.index,
                hint="pass a valid %s (for example: %s 10)" % (self.kind, as_entered),
            ))
            return Declined()
        return Accepted(value, used)

    def __repr__(self):
        return f"{type(self).__name__}()"


class Integer(_Numeric):
    kind = "integer"
    pattern = re.compile(r"[+-]?(0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|\d+)")

    def parse(self, text):
        try:
            return int(text, 0)
        except ValueError:
            return int(text, 10)  # leading zeros, e.g. '010'


class Float(_Numeric):
    kind = "floating-point"
    pattern = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

    def parse(self, text):
        return float(text)


class Constant:
    """flag consumer: records `value` and never consumes input."""

    def __init__(self, value=True):
        self.value = value

    def __call__(self, parser, option, as_entered, connection, argument):
        return Declined(self.value)

    def __repr__(self):
        return f"Constant({self.value!r})"


class Collect:
    """append every accepted value to the list held in option.value."""

    def __init__(self, convert=str):
        if not callable(convert):
            raise TypeError("collect converter must be callable")
        self.convert = convert

    def __call__(self, parser, option, as_entered, connection, argument):
        if _unforced(option, connection, argument):
            return Declined()
        try:
            value = self.convert(argument)
        except ValueError:
            parser.report(ValueConversionError(
                "invalid value %r" % argument,
                input=as_entered,
                index=parser.index,
            ))
            return Declined()
        return Accepted([*(option.value or ()), value])

    def __repr__(self):
        return f"Collect({getattr(self.convert, '__name__', self.convert)!r})"


__all__ = (
    "String",
    "Integer",
    "Float",
    "Constant",
    "Collect",
)
