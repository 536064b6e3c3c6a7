"""
optscan faults (parse errors) and reporting.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse problem.
- ParseFault: base type carrying a message plus a read-only options mapping; it knows how
  to render itself through rich, and one subclass exists per kind of problem.
- Reporter: the single notification path of a parsing session. It keeps the sticky error
  flag, the last message and the ordered list of faults, and forwards each fault to a sink.
- print_error(): the standard sink, printing "prog: option: message" on stderr with rich.

Propagation policy
- Faults are never raised by the engine. They are recorded and reported, and the caller
  decides whether to keep draining tokens or to abort.
- The error flag is sticky for the whole session; only Reporter.reset() clears it.
- While an error is pending, further "unrecognized option" faults are dropped to avoid
  cascades (e.g. a mistyped bundle). Every other kind is always reported.

Host customization (read from __main__, like the rest of the presentation layer)
- __prog__: program name shown in front of printed faults.
- __styles__: mapping of style overrides for rich rendering.
- __codes__: mapping FaultCode -> label, see FaultCode.normalize().
"""
import logging
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, progname

logger = logging.getLogger(__name__)

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - options (1111x)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_ABBREVIATION, MISSING_ARGUMENT,
        REPEATED_OPTION, UNEXPECTED_ARGUMENT
    - values (1112x)
      • INVALID_VALUE (raised by the standard numeric consumers only)
    """
    # --- option errors (1111x) ---
    UNRECOGNIZED_OPTION         = 11111
    AMBIGUOUS_ABBREVIATION      = 11112
    MISSING_ARGUMENT            = 11113
    REPEATED_OPTION             = 11114
    UNEXPECTED_ARGUMENT         = 11115

    # --- value errors (1112x) ---
    INVALID_VALUE               = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseFault(Exception):
    """
    a single parse problem, tied to the option text the user typed.

    options (all optional, read-only once built)
    - input: the offending text as entered (e.g. '-n', '--outpt').
    - index: argument-vector position of the offending token.
    - code: FaultCode of this fault.
    - title: short heading used by the rich rendering.
    - hint: one-sentence advice shown under the message.
    - candidates: names involved in an ambiguity.
    """
    code = Unset
    title = "parse error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": type(self).code, "title": type(self).title} | options)

    @property
    def input(self):
        return self.options.get("input", "")

    def __str__(self):
        if self.input:
            return f"{self.input}: {self.message}"
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        code = self.options["code"]
        header = Text.assemble(
            "[ ",
            (progname(), styles["prog-name"]),
            " — ",
            (code.normalize() if isinstance(code, FaultCode) else "-", styles["code"]),
            " | ",
            (self.options["title"].title(), styles["error-title"]),
            " ]",
        )
        message = Text(str(self), styles["error-message"])
        if not (hint := self.options.get("hint")):
            return Group(header, message)
        return Group(header, message, Text.assemble((" → ", styles["hint-arrow"]), (hint, styles["hint"])))


class UnrecognizedOptionError(ParseFault):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"


class AmbiguousAbbreviationError(ParseFault):
    code = FaultCode.AMBIGUOUS_ABBREVIATION
    title = "ambiguous option"


class MissingArgumentError(ParseFault):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"


class RepeatedOptionError(ParseFault):
    code = FaultCode.REPEATED_OPTION
    title = "repeated option"


class UnexpectedArgumentError(ParseFault):
    code = FaultCode.UNEXPECTED_ARGUMENT
    title = "unexpected argument"


class ValueConversionError(ParseFault):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"


class Reporter:
    """
    session-scoped error state plus the notification sink.

    attributes
    - error: sticky flag, True once any fault was reported in this session.
    - message: text of the last reported fault (None before the first one).
    - faults: every reported fault, in order.
    - sink: callable(option, message) or None. None keeps the state without printing.
    """

    def __init__(self, sink=None):
        if sink is not None and not callable(sink):
            raise TypeError("reporter sink must be callable or None")
        self.sink = sink
        self.error = False
        self.message = None
        self.faults = []

    def reset(self):
        self.error = False
        self.message = None
        self.faults = []

    def report(self, fault, /):
        """
        record a fault and forward it to the sink.

        returns True when the fault was reported, False when it was dropped
        (an unrecognized option while another error is already pending).
        """
        if not isinstance(fault, ParseFault):
            raise TypeError("report() argument must be a parse fault")
        if isinstance(fault, UnrecognizedOptionError) and self.error:
            logger.debug("dropping %s while an error is pending", fault)
            return False
        self.error = True
        self.message = fault.message
        self.faults.append(fault)
        logger.debug("reported %s (%s)", fault, fault.options["code"])
        if self.sink is not None:
            self.sink(fault.input, fault.message)
        return True


def print_error(option, message, /):
    """
    standard sink: print "prog: option: message" on stderr.
    """
    styles = defaultdict(str, {
        "prog-name": "bold",
        "option": "bold #FF4DA6",
        "error-message": "",
    } | getattr(__import__("__main__"), "__styles__", {}))

    if option:
        console.print(Text.assemble(
            (progname(), styles["prog-name"]), ": ",
            (option, styles["option"]), ": ",
            (message, styles["error-message"]),
        ))
    else:
        console.print(Text.assemble((progname(), styles["prog-name"]), ": ", (message, styles["error-message"])))


__all__ = (
    "FaultCode",
    "ParseFault",
    "UnrecognizedOptionError",
    "AmbiguousAbbreviationError",
    "MissingArgumentError",
    "RepeatedOptionError",
    "UnexpectedArgumentError",
    "ValueConversionError",
    "Reporter",
    "print_error",
)
