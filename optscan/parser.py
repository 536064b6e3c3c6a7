"""
optscan parser: dispatcher, session and convenience driver.

Session lifecycle
- Parser(options, ...) validates the table once (catch-all located and cached).
- init(arguments) starts a session: every descriptor's found/value is reset, the cursor
  is rewound and the sticky error state is cleared. The argument list is owned by the
  caller; it is permuted in place (options moved ahead of positionals) and never resized.
- next_option() processes exactly one logical unit and returns an Occurrence, or None once
  the vector is exhausted.
- process(arguments) drives next_option() until exhaustion or the first positional argument
  and returns the index of the first argument not consumed by option processing.

One token, one outcome
    scanned → resolved → flag applied | argument dispatched | missing argument |
                         ambiguous | unrecognized | repeated | unexpected argument

Failures never raise: they are reported through the session Reporter (sticky flag plus sink),
carried on the returned Occurrence, and the cursor moves on so the caller may keep draining.

Quick example:
    >>> from optscan import Parser, Option, String
    >>> verbose = Option("v", "verbose")
    >>> output = Option("o", "output", consumer=String(), required=True)
    >>> argv = ["prog", "file1", "-v", "--output=out.txt", "file2"]
    >>> Parser([verbose, output]).process(argv)
    3
    >>> argv
    ['prog', '-v', '--output=out.txt', 'file1', 'file2']
    >>> output.value
    'out.txt'
"""
import difflib
import logging
import sys
from typing import NamedTuple

from .faults import (
    AmbiguousAbbreviationError,
    MissingArgumentError,
    RepeatedOptionError,
    Reporter,
    UnexpectedArgumentError,
    UnrecognizedOptionError,
    print_error,
)
from .matcher import Matcher
from .options import Accepted, Connection, Declined, Found, OptionTable
from .scanner import LONG_OPTION_START, Scanner, TokenKind
from .utils import Unset, ordinal

logger = logging.getLogger(__name__)


class Occurrence(NamedTuple):
    """
    the outcome of one next_option() call.

    - option: the matched descriptor; None for an unrecognized/ambiguous token and for a
      positional argument when no catch-all option exists.
    - as_entered: what the user typed for this occurrence ('-n', '--output', or the
      positional text).
    - kind: TokenKind of the scanned token.
    - fault: the reported fault, None on success (a dropped fault is still attached).
    """
    option: object
    as_entered: str
    kind: TokenKind
    fault: object = None

    @property
    def ok(self):
        return self.fault is None and self.option is not None


def _normalize(result, argument):
    if isinstance(result, Accepted | Declined):
        return result
    if result is True:
        return Accepted(argument)
    if result is False or result is None:
        return Declined()
    raise TypeError(f"option consumer returned {type(result).__name__!r}, expected Accepted, Declined or bool")


class Parser:
    """
    incremental command-line option parser.

    parameters
    - options: iterable of Option (or an OptionTable).
    - option_start: characters that introduce an option (default '-'); must contain '-'
      for long options to be recognized.
    - sink: callable(option, message) receiving every reported fault; None disables output.
    - ignore_case: match long option names case-insensitively.
    """

    def __init__(self, options, *, option_start="-", sink=print_error, ignore_case=False):
        if not isinstance(option_start, str) or not option_start:
            raise ValueError("option start must be a non-empty string")
        self.table = OptionTable(options)
        self.matcher = Matcher(self.table, ignore_case=ignore_case)
        self.option_start = option_start
        self.reporter = Reporter(sink)
        self._scanner = None

    # --- session state -------------------------------------------------------------

    def init(self, arguments):
        self.table.reset()
        self.reporter.reset()
        self._scanner = Scanner(arguments, self.option_start, reorder=self.table.catchall is None)

    @property
    def scanner(self):
        if self._scanner is None:
            raise RuntimeError("parser has no session; call init() or process() first")
        return self._scanner

    @property
    def arguments(self):
        return self.scanner.arguments

    @property
    def index(self):
        return self.scanner.index

    @property
    def error(self):
        return self.reporter.error

    @property
    def message(self):
        return self.reporter.message

    @property
    def faults(self):
        return tuple(self.reporter.faults)

    def report(self, fault, /):
        return self.reporter.report(fault)

    # --- engine --------------------------------------------------------------------

    def next_option(self):
        """
        scan, resolve and dispatch one logical unit.

        returns
        - None when the argument vector is exhausted.
        - Occurrence otherwise (see Occurrence for the meaning of each field).
        """
        scanner = self.scanner
        if (token := scanner.scan()) is None:
            return None

        if token.kind is TokenKind.POSITIONAL:
            if (option := self.table.catchall) is None:
                return Occurrence(None, token.text, token.kind)
            return self._dispatch(option, token, token.text)

        if token.kind is TokenKind.SHORT:
            as_entered = scanner.current[0] + token.text[0]
            if (option := self.matcher.short(token.text[0])) is None:
                return self._unrecognized(token, as_entered)
            return self._dispatch(option, token, as_entered)

        name = token.text.partition("=")[0]
        as_entered = LONG_OPTION_START + name
        resolution = self.matcher.long(name)
        if resolution.ambiguous:
            names = ", ".join(LONG_OPTION_START + option.long for option in resolution.candidates)
            return self._fail(token, AmbiguousAbbreviationError(
                "ambiguous option (could be %s)" % names,
                input=as_entered,
                index=scanner.index,
                candidates=resolution.candidates,
                hint="type more of the name to pick one of %s" % names,
            ))
        if resolution.option is None:
            return self._unrecognized(token, as_entered)
        return self._dispatch(resolution.option, token, as_entered)

    def process(self, arguments=Unset):
        """
        run a whole session and return the index of the first unconsumed argument.

        everything from that index onward is positional, in its original relative order.
        defaults to sys.argv, which is then reordered in place.
        """
        self.init(sys.argv if arguments is Unset else arguments)
        while (occurrence := self.next_option()) is not None:
            if occurrence.kind is TokenKind.POSITIONAL and occurrence.option is None:
                break
        return self.index

    # --- helpers -------------------------------------------------------------------

    def _fail(self, token, fault, option=None):
        self.report(fault)
        return Occurrence(option, fault.input, token.kind, fault)

    def _unrecognized(self, token, as_entered):
        names = [name for option in self.table.named() for name in option.names]
        try:
            hint = "did you mean %r?" % difflib.get_close_matches(as_entered, names, 1)[0]
        except IndexError:
            hint = "check the spelling of the option"
        return self._fail(token, UnrecognizedOptionError(
            "unrecognized option at %s position" % ordinal(self.scanner.index),
            input=as_entered,
            index=self.scanner.index,
            hint=hint,
        ))

    def _dispatch(self, option, token, as_entered):
        scanner = self.scanner

        if option.found is not Found.NOT_FOUND and not option.repeatable:
            rest = token.text[1:] if token.kind is TokenKind.SHORT else ""
            if rest and (option.consumer is not None or rest[0] == "="):
                # the rejected occurrence's attached value is not a bundle of flags
                scanner.offset = 0
            return self._fail(token, RepeatedOptionError(
                "may not be repeated",
                input=as_entered,
                index=scanner.index,
                hint="give %s only once" % as_entered,
            ), option)

        # how is a value attached to this occurrence?
        argument, connection, start, position = None, Connection.NEXT_ARGUMENT, None, None
        if token.kind is TokenKind.POSITIONAL:
            argument = token.text
        elif token.kind is TokenKind.SHORT and (rest := token.text[1:]):
            start = scanner.offset + 1
            if rest[0] == "=":
                argument, connection, start = rest[1:], Connection.WITH_EQUALS, start + 1
            else:
                argument, connection = rest, Connection.ADJACENT
        elif token.kind is TokenKind.LONG and "=" in token.text:
            argument, connection = token.text.partition("=")[2], Connection.WITH_EQUALS
        else:
            position = (scanner.index if token.source is None else token.source) + 1
            if position < len(scanner.arguments):
                argument = scanner.arguments[position]

        if option.consumer is None:
            if connection is Connection.WITH_EQUALS:
                scanner.offset = 0
                return self._fail(token, UnexpectedArgumentError(
                    "doesn't allow an argument",
                    input=as_entered,
                    index=scanner.index,
                    hint="remove everything from '=' (for example: %s)" % as_entered,
                ), option)
            option.found = Found.NO_ARG
            logger.debug("flag %s set", as_entered)
            return Occurrence(option, as_entered, token.kind)

        reported = len(self.reporter.faults)
        result = _normalize(option.consumer(self, option, as_entered, connection, argument), argument)

        if isinstance(result, Accepted):
            option.value = result.value
            option.found = Found.WITH_ARG
            if start is not None:
                end = start + result.used if result.used else len(scanner.current)
                scanner.offset = end - 1 if end < len(scanner.current) else 0
            elif position is not None and argument is not None:
                scanner.claim(position)
            logger.debug("%s took %r (%s)", as_entered, result.value, connection.value)
            return Occurrence(option, as_entered, token.kind)

        if connection is Connection.WITH_EQUALS:
            scanner.offset = 0

        if len(self.reporter.faults) > reported:
            # the consumer already explained what went wrong; its adjacent text is spent
            if start is not None:
                scanner.offset = 0
            return Occurrence(option, as_entered, token.kind, self.reporter.faults[-1])

        if option.required:
            return self._fail(token, MissingArgumentError(
                "requires an argument",
                input=as_entered,
                index=scanner.index,
                hint="pass a value (for example: %s VALUE)" % as_entered,
            ), option)

        option.found = Found.NO_ARG
        if result.value is not Unset:
            option.value = result.value
        logger.debug("%s matched without an argument", as_entered)
        return Occurrence(option, as_entered, token.kind)


__all__ = (
    "Occurrence",
    "Parser",
)
