r"""
optscan option descriptors and the option table.

Overview
- Found: tri-state output slot written by the parser for every descriptor
  (NOT_FOUND, NO_ARG, WITH_ARG).
- Connection: how a value got attached to an option occurrence
  • ADJACENT:      '-n5'            (rest of a short bundle, no '=')
  • WITH_EQUALS:   '-n=5', '--name=5'
  • NEXT_ARGUMENT: '-n 5', '--name 5' (the following argument, if any)
- Accepted / Declined: typed results returned by argument consumers.
- Option: a single descriptor (short name, long name, consumer, flags, output slots).
- OptionTable: the ordered, validated descriptor sequence with the cached catch-all.

Consumer protocol
    consumer(parser, option, as_entered, connection, argument) -> Accepted | Declined | bool | None

- argument is the candidate value (None when nothing could be attached).
- Accepted(value, used=None): the value was taken. For short options with adjacent text,
  `used` may claim only a prefix of that text; the remaining characters continue the bundle.
- Declined(value=Unset): nothing was consumed; `value` (if given) is still recorded.
- True/False/None are accepted for plain callables (True → Accepted(argument)).

Quick example:
    >>> from optscan import Option, OptionTable, String, Collect
    >>> table = OptionTable([
    ...     Option("v", "verbose"),
    ...     Option("o", "output", consumer=String(), required=True),
    ...     Option(long="", consumer=Collect(), repeatable=True),  # catch-all
    ... ])
"""
import re
from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import NamedTuple

from .utils import Unset, coalesce


class Found(IntEnum):
    NOT_FOUND = 0
    NO_ARG = 1
    WITH_ARG = 2


class Connection(Enum):
    NEXT_ARGUMENT = "next-argument"
    WITH_EQUALS = "with-equals"
    ADJACENT = "adjacent"


class Accepted(NamedTuple):
    value: object
    used: int | None = None


class Declined(NamedTuple):
    value: object = Unset


class Option:
    """
    a declarative option descriptor.

    parameters
    - short: str (single character) | Unset
    - long: str | Unset; given without the leading '--'. An empty string marks the
      catch-all descriptor, which receives every positional argument.
    - consumer: callable | None; None makes the option a pure presence flag.
    - required: bool; a missing value is an error (needs a consumer).
    - repeatable: bool; matching twice in one session is allowed.
    - default: initial `value` at the start of every session.
    - data: opaque payload, never interpreted by the parser.

    output slots (written by the parser)
    - found: Found
    - value: last recorded value (default until something is recorded)
    """
    __slots__ = ("short", "long", "consumer", "required", "repeatable", "default", "data", "found", "value")

    def __init__(
            self,
            short=Unset,
            long=Unset,
            *,
            consumer=None,
            required=False,
            repeatable=False,
            default=None,
            data=None,
    ):
        if not isinstance(short, str | Unset):
            raise TypeError("option short name must be a string")
        elif isinstance(short, str) and (len(short) != 1 or short in "-= \t"):
            raise ValueError(f"invalid short option name {short!r}")

        if not isinstance(long, str | Unset):
            raise TypeError("option long name must be a string")
        elif isinstance(long, str) and re.search(r"^-|[=\s]", long):
            raise ValueError(f"invalid long option name {long!r} (give it without leading dashes)")

        if short is Unset and long is Unset:
            raise ValueError("option needs a short or a long name")
        if consumer is not None and not callable(consumer):
            raise TypeError("option consumer must be callable")
        if required and consumer is None:
            raise ValueError("a required option needs a consumer to take its value")

        self.short = coalesce(short)
        self.long = coalesce(long)
        self.consumer = consumer
        self.required = bool(required)
        self.repeatable = bool(repeatable)
        self.default = default
        self.data = data
        self.found = Found.NOT_FOUND
        self.value = default

    @property
    def catchall(self):
        return self.long == ""

    @property
    def names(self):
        names = []
        if self.short is not None:
            names.append("-" + self.short)
        if self.long:
            names.append("--" + self.long)
        return tuple(names)

    def reset(self):
        self.found = Found.NOT_FOUND
        self.value = self.default

    def __repr__(self):
        if self.catchall:
            return f"option(catchall, found={self.found.name}, value={self.value!r})"
        return f"option({'/'.join(self.names)}, found={self.found.name}, value={self.value!r})"


class OptionTable:
    """
    ordered, validated sequence of descriptors.

    rules
    - at most one catch-all descriptor; it must be the last entry and carry a consumer.
    - the catch-all is located once, at construction, and cached in `catchall`.
    - duplicate names are not detected; lookups are first-match in table order.
    """

    def __init__(self, options, /):
        if isinstance(options, OptionTable):
            options = options.options
        if not isinstance(options, Iterable):
            raise TypeError("option table must be built from an iterable of options")

        self.options = tuple(options)
        self.catchall = None

        for index, option in enumerate(self.options):
            if not isinstance(option, Option):
                raise TypeError(f"option table entry {index} is not an option")
            if not option.catchall:
                continue
            if option.consumer is None:
                raise ValueError("the catch-all option needs a consumer")
            if self.catchall is not None:
                raise ValueError("option table can have only one catch-all option")
            if index != len(self.options) - 1:
                raise ValueError("the catch-all option must be the last entry of the table")
            self.catchall = option

    def __iter__(self):
        return iter(self.options)

    def __len__(self):
        return len(self.options)

    def __getitem__(self, index):
        return self.options[index]

    def named(self):
        """iterate over every descriptor except the catch-all."""
        return (option for option in self.options if not option.catchall)

    def reset(self):
        for option in self.options:
            option.reset()


__all__ = (
    "Found",
    "Connection",
    "Accepted",
    "Declined",
    "Option",
    "OptionTable",
)
