"""
optscan scanner: the cursor state machine over an argument vector.

The scanner walks the caller's argument list and classifies one token per call:
- LONG:       '--name' or '--name=value'        (text is what follows '--')
- SHORT:      one character of a '-abc' bundle  (text is the bundle from that character on)
- POSITIONAL: anything else                     (text is the whole argument)

cursor
- index: current argument (0 is the program name and is never scanned).
- offset: 0 outside a bundle, otherwise the position of the current short option
  inside arguments[index].
- source: slot the current argument was relocated from (None when it did not move).
- positional_only: latched once '--' is seen or no option-looking argument remains.

reordering
- when `reorder` is set (no catch-all option) and the current argument is positional,
  the next option-looking argument further down is rotated into the current slot and
  the positionals in between shift one slot right. Only one argument moves per call;
  the vector is never resized and strings are never modified. The slot the option
  came from is reported on the token (`source`) so that a value taken from the next
  argument can be fetched from its original neighbour.
- when none remains, positional_only is latched for the rest of the session.

A bare '--' latches positional_only and is never returned. A lone option-start
character ('-') is an ordinary positional argument.
"""
import logging
from collections.abc import MutableSequence
from enum import Enum
from typing import NamedTuple

logger = logging.getLogger(__name__)

LONG_OPTION_START = "--"


class TokenKind(Enum):
    POSITIONAL = "positional"
    LONG = "long"
    SHORT = "short"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    source: int | None = None


class Scanner:
    def __init__(self, arguments, option_start="-", *, reorder=True):
        if not isinstance(arguments, MutableSequence):
            raise TypeError("scanner needs a mutable sequence of arguments (e.g. a list)")
        if not isinstance(option_start, str) or not option_start:
            raise ValueError("option start must be a non-empty string")
        self.arguments = arguments
        self.option_start = option_start
        self.reorder = reorder
        self.index = 0
        self.offset = 0
        self.source = None
        self.positional_only = False

    @property
    def current(self):
        return self.arguments[self.index]

    def _looks_like_option(self, argument):
        return len(argument) > 1 and argument[0] in self.option_start

    def _find_option(self, start):
        for position in range(start, len(self.arguments)):
            if self._looks_like_option(self.arguments[position]):
                return position
        return None

    def rotate(self, source, target):
        """
        move arguments[source] to `target` (target <= source), shifting the
        elements in between one slot right. Nothing else moves.
        """
        if source > target:
            self.arguments[target:source + 1] = [self.arguments[source], *self.arguments[target:source]]

    def claim(self, position):
        """
        take arguments[position] as the value of the current option: it is rotated
        right behind the current argument and the cursor moves onto it.
        """
        if position > self.index + 1:
            logger.debug("relocating value %r from %d to %d", self.arguments[position], position, self.index + 1)
        self.rotate(position, self.index + 1)
        self.index += 1
        self.offset = 0
        self.source = None

    def scan(self):
        """
        classify the next token, or return None when the vector is exhausted.
        """
        if self.offset:
            self.offset += 1
            if self.offset < len(self.current):
                return Token(TokenKind.SHORT, self.current[self.offset:], self.source)
            self.offset = 0  # end of the bundle

        while True:
            self.index += 1
            self.source = source = None
            if self.index >= len(self.arguments):
                self.index = len(self.arguments)
                return None

            argument = self.arguments[self.index]

            if not self.positional_only:
                if not self._looks_like_option(argument) and self.reorder:
                    source = self._find_option(self.index + 1)
                    if source is None:
                        self.positional_only = True
                    else:
                        logger.debug("relocating option %r from %d to %d", self.arguments[source], source, self.index)
                        self.rotate(source, self.index)
                        self.source = source
                        argument = self.arguments[self.index]

                if self._looks_like_option(argument):
                    if argument == LONG_OPTION_START:
                        self.positional_only = True
                        continue
                    if argument.startswith(LONG_OPTION_START):
                        return Token(TokenKind.LONG, argument[len(LONG_OPTION_START):], source)
                    self.offset = 1
                    return Token(TokenKind.SHORT, argument[1:], source)

            return Token(TokenKind.POSITIONAL, argument)


__all__ = (
    "TokenKind",
    "Token",
    "Scanner",
    "LONG_OPTION_START",
)
