"""
optscan matcher: map scanned option text to a descriptor.

rules
- short names: linear search, first exact match in table order wins.
- long names: an exact match always wins. Otherwise the typed text is compared
  segment by segment ('-' separated) against every long name: it matches when it has
  no more segments than the name and each typed segment is a prefix of the name's
  segment at the same position. Trailing segments of the name may be dropped.

      typed      name              match
      foo-b      foo-bar           yes
      f-b-b      foo-bar-baz       yes
      foo        foo-bar           yes
      foob       foo-bar           no   (the dash must line up)
      foo-bar-x  foo-bar           no   (more segments than the name)

- a unique candidate is selected; several candidates are an ambiguity. The matcher
  only resolves; reporting is left to the caller.
"""
from typing import NamedTuple


class Resolution(NamedTuple):
    option: object
    candidates: tuple = ()

    @property
    def ambiguous(self):
        return self.option is None and len(self.candidates) > 1


def abbreviates(typed, name, /):
    """
    return True when `typed` is a segment-wise abbreviation of the long `name`.
    """
    parts = typed.split("-")
    segments = name.split("-")
    if len(parts) > len(segments):
        return False
    return all(segment.startswith(part) for part, segment in zip(parts, segments))


class Matcher:
    def __init__(self, table, *, ignore_case=False):
        self.table = table
        self.ignore_case = ignore_case

    def _fold(self, text):
        return text.casefold() if self.ignore_case else text

    def short(self, char):
        for option in self.table.named():
            if option.short == char:
                return option
        return None

    def long(self, name):
        """
        resolve a long option name (already stripped of '--' and of any '=value' tail).
        """
        if not name:
            return Resolution(None)

        typed = self._fold(name)
        named = [option for option in self.table.named() if option.long]

        for option in named:
            if self._fold(option.long) == typed:
                return Resolution(option, (option,))

        candidates = tuple(option for option in named if abbreviates(typed, self._fold(option.long)))
        if len(candidates) == 1:
            return Resolution(candidates[0], candidates)
        return Resolution(None, candidates)


__all__ = (
    "Resolution",
    "Matcher",
    "abbreviates",
)
