r"""
Argsift flag descriptors and matching.

A flag descriptor is a plain string naming one or more equivalent spellings of a
switch, optionally decorated for documentation:

    "-v"                        one alias
    "-v | --verbose"            two aliases
    "[-v | --verbose ...]"      brackets/braces and trailing dots are decoration
    "[-n | --number float64]"   the last alias may carry a value-name hint

Parsing (done once, at construction)
- strip every leading/trailing '[', ']', '{', '}' and '.' character;
- split the remainder on '|' and trim whitespace around each alias;
- for the last alias only, cut at the first space: the head is the alias and
  the trimmed tail is the hint ("[-n theName]" → alias "-n", hint "theName").

Matching is exact and case-sensitive: no prefixes, no "--name=value".

Flag subclasses str, so a descriptor keeps printing exactly as written; that
text is what faults and usage output show.
"""
import functools


class Flag(str):
    """
    immutable flag descriptor: the descriptor text plus its parsed aliases/hint.

    properties
    - aliases: tuple[str, ...], never empty.
    - hint: str | None, the value-name hint of the last alias (documentation only).
    """

    def __new__(cls, descriptor, /):
        if not isinstance(descriptor, str):
            raise TypeError("flag descriptor must be a string")
        self = super().__new__(cls, descriptor)

        aliases = [alias.strip() for alias in descriptor.strip("[]{}.").split("|")]
        last, _, hint = aliases[-1].partition(" ")
        aliases[-1] = last

        self._aliases = tuple(aliases)
        self._hint = hint.strip() or None
        return self

    @classmethod
    def of(cls, descriptor, /):
        """
        return `descriptor` itself when it is a Flag, else a cached Flag for it.
        """
        if isinstance(descriptor, Flag):
            return descriptor
        return _cached(descriptor)

    @property
    def aliases(self):
        return self._aliases

    @property
    def hint(self):
        return self._hint

    def matches(self, token, /):
        """
        return True iff `token` is exactly one of the aliases.
        """
        return token in self._aliases

    def __repr__(self):
        return f"flag({str.__repr__(self)}, aliases={self._aliases!r}, hint={self._hint!r})"


@functools.cache
def _cached(descriptor, /):
    return Flag(descriptor)


def matches(descriptor, token, /):
    """
    return True iff `token` is an occurrence of the flag `descriptor`.

    - matches("-v | --verbose", "--verbose") -> True
    - matches("[-n theName]", "-n")          -> True
    - matches("[-n theName]", "theName")     -> False
    """
    return Flag.of(descriptor).matches(token)


__all__ = (
    "Flag",
    "matches",
)
