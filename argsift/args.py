"""
Argsift stateful argument session.

Args wraps the pure extraction functions with the bookkeeping a program needs:
one mutable token list, one accumulated fault chain and the usage text built
from every flag/positional the program asked about.

Typical flow
    args = Args("A simple utility to add or average a number list.", sys.argv)
    verbose = args.count("[-v | --verbose ...]", "The verbose level.")
    numbers = args.values("[-n | --number float64 ...]", "The numbers to act on.", kind="float64")
    operation = args.next_option("[operation]", ("add", "average"), "The operation.")
    args.done()
    args.report(shell=True)   # prints faults + usage and exits 1 when anything went wrong

Behavior
- argv[0] is the program name (its basename is used in usage); an empty argv
  records "no program arguments".
- every method registers its name/description for usage() first, then runs the
  matching extraction, stores the remaining tokens and records any fault.
  Extraction never stops because of earlier faults.
- `kind` selects the conversion: `str` (default) or a numeric type / type name.
- settings tag their faults with the source of the offending value
  ("invalid flag", "invalid environment variable", "invalid default").
"""
import logging
import os.path

from . import extractors, scanner, settings
from .faults import FaultCode, ArgumentFault, FaultChain, combine, trigger
from .numeric import resolve
from .utils import Unset

logger = logging.getLogger(__name__)

UNDEFINED_PROGRAM = "NotDefined"


def _zero(kind):
    return "" if kind is str else resolve(kind).zero


class Args:
    """
    stateful argument session over a program's argv.

    properties
    - program: basename of argv[0]
    - description: the program description shown by usage()
    - tokens: copy of the tokens not consumed yet
    - fault: FaultChain of every recorded fault, or None
    """

    def __init__(self, description, argv, /, *, environ=Unset):
        if not isinstance(description, str):
            raise TypeError("Args() description must be a string")
        argv = list(argv or ())
        self._description = description
        self._environ = environ
        self._faults = []
        self._usage = {}
        if argv:
            self._program = os.path.basename(argv[0])
            self._tokens = argv[1:]
        else:
            self._program = UNDEFINED_PROGRAM
            self._tokens = []
            self.push_fault(ArgumentFault(FaultCode.NO_ARGS))

    @property
    def program(self):
        return self._program

    @property
    def description(self):
        return self._description

    @property
    def tokens(self):
        return list(self._tokens)

    @property
    def fault(self):
        return combine(*self._faults)

    def __repr__(self):
        return f"args(program={self._program!r}, tokens={self._tokens!r}, faults={len(self._faults)})"

    def has_fault(self):
        return bool(self._faults)

    def push_fault(self, fault, /):
        """
        record a fault (record or chain); None is ignored.
        """
        if fault is None:
            return
        if not isinstance(fault, ArgumentFault | FaultChain):
            raise TypeError("push_fault() argument must be a fault, a fault chain or None")
        logger.debug("%s: recorded fault: %s", self._program, fault)
        self._faults.extend(fault if isinstance(fault, FaultChain) else (fault,))

    def has_next(self):
        return bool(self._tokens)

    def push_token(self, token, /):
        """
        append a token, e.g. a default for an optional trailing positional.
        """
        if not isinstance(token, str):
            raise TypeError("push_token() argument must be a string")
        self._tokens.append(token)

    def register_usage(self, name, desc, /):
        """
        add `name` (a flag descriptor or positional name) to usage(); the first
        registration of a name wins.
        """
        self._usage.setdefault(str(name), str(desc))

    def _consumed(self, name, tokens):
        logger.debug("%s: %s scanned, %d -> %d tokens", self._program, name, len(self._tokens), len(tokens))
        self._tokens = tokens

    def count(self, flag, desc, /):
        """
        number of occurrences of `flag` (all of them are removed).
        """
        self.register_usage(flag, desc)
        count, tokens = scanner.match_count(flag, self._tokens)
        self._consumed(flag, tokens)
        return count

    def is_present(self, flag, desc, /):
        """
        whether `flag` appears exactly once; more than once records an ambiguity.
        """
        self.register_usage(flag, desc)
        found, tokens, fault = scanner.is_present_once(flag, self._tokens)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return found

    def value(self, flag, desc, /, kind=str):
        """
        (value, found) for the single value following `flag`.
        """
        self.register_usage(flag, desc)
        value, found, tokens, fault = extractors.value_as(kind, flag, self._tokens)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return value, found

    def values(self, flag, desc, /, kind=str):
        """
        list of the values following every occurrence of `flag`; None on any fault.

        the flag and its values are removed even when one occurrence has no value.
        """
        self.register_usage(flag, desc)
        values, tokens, fault = extractors.values_as(kind, flag, self._tokens, consume=True)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return None if fault is not None else values

    def value_option(self, flag, options, desc, /):
        """
        (value, found) for the single value of `flag`, restricted to `options`.
        """
        self.register_usage(flag, desc)
        value, found, tokens, fault = extractors.value_option(flag, options, self._tokens)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return value, found

    def values_option(self, flag, options, desc, /):
        """
        list of the values of `flag`, each restricted to `options`; None on any fault.
        """
        self.register_usage(flag, desc)
        values, tokens, fault = extractors.values_option(flag, options, self._tokens, consume=True)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return None if fault is not None else values

    def next(self, name, desc, /, kind=str):
        """
        the next positional argument; a missing one records "missing argument: <name>".
        """
        self.register_usage(name, desc)
        value, tokens, fault = extractors.next_as(kind, name, self._tokens)
        self._consumed(name, tokens)
        self.push_fault(fault)
        return value

    def next_option(self, name, options, desc, /):
        self.register_usage(name, desc)
        value, tokens, fault = extractors.next_option(name, options, self._tokens)
        self._consumed(name, tokens)
        self.push_fault(fault)
        return value

    def last(self, name, desc, /, kind=str):
        """
        the final positional argument: consumes it, then checks nothing is left.

        the value is converted only when the whole session is still fault free;
        otherwise the kind's zero is returned.
        """
        self.register_usage(name, desc)
        raw, tokens, fault = scanner.consume_next(name, self._tokens)
        self._consumed(name, tokens)
        self.push_fault(fault)
        self.done()
        if self.has_fault():
            return _zero(kind)
        value, fault = extractors.convert(kind, name, raw)
        self.push_fault(fault)
        return value

    def setting(self, flag, env, default, desc, /, kind=str):
        """
        flag value > environment variable > default, converted to `kind`.
        """
        self.register_usage(flag, desc)
        raw, source, tokens, fault = settings.locate_setting(flag, env, self._tokens, environ=self._environ)
        self._consumed(flag, tokens)
        if fault is not None:
            value = _zero(kind)
        elif source is settings.Source.DEFAULT:
            value = default
        else:
            value, fault = extractors.convert(kind, settings.source_name(source, flag, env), raw)
        if fault is not None:
            self.push_fault(combine(ArgumentFault(source.code), fault))
        return value

    def setting_is(self, flag, env, desc, /):
        """
        presence of `flag` > boolean environment variable > False.

        the environment is only read while the session is fault free.
        """
        self.register_usage(flag, desc)
        env = "" if self.has_fault() else env
        value, tokens, fault = settings.resolve_setting_is(env, flag, self._tokens, environ=self._environ)
        self._consumed(flag, tokens)
        self.push_fault(fault)
        return value

    def setting_option(self, flag, env, default, options, desc, /):
        """
        a string setting restricted to `options` (the default is checked as well).
        """
        self.register_usage(flag, desc)
        raw, source, tokens, fault = settings.locate_setting(flag, env, self._tokens, environ=self._environ)
        self._consumed(flag, tokens)
        value = ""
        if fault is None:
            value = raw if raw is not Unset else default
            if fault := extractors.check_option(settings.source_name(source, flag, env), value, options):
                value = ""
        if fault is not None:
            self.push_fault(combine(ArgumentFault(source.code), fault))
        return value

    def done(self):
        """
        record "unexpected argument: [...]" when tokens remain.
        """
        self.push_fault(scanner.assert_empty(self._tokens))

    def usage(self):
        """
        the usage text:

            <program>
            <description>

            Usage: <program> <name> ...

            <name>
            <description of name>
        """
        lines = [self._program, self._description, "", " ".join(["Usage:", self._program, *self._usage])]
        for name, desc in self._usage.items():
            lines.extend(("", name, desc))
        return "\n".join(lines)

    def report(self, /, **options):
        """
        surface the accumulated faults, if any (see argsift.faults.trigger).

        without shell=True the chain is raised; with it, the chain and the usage
        text are printed on stderr and the process exits with status 1.
        """
        if (fault := self.fault) is None:
            return
        trigger(fault, **{"prog": self._program, "usage": self.usage()} | options)


__all__ = (
    "Args",
    "UNDEFINED_PROGRAM",
)
