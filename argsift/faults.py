"""
Argsift faults (error records, chains and rendering).

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue,
  each carrying the short label used in messages ("missing argument", "range", ...).
- ArgumentFault: one error record, an ordered tuple of codes plus an optional detail.
- FaultChain: the composite error of one scan (or of a whole parsing session),
  keeping every record in discovery order.
- combine(): merge None / records / chains into one chain (or None when empty).
- trigger(): central entry point to surface a chain (respecting shell/deferred/fancy/colorful).

Message contract
- A record renders as its labels followed by its detail, joined with ": ".
    ArgumentFault(FaultCode.INVALID_INT64, FaultCode.SYNTAX, detail="-n: 'abc'")
    -> "invalid int64: syntax: -n: 'abc'"
- A chain renders as its records joined with ": ", oldest first.

Querying
- `FaultCode.MISSING in chain` tells whether any record carries the code.
  Consumers match on codes, never on message text.

Integration
- Extraction functions return faults alongside their results and never raise them.
- The orchestrator (argsift.args.Args) accumulates them and calls trigger(chain, **ctx).
- In non-shell mode the chain is raised; in shell mode it is rendered via rich.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - structural / flag values (211xx)
      • AMBIGUOUS, MISSING, UNEXPECTED, NO_ARGS
    - conversion classes (221xx)
      • SYNTAX, RANGE
    - conversion targets (223xx)
      • INVALID_<TYPE> for every numeric type, INVALID_OPTION
    - setting sources (231xx)
      • INVALID_FLAG, INVALID_ENV, INVALID_DEFAULT

    every member carries a `label`, the text used when a record is rendered.
    """

    def __new__(cls, value, label):
        self = int.__new__(cls, value)
        self._value_ = value
        self.label = label
        return self

    # --- structural / flag value errors (211xx) ---
    AMBIGUOUS       = 21101, "ambiguous argument"
    MISSING         = 21102, "missing argument"
    UNEXPECTED      = 21103, "unexpected argument"
    NO_ARGS         = 21104, "no program arguments"

    # --- conversion classes (221xx) ---
    SYNTAX          = 22101, "syntax"
    RANGE           = 22102, "range"

    # --- conversion targets (223xx) ---
    INVALID_FLOAT64 = 22301, "invalid float64"
    INVALID_FLOAT32 = 22302, "invalid float32"
    INVALID_INT64   = 22303, "invalid int64"
    INVALID_INT32   = 22304, "invalid int32"
    INVALID_INT16   = 22305, "invalid int16"
    INVALID_INT8    = 22306, "invalid int8"
    INVALID_INT     = 22307, "invalid int"
    INVALID_UINT64  = 22308, "invalid uint64"
    INVALID_UINT32  = 22309, "invalid uint32"
    INVALID_UINT16  = 22310, "invalid uint16"
    INVALID_UINT8   = 22311, "invalid uint8"
    INVALID_UINT    = 22312, "invalid uint"
    INVALID_OPTION  = 22314, "invalid option"

    # --- setting sources (231xx) ---
    INVALID_FLAG    = 23101, "invalid flag"
    INVALID_ENV     = 23102, "invalid environment variable"
    INVALID_DEFAULT = 23103, "invalid default"

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles():
    return defaultdict(str, {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "title": "bold #FF4DA6",  # friendly pinky title
        "code": "bold #00E5FF",  # neon cyan fault code
        "label": "#FF4DA6",  # fault labels
        "detail": "#C8C8D0",  # soft light gray detail
        "usage": "italic #9CE19C",  # gentle green usage text
    } | getattr(__import__("__main__"), "__styles__", {}))


class ArgumentFault(Exception):
    """
    one error record: an ordered, non-empty tuple of codes and an optional detail.

    the codes read from the outermost tag to the innermost one, e.g. a failed
    conversion is (INVALID_INT64, SYNTAX) or (INVALID_INT64, RANGE).
    """

    def __init__(self, *codes, detail=""):
        if not codes:
            raise TypeError("ArgumentFault() requires at least one fault code")
        for code in codes:
            if not isinstance(code, FaultCode):
                raise TypeError("ArgumentFault() codes must be fault-codes")
        if not isinstance(detail, str):
            raise TypeError("ArgumentFault() 'detail' must be a string")
        super().__init__(*codes)
        self.codes = codes
        self.detail = detail

    def __contains__(self, code, /):
        return code in self.codes

    def __str__(self):
        return ": ".join([code.label for code in self.codes] + ([self.detail] if self.detail else []))

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __rich__(self):
        styles = _styles()
        labels = Text(": ").join(Text(code.label, styles["label"]) for code in self.codes)
        if not self.detail:
            return labels
        return Text.assemble(labels, ": ", Text(self.detail, styles["detail"]))


class FaultChain(Exception):
    """
    composite error holding every fault record of a scan, in discovery order.

    contract
    - never empty: an operation without faults returns None instead of a chain.
    - str(chain) joins each record's message with ": ".
    - `code in chain` is true when any record carries the code.
    - options (prog, shell, fancy, colorful, deferred, usage) only affect rendering
      and triggering, never the message.
    """

    def __init__(self, faults, /, **options):
        faults = tuple(faults)
        if not faults:
            raise ValueError("FaultChain() requires at least one fault")
        for fault in faults:
            if not isinstance(fault, ArgumentFault):
                raise TypeError("FaultChain() items must be argument faults")
        super().__init__(*faults)
        self.faults = faults
        self.options = MappingProxyType(options)

    @property
    def codes(self):
        return tuple(code for fault in self.faults for code in fault.codes)

    def __contains__(self, code, /):
        return any(code in fault for fault in self.faults)

    def __iter__(self):
        return iter(self.faults)

    def __len__(self):
        return len(self.faults)

    def __str__(self):
        return ": ".join(map(str, self.faults))

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __rich__(self):
        main = __import__("__main__")
        styles = _styles()
        colorful = self.options.get("colorful", True)

        def styler(style):
            return styles[style] if colorful else ""

        prog = Text(str(self.options.get("prog", getattr(main, "__prog__", "argsift"))), styler("prog-name"))
        header = Text.assemble("[ ", prog, " — ", Text("error", styler("title")), " ]")

        lines = []
        for fault in self.faults:
            body = fault.__rich__() if colorful else Text(str(fault))
            lines.append(Text.assemble(" ", Text(fault.codes[0].normalize(), styler("code")), " ", body))

        if usage := self.options.get("usage"):
            lines.append(Text(""))
            lines.append(Text(usage, styler("usage")))

        if self.options.get("fancy", False):
            return Panel(Group(*lines), title=header, title_align="left")
        return Group(header, *lines)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.faults, **{**self.options, **overrides})


def combine(*parts):
    """
    merge fault records and chains into one chain, preserving order.

    - None parts are skipped, records are appended, chains are flattened.
    - returns None when nothing remains, so `combine()` is the empty chain.
    """
    faults = []
    for part in parts:
        match part:
            case None:
                continue
            case FaultChain():
                faults.extend(part.faults)
            case ArgumentFault():
                faults.append(part)
            case _:
                raise TypeError("combine() arguments must be faults, fault chains or None")
    return FaultChain(faults) if faults else None


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see FaultChain).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the chain is raised.

    typical options
    - prog, shell, fancy, colorful, deferred, usage.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentFault",
    "FaultChain",
    "combine",
    "trigger",
)
