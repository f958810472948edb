"""
Argsift numeric literal parser.

Overview
- NumericType: a sealed descriptor for one target type (name, family, width, fault code).
- The twelve supported types are module constants (FLOAT64 ... UINT) and are
  registered by name in TYPES; resolve() accepts either form.
- parse(kind, name, token) -> (value, fault), plus one entry point per type
  (parse_float64, parse_int8, ...).

Integer literals
- Base detection runs on the raw token before any conversion:
  • "0b…", "0o…", "0x…" (any case, token longer than two characters) → base 2/8/16, prefix stripped.
  • any other token starting with "0" → base 8, the zero stripped ("0" alone stays "0").
  • everything else → base 10.
- Signed types take one optional leading sign after base detection, so "-0x1f" is
  a syntax error while "-31" is fine. Unsigned types take no sign at all.
- Digits must all belong to the detected base; whitespace and underscores are rejected.

Float literals
- Decimal literals with optional exponent, "inf"/"infinity"/"nan" (any case,
  optional sign) and hex literals with a binary exponent ("0x1.8p3").
- float32 values are rounded to single precision.

Failures
- A failure is reported as ArgumentFault(INVALID_<TYPE>, SYNTAX | RANGE) with
  the detail "<name>: '<token>'" (the token as given, prefix included).
- The returned value is always deterministic: the type's zero on a syntax error,
  the bound in the overflow direction on a range error (±inf for floats).
"""
import math
import re
import struct
from types import MappingProxyType
from typing import final

from .faults import FaultCode, ArgumentFault, FaultChain
from .utils import rename

_FLOAT = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)", re.IGNORECASE)
_HEXFLOAT = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_DIGITS = MappingProxyType({
    2: "[01]+",
    8: "[0-7]+",
    10: "[0-9]+",
    16: "[0-9a-fA-F]+",
})
_PREFIXES = MappingProxyType({
    "0b": 2,
    "0o": 8,
    "0x": 16,
})


def detect_base(token, /):
    """
    split an integer literal into (digits, base).

    examples
    - "0x1F"  -> ("1F", 16)
    - "0b101" -> ("101", 2)
    - "017"   -> ("17", 8)
    - "0"     -> ("0", 8)
    - "-12"   -> ("-12", 10)
    """
    if len(token) > 2 and token[0] == "0" and (base := _PREFIXES.get(token[:2].lower())):
        return token[2:], base
    if token[:1] == "0":
        return token[1:] or "0", 8
    return token, 10


@final
class NumericType:
    """
    sealed descriptor of a numeric target type.

    attributes
    - name: "int64", "uint8", "float32", ...
    - family: "int", "uint" or "float"
    - bits: storage width (the native word types use 64)
    - code: the INVALID_<TYPE> fault code wrapping syntax/range failures
    - zero: 0 or 0.0
    - bounds: (minimum, maximum) for integer types, None for floats
    """
    __slots__ = ("name", "family", "bits", "code")

    def __init__(self, name, family, bits, code, /):
        self.name = name
        self.family = family
        self.bits = bits
        self.code = code

    def __init_subclass__(cls, **options):
        raise TypeError("type 'NumericType' is not an acceptable base type")

    def __repr__(self):
        return f"numeric-type({self.name})"

    @property
    def zero(self):
        return 0.0 if self.family == "float" else 0

    @property
    def bounds(self):
        match self.family:
            case "int":
                return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
            case "uint":
                return 0, (1 << self.bits) - 1
        return None

    def fault(self, kind, name, token, /):
        return FaultChain([ArgumentFault(self.code, kind, detail=f"{name}: '{token}'")])

    def parse(self, name, token, /):
        """
        convert one token, returning (value, fault); fault is None on success.
        """
        if not isinstance(token, str):
            raise TypeError(f"{self.name} parser argument must be a string")
        if self.family == "float":
            return self._parse_float(name, token)
        return self._parse_integer(name, token)

    def _parse_integer(self, name, token):
        digits, base = detect_base(token)
        sign = r"([+-]?)" if self.family == "int" else r"()"
        if not (match := re.fullmatch(sign + "(" + _DIGITS[base] + ")", digits)):
            return self.zero, self.fault(FaultCode.SYNTAX, name, token)

        value = int(match.group(2), base)
        if match.group(1) == "-":
            value = -value

        lower, upper = self.bounds
        if value > upper:
            return upper, self.fault(FaultCode.RANGE, name, token)
        if value < lower:
            return lower, self.fault(FaultCode.RANGE, name, token)
        return value, None

    def _parse_float(self, name, token):
        if _FLOAT.fullmatch(token):
            value = float(token)
            literal = not any(char.isdigit() for char in token)
        elif _HEXFLOAT.fullmatch(token):
            try:
                value = float.fromhex(token)
            except OverflowError:
                return math.copysign(math.inf, -1.0 if token.startswith("-") else 1.0), \
                    self.fault(FaultCode.RANGE, name, token)
            literal = False
        else:
            return self.zero, self.fault(FaultCode.SYNTAX, name, token)

        # inf/nan spelled out are values, not overflows
        if math.isinf(value) and not literal:
            return value, self.fault(FaultCode.RANGE, name, token)

        if self.bits == 32 and not math.isnan(value):
            try:
                value = struct.unpack("<f", struct.pack("<f", value))[0]
            except OverflowError:
                return math.copysign(math.inf, value), self.fault(FaultCode.RANGE, name, token)
        return value, None


FLOAT64 = NumericType("float64", "float", 64, FaultCode.INVALID_FLOAT64)
FLOAT32 = NumericType("float32", "float", 32, FaultCode.INVALID_FLOAT32)
INT64 = NumericType("int64", "int", 64, FaultCode.INVALID_INT64)
INT32 = NumericType("int32", "int", 32, FaultCode.INVALID_INT32)
INT16 = NumericType("int16", "int", 16, FaultCode.INVALID_INT16)
INT8 = NumericType("int8", "int", 8, FaultCode.INVALID_INT8)
INT = NumericType("int", "int", 64, FaultCode.INVALID_INT)
UINT64 = NumericType("uint64", "uint", 64, FaultCode.INVALID_UINT64)
UINT32 = NumericType("uint32", "uint", 32, FaultCode.INVALID_UINT32)
UINT16 = NumericType("uint16", "uint", 16, FaultCode.INVALID_UINT16)
UINT8 = NumericType("uint8", "uint", 8, FaultCode.INVALID_UINT8)
UINT = NumericType("uint", "uint", 64, FaultCode.INVALID_UINT)

TYPES = MappingProxyType({
    kind.name: kind
    for kind in (FLOAT64, FLOAT32, INT64, INT32, INT16, INT8, INT, UINT64, UINT32, UINT16, UINT8, UINT)
})


def resolve(kind, /):
    """
    return the NumericType for a descriptor or a registered name.
    """
    if isinstance(kind, NumericType):
        return kind
    if not isinstance(kind, str):
        raise TypeError("resolve() argument must be a numeric type or its name")
    try:
        return TYPES[kind]
    except KeyError:
        raise ValueError(f"unknown numeric type {kind!r}") from None


def parse(kind, name, token, /):
    """
    parse `token` as `kind`, naming the offending argument `name` in faults.

    returns (value, fault) where fault is None or a FaultChain, e.g.
    - parse("int8", "-n", "0x7f")  -> (127, None)
    - parse("int8", "-n", "0x80")  -> (127, invalid int8: range: -n: '0x80')
    - parse("uint8", "-n", "-1")   -> (0, invalid uint8: syntax: -n: '-1')
    """
    return resolve(kind).parse(name, token)


def _parser(kind):
    @rename("parse_" + kind.name)
    def parser(name, token, /):
        return kind.parse(name, token)

    parser.__doc__ = f"parse a token as {kind.name}, returning (value, fault)."
    return parser


parse_float64 = _parser(FLOAT64)
parse_float32 = _parser(FLOAT32)
parse_int64 = _parser(INT64)
parse_int32 = _parser(INT32)
parse_int16 = _parser(INT16)
parse_int8 = _parser(INT8)
parse_int = _parser(INT)
parse_uint64 = _parser(UINT64)
parse_uint32 = _parser(UINT32)
parse_uint16 = _parser(UINT16)
parse_uint8 = _parser(UINT8)
parse_uint = _parser(UINT)


__all__ = (
    "NumericType",
    "FLOAT64",
    "FLOAT32",
    "INT64",
    "INT32",
    "INT16",
    "INT8",
    "INT",
    "UINT64",
    "UINT32",
    "UINT16",
    "UINT8",
    "UINT",
    "TYPES",
    "resolve",
    "detect_base",
    "parse",
    "parse_float64",
    "parse_float32",
    "parse_int64",
    "parse_int32",
    "parse_int16",
    "parse_int8",
    "parse_int",
    "parse_uint64",
    "parse_uint32",
    "parse_uint16",
    "parse_uint8",
    "parse_uint",
)
