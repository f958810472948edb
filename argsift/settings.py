"""
Argsift settings resolver.

A setting is a value chosen from three tiers, highest precedence first:

    explicit flag value  >  environment variable  >  default

Entry points
- locate_setting(flag, env, tokens)                 -> (raw, source, tokens, fault)
- resolve_setting(default, env, flag, tokens)       -> (value, tokens, fault)
- resolve_setting_as(kind, default, env, flag, tokens)
- resolve_setting_<type>(default, env, flag, tokens) for every numeric type
- resolve_setting_is(env, flag, tokens)             -> (bool, tokens, fault)
- parse_bool(token)                                 -> bool
- resolve_setting_option(default, env, flag, options, tokens)

Rules
- the flag is scanned first; a scan fault (missing value, repeated flag) is
  returned straight away together with the token list exactly as given.
- an empty env name disables the environment tier; an unset variable is skipped.
- raw strings from the flag are converted naming the flag, those from the
  environment naming the variable. The default is already typed and is used as is.
- the environment lookup goes through `environ` (any mapping), os.environ
  unless told otherwise.
"""
import os
from enum import Enum

from .faults import FaultCode
from .extractors import check_option
from .flags import Flag
from .numeric import TYPES, resolve
from .scanner import extract_value, is_present_once
from .utils import Unset, coalesce, rename

_TRUTHS = frozenset(("", "t", "true", "y", "yes", "on", "1"))


class Source(Enum):
    """
    where a setting's raw value came from; `code` tags faults raised by that value.
    """
    FLAG = FaultCode.INVALID_FLAG
    ENV = FaultCode.INVALID_ENV
    DEFAULT = FaultCode.INVALID_DEFAULT

    @property
    def code(self):
        return self.value


def parse_bool(token, /):
    """
    read an environment flag: "", t, true, y, yes, on or 1 (any case) is True,
    anything else is False.
    """
    return token.lower() in _TRUTHS


def _lookup(env, environ):
    if not isinstance(env, str):
        raise TypeError("setting environment variable name must be a string")
    if not env:
        return Unset
    return coalesce(environ, os.environ).get(env, Unset)


def locate_setting(flag, env, tokens, /, *, environ=Unset):
    """
    pick the raw value of a setting without converting it.

    returns (raw, source, tokens, fault)
    - flag found:      (value, Source.FLAG, cleaned, None)
    - env var set:     (value, Source.ENV, cleaned, None)
    - neither:         (Unset, Source.DEFAULT, cleaned, None)
    - flag scan fault: ("", Source.FLAG, tokens as given, fault)
    """
    tokens = list(tokens)
    raw, found, cleaned, fault = extract_value(flag, tokens)
    if fault is not None:
        return "", Source.FLAG, tokens, fault
    if found:
        return raw, Source.FLAG, cleaned, None
    if (raw := _lookup(env, environ)) is not Unset:
        return raw, Source.ENV, cleaned, None
    return Unset, Source.DEFAULT, cleaned, None


def source_name(source, flag, env, /):
    """
    the name a fault uses for a value coming from `source`.
    """
    match source:
        case Source.FLAG:
            return str(flag)
        case Source.ENV:
            return env
    return "default"


def resolve_setting(default, env, flag, tokens, /, *, environ=Unset):
    """
    resolve a string setting.

    - resolve_setting("c", "", "-t", ["-t", "f"]) -> ("f", [], None)
    - resolve_setting("c", "", "-t", [])          -> ("c", [], None)
    """
    if not isinstance(default, str):
        raise TypeError("resolve_setting() default must be a string")
    raw, _, cleaned, fault = locate_setting(flag, env, tokens, environ=environ)
    if fault is not None:
        return "", cleaned, fault
    return coalesce(raw, default), cleaned, None


def resolve_setting_as(kind, default, env, flag, tokens, /, *, environ=Unset):
    """
    resolve a setting of type `kind` (`str` or a numeric type / type name).

    a conversion failure returns the parser's deterministic value with the fault.
    """
    if kind is str:
        return resolve_setting(default, env, flag, tokens, environ=environ)
    converter = resolve(kind)
    raw, source, cleaned, fault = locate_setting(flag, env, tokens, environ=environ)
    if fault is not None:
        return converter.zero, cleaned, fault
    if source is Source.DEFAULT:
        return default, cleaned, None
    value, fault = converter.parse(source_name(source, flag, env), raw)
    return value, cleaned, fault


def resolve_setting_is(env, flag, tokens, /, *, environ=Unset):
    """
    resolve a boolean setting: presence of `flag` > boolean env var > False.

    a repeated flag is ambiguous; its occurrences are still removed and the
    environment is not consulted. The environment value never faults.
    """
    found, cleaned, fault = is_present_once(Flag.of(flag), tokens)
    if fault is not None or found:
        return found, cleaned, fault
    if (raw := _lookup(env, environ)) is Unset:
        return False, cleaned, None
    return parse_bool(raw), cleaned, None


def resolve_setting_option(default, env, flag, options, tokens, /, *, environ=Unset):
    """
    resolve a string setting restricted to `options`; the default is checked too.
    """
    options = tuple(options)
    raw, source, cleaned, fault = locate_setting(flag, env, tokens, environ=environ)
    if fault is not None:
        return "", cleaned, fault
    value = coalesce(raw, default)
    if fault := check_option(source_name(source, flag, env), value, options):
        return "", cleaned, fault
    return value, cleaned, None


def _variant(kind):
    @rename("resolve_setting_" + kind.name)
    def variant(default, env, flag, tokens, /, *, environ=Unset):
        return resolve_setting_as(kind, default, env, flag, tokens, environ=environ)

    variant.__doc__ = f"resolve_setting_as() bound to {kind.name}."
    return variant


_VARIANTS = {"resolve_setting_" + kind.name: _variant(kind) for kind in TYPES.values()}
globals().update(_VARIANTS)


__all__ = (
    "Source",
    "parse_bool",
    "locate_setting",
    "source_name",
    "resolve_setting",
    "resolve_setting_as",
    "resolve_setting_is",
    "resolve_setting_option",
) + tuple(_VARIANTS)
