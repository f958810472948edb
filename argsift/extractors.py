"""
Argsift typed extractors.

A thin compositional layer over the scanner: it runs the matching scan, then
feeds the raw string(s) through the numeric parser. It adds no matching logic
of its own, only conversion and fault composition.

Generic entry points (kind is `str` or a numeric type / type name)
- value_as(kind, flag, tokens)   -> (value, found, tokens, fault)
- values_as(kind, flag, tokens)  -> (values, tokens, fault)
- next_as(kind, name, tokens)    -> (value, tokens, fault)
- last_as(kind, name, tokens)    -> (value, fault)

Named variants for every numeric type are generated at import time:
extract_value_int64, extract_values_uint8, consume_next_float32,
consume_last_int, ... (see __all__).

Option choices
- check_option(name, value, options) -> fault
- value_option / values_option / next_option / last_option restrict strings
  to a fixed set.

Conversion rules
- faults name the argument by its flag text (positional: by its name).
- single value: a failed conversion turns found into False and keeps the
  parser's deterministic value (bound on overflow, zero on bad syntax).
- multiple values: every value is converted even after a failure, failed slots
  hold the type's zero, and every fault is combined in order.
"""
from .faults import FaultCode, ArgumentFault, FaultChain, combine
from .numeric import TYPES, resolve
from .scanner import extract_value, extract_values, consume_next, consume_last
from .utils import rename


def _converter(kind):
    if kind is str:
        return None
    return resolve(kind)


def value_as(kind, flag, tokens, /):
    """
    extract the single value of `flag` and convert it to `kind`.
    """
    converter = _converter(kind)
    raw, found, cleaned, fault = extract_value(flag, tokens)
    if converter is None:
        return raw, found, cleaned, fault

    value = converter.zero
    if fault is None and found:
        value, fault = converter.parse(str(flag), raw)
        if fault is not None:
            found = False
    return value, found, cleaned, fault


def values_as(kind, flag, tokens, /, *, consume=False):
    """
    extract every value of `flag` and convert each one to `kind`.

    `consume` is handed to extract_values().
    """
    converter = _converter(kind)
    raws, cleaned, fault = extract_values(flag, tokens, consume=consume)
    if converter is None or fault is not None:
        return raws, cleaned, fault

    values = [converter.zero] * len(raws)
    faults = []
    for index, raw in enumerate(raws):
        value, error = converter.parse(str(flag), raw)
        if error is None:
            values[index] = value
        else:
            faults.append(error)
    return values, cleaned, combine(*faults)


def next_as(kind, name, tokens, /):
    """
    consume the next positional argument and convert it to `kind`.

    the token is consumed even when its conversion fails.
    """
    converter = _converter(kind)
    raw, cleaned, fault = consume_next(name, tokens)
    if converter is None:
        return raw, cleaned, fault
    if fault is not None:
        return converter.zero, cleaned, fault
    value, fault = converter.parse(str(name), raw)
    return value, cleaned, fault


def last_as(kind, name, tokens, /):
    """
    consume the only remaining positional argument and convert it to `kind`.
    """
    converter = _converter(kind)
    raw, fault = consume_last(name, tokens)
    if converter is None:
        return raw, fault
    if fault is not None:
        return converter.zero, fault
    return converter.parse(str(name), raw)


def convert(kind, name, raw, /):
    """
    convert one raw string to `kind`, naming the argument `name` in faults.

    `str` passes the raw string through unchanged.
    """
    if (converter := _converter(kind)) is None:
        return raw, None
    return converter.parse(str(name), raw)


def check_option(name, value, options, /):
    """
    return None when `value` is one of `options`, else
    "invalid option: '<value>' (<name> must be one of [<options>])".
    """
    options = tuple(options)
    if value in options:
        return None
    return FaultChain([ArgumentFault(
        FaultCode.INVALID_OPTION,
        detail=f"'{value}' ({name} must be one of [{' '.join(options)}])",
    )])


def value_option(flag, options, tokens, /):
    """
    extract the single value of `flag`, which must be one of `options`.

    an invalid choice clears found and the value, like a failed conversion.
    """
    raw, found, cleaned, fault = extract_value(flag, tokens)
    if fault is None and found and (fault := check_option(str(flag), raw, options)):
        return "", False, cleaned, fault
    return raw, found, cleaned, fault


def values_option(flag, options, tokens, /, *, consume=False):
    """
    extract every value of `flag`; each one must be one of `options`.

    every value is checked, invalid slots hold "" and every fault is combined
    in order, as values_as() does for conversions.
    """
    options = tuple(options)
    raws, cleaned, fault = extract_values(flag, tokens, consume=consume)
    if fault is not None:
        return raws, cleaned, fault

    values = [""] * len(raws)
    faults = []
    for index, raw in enumerate(raws):
        if (error := check_option(str(flag), raw, options)) is None:
            values[index] = raw
        else:
            faults.append(error)
    return values, cleaned, combine(*faults)


def next_option(name, options, tokens, /):
    """
    consume the next positional argument, which must be one of `options`.
    """
    raw, cleaned, fault = consume_next(name, tokens)
    if fault is None and (fault := check_option(str(name), raw, options)):
        return "", cleaned, fault
    return raw, cleaned, fault


def last_option(name, options, tokens, /):
    """
    consume the only remaining positional argument, which must be one of `options`.
    """
    raw, fault = consume_last(name, tokens)
    if fault is None and (fault := check_option(str(name), raw, options)):
        return "", fault
    return raw, fault


def _variant(prefix, template, kind):
    @rename(f"{prefix}_{kind.name}")
    def variant(subject, tokens, /):
        return template(kind, subject, tokens)

    variant.__doc__ = f"{template.__name__}() bound to {kind.name}."
    return variant


_TEMPLATES = {
    "extract_value": value_as,
    "extract_values": values_as,
    "consume_next": next_as,
    "consume_last": last_as,
}

# one named variant per (entry point, numeric type), e.g. extract_value_int64
_VARIANTS = {
    f"{prefix}_{kind.name}": _variant(prefix, template, kind)
    for prefix, template in _TEMPLATES.items()
    for kind in TYPES.values()
}
globals().update(_VARIANTS)


__all__ = (
    "value_as",
    "values_as",
    "next_as",
    "last_as",
    "convert",
    "check_option",
    "value_option",
    "values_option",
    "next_option",
    "last_option",
) + tuple(_VARIANTS)
