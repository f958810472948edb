"""
Argsift token scanner.

Every function here is pure: it takes a flag (or a positional name) and a token
list, and returns its result together with a *new* list holding the tokens it
did not consume, in their original order. Faults are returned, never raised;
the fault slot is None on success and a FaultChain otherwise.

Flag scans
- match_count(flag, tokens)      -> (count, tokens)
- is_present_once(flag, tokens)  -> (found, tokens, fault)
- extract_value(flag, tokens)    -> (value, found, tokens, fault)
- extract_values(flag, tokens)   -> (values, tokens, fault)

Positional consumption
- consume_next(name, tokens)     -> (value, tokens, fault)
- consume_last(name, tokens)     -> (value, fault)
- assert_empty(tokens)           -> fault

Scans never stop early: a single pass reports every missing value and every
repeated single-value flag, in the order they appear.
"""
from .faults import FaultCode, ArgumentFault, FaultChain, combine
from .flags import Flag


def _ensure_tokens(tokens):
    if isinstance(tokens, str):
        raise TypeError("token list must be a sequence of strings, not a string")
    return list(tokens)


def match_count(flag, tokens, /):
    """
    count (and remove) every occurrence of `flag`.

    - match_count("-v", ["-v", "arg1", "-v", "arg2", "-v"]) -> (3, ["arg1", "arg2"])
    """
    flag = Flag.of(flag)
    count = 0
    cleaned = []
    for token in _ensure_tokens(tokens):
        if flag.matches(token):
            count += 1
        else:
            cleaned.append(token)
    return count, cleaned


def is_present_once(flag, tokens, /):
    """
    report whether `flag` appears exactly once.

    every occurrence is removed even when the flag is ambiguous (more than once),
    in which case found is False and the fault reads
    "ambiguous argument: '<flag>' found <n> times".
    """
    flag = Flag.of(flag)
    count, cleaned = match_count(flag, tokens)
    if count > 1:
        return False, cleaned, FaultChain([
            ArgumentFault(FaultCode.AMBIGUOUS, detail=f"'{flag}' found {count} times"),
        ])
    return count == 1, cleaned, None


def extract_value(flag, tokens, /):
    """
    extract the single value following `flag`.

    walk
    - a matching token consumes itself and the token after it (whatever it is).
    - a matching last token has no value: "missing argument: '<flag> value'".
    - a second (third, ...) occurrence keeps the first value and records
      "ambiguous argument: '<flag> <new>' already set to: '<first>'".

    returns
    - (value, found, cleaned, None) on success (("", False, tokens, None) when absent).
    - ("", False, cleaned, chain) when anything went wrong; the chain lists every
      fault in discovery order and the cleaned list still has the matches removed.
    """
    flag = Flag.of(flag)
    tokens = _ensure_tokens(tokens)
    found = False
    value = ""
    cleaned = []
    faults = []

    index = 0
    while index < len(tokens):
        if not flag.matches(tokens[index]):
            cleaned.append(tokens[index])
        elif index + 1 >= len(tokens):
            faults.append(ArgumentFault(FaultCode.MISSING, detail=f"'{flag} value'"))
        else:
            index += 1
            if found:
                faults.append(ArgumentFault(
                    FaultCode.AMBIGUOUS,
                    detail=f"'{flag} {tokens[index]}' already set to: '{value}'",
                ))
            else:
                value = tokens[index]
                found = True
        index += 1

    if fault := combine(*faults):
        return "", False, cleaned, fault
    return value, found, cleaned, None


def extract_values(flag, tokens, /, *, consume=False):
    """
    extract the value following every occurrence of `flag`, in order.

    returns
    - (values, cleaned, None) on success; values is an empty list when absent.
    - (None, tokens, chain) when an occurrence has no value. Unlike
      extract_value(), nothing is consumed on failure: the token list comes
      back as given. With consume=True the cleaned list is returned instead,
      which is what a session needs to keep scanning after the fault.
    """
    flag = Flag.of(flag)
    tokens = _ensure_tokens(tokens)
    values = []
    cleaned = []
    faults = []

    index = 0
    while index < len(tokens):
        if not flag.matches(tokens[index]):
            cleaned.append(tokens[index])
        elif index + 1 >= len(tokens):
            faults.append(ArgumentFault(FaultCode.MISSING, detail=f"'{flag} value'"))
        else:
            index += 1
            values.append(tokens[index])
        index += 1

    if fault := combine(*faults):
        return None, cleaned if consume else tokens, fault
    return values, cleaned, None


def consume_next(name, tokens, /):
    """
    consume the first remaining token as the positional argument `name`.

    an empty list yields ("", [], "missing argument: <name>").
    """
    tokens = _ensure_tokens(tokens)
    if not tokens:
        return "", tokens, FaultChain([ArgumentFault(FaultCode.MISSING, detail=str(name))])
    return tokens[0], tokens[1:], None


def assert_empty(tokens, /):
    """
    return None when no tokens remain, else "unexpected argument: [<leftovers>]".
    """
    if tokens := _ensure_tokens(tokens):
        return FaultChain([ArgumentFault(FaultCode.UNEXPECTED, detail=f"[{' '.join(tokens)}]")])
    return None


def consume_last(name, tokens, /):
    """
    consume the only remaining token as the positional argument `name`.

    - consume_last("FILE", ["a"])       -> ("a", None)
    - consume_last("FILE", [])          -> ("", "missing argument: FILE")
    - consume_last("FILE", ["a", "b"])  -> ("", "unexpected argument: [b]")
    """
    value, cleaned, fault = consume_next(name, tokens)
    if fault is None:
        fault = assert_empty(cleaned)
    if fault is not None:
        return "", fault
    return value, None


__all__ = (
    "match_count",
    "is_present_once",
    "extract_value",
    "extract_values",
    "consume_next",
    "consume_last",
    "assert_empty",
)
