"""
Argsift internal helpers.

- Unset: sentinel for "no value", used where None or an empty mapping would be
  a meaningful value (the `environ` argument, a setting with no raw value).
- coalesce(value, default): swap Unset for a default, keep everything else.
- rename(...): give the generated per-type functions their public names.
"""
import builtins
from typing import final


@final
class UnsetType:
    """
    type of the Unset sentinel; falsy, sealed, a single instance per process.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """
    return `object`, or `default` when `object` is Unset.

    - coalesce("f", "c")   -> "f"
    - coalesce(Unset, "c") -> "c"
    - coalesce({}, None)   -> {}
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    set __name__ and __qualname__ of a callable.

    - rename(function, "extract_value_int64") -> function
    - @rename("extract_value_int64")          -> decorator
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("@rename() argument must be a string")
        return lambda callable: rename(callable, name)
    if len(parameters) != 2:
        raise TypeError("rename() takes 1 to 2 arguments but %d were given" % len(parameters))

    callable, name = parameters
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    callable.__name__ = callable.__qualname__ = name
    return callable


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "UnsetType",
    "Unset",
)
