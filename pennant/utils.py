"""
Pennant utilities shared by the option model, the faults and the session.

- Unset: "not provided" marker, distinct from None and "" (falsy, prints as Unset).
- coalesce(value, default): swap Unset for a default, keep every other value.
- rename("name"): decorator giving generated functions a stable name for tracebacks.
- StorageGuard / view("field"): descriptor storage written once while building
  and read back through read-only properties.
"""
from contextlib import contextmanager
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker; there is exactly one instance.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    coalesce(Unset, "x") -> "x"; coalesce(None, "x") -> None.
    """
    return default if object is Unset else object


def rename(name, /):
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


class StorageGuard:
    """
    Mixin for objects whose state is fixed at construction.

    Backing fields are named with a leading '-' so they can never collide with
    (or be reached as) ordinary attributes:
    - reading one directly raises AttributeError;
    - writing one is only allowed inside the build block:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
    """
    __slots__ = ("__building",)

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if name.startswith("-"):
            raise AttributeError("descriptor storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if name.startswith("-") and not self.__building:
            raise AttributeError("descriptor storage is read-only")
        object.__setattr__(self, name, value)

    def __delattr__(self, name, /):
        if name.startswith("-"):
            raise AttributeError("descriptor storage is read-only")
        object.__delattr__(self, name)


def view(name, /):
    """
    Read-only property over the '-name' backing field of a StorageGuard.
    """

    @rename(name)
    def getter(self):
        return object.__getattribute__(self, "-" + name)

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "StorageGuard",
    "view",
)
