r"""
Pennant option model: descriptors and the registry that owns them.

Overview
- Arity: how many values an option takes (none, one, or repeatable).
- Occur: declared requiredness (required or optional).
- Opt: immutable description of one named option (short/long names, display
  metadata, arity, requiredness, default).
- Registry: ordered, append-only collection of Opt keyed by long name; duplicate
  long names are ignored with a DuplicateOptionWarning.

Metadata (sanitized on construction)
- long_name: required, non-empty, r"[^\W_][\w-]*" (the canonical key).
- short_name: "" (none) or a single letter/digit.
- descr / hint: display-only strings ("" when not given).
- default: None or a string; flags cannot carry one.

Effective requiredness
- a default always makes an option optional, whatever was declared.
- flags are always resolvable (absence reads as "false").
- multi-valued options never fail on absence; zero occurrences simply yield
  no values, so their declared requiredness carries no weight during parsing.

Quick example:
    >>> registry = Registry()
    >>> registry.register(Opt("help", "h", "Print the usage menu", arity=Arity.NO_VALUE))
    True
    >>> registry.register(Opt("iter", "i", "Iterations", "TIMES", occur=Occur.REQUIRED))
    True
    >>> [opt.long_name for opt in registry.describe()]
    ['help', 'iter']
"""
import enum
import logging
import re
from types import MappingProxyType

from .faults import DuplicateOptionWarning, trigger
from .tokenizer import Shape
from .utils import *

logger = logging.getLogger(__name__)


class Arity(enum.Enum):
    """
    number of values an option carries.
    """
    NO_VALUE = "no-value"
    SINGLE_VALUE = "single-value"
    MULTI_VALUE = "multi-value"


class Occur(enum.Enum):
    """
    declared requiredness of an option.
    """
    REQUIRED = "required"
    OPTIONAL = "optional"


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short and long names in place.

    Raises
    - TypeError: when a name is not a string.
    - ValueError: when the long name is empty or malformed, or the short name
      is anything but "" or one letter/digit.
    """
    if not isinstance(long_name := metadata["long_name"], str):
        raise TypeError("%s 'long_name' must be a string" % cls.__typename__)
    elif not (long_name := long_name.strip()):
        raise ValueError("%s 'long_name' cannot be empty" % cls.__typename__)
    elif not re.fullmatch(r"[^\W_][\w-]*", long_name):
        raise ValueError("%s 'long_name' must be a valid option name (e.g., 'log-file')" % cls.__typename__)
    metadata["long_name"] = long_name

    if not isinstance(short_name := coalesce(metadata["short_name"], ""), str):
        raise TypeError("%s 'short_name' must be a string" % cls.__typename__)
    elif short_name and not re.fullmatch(r"[^\W_]", short_name):
        raise ValueError("%s 'short_name' must be a single letter or digit" % cls.__typename__)
    metadata["short_name"] = short_name


def _sanitize_display(cls, metadata, /):
    """
    Internal: normalize 'descr' and 'hint' to strings ("" when Unset).
    """
    for field in ("descr", "hint"):
        if not isinstance(value := coalesce(metadata[field], ""), str):
            raise TypeError("%s '%s' must be a string" % (cls.__typename__, field))
        metadata[field] = value.strip()


def _sanitize_value_policy(cls, metadata, /):
    """
    Internal: validate arity, requiredness and default together.

    Rules
    - arity must be an Arity and occur an Occur.
    - default must be None or a string, and is forbidden on flags.
    - flags carry no value hint.
    """
    if not isinstance(arity := metadata["arity"], Arity):
        raise TypeError("%s 'arity' must be an Arity" % cls.__typename__)
    if not isinstance(metadata["occur"], Occur):
        raise TypeError("%s 'occur' must be an Occur" % cls.__typename__)

    if not isinstance(default := metadata["default"], str | None):
        raise TypeError("%s 'default' must be a string" % cls.__typename__)
    if arity is Arity.NO_VALUE:
        if default is not None:
            raise ValueError("%s without a value cannot have a 'default'" % cls.__typename__)
        if metadata["hint"]:
            raise ValueError("%s without a value cannot have a 'hint'" % cls.__typename__)


class DescriptorType(type):
    """
    Metaclass that exposes '__fields__' as read-only properties and provides a
    stable __rich_repr__ for pretty printers.

    Conventions
    - __typename__ is derived from the class name and used in messages.
    - every name in __fields__ is backed by a '-'-prefixed slot written once
      during construction (see StorageGuard) and read through view().
    """

    def __new__(cls, name, bases, namespace, **options):
        namespace = namespace | {
            "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
        } | {
            field: view(field) for field in namespace.get("__fields__", ())
        }
        self = super().__new__(cls, name, bases, namespace, **options)

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in type(self).__fields__:
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


class Opt(StorageGuard, metaclass=DescriptorType):
    """
    Immutable description of one named option.

    Opt records identity (short/long names), display metadata (descr/hint),
    arity, declared requiredness and an optional default. It is built once,
    locked, and then owned by a Registry.

    Properties
    - The names listed in __fields__ are exposed as read-only attributes.
    - required: effective requiredness used by the resolution engine.
    """

    __fields__ = (
        "long_name",
        "short_name",
        "descr",
        "hint",
        "arity",
        "occur",
        "default",
    )

    def __new__(
            cls,
            long_name,
            short_name=Unset,
            descr=Unset,
            hint=Unset,
            /,
            *,
            arity=Arity.SINGLE_VALUE,
            occur=Occur.OPTIONAL,
            default=None
    ):
        """
        Construct an option descriptor.

        Parameters
        - long_name: str
          Canonical key, e.g. "log-file" for a --log-file option.
        - short_name: Unset | str
          e.g. "l" for a -l option; omitted or "" for none.
        - descr: Unset | str
          Description for the usage message.
        - hint: Unset | str
          Placeholder for the value in the usage message, e.g. "FILE".
        - arity: Arity
          NO_VALUE (flag), SINGLE_VALUE or MULTI_VALUE.
        - occur: Occur
          Declared requiredness; overridden to optional when a default exists.
        - default: None | str
          Value used when the option is not given (value-bearing options only).
        """
        metadata = {
            "long_name": long_name,
            "short_name": short_name,
            "descr": descr,
            "hint": hint,
            "arity": arity,
            "occur": occur,
            "default": default,
        }
        _sanitize_names(cls, metadata)
        _sanitize_display(cls, metadata)
        _sanitize_value_policy(cls, metadata)

        # A default always downgrades the declared requiredness.
        if metadata["default"] is not None:
            metadata["occur"] = Occur.OPTIONAL

        with super().__new__(cls) as self:
            for field, value in metadata.items():
                setattr(self, "-" + field, value)
        return self

    @property
    def name(self):
        """
        Canonical key of this option (its long name).
        """
        return self.long_name

    @property
    def takes_value(self):
        return self.arity is not Arity.NO_VALUE

    @property
    def multi(self):
        return self.arity is Arity.MULTI_VALUE

    @property
    def required(self):
        """
        Whether parsing fails when this option resolves to nothing.

        Only single-valued options declared REQUIRED without a default qualify.
        """
        return self.arity is Arity.SINGLE_VALUE and self.occur is Occur.REQUIRED

    def shape(self):
        """
        Primitive form handed to the tokenizer adapter.
        """
        return Shape(self.short_name, self.long_name, self.takes_value, self.multi, self.required)

    def __eq__(self, other):
        if not isinstance(other, Opt):
            return NotImplemented
        return all(getattr(self, field) == getattr(other, field) for field in type(self).__fields__)

    def __hash__(self):
        return hash(tuple(getattr(self, field) for field in type(self).__fields__))

    def __repr__(self):
        if self.short_name:
            return "option '-%s --%s'" % (self.short_name, self.long_name)
        return "option '--%s'" % self.long_name


class Registry:
    """
    Ordered, append-only collection of option descriptors keyed by long name.

    Registration order is preserved for usage display and drives the
    resolution order. Registering a long name twice keeps the first descriptor
    and emits a DuplicateOptionWarning; existing state is never altered.
    """

    def __init__(self):
        self._opts = {}

    @property
    def opts(self):
        """
        Read-only mapping of long name to descriptor.
        """
        return MappingProxyType(self._opts)

    def register(self, opt, /, *, stacklevel=1):
        """
        Add a descriptor unless its long name is already taken.

        stacklevel follows warnings.warn: 1 blames the caller of register(),
        2 the caller of that caller, and so on.

        Returns
        - True when the descriptor was added, False when it was ignored.
        """
        if not isinstance(opt, Opt):
            raise TypeError("register() argument must be an Opt")
        if opt.long_name in self._opts:
            trigger(DuplicateOptionWarning(
                "already registered as %r; ignoring %r" % (self._opts[opt.long_name], opt),
                scope=opt.long_name,
                existing=self._opts[opt.long_name],
                duplicate=opt,
                stacklevel=stacklevel + 3,
            ))
            return False
        logger.debug("Registering %r", opt)
        self._opts[opt.long_name] = opt
        return True

    def describe(self):
        """
        Descriptors in registration order.
        """
        return tuple(self._opts.values())

    def shapes(self):
        """
        Descriptors in registration order, converted to tokenizer shapes.
        """
        return tuple(opt.shape() for opt in self._opts.values())

    def __getitem__(self, long_name, /):
        return self._opts[long_name]

    def __contains__(self, long_name, /):
        return long_name in self._opts

    def __iter__(self):
        return iter(tuple(self._opts.values()))

    def __len__(self):
        return len(self._opts)

    def __bool__(self):
        return bool(self._opts)

    def __repr__(self):
        return "Registry(%s)" % ", ".join(map(repr, self._opts.values()))


__all__ = (
    "Arity",
    "Occur",
    "Opt",
    "Registry",
)
