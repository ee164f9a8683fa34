"""
Pennant argument session: register options, resolve tokens, read typed values.

Lifecycle
1. Register options on an Args instance (flag(), option(), multi(), register()).
2. parse(raw_args) hands the tokens to the tokenizer adapter and resolves every
   registered option, in registration order, into a raw string:
   • flags          → "true" / "false"
   • single-valued  → the given value, else the default, else nothing
   • multi-valued   → every occurrence joined with SEPARATOR, else the default,
                      else nothing (absence is never an error)
   A required single-valued option that resolves to nothing raises
   MissingArgumentError; the first failing option (in registration order) wins.
3. Read values back with value_of()/values_of() (and their optional/validated
   variants), coercing the stored string with a `type` callable at that moment.

Value store
- Built from scratch on every successful parse, exposed as a read-only mapping,
  and swapped in as a whole. A failed parse leaves the previous store untouched.
- Strings are stored as-is; coercion is deferred to the accessors.
- SEPARATOR (",") is not escaped: a multi value that contains it is split apart
  when read back with values_of().

Quick example:
    >>> args = Args("program", "Run this program")
    >>> _ = args.flag("h", "help", "Print the usage menu")
    >>> _ = args.option("i", "iter", "Iterations", "TIMES", Occur.REQUIRED)
    >>> args.parse(["-i", "5"]).value_of("iter", int)
    5
"""
import logging
import sys
from types import MappingProxyType

from .faults import CoercionError, MissingArgumentError, ValueNotFoundError
from .options import Arity, Occur, Opt, Registry
from .tokenizer import tokenize
from .usage import short_usage, usage
from .utils import *

logger = logging.getLogger(__name__)

SEPARATOR = ","

_BOOLEANS = MappingProxyType({"true": True, "false": False})


def _coerce(name, raw, type, /):
    """
    Convert one stored string with the requested type.

    bool is strict ("true"/"false" only); any other callable is applied to the
    string and a ValueError/TypeError/ArithmeticError becomes a CoercionError.
    """
    try:
        if type is bool:
            return _BOOLEANS[raw]
        return type(raw)
    except (KeyError, ValueError, TypeError, ArithmeticError):
        raise CoercionError("unable to parse %r" % raw, scope=name, raw=raw, type=type) from None


def _resolve(opt, matches, /):
    """
    Resolve one descriptor against the matches; None when nothing resolved.
    """
    match opt.arity:
        case Arity.NO_VALUE:
            return "true" if matches.present(opt.long_name) else "false"
        case Arity.SINGLE_VALUE:
            value = matches.value(opt.long_name)
            return value if value is not None else opt.default
        case Arity.MULTI_VALUE:
            values = matches.values(opt.long_name)
            return SEPARATOR.join(values) if values else opt.default


class Args:
    """
    One configuration session: an option registry plus the values resolved by
    the latest successful parse.

    An Args instance is owned by whoever builds it; there is no global state.
    Once parse() returns, the value store is immutable and may be read from
    several threads. Re-parsing concurrently with readers needs external
    synchronization.
    """

    def __init__(self, program_name, description=Unset, /):
        if not isinstance(program_name, str):
            raise TypeError("Args() 'program_name' must be a string")
        if not isinstance(description := coalesce(description, ""), str):
            raise TypeError("Args() 'description' must be a string")
        logger.debug("Creating new args object for %r", program_name)
        self._program_name = program_name
        self._description = description
        self._registry = Registry()
        self._values = MappingProxyType({})
        self._free = ()

    @property
    def program_name(self):
        return self._program_name

    @property
    def description(self):
        return self._description

    @property
    def registry(self):
        return self._registry

    @property
    def values(self):
        """
        Read-only view of the raw value store (long name → string).
        """
        return self._values

    @property
    def free(self):
        """
        Operands of the latest successful parse (tokens that are not options).
        """
        return self._free

    # --- registration ---

    def register(self, opt, /):
        """
        Register a prebuilt descriptor; a duplicate long name is ignored with a warning.
        """
        self._registry.register(opt, stacklevel=2)
        return self

    def flag(self, short_name, long_name, descr=Unset, /):
        """
        Register an optional flag that takes no value and defaults to false.

        - short_name: e.g. "h" for a -h flag, or "" for none
        - long_name: e.g. "help" for a --help flag
        - descr: description for the usage message
        """
        self._registry.register(Opt(long_name, short_name, descr, arity=Arity.NO_VALUE), stacklevel=2)
        return self

    def option(self, short_name, long_name, descr=Unset, hint=Unset, occur=Occur.OPTIONAL, default=None, /):
        """
        Register an option that takes exactly one value.

        - hint: placeholder for the value in the usage message, e.g. "FILE"
        - occur: Occur.REQUIRED or Occur.OPTIONAL (a default forces OPTIONAL)
        - default: string used when the option is not given
        """
        opt = Opt(long_name, short_name, descr, hint, arity=Arity.SINGLE_VALUE, occur=occur, default=default)
        self._registry.register(opt, stacklevel=2)
        return self

    def multi(self, short_name, long_name, descr=Unset, hint=Unset, default=None, /):
        """
        Register an option that may be given any number of times.
        """
        self._registry.register(Opt(long_name, short_name, descr, hint, arity=Arity.MULTI_VALUE, default=default), stacklevel=2)
        return self

    def has_options(self):
        return bool(self._registry)

    # --- resolution ---

    def parse(self, raw_args, /):
        """
        Parse tokens (without the program name) against the registered options.

        Returns
        - self, for chaining.

        Raises
        - ArgumentSyntaxError: the tokens do not fit the registered shapes.
        - MissingArgumentError: a required option resolved to nothing.
        """
        logger.debug("Parsing args for %r", self._program_name)
        matches = tokenize(raw_args, self._registry.shapes())

        values = {}
        for opt in self._registry:
            value = _resolve(opt, matches)
            if value:
                values[opt.long_name] = value
            elif opt.required:
                raise MissingArgumentError(
                    "required option missing",
                    scope=opt.long_name,
                    opt=opt,
                )

        self._values = MappingProxyType(values)
        self._free = matches.free
        logger.debug("Args: %r", values)
        return self

    def parse_from_cli(self):
        """
        Parse the process arguments, dropping the program name.
        """
        return self.parse(sys.argv[1:])

    # --- typed accessors ---

    def has_value(self, name, /):
        return name in self._values

    def value_of(self, name, type=str, /):
        """
        Retrieve the value stored for `name` and convert it with `type`.

        Raises
        - ValueNotFoundError: nothing is stored under `name`.
        - CoercionError: the stored string does not convert with `type`.
        """
        try:
            raw = self._values[name]
        except KeyError:
            raise ValueNotFoundError("does not have a value", scope=name) from None
        return _coerce(name, raw, type)

    def optional_value_of(self, name, type=str, /):
        """
        Like value_of(), but None when nothing is stored under `name`.
        """
        if not self.has_value(name):
            return None
        return self.value_of(name, type)

    def values_of(self, name, type=str, /):
        """
        Split the stored string on SEPARATOR and convert every piece with `type`.

        The first piece that fails to convert raises CoercionError.
        """
        try:
            raw = self._values[name]
        except KeyError:
            raise ValueNotFoundError("does not have a value", scope=name) from None
        return [_coerce(name, piece, type) for piece in raw.split(SEPARATOR)]

    def optional_values_of(self, name, type=str, /):
        if not self.has_value(name):
            return None
        return self.values_of(name, type)

    # --- validation pipeline ---

    def validated_value_of(self, name, validations, type=str, /):
        """
        Retrieve and convert the value, then run `validations` in order.

        The first validation that reports the value invalid raises its error;
        later validations are not consulted. Conversion errors surface before
        any validation runs.

        `type` has to produce values comparable with what the validations hold:
        an OrderValidation with an int bound needs type=int. With the default
        type=str the comparison itself fails and its TypeError propagates as-is.
        """
        value = self.value_of(name, type)
        for validation in validations:
            if validation.is_invalid(value):
                raise validation.error(value)
        return value

    def optional_validated_value_of(self, name, validations, type=str, /):
        if not self.has_value(name):
            return None
        return self.validated_value_of(name, validations, type)

    # --- usage ---

    def short_usage(self):
        """
        One-line usage summary from the registered options.
        """
        return short_usage(self._program_name, self._registry.describe())

    def usage(self, brief=Unset, /):
        """
        Verbose usage summary; the brief defaults to the session description.
        """
        return usage(coalesce(brief, self._description), self._registry.describe())

    def full_usage(self, brief=Unset, /):
        """
        The short and verbose usage messages, separated by a blank line.
        """
        return "%s\n\n%s" % (self.short_usage(), self.usage(brief))

    def __repr__(self):
        return "Args(%r, options=%d, values=%r)" % (self._program_name, len(self._registry), dict(self._values))


__all__ = (
    "SEPARATOR",
    "Args",
)
