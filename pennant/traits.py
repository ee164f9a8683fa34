"""
Mixins that bind an argument session to an application class.

- HasArgs: the class knows how to build its Args (classmethod args()) and gets
  usage/parse conveniences on top of it. Every call builds a fresh session, so
  nothing is shared between calls or stored at class level.
- HasParsedArgs: the instance holds an already parsed Args (property
  parsed_args) and gets the typed accessors delegated to it.

Example:
    class Program(HasArgs, HasParsedArgs):
        def __init__(self, raw_args):
            self._parsed = type(self).parse(raw_args)

        @classmethod
        def args(cls):
            return Args("program", "Run this program").flag("h", "help", "Print the usage menu")

        @property
        def parsed_args(self):
            return self._parsed
"""
from abc import ABC, abstractmethod


class HasArgs(ABC):

    @classmethod
    @abstractmethod
    def args(cls):
        """
        Build a new, unparsed Args describing this class's options.
        """

    @classmethod
    def parse(cls, raw_args, /):
        """
        Build the session and parse `raw_args` with it; returns the parsed Args.
        """
        return cls.args().parse(raw_args)

    @classmethod
    def parse_from_cli(cls):
        return cls.args().parse_from_cli()

    @classmethod
    def short_usage(cls):
        return cls.args().short_usage()

    @classmethod
    def usage(cls):
        return cls.args().usage()

    @classmethod
    def full_usage(cls):
        return cls.args().full_usage()


class HasParsedArgs(ABC):

    @property
    @abstractmethod
    def parsed_args(self):
        """
        The parsed Args owned by this instance.
        """

    def has_value(self, name, /):
        return self.parsed_args.has_value(name)

    def value_of(self, name, type=str, /):
        return self.parsed_args.value_of(name, type)

    def optional_value_of(self, name, type=str, /):
        return self.parsed_args.optional_value_of(name, type)

    def values_of(self, name, type=str, /):
        return self.parsed_args.values_of(name, type)

    def optional_values_of(self, name, type=str, /):
        return self.parsed_args.optional_values_of(name, type)

    def validated_value_of(self, name, validations, type=str, /):
        return self.parsed_args.validated_value_of(name, validations, type)

    def optional_validated_value_of(self, name, validations, type=str, /):
        return self.parsed_args.optional_validated_value_of(name, validations, type)


__all__ = (
    "HasArgs",
    "HasParsedArgs",
)
