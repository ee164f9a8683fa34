import logging

from rich.logging import RichHandler

from pennant import *

__prog__ = "program"

logging.basicConfig(level=logging.WARNING, format="%(message)s", handlers=[RichHandler(show_path=False)])


class Program(HasArgs, HasParsedArgs):
    def __init__(self):
        self._parsed = type(self).parse_from_cli()

    @classmethod
    def args(cls):
        args = Args(__prog__, "Run this program")
        args.flag("h", "help", "Print the usage menu")
        args.option("i", "iter", "The number of times to run this program", "TIMES", Occur.REQUIRED)
        args.option("l", "log_file", "The name of the log file", "NAME")
        return args

    @property
    def parsed_args(self):
        return self._parsed

    def run(self):
        if self.value_of("help", bool):
            print(type(self).full_usage())
            return

        iterations = self.validated_value_of("iter", [
            OrderValidation.greater_than(0),
            OrderValidation.less_than_or_equal(10),
        ], int)
        for iteration in range(iterations):
            print("Working on iteration %d" % iteration)
        print("All done!")


if __name__ == '__main__':
    try:
        Program().run()
    except ArgsError as error:
        trigger(error, shell=True, usage=Program.short_usage())
