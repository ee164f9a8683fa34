"""
Usage text built from option descriptors (presentation only).

Layout
- short_usage: "Usage: prog [-h] -i TIMES [-l NAME] [-o VALUE].."
  • optional options are bracketed, required ones are not;
  • the short spelling is preferred, the long one used when there is none;
  • repeatable options are suffixed with "..".
- usage: the brief, a blank line, then "Options:" and one row per option:
  "    -l, --log-file NAME     The name of the log file"
  descriptions start at column 24 and wrap at 78 columns.
"""
import textwrap

DESCRIPTION_COLUMN = 24
LINE_WIDTH = 78


def _hint(opt):
    return opt.hint or "VALUE"


def _synopsis(opt):
    line = "-" + opt.short_name if opt.short_name else "--" + opt.long_name
    if opt.takes_value:
        line += " " + _hint(opt)
    if not opt.required:
        line = "[" + line + "]"
    if opt.multi:
        line += ".."
    return line


def short_usage(program_name, opts, /):
    """
    One-line synopsis for the program and its options.
    """
    return " ".join(["Usage:", program_name, *map(_synopsis, opts)])


def _row(opt, indent_short):
    row = "    "
    if opt.short_name:
        row += "-%s, " % opt.short_name
    elif indent_short:
        row += "    "
    row += "--" + opt.long_name
    if opt.takes_value:
        row += " " + _hint(opt)

    lines = textwrap.wrap(opt.descr, LINE_WIDTH - DESCRIPTION_COLUMN) or [""]
    if len(row) < DESCRIPTION_COLUMN:
        row = row.ljust(DESCRIPTION_COLUMN)
    else:
        row += "\n" + " " * DESCRIPTION_COLUMN
    return (row + ("\n" + " " * DESCRIPTION_COLUMN).join(lines)).rstrip()


def usage(brief, opts, /):
    """
    Verbose listing of every option, preceded by the brief.
    """
    opts = tuple(opts)
    indent_short = any(opt.short_name for opt in opts)
    rows = [_row(opt, indent_short) for opt in opts]
    return "%s\n\nOptions:\n%s\n" % (brief, "\n".join(rows))


__all__ = (
    "short_usage",
    "usage",
)
