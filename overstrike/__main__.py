"""Overstrike CLI entry point.

Allows running via `python -m overstrike` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import io
import logging
import sys
from typing import BinaryIO, List, Optional, TextIO

from .html_renderer import render_lines
from .settings_persistence import INPUT_ENCODING, LINE_BREAK_TAGS, get_persistence
from .typewriter import decode_stream
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = """\
usage: overstrike [--br | --no-br] [--encoding NAME] [--save-defaults] [FILE ...]
       overstrike --version

Convert overtyped text (nroff/man output with backspace emphasis) to HTML.
Reads standard input when no FILE is given or FILE is '-'.

  --br               end each line with <br>
  --no-br            end each line with a plain newline
  --encoding NAME    input encoding
  --save-defaults    remember --br/--no-br and --encoding for later runs
  -V, --version      print version and exit
  -h, --help         show this help and exit
"""


class UsageError(Exception):
    pass


def parse_args(args: List[str]) -> dict:
    """Parse command line arguments into an options dict.

    Options not given on the command line are left as None so that the
    saved defaults can fill them in.
    """
    opts = {
        'help': False,
        'version': False,
        'line_break_tags': None,
        'encoding': None,
        'save_defaults': False,
        'files': [],
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '--':
            opts['files'].extend(args[i + 1:])
            break
        if arg in ('-h', '--help'):
            opts['help'] = True
        elif arg in ('-V', '--version'):
            opts['version'] = True
        elif arg == '--br':
            opts['line_break_tags'] = True
        elif arg == '--no-br':
            opts['line_break_tags'] = False
        elif arg == '--save-defaults':
            opts['save_defaults'] = True
        elif arg == '--encoding':
            if i + 1 >= len(args):
                raise UsageError("--encoding requires a value")
            i += 1
            opts['encoding'] = args[i]
        elif arg.startswith('--encoding='):
            opts['encoding'] = arg.split('=', 1)[1]
        elif arg.startswith('-') and arg != '-':
            raise UsageError(f"unknown option: {arg}")
        else:
            opts['files'].append(arg)
        i += 1
    return opts


def _text_stream(raw: BinaryIO, encoding: str) -> TextIO:
    # newline='' keeps bare carriage returns intact for the decoder
    return io.TextIOWrapper(raw, encoding=encoding, errors='replace', newline='')


def convert(raw: BinaryIO, out: TextIO, encoding: str, use_line_break_tags: bool) -> None:
    """Decode one overtyped byte stream and write it to `out` as HTML."""
    stream = _text_stream(raw, encoding)
    try:
        typewriter = decode_stream(stream)
    finally:
        stream.detach()
    for html in render_lines(typewriter.document, use_line_break_tags):
        out.write(html)


def run(args: List[str], stdin: BinaryIO, stdout: TextIO, stderr: TextIO) -> int:
    try:
        opts = parse_args(args)
    except UsageError as e:
        stderr.write(f"overstrike: {e}\n")
        stderr.write(USAGE)
        return 2

    if opts['help']:
        stdout.write(USAGE)
        return 0
    if opts['version']:
        stdout.write(get_version_string() + "\n")
        return 0

    persistence = get_persistence()
    chosen = {}
    if opts['encoding'] is not None:
        chosen[INPUT_ENCODING] = opts['encoding']
        if not persistence.validate_setting(INPUT_ENCODING, opts['encoding']):
            stderr.write(f"overstrike: unsupported input encoding: {opts['encoding']}\n")
            return 2
    if opts['line_break_tags'] is not None:
        chosen[LINE_BREAK_TAGS] = opts['line_break_tags']

    if opts['save_defaults']:
        if not chosen:
            stderr.write("overstrike: --save-defaults needs --br, --no-br or --encoding\n")
            stderr.write(USAGE)
            return 2
        if not persistence.save_settings(chosen):
            stderr.write("overstrike: could not save defaults\n")

    settings = persistence.load_settings()
    encoding = opts['encoding'] or settings[INPUT_ENCODING]
    use_br = opts['line_break_tags']
    if use_br is None:
        use_br = settings[LINE_BREAK_TAGS]

    status = 0
    for name in opts['files'] or ['-']:
        if name == '-':
            convert(stdin, stdout, encoding, use_br)
            continue
        try:
            with open(name, 'rb') as f:
                convert(f, stdout, encoding, use_br)
        except OSError as e:
            logger.warning(f"Could not read {name}: {e}")
            status = 1
    stdout.flush()
    return status


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    sys.exit(run(args, sys.stdin.buffer, sys.stdout, sys.stderr))


if __name__ == "__main__":  # pragma: no cover
    main()
