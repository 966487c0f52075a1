"""End-to-end decoding and rendering of typical nroff output."""

import unittest

from overstrike.typewriter import Typewriter


def underline_each(t, s):
    for c in s:
        t.append('_')
        t.append('\x08')
        t.append(c)


def bold_each(t, s):
    for c in s:
        t.append(c)
        t.append('\x08')
        t.append(c)


class TestScenarios(unittest.TestCase):

    def test_option_argument_underlined(self):
        t = Typewriter()
        t.append('[')
        underline_each(t, "user")
        t.append(']')
        self.assertEqual(t.to_html(False), "[<u>user</u>]\n")

    def test_bold_word_with_underscore(self):
        t = Typewriter()
        bold_each(t, "LC_MESSAGES")
        self.assertEqual(t.to_html(False), "<b>LC_MESSAGES</b>\n")

    def test_bold_run_spans_single_space(self):
        t = Typewriter()
        bold_each(t, "ENVIRONMENT")
        t.append(' ')
        bold_each(t, "VARIABLES")
        self.assertEqual(t.to_html(False), "<b>ENVIRONMENT VARIABLES</b>\n")

    def test_mixed_document_with_line_breaks(self):
        t = Typewriter()
        t.feed("hello\n")

        for c in "world":
            t.append(c)
            t.append('\x08')
            t.append('_')
        t.append('\n')

        t.feed("in ")
        bold_each(t, "bold")
        t.append('\n')

        t.append('\n')

        t.feed("f\bf\b_")
        t.feed("i\bi\b_")
        t.feed("n\b_\bn")

        self.assertEqual(
            t.to_html(True),
            "hello<br>\n"
            "<u>world</u><br>\n"
            "in <b>bold</b><br>\n"
            "<br>\n"
            "<b><u>fin</u></b><br>\n",
        )

    def test_man_page_header(self):
        t = Typewriter()
        t.feed("N\bNA\bAM\bME\bE\n")
        t.feed("       ls - list directory contents\n")
        t.feed("\n")
        t.feed("S\bSY\bYN\bNO\bOP\bPS\bSI\bIS\bS\n")
        t.feed("       l\bls\bs [_\bO_\bP_\bT_\bI_\bO_\bN]... [_\bF_\bI_\bL_\bE]...")
        self.assertEqual(
            t.to_html(),
            "<b>NAME</b>\n"
            "       ls - list directory contents\n"
            "\n"
            "<b>SYNOPSIS</b>\n"
            "       <b>ls</b> [<u>OPTION</u>]... [<u>FILE</u>]...\n",
        )

    def test_underlined_phrase_bridges_space(self):
        t = Typewriter()
        underline_each(t, "file")
        t.append(' ')
        underline_each(t, "name")
        self.assertEqual(t.to_html(), "<u>file name</u>\n")


if __name__ == '__main__':
    unittest.main()
