"""
Leaf Matching and Highlighting
Decides whether a completed leaf matches the search pattern and formats the
line to report for it.
"""

import re

from . import join_path

###############################################################################
# Constants
###############################################################################

BOLD_RED = '\033[1;31m'
RESET = '\033[0m'

###############################################################################
# Disciplines
###############################################################################

class Disciplines:
    EXACT = 'EXACT'
    IGNORE_CASE = 'IGNORE_CASE'
    PATH = 'PATH'

###############################################################################
# Helpers
###############################################################################

def highlight(s, start, end, enabled=True):
    # Wrap exactly s[start:end] with the highlight markers.
    if not enabled:
        return s
    return s[:start] + BOLD_RED + s[start:end] + RESET + s[end:]

def find_exact(haystack, pattern):
    # Return the (start, end) span of the first occurrence of pattern, or None.
    # An empty pattern matches at offset 0.
    idx = haystack.find(pattern)
    if idx == -1:
        return None
    return idx, idx + len(pattern)

def find_ignore_case(haystack, pattern):
    # Use a regex rather than lower() so that the span indexes the original
    # string even where case folding changes its length.
    m = re.search(re.escape(pattern), haystack, re.IGNORECASE)
    if m is None:
        return None
    return m.span()

def format_line(path, line, value):
    return '{}:{}: {}'.format(path, line, value)

###############################################################################
# Matcher
###############################################################################

class Matcher:
    def __init__(self, pattern, discipline=Disciplines.EXACT, highlight=True):
        self.pattern = pattern
        self.discipline = discipline
        self.highlight = highlight

    def __call__(self, path, value, line, column):
        """Return the line to report for the leaf at path, or None if it
        doesn't match.
        """
        path = join_path(path)

        if self.discipline == Disciplines.PATH:
            span = find_exact(path, self.pattern)
            if span is None:
                return None
            return format_line(
                highlight(path, *span, enabled=self.highlight), line, value)

        if self.discipline == Disciplines.IGNORE_CASE:
            span = find_ignore_case(value, self.pattern)
        elif self.discipline == Disciplines.EXACT:
            span = find_exact(value, self.pattern)
        else:
            raise NotImplementedError(self.discipline)

        if span is None:
            return None
        return format_line(
            path, line, highlight(value, *span, enabled=self.highlight))
