"""
Dialect and service rules.

Constants only; the parser and the HTTP layer read them, nothing writes them.
"""

CR = "\r"
LF = "\n"
LINE_TERMINATORS = (CR, LF)

DEFAULT_QUOTE = '"'
# The form leaves the delimiter empty for tab-separated input.
DEFAULT_DELIMITER = "\t"
CSV_DELIMITER = ","

UPLOAD_SUFFIXES = (".csv", ".tsv", ".txt")
