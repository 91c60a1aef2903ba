"""Helpers for the plain text that moves between IRC and the model."""

_NEWLINES = str.maketrans({"\n": " ", "\r": " "})


def extract_message(line: str) -> str:
    """Return the text of an IRC line, i.e. whatever follows its second colon.

    With only one colon the text after it is returned; with none the
    result is empty.
    """
    first = line.find(":")
    if first == -1:
        return ""
    second = line.find(":", first + 1)
    start = (second if second != -1 else first) + 1
    return line[start:]


def flatten_newlines(text: str) -> str:
    """Replace every carriage return and line feed with a space."""
    return text.translate(_NEWLINES)