"""
pydsparql.query_form
====================

Heuristic classification of a raw SPARQL string into one of the four
query forms. Only the prologue (``BASE`` / ``PREFIX`` declarations) and
the first keyword after it are inspected; nothing is parsed beyond that.

The scanner is deliberately lenient:

* ``BASE`` and ``PREFIX`` may appear in any order and any number of
  times, and keywords are matched case-insensitively.
* ``#`` comments and whitespace between declarations are skipped.

Anything it cannot make sense of yields :attr:`QueryForm.UNKNOWN`; the
classification only drives the Accept header, so it never raises.
"""

import enum
from typing import Optional


class QueryForm(enum.StrEnum):
    SELECT = "SELECT"
    ASK = "ASK"
    CONSTRUCT = "CONSTRUCT"
    DESCRIBE = "DESCRIBE"
    UNKNOWN = "UNKNOWN"

    @property
    def returns_results(self) -> bool:
        """True for forms answered with a SPARQL results document."""
        return self in (QueryForm.SELECT, QueryForm.ASK)

    @property
    def returns_graph(self) -> bool:
        """True for forms answered with an RDF graph."""
        return self in (QueryForm.CONSTRUCT, QueryForm.DESCRIBE)


_QUERY_FORMS = {
    form.value: form for form in QueryForm if form is not QueryForm.UNKNOWN
}


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _skip_blank(text: str, pos: int) -> int:
    """Advance past whitespace and ``#`` line comments."""
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch.isspace():
            pos += 1
        elif ch == "#":
            eol = text.find("\n", pos)
            pos = n if eol == -1 else eol + 1
        else:
            break
    return pos


def _read_word(text: str, pos: int) -> tuple[str, int]:
    end = pos
    while end < len(text) and text[end].isascii() and text[end].isalpha():
        end += 1
    return text[pos:end], end


def _skip_iri(text: str, pos: int) -> Optional[int]:
    """Skip an ``<iri>`` starting at ``pos``; ``None`` if there is none."""
    if pos >= len(text) or text[pos] != "<":
        return None
    close = text.find(">", pos + 1)
    if close == -1:
        return None
    return close + 1


def _skip_base(text: str, pos: int) -> Optional[int]:
    return _skip_iri(text, _skip_blank(text, pos))


def _skip_prefix(text: str, pos: int) -> Optional[int]:
    # PREFIX needs whitespace before the (possibly empty) prefix name.
    if pos >= len(text) or not text[pos].isspace():
        return None
    pos = _skip_blank(text, pos)
    while pos < len(text) and text[pos] != ":":
        if text[pos].isspace() or text[pos] in "<>":
            return None
        pos += 1
    if pos >= len(text):
        return None
    return _skip_iri(text, _skip_blank(text, pos + 1))


def classify_query_form(query: str) -> QueryForm:
    """
    Return the :class:`QueryForm` of ``query``.

    The first keyword after the prologue must be one of ``SELECT``,
    ``ASK``, ``CONSTRUCT`` or ``DESCRIBE`` and must be followed by a
    non-word character; update statements, bare keywords at the end of
    the text and malformed prologues all give ``UNKNOWN``.
    """
    pos = _skip_blank(query, 0)
    while True:
        word, end = _read_word(query, pos)
        keyword = word.upper()
        if keyword == "BASE":
            after = _skip_base(query, end)
        elif keyword == "PREFIX":
            after = _skip_prefix(query, end)
        else:
            break
        if after is None:
            return QueryForm.UNKNOWN
        pos = _skip_blank(query, after)

    form = _QUERY_FORMS.get(keyword)
    if form is None or end >= len(query) or _is_word_char(query[end]):
        return QueryForm.UNKNOWN
    return form
