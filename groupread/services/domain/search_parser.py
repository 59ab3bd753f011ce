"""
Parser for the free-text ``sql_search`` filter.

The filter is a small boolean expression over group columns, for example::

    display_name like '%west%' and (status_enum = 300 or external_id is null)

It is parsed into a SQLAlchemy expression so that every literal becomes a
bound parameter and every column is resolved against the group alias.
Nothing from the input is ever copied into the SQL text.

Grammar::

    expression := term ("or" term)*
    term       := factor ("and" factor)*
    factor     := "(" expression ")" | comparison
    comparison := column op literal
                | column ["not"] "like" string
                | column "is" ["not"] "null"
"""

import operator
import re
from collections import namedtuple
from typing import Dict, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from groupread.services.base import ValidationError

Token = namedtuple("Token", ["kind", "value"])

_TOKEN_PATTERN = re.compile(r"""
    \s*(?:
        (?P<string>'(?:[^']|'')*')
      | (?P<number>-?\d+)
      | (?P<op><=|>=|<>|!=|=|<|>)
      | (?P<lparen>\()
      | (?P<rparen>\))
      | (?P<word>[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?)
    )""", re.VERBOSE)

_COMPARISONS = {
    "=": operator.eq,
    "!=": operator.ne,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_KEYWORDS = {"and", "or", "not", "like", "is", "null"}

# Signed 64-bit, the widest integer the supported databases bind
SQL_INTEGER_RANGE = (-2 ** 63, 2 ** 63 - 1)


def tokenize(text: str) -> List[Token]:
    """Split a search fragment into tokens; keywords are lower-cased."""
    tokens = []
    position = 0
    text = text.rstrip()
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None or match.end() == position:
            raise ValidationError(
                f"Unexpected character in search at position {position}",
                field="sql_search", value=text
            )
        kind = match.lastgroup
        value = match.group(kind)
        if kind == "string":
            value = value[1:-1].replace("''", "'")
        elif kind == "number":
            value = int(value)
            low, high = SQL_INTEGER_RANGE
            if not low <= value <= high:
                raise ValidationError(
                    f"Number out of range in search at position {position}",
                    field="sql_search", value=text
                )
        elif kind == "word" and value.lower() in _KEYWORDS:
            kind, value = "keyword", value.lower()
        tokens.append(Token(kind, value))
        position = match.end()
    return tokens


class SearchExpressionParser:
    """
    Turns a search fragment into a SQLAlchemy clause.

    ``columns`` maps the public column names a caller may filter on to the
    aliased columns they resolve to. A column may be written bare or with the
    ``qualifier`` prefix (``display_name`` or ``g.display_name``). The parser
    holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(self, columns: Dict[str, ColumnElement], qualifier: str = "g"):
        self._columns = columns
        self._qualifier = qualifier

    def parse(self, text: Optional[str]) -> Optional[ColumnElement]:
        """Parse ``text``; blank or missing input yields ``None``."""
        if text is None or not text.strip():
            return None
        return _ExpressionReader(self._columns, self._qualifier, text).read()


class _ExpressionReader:
    """Recursive descent over the tokens of one search fragment."""

    def __init__(self, columns: Dict[str, ColumnElement], qualifier: str, text: str):
        self._columns = columns
        self._qualifier = qualifier
        self._text = text
        self._tokens = tokenize(text)
        self._position = 0

    def read(self) -> ColumnElement:
        clause = self._expression()
        if self._peek() is not None:
            self._fail(f"Unexpected token '{self._peek().value}'")
        return clause

    def _expression(self) -> ColumnElement:
        clauses = [self._term()]
        while self._accept_keyword("or"):
            clauses.append(self._term())
        return clauses[0] if len(clauses) == 1 else or_(*clauses)

    def _term(self) -> ColumnElement:
        clauses = [self._factor()]
        while self._accept_keyword("and"):
            clauses.append(self._factor())
        return clauses[0] if len(clauses) == 1 else and_(*clauses)

    def _factor(self) -> ColumnElement:
        token = self._peek()
        if token is not None and token.kind == "lparen":
            self._advance()
            clause = self._expression()
            self._expect("rparen", "')'")
            return clause
        return self._comparison()

    def _comparison(self) -> ColumnElement:
        column = self._column()

        if self._accept_keyword("is"):
            negated = self._accept_keyword("not")
            self._expect_keyword("null")
            return column.is_not(None) if negated else column.is_(None)

        if self._accept_keyword("not"):
            self._expect_keyword("like")
            return column.not_like(self._expect("string", "a quoted pattern").value)

        if self._accept_keyword("like"):
            return column.like(self._expect("string", "a quoted pattern").value)

        token = self._expect("op", "a comparison operator")
        literal = self._literal()
        return _COMPARISONS[token.value](column, literal)

    def _column(self) -> ColumnElement:
        token = self._expect("word", "a column name")
        name = token.value
        if "." in name:
            prefix, name = name.split(".", 1)
            if prefix != self._qualifier:
                self._fail(f"Unknown table qualifier '{prefix}'")
        if name not in self._columns:
            raise ValidationError(
                f"Column '{name}' cannot be used in search",
                field="sql_search", value=self._text
            )
        return self._columns[name]

    def _literal(self):
        token = self._peek()
        if token is None or token.kind not in ("string", "number"):
            self._fail("Expected a quoted string or a number")
        self._advance()
        return token.value

    # Token helpers

    def _peek(self) -> Optional[Token]:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _advance(self) -> Token:
        token = self._tokens[self._position]
        self._position += 1
        return token

    def _accept_keyword(self, keyword: str) -> bool:
        token = self._peek()
        if token is not None and token.kind == "keyword" and token.value == keyword:
            self._advance()
            return True
        return False

    def _expect_keyword(self, keyword: str) -> None:
        if not self._accept_keyword(keyword):
            self._fail(f"Expected '{keyword}'")

    def _expect(self, kind: str, description: str) -> Token:
        token = self._peek()
        if token is None or token.kind != kind:
            self._fail(f"Expected {description}")
        return self._advance()

    def _fail(self, message: str):
        raise ValidationError(f"Invalid search: {message}", field="sql_search", value=self._text)
