"""Recursive-descent parser for condition expressions.

Grammar (``&&`` binds tighter than ``||``, both left-associative)::

    expr      := and_expr ( "||" and_expr )*
    and_expr  := primary ( "&&" primary )*
    primary   := "(" expr ")" | predicate
    predicate := NAME OP literal
               | NAME "in" "[" literal ( "," literal )* "]"
               | NAME "contains" literal
    literal   := quoted string | number | true | false
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, NamedTuple, Optional

from ..exceptions import InvalidConditionError
from .ast import COMPARISON_OPERATORS, Comparison, Contains, Literal, Logical, Membership, Node

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
  | (?P<number>-?\d+(?:\.\d+)?(?![\w.]))
  | (?P<op>&&|\|\||==|!=|<=|>=|<|>)
  | (?P<punct>[\[\](),])
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

_KEYWORDS = {"in", "contains", "true", "false"}


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(expression: str) -> List[Token]:
    """Split an expression into tokens, dropping whitespace."""
    tokens: List[Token] = []
    position = 0
    while position < len(expression):
        match = _TOKEN_RE.match(expression, position)
        if not match:
            if expression[position] in "'\"":
                raise ValueError(f"unterminated string starting at column {position + 1}")
            raise ValueError(f"unexpected character '{expression[position]}' at column {position + 1}")
        kind = match.lastgroup
        text = match.group()
        if kind == "name" and text in _KEYWORDS:
            kind = "keyword"
        if kind != "ws":
            tokens.append(Token(kind, text, position))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, expression: str):
        self.expression = expression
        self.tokens = tokenize(expression)
        self.index = 0

    def parse(self) -> Node:
        if not self.tokens:
            raise ValueError("expression is empty")
        node = self._expr()
        if self._peek() is not None:
            token = self._peek()
            raise ValueError(f"unexpected '{token.text}' at column {token.position + 1}")
        return node

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------
    def _expr(self) -> Node:
        node = self._and_expr()
        while self._accept("op", "||"):
            node = Logical("||", node, self._and_expr())
        return node

    def _and_expr(self) -> Node:
        node = self._primary()
        while self._accept("op", "&&"):
            node = Logical("&&", node, self._primary())
        return node

    def _primary(self) -> Node:
        if self._accept("punct", "("):
            node = self._expr()
            self._expect("punct", ")")
            return node
        return self._predicate()

    def _predicate(self) -> Node:
        token = self._next("a parameter name")
        if token.kind != "name":
            raise ValueError(f"expected a parameter name, found '{token.text}' at column {token.position + 1}")
        name = token.text

        if self._accept("keyword", "in"):
            self._expect("punct", "[")
            if self._accept("punct", "]"):
                raise ValueError(f"empty value list for '{name} in'")
            literals = [self._literal()]
            while self._accept("punct", ","):
                literals.append(self._literal())
            self._expect("punct", "]")
            return Membership(name, tuple(literals))

        if self._accept("keyword", "contains"):
            return Contains(name, self._literal())

        operator = self._next("a comparison operator")
        if operator.kind != "op" or operator.text not in COMPARISON_OPERATORS:
            raise ValueError(
                f"expected a comparison operator after '{name}', found '{operator.text}'"
            )
        return Comparison(name, operator.text, self._literal())

    def _literal(self) -> Literal:
        token = self._next("a literal")
        if token.kind == "string":
            return _unquote(token.text)
        if token.kind == "number":
            return float(token.text) if "." in token.text else int(token.text)
        if token.kind == "keyword" and token.text in ("true", "false"):
            return token.text == "true"
        raise ValueError(
            f"expected a quoted string, number, true or false, found '{token.text}' "
            f"at column {token.position + 1}"
        )

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------
    def _peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _next(self, wanted: str) -> Token:
        token = self._peek()
        if token is None:
            raise ValueError(f"expected {wanted}, found end of expression")
        self.index += 1
        return token

    def _accept(self, kind: str, text: str) -> bool:
        token = self._peek()
        if token is not None and token.kind == kind and token.text == text:
            self.index += 1
            return True
        return False

    def _expect(self, kind: str, text: str) -> None:
        if not self._accept(kind, text):
            token = self._peek()
            found = f"'{token.text}'" if token else "end of expression"
            raise ValueError(f"expected '{text}', found {found}")


def _unquote(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text[1:-1])


@lru_cache(maxsize=512)
def _parse_cached(expression: str) -> Node:
    return _Parser(expression).parse()


def parse_condition(expression: str, parameter: Optional[str] = None) -> Node:
    """Parse an expression into a syntax tree.

    Raises InvalidConditionError naming the owning parameter and the
    expression text when the expression is malformed.
    """
    if not isinstance(expression, str):
        raise InvalidConditionError(repr(expression), "expression must be a string", parameter)
    try:
        return _parse_cached(expression.strip())
    except ValueError as exc:
        raise InvalidConditionError(expression, str(exc), parameter) from exc
