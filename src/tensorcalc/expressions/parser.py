"""Formula parser: text -> SymPy expression.

Grammar (no implicit multiplication, ``2r`` is rejected)::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('-' | '+') unary | power
    power   := primary (('^' | '**') unary)?
    primary := NUMBER | IDENT | IDENT '(' args ')' | '(' expr ')'

Precedence is therefore power > unary negation > multiply/divide >
add/subtract.  Power is right-associative (``a^b^c == a^(b^c)``) and binds
tighter than a leading minus (``-x^2 == -(x^2)``); ``*`` and ``/`` are
left-associative.

Function applications are limited to :data:`SUPPORTED_FUNCTIONS`, the
free functions declared by the caller (e.g. the scale factor ``a(t)``), and
``diff(expr, x, ...)`` which the printer emits for derivatives of free
functions.  Decimal literals are converted to exact rationals so that zero
testing never has to reason about floating-point round-off.
"""
from __future__ import annotations

import re
from fractions import Fraction
from typing import Iterable, NamedTuple

import sympy as sp

from ..errors import ParseError

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

SUPPORTED_FUNCTIONS: dict[str, type[sp.Function]] = {
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "exp": sp.exp,
    "log": sp.log,
    "sqrt": sp.sqrt,
}

CONSTANTS: dict[str, sp.Expr] = {"pi": sp.pi}

DERIVATIVE = "diff"

RESERVED_NAMES = frozenset(SUPPORTED_FUNCTIONS) | frozenset(CONSTANTS) | {DERIVATIVE}

IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

_TOKEN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<ident>[A-Za-z][A-Za-z0-9_]*)
  | (?P<op>\*\*|[-+*/^(),])
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, raising :class:`ParseError` on unknown input."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise ParseError(text, pos, f"unknown token {text[pos]!r}")
        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, match.group(), pos))
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens


# ---------------------------------------------------------------------------
# Recursive-descent parser
# ---------------------------------------------------------------------------


class _Parser:
    def __init__(self, text: str, functions: frozenset[str]) -> None:
        self.text = text
        self.functions = functions
        self.tokens = tokenize(text)
        self.index = 0

    # token helpers -------------------------------------------------------

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def accept(self, *ops: str) -> Token | None:
        token = self.current
        if token.kind == "op" and token.text in ops:
            return self.advance()
        return None

    def expect_close(self, opened: Token) -> None:
        if self.accept(")") is None:
            raise ParseError(
                self.text,
                self.current.position,
                f"unbalanced parentheses: '(' at position {opened.position} is never closed",
            )

    def fail(self, token: Token, reason: str) -> ParseError:
        return ParseError(self.text, token.position, reason)

    # grammar -------------------------------------------------------------

    def parse(self) -> sp.Expr:
        if self.current.kind == "end":
            raise self.fail(self.current, "empty expression")
        expr = self.expr()
        token = self.current
        if token.kind != "end":
            if token.text == ")":
                raise self.fail(token, "unbalanced parentheses: unexpected ')'")
            raise self.fail(token, f"unexpected token {token.text!r}")
        return expr

    def expr(self) -> sp.Expr:
        result = self.term()
        while True:
            if self.accept("+"):
                result = result + self.term()
            elif self.accept("-"):
                result = result - self.term()
            else:
                return result

    def term(self) -> sp.Expr:
        result = self.unary()
        while True:
            if self.accept("*"):
                result = result * self.unary()
                continue
            op = self.accept("/")
            if op is None:
                return result
            divisor = self.unary()
            if divisor == 0:
                raise self.fail(op, "division by zero")
            result = result / divisor

    def unary(self) -> sp.Expr:
        if self.accept("-"):
            return -self.unary()
        if self.accept("+"):
            return self.unary()
        return self.power()

    def power(self) -> sp.Expr:
        base = self.primary()
        if self.accept("^", "**"):
            return base ** self.unary()
        return base

    def primary(self) -> sp.Expr:
        token = self.advance()
        if token.kind == "number":
            value = Fraction(token.text)
            return sp.Rational(value.numerator, value.denominator)
        if token.kind == "ident":
            return self.identifier(token)
        if token.kind == "op" and token.text == "(":
            inner = self.expr()
            self.expect_close(token)
            return inner
        if token.kind == "end":
            raise self.fail(token, "unexpected end of expression")
        if token.text == ")":
            raise self.fail(token, "unbalanced parentheses: unexpected ')'")
        raise self.fail(token, f"unexpected token {token.text!r}")

    def identifier(self, token: Token) -> sp.Expr:
        name = token.text
        called = self.current.kind == "op" and self.current.text == "("

        if not called:
            if name in CONSTANTS:
                return CONSTANTS[name]
            if name in SUPPORTED_FUNCTIONS or name == DERIVATIVE or name in self.functions:
                raise self.fail(token, f"function {name!r} requires arguments")
            return sp.Symbol(name)

        opened = self.advance()
        if name == DERIVATIVE:
            return self.derivative(token, opened)
        args = self.arguments(opened)
        if name in SUPPORTED_FUNCTIONS:
            if len(args) != 1:
                raise self.fail(token, f"function {name!r} takes exactly one argument")
            return SUPPORTED_FUNCTIONS[name](args[0])
        if name in self.functions:
            return sp.Function(name)(*args)
        raise self.fail(token, f"unsupported function {name!r}")

    def arguments(self, opened: Token) -> list[sp.Expr]:
        if self.current.kind == "op" and self.current.text == ")":
            raise self.fail(self.current, "empty argument list")
        args = [self.expr()]
        while self.accept(","):
            args.append(self.expr())
        self.expect_close(opened)
        return args

    def derivative(self, token: Token, opened: Token) -> sp.Expr:
        target = self.expr()
        variables: list[sp.Symbol] = []
        while self.accept(","):
            var = self.advance()
            if var.kind != "ident" or var.text in RESERVED_NAMES:
                raise self.fail(var, "diff() variables must be plain symbols")
            variables.append(sp.Symbol(var.text))
        if not variables:
            raise self.fail(token, "diff() requires at least one variable")
        self.expect_close(opened)
        return sp.diff(target, *variables)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(text: str, functions: Iterable[str] = ()) -> sp.Expr:
    """Parse a formula string into a SymPy expression.

    Parameters
    ----------
    text : str
        Formula such as ``"-(1 - 2*M/r)"`` or ``"r^2*sin(theta)^2"``.
    functions : iterable of str
        Names of free (undefined) functions that may be applied, e.g.
        ``("a",)`` to allow ``a(t)``.

    Returns
    -------
    sp.Expr
        The parsed expression.

    Raises
    ------
    ParseError
        On malformed syntax, unbalanced parentheses, unknown tokens or
        unsupported function names.
    """
    declared = frozenset(functions)
    for name in declared:
        if not IDENTIFIER.fullmatch(name) or name in RESERVED_NAMES:
            raise ParseError(name, 0, f"invalid free function name {name!r}")
    return _Parser(text, declared).parse()
