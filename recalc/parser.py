# parser.py
"""Precedence-climbing parser producing an AST for one input line.

Grammar:
    calculation := assign | expr
    assign      := IDENT '=' expr
    expr        := term (OP term)*
    term        := NUMBER | ('+'|'-') (NUMBER | const) | const | function | IDENT | '(' expr ')'
    function    := IDENT '(' expr ')'
    const       := 'pi' | 'e' | 'inf' | 'nan'

Binding power and associativity come from the Operator table, so there is
no grammar rule per precedence level.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List

from .errors import ParseError
from .lexer import Lexer, Token
from .nodes import ASTNode, Assignment, BinaryOp, FuncCall, Number, Operator, Variable

logger = logging.getLogger(__name__)

# Named constants, substituted at parse time.
CONSTANTS: Dict[str, float] = {
    'pi': math.pi,
    'e': math.e,
    'inf': math.inf,
    'nan': math.nan,
}

_SIGNS = ('+', '-')


class Parser:
    """Builds a correctly nested tree from a flat token list."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _lookahead(self, n: int = 1) -> Token:
        i = min(self.pos + n, len(self.tokens) - 1)
        return self.tokens[i]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != 'EOF':
            self.pos += 1
        return tok

    def _expect(self, typ: str) -> Token:
        tok = self._current()
        if tok.type != typ:
            raise ParseError(f"Expected {typ} at pos {tok.pos}; got {_describe(tok)}", tok.pos)
        return self._advance()

    def parse(self) -> ASTNode:
        """Parse a whole line: either `name = expr` or a bare expression."""
        if self._current().type == 'EOF':
            raise ParseError("Empty expression", self._current().pos)
        if self._current().type == 'IDENT' and self._lookahead().type == 'ASSIGN':
            node = self._parse_assignment()
        else:
            node = self.parse_expression(1)
        tok = self._current()
        if tok.type != 'EOF':
            raise ParseError(f"Unexpected {_describe(tok)} at pos {tok.pos}", tok.pos)
        logger.debug(f"Parsed a {type(node).__name__} node")
        return node

    def _parse_assignment(self) -> ASTNode:
        name_tok = self._advance()
        if name_tok.value in CONSTANTS:
            raise ParseError(f"Cannot assign to constant '{name_tok.value}' at pos {name_tok.pos}", name_tok.pos)
        self._expect('ASSIGN')
        return Assignment(name_tok.value, self.parse_expression(1))

    def parse_expression(self, min_prec: int) -> ASTNode:
        """Parse a term, then fold in every operator binding at least as tightly as min_prec."""
        left = self.parse_term()
        while True:
            cur = self._current()
            if cur.type != 'OP':
                break
            op = Operator.from_symbol(cur.value)
            if op.precedence < min_prec:
                break
            self._advance()
            # Right-assoc operators let an equal-precedence operator bind the right operand.
            next_min = op.precedence if op.right_assoc else op.precedence + 1
            right = self.parse_expression(next_min)
            left = BinaryOp(op, left, right)
        return left

    def _at_literal(self) -> bool:
        """True when the current token is a number or a constant name (not a call)."""
        cur = self._current()
        if cur.type == 'NUMBER':
            return True
        return cur.type == 'IDENT' and cur.value in CONSTANTS and self._lookahead().type != 'LPAREN'

    def _literal_value(self, tok: Token) -> float:
        if tok.type == 'NUMBER':
            return tok.value
        return CONSTANTS[tok.value]

    def parse_term(self) -> ASTNode:
        tok = self._advance()
        if tok.type == 'NUMBER':
            return Number(tok.value)
        if tok.type == 'OP' and tok.value in _SIGNS and self._at_literal():
            value = self._literal_value(self._advance())
            return Number(-value if tok.value == '-' else value)
        if tok.type == 'IDENT':
            if self._current().type == 'LPAREN':
                self._advance()
                arg = self.parse_expression(1)
                self._expect('RPAREN')
                return FuncCall(tok.value, arg)
            if tok.value in CONSTANTS:
                return Number(CONSTANTS[tok.value])
            return Variable(tok.value)
        if tok.type == 'LPAREN':
            expr = self.parse_expression(1)
            self._expect('RPAREN')
            return expr
        if tok.type == 'EOF':
            raise ParseError(f"Unexpected end of input at pos {tok.pos}", tok.pos)
        raise ParseError(f"Unexpected {_describe(tok)} at pos {tok.pos}", tok.pos)


def _describe(tok: Token) -> str:
    if tok.type == 'EOF':
        return "end of input"
    return f"token {tok.value!r}"


def parse(text: str) -> ASTNode:
    """Tokenize and parse a line of text. Raises ParseError (or LexerError) on malformed input."""
    return Parser(Lexer(text).tokenize()).parse()
