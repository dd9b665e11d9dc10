# lexer.py
"""Tokenizer for recalc expressions.

Produces tokens: NUMBER, IDENT, OP, LPAREN, RPAREN, ASSIGN, EOF.
'-' and '+' are always tokenized as operators; the parser decides whether
one in term position belongs to a numeric literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .errors import LexerError

logger = logging.getLogger(__name__)

# Typographic operator spellings mapped onto their ASCII forms.
_OP_ALIASES = {
    '·': '*',
    '×': '*',
    '÷': '/',
}
_OP_CHARS = set('+-*/^') | set(_OP_ALIASES)


@dataclass
class Token:
    """Represents a token with type, value, and character position."""
    type: str
    value: Any
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


class Lexer:
    """Converts a line of input into a list of tokens."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _skip_whitespace(self) -> None:
        while self._peek() and self._peek().isspace():
            self._advance()

    def _exponent_length(self) -> int:
        """Length of an exponent suffix at the current position, 0 if there is none."""
        if self._peek() not in ('e', 'E'):
            return 0
        n = 1
        if self._peek(n) in ('+', '-'):
            n += 1
        if not self._peek(n).isdigit():
            return 0
        while self._peek(n).isdigit():
            n += 1
        return n

    def _read_number(self) -> Token:
        start = self.pos
        while self._peek().isdigit():
            self._advance()
        if self._peek() == '.':
            self._advance()
            while self._peek().isdigit():
                self._advance()
        self._advance(self._exponent_length())
        raw = self.text[start:self.pos]
        try:
            val = float(raw)
        except ValueError:
            raise LexerError(f"Invalid numeric literal {raw!r} at pos {start}", start)
        return Token('NUMBER', val, start)

    def _read_ident(self) -> Token:
        start = self.pos
        while self._peek().isalnum() or self._peek() == '_':
            self._advance()
        return Token('IDENT', self.text[start:self.pos], start)

    def _match_op(self) -> Optional[str]:
        ch = self._peek()
        if ch in _OP_CHARS:
            return _OP_ALIASES.get(ch, ch)
        return None

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            self._skip_whitespace()
            ch = self._peek()
            if ch == '':
                break
            if ch.isdigit() or (ch == '.' and self._peek(1).isdigit()):
                tokens.append(self._read_number())
            elif ch.isalpha() or ch == '_':
                tokens.append(self._read_ident())
            elif ch == '(':
                tokens.append(Token('LPAREN', ch, self.pos))
                self._advance()
            elif ch == ')':
                tokens.append(Token('RPAREN', ch, self.pos))
                self._advance()
            elif ch == '=':
                tokens.append(Token('ASSIGN', ch, self.pos))
                self._advance()
            else:
                op = self._match_op()
                if not op:
                    raise LexerError(f"Unknown character at pos {self.pos}: {ch!r}", self.pos)
                tokens.append(Token('OP', op, self.pos))
                self._advance()
        tokens.append(Token('EOF', None, self.pos))
        logger.debug(f"Tokenized {self.text!r} into {len(tokens)} tokens")
        return tokens
