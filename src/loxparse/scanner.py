# pylint: disable=missing-function-docstring,missing-class-docstring,missing-module-docstring

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from loxparse.value import LoxValue

# fmt: off
TokenType = Enum("TokenType", [
    # Single-character tokens.
    "LEFT_PAREN", "RIGHT_PAREN", "LEFT_BRACE", "RIGHT_BRACE",
    "COMMA", "DOT", "MINUS", "PLUS", "SEMICOLON", "SLASH", "STAR",

    # One or two character tokens.
    "BANG", "BANG_EQUAL",
    "EQUAL", "EQUAL_EQUAL",
    "GREATER", "GREATER_EQUAL",
    "LESS", "LESS_EQUAL",

    # Literals.
    "IDENTIFIER", "STRING", "NUMBER",

    # Keywords.
    "AND", "CLASS", "ELSE", "FALSE", "FUN", "FOR", "IF", "NIL", "OR",
    "PRINT", "RETURN", "SUPER", "THIS", "TRUE", "VAR", "WHILE",

    "EOF"
])

keywords = {
    "and":    TokenType.AND,
    "class":  TokenType.CLASS,
    "else":   TokenType.ELSE,
    "false":  TokenType.FALSE,
    "for":    TokenType.FOR,
    "fun":    TokenType.FUN,
    "if":     TokenType.IF,
    "nil":    TokenType.NIL,
    "or":     TokenType.OR,
    "print":  TokenType.PRINT,
    "return": TokenType.RETURN,
    "super":  TokenType.SUPER,
    "this":   TokenType.THIS,
    "true":   TokenType.TRUE,
    "var":    TokenType.VAR,
    "while":  TokenType.WHILE,
}

single_char_tokens = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# Character -> (type alone, type when followed by "=")
two_char_tokens = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}
# fmt: on


def is_digit(c: Optional[str]) -> bool:
    # ASCII only; str.isdigit() accepts characters float() rejects.
    return c is not None and "0" <= c <= "9"


@dataclass(frozen=True)
class Token:
    typ: TokenType
    lexeme: str
    literal: LoxValue
    line: int

    def __str__(self):
        return f"{self.typ.name} {self.lexeme} {self.literal}"


class LineErrorReporter(Protocol):
    def error_line(self, line: int, message: str) -> None:
        ...


class Scanner:
    reporter: LineErrorReporter
    source: str
    tokens: list[Token]

    start: int = 0
    current: int = 0
    line: int = 1

    def __init__(self, reporter: LineErrorReporter, source: str):
        self.reporter = reporter
        self.source = source
        self.tokens = []

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_tokens(self) -> list[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def peek(self) -> Optional[str]:
        """
        Returns the next character, or None if we're at EOF
        """
        if self.is_at_end():
            return None
        return self.source[self.current]

    def peek_next(self) -> Optional[str]:
        """
        Returns the character after next, or None it's EOF
        """
        if self.current + 1 >= len(self.source):
            return None
        return self.source[self.current + 1]

    def advance(self) -> str:
        self.current += 1
        return self.source[self.current - 1]

    def add_token(self, typ: TokenType, literal: LoxValue = None):
        text = self.source[self.start : self.current]
        self.tokens.append(Token(typ, text, literal, self.line))

    def match(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def advance_until_match(self, expected: str, escapes: bool = False) -> bool:
        """
        Advances current pointer until expected character is matched (but
        not consumed) or EOF. Returns True if character is found before EOF.
        With escapes, a backslash also skips the character that follows it.
        """
        while not self.is_at_end():
            p = self.peek()
            if p == expected:
                return True
            if escapes and p == "\\" and self.peek_next() is not None:
                self.advance()
                p = self.peek()
            if p == "\n":
                self.line += 1
            self.advance()
        return False

    def block_comment(self):
        starting_line = self.line
        while self.advance_until_match("*"):
            self.advance()
            if self.match("/"):
                return
        self.report_error(
            f"Unterminated block comment starting on line {starting_line}."
        )

    def string(self):
        if not self.advance_until_match('"', escapes=True):
            self.report_error("Unterminated string.")
            return
        # Closing quote.
        self.advance()

        raw = self.source[self.start + 1 : self.current - 1]
        # Escape sequences are decoded with python's own rules. The triple
        # quotes keep multiline strings intact.
        try:
            value = ast.literal_eval(f'"""{raw}"""')
        except (SyntaxError, ValueError):
            self.report_error("Invalid escape sequence in string.")
            return
        self.add_token(TokenType.STRING, value)

    def number(self):
        while is_digit(self.peek()):
            self.advance()
        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenType.NUMBER, float(self.source[self.start : self.current]))

    def identifier(self):
        while (p := self.peek()) and (p.isalnum() or p == "_"):
            self.advance()

        text = self.source[self.start : self.current]
        self.add_token(keywords.get(text, TokenType.IDENTIFIER))

    def scan_token(self):
        c = self.advance()
        match c:
            case c if c in single_char_tokens:
                self.add_token(single_char_tokens[c])
            case c if c in two_char_tokens:
                alone, with_equal = two_char_tokens[c]
                self.add_token(with_equal if self.match("=") else alone)
            case "/":
                if self.match("/"):
                    self.advance_until_match("\n")
                elif self.match("*"):
                    self.block_comment()
                else:
                    self.add_token(TokenType.SLASH)
            case "\n":
                self.line += 1
            case c if c.isspace():
                pass
            case '"':
                self.string()
            case c if is_digit(c):
                self.number()
            case c if c.isalpha() or c == "_":
                self.identifier()
            case _:
                self.report_error(f"Unexpected character '{c}'.")

    def report_error(self, message: str):
        self.reporter.error_line(self.line, message)
