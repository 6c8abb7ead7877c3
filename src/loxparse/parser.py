from typing import Callable, Optional, Protocol

import loxparse.exceptions
import loxparse.expr
import loxparse.scanner


TT = loxparse.scanner.TokenType


class ErrorReporter(Protocol):
    def error(self, token: loxparse.scanner.Token, message: str) -> None:
        ...


class LoxParseError(loxparse.exceptions.LoxError):
    pass


class Parser:
    """
    Recursive descent parser for Lox expressions. Each precedence level is a
    method delegating its operands to the next tighter level:

        expression -> equality
        equality   -> comparison ( ( "!=" | "==" ) comparison )*
        comparison -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
        term       -> factor ( ( "-" | "+" ) factor )*
        factor     -> unary ( ( "/" | "*" ) unary )*
        unary      -> ( "!" | "-" ) unary | primary
        primary    -> NUMBER | STRING | "true" | "false" | "nil"
                    | "(" expression ")"
    """

    tokens: list[loxparse.scanner.Token]
    current: int = 0
    reporter: ErrorReporter

    def __init__(
        self, reporter: ErrorReporter, tokens: list[loxparse.scanner.Token]
    ) -> None:
        self.reporter = reporter
        self.tokens = tokens

    def parse(self, require_eof: bool = False) -> Optional[loxparse.expr.Expr]:
        """
        Parses a single expression. Returns None if an error was reported.
        Tokens left after the expression are ignored unless require_eof is set.
        """
        try:
            expr = self.expression()
            if require_eof and not self.is_at_end():
                raise self.error(self.peek(), "Expect end of expression.")
            return expr
        except LoxParseError:
            return None
        except RecursionError:
            # Every nesting level costs about a dozen frames of descent.
            self.error(self.peek(), "Expression nested too deeply.")
            return None

    def expression(self) -> loxparse.expr.Expr:
        return self.equality()

    def equality(self) -> loxparse.expr.Expr:
        return self.parse_binary_operation(
            self.comparison,
            TT.BANG_EQUAL,
            TT.EQUAL_EQUAL,
        )

    def comparison(self) -> loxparse.expr.Expr:
        return self.parse_binary_operation(
            self.term,
            TT.GREATER,
            TT.GREATER_EQUAL,
            TT.LESS,
            TT.LESS_EQUAL,
        )

    def term(self) -> loxparse.expr.Expr:
        return self.parse_binary_operation(self.factor, TT.MINUS, TT.PLUS)

    def factor(self) -> loxparse.expr.Expr:
        return self.parse_binary_operation(self.unary, TT.SLASH, TT.STAR)

    def unary(self) -> loxparse.expr.Expr:
        if tok := self.match(TT.BANG, TT.MINUS):
            return loxparse.expr.Unary(tok, self.unary())
        return self.primary()

    def primary(self) -> loxparse.expr.Expr:
        if self.match(TT.FALSE):
            return loxparse.expr.Literal(False)
        if self.match(TT.TRUE):
            return loxparse.expr.Literal(True)
        if self.match(TT.NIL):
            return loxparse.expr.Literal(None)
        if tok := self.match(TT.NUMBER, TT.STRING):
            return loxparse.expr.Literal(tok.literal)
        if self.match(TT.LEFT_PAREN):
            expr = self.expression()
            self.consume(TT.RIGHT_PAREN, "Expect ')' after expression.")
            return loxparse.expr.Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    def parse_binary_operation(
        self, next_expr: Callable[[], loxparse.expr.Expr], *types: TT
    ) -> loxparse.expr.Expr:
        # Folding in a loop keeps every level left-associative.
        expr = next_expr()
        while tok := self.match(*types):
            expr = loxparse.expr.Binary(expr, tok, next_expr())
        return expr

    def consume(self, typ: TT, message: str) -> loxparse.scanner.Token:
        if tok := self.match(typ):
            return tok
        raise self.error(self.peek(), message)

    def error(self, token: loxparse.scanner.Token, message: str) -> LoxParseError:
        self.reporter.error(token, message)
        return LoxParseError()

    def is_at_end(self) -> bool:
        return self.peek().typ == TT.EOF

    def peek(self) -> loxparse.scanner.Token:
        return self.tokens[self.current]

    def previous(self) -> loxparse.scanner.Token:
        return self.tokens[self.current - 1]

    def advance(self) -> loxparse.scanner.Token:
        if not self.is_at_end():
            self.current += 1
            return self.previous()
        return self.peek()

    def check(self, *types: TT) -> Optional[loxparse.scanner.Token]:
        """
        Returns the next token if it is one of the given types, without
        consuming it. Never matches at EOF.
        """
        if self.is_at_end():
            return None
        if (tok := self.peek()).typ in types:
            return tok
        return None

    def match(self, *types: TT) -> Optional[loxparse.scanner.Token]:
        """
        Tries to match the next token to the given types. Consumes and returns
        the token on match, returns None if there is no match.
        """
        if self.check(*types):
            return self.advance()
        return None
