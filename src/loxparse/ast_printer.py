import decimal
import math

from loxparse.expr import Binary, Expr, ExprVisitor, Grouping, Literal, Unary
from loxparse.value import stringify


class AstPrinter(ExprVisitor[str]):
    """Renders an expression as a lisp-like string, e.g. (+ 1 (* 2 3))."""

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def parenthesize(self, name: str, *exprs: Expr) -> str:
        args_list = " ".join(expr.accept(self) for expr in exprs)
        return f"({name} {args_list})"

    def visit_binary(self, expr: Binary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping(self, expr: Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    def visit_literal(self, expr: Literal) -> str:
        return stringify(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)


class SourcePrinter(ExprVisitor[str]):
    """
    Renders an expression back to lox source. Only groupings produce
    parentheses, so trees built by the parser scan and parse back to the
    same tree.
    """

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def visit_binary(self, expr: Binary) -> str:
        left = expr.left.accept(self)
        right = expr.right.accept(self)
        return f"{left} {expr.operator.lexeme} {right}"

    def visit_grouping(self, expr: Grouping) -> str:
        return f"({expr.expression.accept(self)})"

    def visit_literal(self, expr: Literal) -> str:
        match expr.value:
            case str(text):
                escaped = text.replace("\\", "\\\\").replace('"', '\\"')
                return f'"{escaped}"'
            case float(number):
                return self.number(number)
        return stringify(expr.value)

    def visit_unary(self, expr: Unary) -> str:
        return f"{expr.operator.lexeme}{expr.right.accept(self)}"

    @staticmethod
    def number(val: float) -> str:
        """
        Plain decimal digits, the only number form the scanner reads. The
        shortest repr is widened through Decimal so no precision is lost.
        """
        if math.isinf(val):
            # Any digit string past the double range scans back as inf.
            return "1" + "0" * 309
        text = format(decimal.Decimal(repr(val)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
