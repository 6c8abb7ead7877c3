import sys

from loxparse import ast_printer
from loxparse import parser
from loxparse import scanner


class Lox:
    """
    Runs source through the scanner and parser and prints the parsed
    expression. Also acts as the error reporter for both stages.
    """

    printer: ast_printer.AstPrinter
    debug_enabled: bool
    had_error: bool = False

    def __init__(self, debug: bool = False):
        self.printer = ast_printer.AstPrinter()
        self.debug_enabled = debug

    def run_file(self, path: str):
        source: str
        with open(path, encoding="utf-8") as source_file:
            source = source_file.read()
        self.run(source)
        if self.had_error:
            sys.exit(65)

    def run_prompt(self):
        while True:
            try:
                line = input(">>> ")
                self.run(line)
                self.had_error = False
            except EOFError:
                break

    def run(self, source: str):
        scan = scanner.Scanner(self, source)
        tokens = scan.scan_tokens()

        if self.debug_enabled:
            self.debug("Scanned tokens:")
            for token in tokens:
                self.debug(token)
            self.debug()

        if self.had_error:
            return

        parse = parser.Parser(self, tokens)
        expr = parse.parse(require_eof=True)
        if expr is None:
            return
        try:
            printed = self.printer.print(expr)
        except RecursionError:
            self.error_line(tokens[0].line, "Expression nested too deeply.")
            return
        print(printed)

    def error_line(self, line: int, message: str):
        self.report(line, "", message)

    def error(self, token: scanner.Token, message: str):
        if token.typ == scanner.TokenType.EOF:
            self.report(token.line, "at end", message)
        else:
            self.report(token.line, f"at '{token.lexeme}'", message)

    def report(self, line: int, where: str, message: str):
        if where:
            where = " " + where
        print(f"[line {line}] Error{where}: {message}", file=sys.stderr)
        self.had_error = True

    def debug(self, *args, **kwargs):
        print(*args, **kwargs, file=sys.stderr)


def main():
    if len(sys.argv) > 2:
        print("Usage: plox [script]", file=sys.stderr)
        sys.exit(64)
    if len(sys.argv) == 2:
        Lox().run_file(sys.argv[1])
    else:
        Lox().run_prompt()


if __name__ == "__main__":
    main()
