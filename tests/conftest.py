import pytest

from loxparse.parser import Parser
from loxparse.scanner import Scanner


class RecordingReporter:
    """Collects diagnostics instead of printing them."""

    def __init__(self):
        self.errors = []
        self.line_errors = []

    def error(self, token, message):
        self.errors.append((token, message))

    def error_line(self, line, message):
        self.line_errors.append((line, message))


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def scan(reporter):
    def scan_source(source):
        return Scanner(reporter, source).scan_tokens()

    return scan_source


@pytest.fixture
def parse(scan, reporter):
    def parse_source(source, require_eof=False):
        return Parser(reporter, scan(source)).parse(require_eof)

    return parse_source
