import logging
import re
from typing import List, Optional, Tuple

from ..utils.errors import KairoError
from .ast import AssignStmt, BinaryAdd, Expr, Ident, IntLit, PrintStmt, Program, Stmt, StringLit
from .span import SourceSpan

logger = logging.getLogger(__name__)

COMMENT_MARKER = '//'
MUTABLE_MARKER = '$'

INT_RE = re.compile(r'-?[0-9]+')
IDENT_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


class ParseError(KairoError):
    """Syntax error. Parsing stops at the first one."""

    def __init__(self, message: str, line: int = 0, column: int = 0,
                 line_text: str = "", filename: Optional[str] = None):
        self.line_text = line_text
        self.filename = filename
        super().__init__(message, line, column, line_text)

    def _format_error(self) -> str:
        result = f"syntax error: {self.message}"
        if self.filename and self.line > 0:
            location = f"{self.filename}:{self.line}"
            if self.column > 0:
                location += f":{self.column}"
            result += f"\n  --> {location}"
        return result


def _is_ident_start(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == '_')


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == '_')


def _is_string_literal(text: str) -> bool:
    return len(text) >= 2 and text.startswith('"') and text.endswith('"')


class KairoParser:
    """Line-oriented parser for Kairo source.

    Each physical line holds at most one statement: either
    ``print("...")`` or ``[$]name = expr``. Blank lines and ``//``
    comments are skipped.
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def parse(self) -> Program:
        statements: List[Stmt] = []
        for line_no, raw_line in enumerate(self.source.split('\n'), start=1):
            if raw_line.endswith('\r'):
                raw_line = raw_line[:-1]
            trimmed = raw_line.strip()
            if not trimmed or trimmed.startswith(COMMENT_MARKER):
                continue

            stmt = self._parse_print(trimmed, raw_line, line_no)
            if stmt is None:
                # assignment needs the raw line to keep column offsets
                stmt = self._parse_assign(raw_line, line_no)
            if stmt is None:
                raise self._error(f"cannot parse line {line_no}: {raw_line}", line_no, raw_line)
            statements.append(stmt)

        logger.debug("parsed %d statement(s) from %s", len(statements), self.filename)
        return Program(statements)

    def _error(self, message: str, line_no: int, raw_line: str, column: int = 0) -> ParseError:
        return ParseError(message, line_no, column, raw_line, self.filename)

    def _parse_print(self, line: str, raw_line: str, line_no: int) -> Optional[PrintStmt]:
        if not (line.startswith('print(') and line.endswith(')')):
            return None

        inner = line[len('print('):-1].strip()
        if not _is_string_literal(inner):
            raise self._error(
                f"print(...) only supports string literals, line {line_no}", line_no, raw_line)

        # escape sequences are not processed
        content = inner[1:-1]
        start_col = len(raw_line) - len(raw_line.lstrip()) + 1
        span = SourceSpan.single_line(line_no, start_col, start_col + len(line))
        return PrintStmt(content, span)

    def _parse_assign(self, raw: str, line_no: int) -> Optional[AssignStmt]:
        lhs, eq, rhs = raw.partition('=')
        if not eq:
            return None

        i = 0
        while i < len(lhs) and lhs[i].isspace():
            i += 1

        declares_mutable = False
        if i < len(lhs) and lhs[i] == MUTABLE_MARKER:
            declares_mutable = True
            i += 1
            while i < len(lhs) and lhs[i].isspace():
                i += 1

        if i >= len(lhs) or not _is_ident_start(lhs[i]):
            return None

        name_start = i
        i += 1
        while i < len(lhs) and _is_ident_char(lhs[i]):
            i += 1
        name = lhs[name_start:i]

        if lhs[i:].strip():
            raise self._error(
                f"invalid left-hand side `{lhs.strip()}` (line {line_no})",
                line_no, raw, column=name_start + 1)

        # rhs starts right after the '=' sign
        value = self._parse_expr(rhs, line_no, len(lhs) + 2, raw)
        span = SourceSpan.single_line(line_no, 1, len(raw))
        name_span = SourceSpan.single_line(line_no, name_start + 1, name_start + 1 + len(name))
        return AssignStmt(name, declares_mutable, value, span, name_span)

    def _parse_expr(self, text: str, line_no: int, column: int, raw_line: str) -> Expr:
        """Parse ``a + b + ...`` as a left-associative chain of additions.

        ``column`` is the 1-based column of ``text[0]`` in the source line.
        """
        pieces: List[Tuple[str, int]] = []
        offset = 0
        for piece in text.split('+'):
            leading = len(piece) - len(piece.lstrip())
            pieces.append((piece.strip(), column + offset + leading))
            offset += len(piece) + 1

        atom, col = pieces[0]
        expr = self._parse_atom(atom, line_no, col, raw_line)
        for atom, col in pieces[1:]:
            rhs = self._parse_atom(atom, line_no, col, raw_line)
            expr = BinaryAdd(expr, rhs, expr.span)
        return expr

    def _parse_atom(self, text: str, line_no: int, column: int, raw_line: str) -> Expr:
        span = SourceSpan.single_line(line_no, column, column + len(text))

        if _is_string_literal(text):
            return StringLit(text[1:-1], span)

        if INT_RE.fullmatch(text):
            value = int(text)
            if I64_MIN <= value <= I64_MAX:
                return IntLit(value, span)

        if IDENT_RE.fullmatch(text):
            return Ident(text, span)

        raise self._error(
            f"cannot parse expression `{text}` (line {line_no})", line_no, raw_line, column)


def parse(source: str, filename: str = "<input>") -> Program:
    """Parse Kairo source text into a Program."""
    return KairoParser(source, filename).parse()
