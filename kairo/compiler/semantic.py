import logging
import re
from enum import Enum
from typing import Dict, List

from ..core.ast import AssignStmt, Expr, Ident, PrintStmt, Program, iter_idents
from ..core.diagnostics import Diagnostic, caret_line, get_line
from ..core.span import SourceSpan
from ..core.symbols import Mutability, SymbolTable
from ..utils.errors import KairoError


class SemanticErrorKind(Enum):
    DUPLICATE_DECLARATION = "duplicate-declaration"
    ASSIGN_TO_IMMUTABLE = "assign-to-immutable"
    UNDEFINED_VARIABLE = "undefined-variable"


class SemanticError(KairoError):
    """A single semantic error with its rendered diagnostic"""

    def __init__(self, kind: SemanticErrorKind, name: str, diagnostic: Diagnostic):
        self.kind = kind
        self.name = name
        self.diagnostic = diagnostic
        super().__init__(diagnostic.summary, diagnostic.line, diagnostic.column,
                         diagnostic.line_text)

    @property
    def summary(self) -> str:
        return self.diagnostic.summary

    @property
    def line_text(self) -> str:
        return self.diagnostic.line_text

    @property
    def caret(self) -> str:
        return self.diagnostic.caret

    def _format_error(self) -> str:
        return self.diagnostic.format()


class SemanticErrors(KairoError):
    """All semantic errors found in one pass over a program"""

    def __init__(self, errors: List[SemanticError]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} semantic error(s)")

    def _format_error(self) -> str:
        return '\n\n'.join(str(e) for e in self.errors)


def _suggest_assign_immutable(name: str) -> str:
    return (
        f"   - to make it mutable, add `$` to its first assignment:\n"
        f"        ${name} = 0\n"
        f"        {name} = {name} + 1\n"
        f"   - or create a new variable instead:\n"
        f"        new_{name} = {name} + 1"
    )


def _suggest_redeclare(name: str) -> str:
    return (
        f"   - to reassign it, drop the `$`:\n"
        f"        {name} = ...\n"
        f"   - to declare a new variable, pick another name:\n"
        f"        {name}_2 = ..."
    )


def _suggest_undefined(name: str) -> str:
    return (
        f"   - declare it before use:\n"
        f"        {name} = ...    // immutable\n"
        f"        ${name} = ...   // mutable"
    )


class SemanticAnalyzer:
    """Checks mutability and declaration order, and builds the symbol table.

    Errors are collected rather than raised so that one run reports every
    problem in the program.
    """

    def __init__(self, source: str = "", filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.symbol_table = SymbolTable()
        self.errors: List[SemanticError] = []
        self.logger = logging.getLogger(__name__)

    def analyze(self, program: Program) -> bool:
        """Analyze the program and return True if no errors"""
        self._check_declarations(program)
        self._check_uses(program)
        if self.errors:
            self.logger.info("%s: %d semantic error(s)", self.filename, len(self.errors))
        return len(self.errors) == 0

    # Pass 1: declarations and mutability

    def _check_declarations(self, program: Program):
        for stmt in program.statements:
            if isinstance(stmt, PrintStmt):
                continue
            if isinstance(stmt, AssignStmt):
                self._check_assignment(stmt)

    def _check_assignment(self, stmt: AssignStmt):
        existing = self.symbol_table.mutability_of(stmt.name)

        if stmt.declares_mutable:
            if existing is None:
                self.symbol_table.declare(stmt.name, Mutability.MUTABLE, stmt.name_span)
            else:
                self._report(
                    SemanticErrorKind.DUPLICATE_DECLARATION, stmt.name, stmt.name_span,
                    f"variable `{stmt.name}` is already declared and cannot be declared again",
                    _suggest_redeclare(stmt.name))
            return

        if existing is None:
            self.symbol_table.declare(stmt.name, Mutability.IMMUTABLE, stmt.name_span)
        elif existing is Mutability.IMMUTABLE:
            self._report(
                SemanticErrorKind.ASSIGN_TO_IMMUTABLE, stmt.name, stmt.name_span,
                f"cannot assign twice to immutable variable `{stmt.name}`",
                _suggest_assign_immutable(stmt.name))
        # MUTABLE: plain reassignment, table unchanged

    # Pass 2: use before declaration

    def _check_uses(self, program: Program):
        declared: Dict[str, Mutability] = {}
        for stmt in program.statements:
            if not isinstance(stmt, AssignStmt):
                continue
            self._check_expr(stmt.value, declared)
            mutability = Mutability.MUTABLE if stmt.declares_mutable else Mutability.IMMUTABLE
            declared.setdefault(stmt.name, mutability)

    def _check_expr(self, expr: Expr, declared: Dict[str, Mutability]):
        for ident in iter_idents(expr):
            if ident.name not in declared:
                self._report(
                    SemanticErrorKind.UNDEFINED_VARIABLE, ident.name, self._locate(ident),
                    f"use of undefined variable `{ident.name}`",
                    _suggest_undefined(ident.name))

    def _locate(self, ident: Ident) -> SourceSpan:
        """Return the span of ``ident``, re-locating it in the line text when
        the recorded column does not point at the name."""
        span = ident.span
        line_text = get_line(self.source, span.line)
        start = span.start.column - 1
        if not line_text or line_text[start:start + len(ident.name)] == ident.name:
            return span

        match = re.search(r'(?<![A-Za-z0-9_])' + re.escape(ident.name) + r'(?![A-Za-z0-9_])', line_text)
        if match is None:
            return span
        return SourceSpan.single_line(span.line, match.start() + 1, match.end() + 1)

    def _report(self, kind: SemanticErrorKind, name: str, span: SourceSpan,
                summary: str, suggestions: str):
        diagnostic = Diagnostic(
            summary=summary,
            filename=self.filename,
            line=span.line,
            column=span.start.column,
            line_text=get_line(self.source, span.line),
            caret=caret_line(span),
            suggestions=suggestions,
        )
        self.errors.append(SemanticError(kind, name, diagnostic))


def check_semantics(program: Program, source: str = "", filename: str = "<input>") -> SymbolTable:
    """Return the program's symbol table, or raise SemanticErrors with every problem found."""
    analyzer = SemanticAnalyzer(source, filename)
    if not analyzer.analyze(program):
        raise SemanticErrors(analyzer.errors)
    return analyzer.symbol_table
