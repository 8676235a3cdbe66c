"""Core package re-exports: spans, AST, parser, symbols and diagnostics"""
from .span import SourcePos, SourceSpan
from .ast import Program, PrintStmt, AssignStmt, StringLit, IntLit, Ident, BinaryAdd, Expr, Stmt, iter_idents
from .symbols import Mutability, Symbol, SymbolTable
from .diagnostics import Diagnostic, caret_line, get_line
from .parser import KairoParser, ParseError, parse

__all__ = [
    'SourcePos', 'SourceSpan',
    'Program', 'PrintStmt', 'AssignStmt', 'StringLit', 'IntLit', 'Ident', 'BinaryAdd', 'Expr', 'Stmt', 'iter_idents',
    'Mutability', 'Symbol', 'SymbolTable',
    'Diagnostic', 'caret_line', 'get_line',
    'KairoParser', 'ParseError', 'parse',
]
