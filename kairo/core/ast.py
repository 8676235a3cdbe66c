from dataclasses import dataclass, field
from typing import Iterator, List, Union

from .span import SourceSpan


# Expressions

@dataclass
class StringLit:
    text: str
    span: SourceSpan


@dataclass
class IntLit:
    value: int
    span: SourceSpan


@dataclass
class Ident:
    name: str
    span: SourceSpan


@dataclass
class BinaryAdd:
    left: 'Expr'
    right: 'Expr'
    # inherited from the left operand
    span: SourceSpan


Expr = Union[StringLit, IntLit, Ident, BinaryAdd]


# Statements

@dataclass
class PrintStmt:
    content: str
    span: SourceSpan


@dataclass
class AssignStmt:
    name: str
    declares_mutable: bool
    value: Expr
    span: SourceSpan
    name_span: SourceSpan


Stmt = Union[PrintStmt, AssignStmt]


@dataclass
class Program:
    statements: List[Stmt] = field(default_factory=list)

    def __iter__(self) -> Iterator[Stmt]:
        return iter(self.statements)


def iter_idents(expr: Expr) -> Iterator[Ident]:
    """Yield every identifier reference in an expression, left to right."""
    if isinstance(expr, Ident):
        yield expr
    elif isinstance(expr, BinaryAdd):
        yield from iter_idents(expr.left)
        yield from iter_idents(expr.right)
