from typing import List, Set

from ..core.ast import AssignStmt, BinaryAdd, Expr, Ident, IntLit, PrintStmt, Program, StringLit
from ..core.symbols import Mutability, SymbolTable

INDENT = '    '


def escape_string(text: str) -> str:
    """Escape text for a Rust string literal."""
    return text.replace('\\', '\\\\').replace('"', '\\"')


def escape_format_string(text: str) -> str:
    """Escape text for use as a literal println! format string."""
    return escape_string(text).replace('{', '{{').replace('}', '}}')


class RustCodeGenerator:
    """Lowers a checked Program to a single-file Rust program.

    Immutable variables become plain ``let`` bindings. Mutable variables
    live in an ``Rc<RefCell<_>>`` cell: the first assignment creates the
    cell and later ones write through it.
    """

    def __init__(self):
        self.header: List[str] = []
        self.body: List[str] = []
        self.declared: Set[str] = set()
        self.symbols = SymbolTable()

    def generate(self, program: Program, symbols: SymbolTable) -> str:
        self.header = []
        self.body = []
        self.declared = set()
        self.symbols = symbols

        if symbols.has_mutable():
            self.header.append('use std::rc::Rc;')
            self.header.append('use std::cell::RefCell;')
            self.header.append('')

        for stmt in program.statements:
            if isinstance(stmt, PrintStmt):
                self._emit_print(stmt)
            elif isinstance(stmt, AssignStmt):
                self._emit_assign(stmt)

        parts: List[str] = list(self.header)
        parts.append('fn main() {')
        parts.extend(INDENT + line for line in self.body)
        parts.append('}')
        return '\n'.join(parts) + '\n'

    def _emit_print(self, stmt: PrintStmt):
        self.body.append(f'println!("{escape_format_string(stmt.content)}");')

    def _emit_assign(self, stmt: AssignStmt):
        name = stmt.name
        # names missing from the table are treated as immutable
        mutability = self.symbols.mutability_of(name) or Mutability.IMMUTABLE
        is_first = name not in self.declared
        value = self.gen_expr(stmt.value)

        if is_first and mutability is Mutability.MUTABLE and stmt.declares_mutable:
            self.body.append(f'let {name} = Rc::new(RefCell::new({value}));')
            self.declared.add(name)
        elif is_first and mutability is Mutability.IMMUTABLE and not stmt.declares_mutable:
            self.body.append(f'let {name} = {value};')
            self.declared.add(name)
        elif not is_first and mutability is Mutability.MUTABLE:
            # the right operand is evaluated, and its borrows released, before the
            # place is borrowed mutably; a binding named `value` only shadows inside
            self.body.append(
                f'*{name}.borrow_mut() = {{ let value = {self._gen_initializer(stmt.value)}; value }};')
        elif not is_first:
            # rejected by semantic analysis
            self.body.append(f'let {name} = {value}; // (note) immutable redeclaration fallback')
        else:
            # first occurrence whose marker disagrees with the table
            self.body.append(f'let {name} = {value};')
            self.declared.add(name)

    def _gen_initializer(self, expr: Expr) -> str:
        # outermost addition without parentheses, rustc warns on `let v = (a + b);`
        if isinstance(expr, BinaryAdd):
            return f'{self.gen_expr(expr.left)} + {self.gen_expr(expr.right)}'
        return self.gen_expr(expr)

    def gen_expr(self, expr: Expr) -> str:
        if isinstance(expr, StringLit):
            return f'"{escape_string(expr.text)}"'
        if isinstance(expr, IntLit):
            return str(expr.value)
        if isinstance(expr, Ident):
            if self.symbols.is_mutable(expr.name):
                return f'*{expr.name}.borrow()'
            return expr.name
        if isinstance(expr, BinaryAdd):
            return f'({self.gen_expr(expr.left)} + {self.gen_expr(expr.right)})'
        raise TypeError(f"unknown expression node: {type(expr).__name__}")


def generate_rust(program: Program, symbols: SymbolTable) -> str:
    return RustCodeGenerator().generate(program, symbols)
