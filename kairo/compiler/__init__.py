"""Compiler package: semantic analysis and Rust code generation"""
from .semantic import SemanticAnalyzer, SemanticError, SemanticErrorKind, SemanticErrors, check_semantics
from .codegen import RustCodeGenerator, generate_rust, escape_string

__all__ = [
    'SemanticAnalyzer', 'SemanticError', 'SemanticErrorKind', 'SemanticErrors', 'check_semantics',
    'RustCodeGenerator', 'generate_rust', 'escape_string',
]
