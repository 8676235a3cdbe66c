"""Kairo: a tiny mutability-aware language compiled to Rust."""
__version__ = "0.1.0"

from .core import parse, KairoParser, ParseError, Program, Mutability, SymbolTable
from .compiler import SemanticAnalyzer, SemanticError, SemanticErrors, check_semantics
from .compiler import RustCodeGenerator, generate_rust
from .pipeline import CompilerConfig, KairoCompiler, compile_file, compile_string
from .utils.errors import KairoError, SourceInputError, ToolchainError, ProgramRunError

__all__ = [
    'parse', 'KairoParser', 'ParseError', 'Program', 'Mutability', 'SymbolTable',
    'SemanticAnalyzer', 'SemanticError', 'SemanticErrors', 'check_semantics',
    'RustCodeGenerator', 'generate_rust',
    'CompilerConfig', 'KairoCompiler', 'compile_file', 'compile_string',
    'KairoError', 'SourceInputError', 'ToolchainError', 'ProgramRunError',
]
