#!/usr/bin/env python3
"""Command line front end: ``kairo run FILE`` and ``kairo build FILE``."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .compiler.semantic import SemanticErrors
from .pipeline import CompilerConfig, KairoCompiler
from .utils.errors import KairoError, SourceInputError, root_cause
from .utils.term import print_diagnostic, print_error, print_success


def ensure_source_file(path: Path, extension: str = 'kr'):
    if not path.exists():
        raise SourceInputError(f"source file not found: {path}")
    if path.suffix != f'.{extension}':
        raise SourceInputError(f"expect a .{extension} file: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='kairo',
        description='Kairo language toolchain',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log compiler stages')
    sub = parser.add_subparsers(dest='command', required=True)

    run_p = sub.add_parser('run', help='Compile a .kr file and run it')
    run_p.add_argument('file', type=Path, help='.kr source file')

    build_p = sub.add_parser('build', help='Compile a .kr file to an executable')
    build_p.add_argument('file', type=Path, help='.kr source file')
    build_p.add_argument('--release', action='store_true', help='Build with optimizations')
    build_p.add_argument('--out-dir', type=Path, default=None,
                         help='Directory for generated artifacts (default: target/kairo_out)')
    return parser


def _compile(compiler: KairoCompiler, file: Path, release: bool) -> Path:
    ensure_source_file(file, compiler.config.source_extension)
    try:
        return compiler.compile(file, optimize=release)
    except KairoError as e:
        raise KairoError(f"failed to compile {file}") from e


def run_file(compiler: KairoCompiler, file: Path):
    exe_path = _compile(compiler, file, release=False)
    compiler.run(exe_path)


def build_file(compiler: KairoCompiler, file: Path, release: bool) -> Path:
    exe_path = _compile(compiler, file, release)
    print_success(f"Built: {exe_path}")
    return exe_path


def report(exc: BaseException):
    """Print the most specific error available."""
    cause = root_cause(exc)
    if isinstance(cause, SemanticErrors):
        for error in cause.errors:
            print_diagnostic(error.diagnostic)
        print_error(f"aborting due to {len(cause.errors)} previous error(s)")
    else:
        print_error(str(cause))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = CompilerConfig.from_env()
    config.verbose = args.verbose
    if getattr(args, 'out_dir', None) is not None:
        config.out_dir = args.out_dir
    compiler = KairoCompiler(config)

    try:
        if args.command == 'run':
            run_file(compiler, args.file)
        else:
            build_file(compiler, args.file, args.release)
    except (KairoError, OSError) as e:
        report(e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
