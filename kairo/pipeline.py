import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .compiler.codegen import RustCodeGenerator
from .compiler.semantic import check_semantics
from .core.parser import KairoParser
from .utils.build import build_tools
from .utils.errors import ProgramRunError, SourceInputError, ToolchainError
from .utils.term import print_stage

DEFAULT_OUT_DIR = Path('target') / 'kairo_out'


@dataclass
class CompilerConfig:
    out_dir: Path = field(default_factory=lambda: DEFAULT_OUT_DIR)
    rustc: str = 'rustc'
    edition: str = '2024'
    verbose: bool = False
    source_extension: str = 'kr'

    @classmethod
    def from_env(cls) -> 'CompilerConfig':
        config = cls()
        config.rustc = os.environ.get('RUSTC', config.rustc)
        out_dir = os.environ.get('KAIRO_OUT_DIR')
        if out_dir:
            config.out_dir = Path(out_dir)
        return config


class KairoCompiler:
    """Kairo to native executable, by way of generated Rust"""

    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = config or CompilerConfig()
        self.logger = logging.getLogger(__name__)

    def _stage(self, step: int, message: str):
        self.logger.info("Phase %d: %s", step, message)
        if self.config.verbose:
            print_stage(step, 4, message)

    def translate(self, source: str, filename: str = "<input>") -> str:
        """Run parse, semantic analysis and code generation; return Rust source."""
        self._stage(1, f"Parsing {filename}")
        program = KairoParser(source, filename).parse()

        self._stage(2, "Semantic analysis")
        symbols = check_semantics(program, source, filename)
        self.logger.debug("symbols: %s", {n: m.value for n, m in symbols.as_dict().items()})

        self._stage(3, "Generating Rust")
        return RustCodeGenerator().generate(program, symbols)

    def compile(self, source_path: Union[str, Path], optimize: bool = False) -> Path:
        """Compile a .kr file and return the path of the produced executable."""
        src_path = Path(source_path)
        try:
            source = src_path.read_text(encoding='utf-8')
        except OSError as e:
            raise SourceInputError(f"failed to read source: {src_path}") from e
        except UnicodeDecodeError as e:
            raise SourceInputError(f"source is not valid utf-8: {src_path}") from e

        rust_code = self.translate(source, src_path.name)

        stem = src_path.stem or 'out'
        out_dir = Path(self.config.out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        rs_path = out_dir / f"{stem}.rs"
        exe_path = out_dir / build_tools.executable_name(stem)

        rs_path.write_text(rust_code, encoding='utf-8')
        self.logger.info("Wrote generated Rust to %s", rs_path)

        self._run_rustc(rs_path, exe_path, optimize)
        return exe_path

    def _run_rustc(self, rs_path: Path, exe_path: Path, optimize: bool):
        cmd = build_tools.rustc_command(self.config.rustc, rs_path, exe_path,
                                        optimize=optimize, edition=self.config.edition)
        self._stage(4, f"Compiling {rs_path.name} with {self.config.rustc}")
        self.logger.debug("command: %s", ' '.join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ToolchainError(build_tools.install_instructions(), returncode=-1) from e

        if result.returncode != 0:
            raise ToolchainError(
                "rustc failed to compile generated code",
                returncode=result.returncode,
                output=(result.stderr or '').strip(),
            )
        if result.stderr:
            self.logger.debug("rustc: %s", result.stderr.strip())

    def run(self, exe_path: Union[str, Path]) -> int:
        """Run a produced executable with inherited stdio."""
        exe_path = Path(exe_path)
        self.logger.info("Running %s", exe_path)
        try:
            result = subprocess.run([str(exe_path.resolve())])
        except OSError as e:
            raise ProgramRunError(f"failed to run {exe_path}: {e}", returncode=-1) from e
        if result.returncode != 0:
            raise ProgramRunError(f"program exited with status: {result.returncode}",
                                  returncode=result.returncode)
        return result.returncode


def compile_string(source: str, filename: str = "<string>") -> str:
    return KairoCompiler().translate(source, filename)


def compile_file(source_path: Union[str, Path], optimize: bool = False,
                 config: Optional[CompilerConfig] = None) -> Path:
    return KairoCompiler(config or CompilerConfig.from_env()).compile(source_path, optimize)
