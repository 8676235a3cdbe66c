#!/usr/bin/env python3
import platform
import shutil
from pathlib import Path
from typing import List


class BuildTools:
    """Build tool detection and command construction"""

    @staticmethod
    def check_rustc(rustc: str = 'rustc') -> bool:
        """Check if the Rust compiler is available"""
        return shutil.which(rustc) is not None

    @staticmethod
    def executable_name(stem: str) -> str:
        if platform.system().lower().startswith('windows'):
            return f"{stem}.exe"
        return stem

    @staticmethod
    def rustc_command(rustc: str, source: Path, output: Path, optimize: bool = False,
                      edition: str = '2024') -> List[str]:
        cmd = [rustc]
        if optimize:
            cmd.append('-O')
        cmd.append(f'--edition={edition}')
        cmd.extend(['-o', str(output), str(source)])
        return cmd

    @staticmethod
    def install_instructions() -> str:
        return (
            "rustc was not found on PATH.\n"
            "  Install the Rust toolchain from https://rustup.rs/\n"
            "  or point the RUSTC environment variable at an existing rustc."
        )


build_tools = BuildTools()
