import os

from rich.console import Console
from rich.markup import escape

from ..core.diagnostics import Diagnostic


def make_console(stderr: bool = False) -> Console:
    # NO_COLOR disables color whenever it is set, even to an empty string
    return Console(stderr=stderr, highlight=False, soft_wrap=True,
                   no_color='NO_COLOR' in os.environ)


console = make_console()
err_console = make_console(stderr=True)


def _is_minimal() -> bool:
    # environment override KAIRO_MINIMAL_UI=1
    env = os.environ.get('KAIRO_MINIMAL_UI')
    if env is not None:
        return env.strip().lower() in ('1', 'true', 'yes', 'on')
    return False


def print_stage(step: int, total: int, message: str):
    """Print a staged progress-like line (e.g. [1/4] Parsing...)"""
    if _is_minimal():
        console.print(f"\\[{step}/{total}] {escape(message)}")
    else:
        console.print(f"[cyan]●[/cyan] [bold]{step}/{total}[/bold] {escape(message)}")


def print_error(message: str):
    if _is_minimal():
        err_console.print(f"\\[ERROR] {escape(message)}")
        return
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str):
    if _is_minimal():
        console.print(f"\\[OK] {escape(message)}")
        return
    console.print(f"[green]Success:[/green] {escape(message)}")


def print_diagnostic(diagnostic: Diagnostic):
    if _is_minimal():
        err_console.print(diagnostic.format(), markup=False)
    else:
        err_console.print(diagnostic.format_markup())
    err_console.print()
