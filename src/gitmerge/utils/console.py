"""Themed console output for the gitmerge CLI.

Thin wrapper over a rich ``Console`` providing status lines and the
progress bar used while blob contents are fetched.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
from rich.text import Text
from rich.theme import Theme


class StatusType(Enum):
    """Standard status types with associated symbols."""
    SUCCESS = ("[✓]", "success", "green")
    ERROR = ("[x]", "error", "red")
    WARNING = ("[!]", "warning", "yellow")
    INFO = ("[!]", "info", "cyan")


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    info: str
    warning: str
    error: str
    success: str
    highlight: str
    path: str
    number: str
    dim: str
    accent: str


THEMES = {
    'manhattan': ThemeColors(
        info='cyan',
        warning='yellow',
        error='red',
        success='green',
        highlight='bright_cyan',
        path='white',
        number='bright_blue',
        dim='bright_black',
        accent='cyan',
    ),
    'matrix': ThemeColors(
        info='bright_green',
        warning='yellow',
        error='red',
        success='green',
        highlight='bold bright_green',
        path='green',
        number='bright_green',
        dim='green',
        accent='bright_green',
    ),
    'sunset': ThemeColors(
        info='orange3',
        warning='yellow',
        error='red3',
        success='green',
        highlight='bold orange1',
        path='wheat1',
        number='orange1',
        dim='grey50',
        accent='dark_orange3',
    ),
}


class ConsoleManager:
    """Console output with theme support."""
    
    def __init__(self, theme: str = "manhattan", file: Optional[Any] = None):
        self.theme_name = theme
        self.theme_colors = THEMES.get(theme, THEMES['manhattan'])
        self.console = Console(theme=self._create_rich_theme(), file=file, highlight=False)
    
    def _create_rich_theme(self) -> Theme:
        """Create Rich theme from our theme colors."""
        colors = self.theme_colors
        return Theme({
            'info': colors.info,
            'warning': colors.warning,
            'error': colors.error,
            'success': colors.success,
            'highlight': colors.highlight,
            'path': colors.path,
            'number': colors.number,
            'dim': colors.dim,
            'accent': colors.accent,
        })
    
    def print(self, *args, **kwargs):
        self.console.print(*args, **kwargs)
    
    def print_status(self, status: StatusType, message: str):
        """Print a status line with icon."""
        icon, _, color = status.value
        text = Text()
        text.append(f"{icon} ", style=color)
        text.append(message)
        self.console.print(text)
    
    def print_error(self, message: str):
        self.print_status(StatusType.ERROR, message)
    
    def print_success(self, message: str):
        self.print_status(StatusType.SUCCESS, message)
    
    def print_info(self, message: str):
        self.print_status(StatusType.INFO, message)
    
    def print_warning(self, message: str):
        self.print_status(StatusType.WARNING, message)
    
    def print_separator(self, char: str = "═", width: int = 60):
        self.console.print(char * width, style="dim")
    
    def print_exception(self):
        self.console.print_exception()
    
    def stream(self, delta: str):
        """Write a streamed text fragment without a trailing newline."""
        self.console.print(delta, end="", markup=False, highlight=False)
    
    def progress(self) -> Progress:
        """Progress bar for file fetching."""
        return Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("{task.completed}/{task.total}"),
            TimeElapsedColumn(),
            console=self.console,
        )
