"""
Shared Rich console instances with the Better Specs theme.
"""

from rich.console import Console
from rich.theme import Theme

BETTERSPECS_THEME = Theme({
    "brand": "#CC342D",           # Ruby red - headers, branding
    "success": "green",
    "warning": "yellow",
    "error": "red bold",
    "info": "white",
    "category": "#E9573F",        # Guideline categories
    "identifier": "cyan",         # Record IDs
    "muted": "dim",
})

# Stdout for answers, stderr for logs and errors
console = Console(theme=BETTERSPECS_THEME)
err_console = Console(theme=BETTERSPECS_THEME, stderr=True)
