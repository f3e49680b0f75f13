"""Console presentation for Taskpal."""

import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from .commands import Response
from .config import ConfigModel
from .errors import TaskpalError


logger = logging.getLogger(__name__)

ERROR_PREFIX = "☹ OOPS!!! "

CITY_LIGHTS_COLORS = {
    'surface_light': '#41505E',
    'primary': '#68D5F3',
    'secondary': '#5CCFE6',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

TASKPAL_THEME = Theme({
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'bright': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'primary': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'accent': f"{CITY_LIGHTS_COLORS['accent']}",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'tag': f"{CITY_LIGHTS_COLORS['secondary']}",
    'border': f"{CITY_LIGHTS_COLORS['surface_light']}",
})

QUICK_HELP = """[primary]todo[/primary] [muted]read book #fun !high[/muted]
[primary]deadline[/primary] [muted]submit report /by 26/08/2020 23:59[/muted]
[primary]event[/primary] [muted]team dinner /at 28/08 7:30 PM[/muted]
[primary]list[/primary], [primary]done[/primary] [muted]<n>[/muted], [primary]delete[/primary] [muted]<n>[/muted], [primary]bye[/primary]
[primary]due[/primary] [muted]26/08[/muted], [primary]find[/primary] [muted]<keyword>[/muted], [primary]prioritised[/primary] [muted]high[/muted], [primary]tagged[/primary] [tag]fun work[/tag]"""


def format_error(error: TaskpalError) -> str:
    return ERROR_PREFIX + error.message


class Ui:
    """Renders responses and errors, and reads commands from the console."""

    def __init__(self, config: ConfigModel, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console(theme=TASKPAL_THEME, no_color=config.no_color)

    def show_welcome(self):
        name = self.config.user_name.strip()
        greeting = f"Hello {name}! " if name else "Hello! "
        icon = "👋 " if self.config.use_emoji else ""
        self.console.print(Panel(
            f"[bright]{icon}{greeting}I'm Taskpal.[/bright]\nWhat can I do for you?\n\n{QUICK_HELP}",
            title="[accent]Taskpal[/accent]",
            border_style="border",
            padding=(1, 2),
        ))

    def show_response(self, response: Response):
        style = "success" if not response.is_exit else "accent"
        self.console.print(Panel(Text(response.message), border_style=style, padding=(0, 1)))

    def show_error(self, error: TaskpalError):
        self.console.print(Panel(Text(format_error(error), style="error"), border_style="error", padding=(0, 1)))

    def read_command(self) -> str:
        """Read one line. Raises EOFError when input ends."""
        return self.console.input("[primary]> [/primary]")
