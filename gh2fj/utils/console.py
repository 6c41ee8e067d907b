from rich.console import Console
from rich.markup import escape


def make_console():
    return Console(highlight=False)


class Reporter:
    """Console progress display: one live status line plus persistent notices"""

    def __init__(self, console=None):
        self.console = console or make_console()
        self._status = None

    def start(self, text):
        if self._status is None:
            self._status = self.console.status(escape(text))
            self._status.start()
        else:
            self._status.update(escape(text))

    def update(self, text):
        if self._status is not None:
            self._status.update(escape(text))

    def stop(self):
        if self._status is not None:
            self._status.stop()
            self._status = None

    def info(self, text):
        self.console.print(f"[blue]ℹ {escape(text)}[/]")

    def success(self, text):
        self.console.print(f"[green]✔ {escape(text)}[/]")

    def warn(self, text):
        self.console.print(f"[yellow]⚠ {escape(text)}[/]")

    def fail(self, text, style="red"):
        self.console.print(f"[{style}]✖ {escape(text)}[/]")

    def error_item(self, text):
        self.console.print(f"[red]  -> {escape(text)}[/]")
