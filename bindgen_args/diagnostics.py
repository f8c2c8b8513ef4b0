"""Error and warning reporting for option decoding."""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class Location:
    """Where a problem was found: an options file and, optionally, one of its keys."""

    path: str
    key: Optional[str] = None

    def __str__(self) -> str:
        if self.key is None:
            return self.path
        return f"{self.path}[{self.key}]"


class Diagnostics(Protocol):
    """Sink for problems found while decoding options."""

    def error(self, location: Location, message: str) -> None: ...

    def warning(self, location: Location, message: str) -> None: ...


class ConsoleDiagnostics:
    """Print diagnostics to stderr."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console if console is not None else Console(stderr=True)
        self.error_count: int = 0
        self.warning_count: int = 0

    def error(self, location: Location, message: str) -> None:
        self.error_count += 1
        self.console.print(
            f"{escape(str(location))}: [red]error:[/red] {escape(message)}"
        )

    def warning(self, location: Location, message: str) -> None:
        self.warning_count += 1
        self.console.print(
            f"{escape(str(location))}: [yellow]warning:[/yellow] {escape(message)}"
        )


@dataclass
class Report:
    """One reported error or warning."""

    level: str
    location: Location
    message: str


@dataclass
class CollectingDiagnostics:
    """Keep diagnostics in memory instead of printing them."""

    reports: list[Report] = field(default_factory=list)

    def error(self, location: Location, message: str) -> None:
        self.reports.append(Report("error", location, message))

    def warning(self, location: Location, message: str) -> None:
        self.reports.append(Report("warning", location, message))

    @property
    def errors(self) -> list[Report]:
        return [r for r in self.reports if r.level == "error"]

    @property
    def warnings(self) -> list[Report]:
        return [r for r in self.reports if r.level == "warning"]
