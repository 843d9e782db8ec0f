"""Interactive candidate picker.

Shows ranked candidates page by page in a Rich table and reads a command
from the prompt:

- ``<n>``: choose item n (select it in Zotero and open its PDF)
- ``p <n>``: choose item n and print its attachment path
- ``s <n>``: select item n in Zotero and keep picking
- ``o <n>``: open the PDF of item n and keep picking
- ``n`` / ``b``: next / previous page
- ``q`` or empty input: quit
"""

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from zotfind.cli.utils.launcher import DEFAULT_COMMAND, open_pdf, select_item
from zotfind.core.models import Author, PartialDate
from zotfind.search import ANY_AUTHOR, Candidate, FindQuery, Library

MATCH_STYLE = "bold red"
STATUS_STYLE = "bold dark_orange"

# authors shown per row before collapsing into [+]
SHOWN_AUTHORS = 3

HELP_LINE = (
    "<n> open  p <n> path  s <n> select in Zotero  o <n> open PDF  "
    "n/b page  q quit"
)


class PickAction(enum.Enum):
    """What to do with the chosen candidate."""

    OPEN_ITEM = "open_item"
    PATH = "path"


@dataclass
class PickResult:
    """Index of the chosen candidate and the action to take."""

    index: int
    how: PickAction = PickAction.OPEN_ITEM


def highlight_name(name: str, patterns: Sequence[str]) -> Text:
    """Style the first query substring found in a name."""
    text = Text(name)
    for pattern in patterns:
        if not pattern or pattern == ANY_AUTHOR:
            continue
        start = name.find(pattern)
        if start >= 0:
            text.stylize(MATCH_STYLE, start, start + len(pattern))
            break
    return text


def format_authors(
    authors: Sequence[Author], patterns: Sequence[str] = (), highlight: bool = True
) -> Text:
    """Format up to three last names, marking longer bylines with [+]."""
    text = Text()
    for index, author in enumerate(authors[:SHOWN_AUTHORS]):
        if index:
            text.append(", ")
        if highlight:
            text.append_text(highlight_name(author.last_name, patterns))
        else:
            text.append(author.last_name)

    if len(authors) > SHOWN_AUTHORS:
        text.append(", [+]")
    return text


def format_date(date: PartialDate | None) -> str:
    """Format a partial date, or a placeholder when missing."""
    return str(date) if date is not None else "----"


class CandidatePicker:
    """Prompt-driven selection over ranked candidates."""

    def __init__(
        self,
        console: Console,
        library: Library,
        query: FindQuery,
        candidates: Sequence[Candidate],
        max_rows: int = 18,
        zotero_command: str = DEFAULT_COMMAND,
    ):
        self.console = console
        self.library = library
        self.query = query
        self.candidates = candidates
        self.max_rows = max(2, max_rows)
        self.zotero_command = zotero_command
        self.page = 0

    @property
    def pages(self) -> int:
        """Number of pages."""
        return max(1, math.ceil(len(self.candidates) / self.max_rows))

    def build_table(self) -> Table:
        """Build the table for the current page."""
        table = Table()
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Authors", overflow="ellipsis", max_width=40)
        table.add_column("Year", justify="center")
        table.add_column("Title", overflow="ellipsis")
        table.add_column("Score", justify="right")

        start = self.page * self.max_rows
        for index in range(start, min(start + self.max_rows, len(self.candidates))):
            candidate = self.candidates[index]
            item = candidate.item

            year = Text(str(item.year) if item.year is not None else "")
            if self.query.date_range.active:
                year.stylize(MATCH_STYLE)

            table.add_row(
                str(index + 1),
                format_authors(candidate.authors, self.query.authors),
                year,
                Text(item.title),
                str(candidate.score),
            )

        return table

    def show(self) -> None:
        """Print the match count and the current page."""
        count = len(self.candidates)
        if count == 1:
            self.console.print("Found 1 match")
        else:
            self.console.print(f"Found {count} matches")

        self.console.print(self.build_table())
        if self.pages > 1:
            self.console.print(f"[dim]Page {self.page + 1}/{self.pages}[/dim]")

    def describe(self, index: int) -> None:
        """Print the key, dates, title and full byline of a candidate."""
        candidate = self.candidates[index]
        item = candidate.item
        status = Text("Selected", style=STATUS_STYLE)
        status.append(
            f": {item.key} (date: {format_date(item.publication_date)} | "
            f"added: {format_date(item.added_date)})",
            style="default",
        )
        self.console.print(status)
        self.console.print(Text(f"   Title: {item.title}"))
        if candidate.authors:
            names = "; ".join(author.full_name for author in candidate.authors)
            self.console.print(Text(f"   Authors: {names}"))

    def run(self) -> PickResult | None:
        """Show candidates and prompt until one is chosen.

        Returns:
            The choice, or None if the user quit.
        """
        self.show()
        self.console.print(f"[dim]{HELP_LINE}[/dim]")

        while True:
            try:
                answer = Prompt.ask(
                    "Choose", console=self.console, default="", show_default=False
                )
            except EOFError:
                return None

            command, _, argument = answer.strip().partition(" ")

            if command in ("", "q"):
                return None

            if command in ("n", "b"):
                self._turn(1 if command == "n" else -1)
                continue

            if command.isdigit():
                index = self._index(command)
                if index is not None:
                    return PickResult(index)
                continue

            if command not in ("p", "s", "o"):
                self.console.print(
                    f"[yellow]Unknown command: {escape(command)}[/yellow]"
                )
                continue

            index = self._index(argument.strip())
            if index is None:
                continue

            if command == "p":
                return PickResult(index, PickAction.PATH)
            elif command == "s":
                self._select(index)
            else:
                self._open(index)

    def _turn(self, step: int) -> None:
        page = min(max(self.page + step, 0), self.pages - 1)
        if page != self.page:
            self.page = page
            self.show()

    def _index(self, text: str) -> int | None:
        if text.isdigit() and 1 <= int(text) <= len(self.candidates):
            return int(text) - 1
        self.console.print(
            f"[yellow]Choose a number between 1 and {len(self.candidates)}[/yellow]"
        )
        return None

    def _select(self, index: int) -> None:
        select_item(self.candidates[index].item.key, self.zotero_command)
        self.describe(index)
        self.console.print("! Selected item")

    def _open(self, index: int) -> None:
        item = self.candidates[index].item
        attachments = self.library.get_attachments(item.id)
        if attachments:
            open_pdf(attachments[0].key, self.zotero_command)
            self.console.print("! Opened item")
        else:
            self.console.print("! Item has no attachments")
