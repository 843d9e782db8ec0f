"""Find command: filter the library and act on the chosen item."""

import click
from rich.markup import escape

from zotfind.cli.ui.picker import CandidatePicker, PickAction
from zotfind.cli.utils.launcher import open_pdf, select_item
from zotfind.search import FindQuery, filter_query


def get_library(ctx):
    """Get the loaded library from context."""
    return ctx.obj.load_library()


@click.command()
@click.option(
    "--author",
    "-a",
    help=(
        "Author (last) name, or a comma-separated list of names. The value "
        "'.' matches any author, but the item must have an author."
    ),
)
@click.option(
    "--year",
    "-y",
    help=(
        "Publication year. Optionally use 'before:YYYY', 'after:YYYY', "
        "'YYYY-YYYY' or 'before:YYYY,after:YYYY'."
    ),
)
@click.option(
    "--added",
    help=(
        "When the item was added. Valid expressions are 'YYYY[-MM[-DD]]', "
        "'before:YYYY[-MM[-DD]]', 'after:YYYY[-MM[-DD]]' or both joined "
        "with a comma."
    ),
)
@click.option("--limit", "-n", type=int, help="Rows per page (default from config)")
@click.option("--list", "list_only", is_flag=True, help="Print matches and exit")
@click.option(
    "--path",
    "print_path",
    is_flag=True,
    help="Print the attachment path of the chosen item instead of opening it",
)
@click.pass_context
def find(
    ctx: click.Context,
    author: str | None,
    year: str | None,
    added: str | None,
    limit: int | None,
    list_only: bool,
    print_path: bool,
) -> None:
    """Find items by author, publication year and date added.

    Matches are ranked by author position: a match on the first author
    scores highest.
    """
    console = ctx.obj.console
    config = ctx.obj.config

    query = FindQuery.from_options(author=author, year=year, added=added)
    if not query.active:
        console.print("[yellow]No search criteria specified[/yellow]")
        return

    library = get_library(ctx)
    candidates = filter_query(query, library)

    if not candidates:
        console.print("No items match selection.")
        return

    zotero_command = config.get("zotero_command", "zotero")
    picker = CandidatePicker(
        console,
        library,
        query,
        candidates,
        max_rows=limit or config.get("max_rows", 18),
        zotero_command=zotero_command,
    )

    if list_only:
        picker.show()
        return

    choice = picker.run()
    if choice is None:
        return

    candidate = candidates[choice.index]
    console.print(f"Selected: {escape(candidate.item.title)}")

    attachments = library.get_attachments(candidate.item.id)

    if print_path or choice.how is PickAction.PATH:
        if not attachments:
            console.print("[yellow]No attachments for item[/yellow]")
            return
        path = attachments[0].resolve(ctx.obj.data_dir)
        if path is None:
            console.print("[yellow]Attachment has no file[/yellow]")
            return
        click.echo(str(path))
        return

    select_item(candidate.item.key, zotero_command)
    if attachments:
        open_pdf(attachments[0].key, zotero_command)
    else:
        console.print("[yellow]No attachments for item[/yellow]")
