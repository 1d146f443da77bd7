# main.py
import re
from dataclasses import dataclass, field
from typing import List, Optional

import requests
import typer

from config import OUTPUT_FILE
from output import Reporter
from report import SortOrder, aggregate, dedupe
from steam import ApiError, ApiResult, resolve_collection

app = typer.Typer(add_completion=False)

_DIGITS_RE = re.compile(r"[0-9]+")

NETWORK_ERROR = "A network error occurred while requesting the Steam servers. Please try again later."


@dataclass
class RunContext:
    reporter: Reporter
    order: SortOrder = SortOrder.NONE
    session: Optional[requests.Session] = None
    working_set: List[str] = field(default_factory=list)


def extract_ids(text: str) -> List[str]:
    """Every run of digits is an id, so both raw ids and workshop URLs work."""
    return _DIGITS_RE.findall(text or "")


def _report_failure(ctx: RunContext, result: ApiResult) -> None:
    if result.error is ApiError.NETWORK:
        ctx.reporter.line(NETWORK_ERROR, style="yellow")
    elif result.error is ApiError.UNAVAILABLE:
        ctx.reporter.line("It seems that the object is invalid or simply temporarily unavailable.", style="yellow")
    if result.detail:
        ctx.reporter.error(result.detail)


def process_object(ctx: RunContext, object_id: str) -> int:
    """Resolve one object, size its items and print the report. Returns the total in bytes."""
    ctx.working_set.clear()
    out = ctx.reporter

    resolved = resolve_collection(object_id, session=ctx.session)
    if not resolved.ok:
        _report_failure(ctx, resolved)
        return 0

    resolution = resolved.value
    if resolution.is_collection:
        out.line(
            "The Steam API reports that the object is a Workshop collection "
            f"containing {len(resolution.items)} items."
        )
        out.line("Beginning of calculation...")
    else:
        out.line(
            "The Steam API reports that the object is a simple addon "
            "(in some cases, the identifier you entered may be invalid)."
        )

    ctx.working_set.extend(dedupe(resolution.items))
    if not ctx.working_set:
        out.line(f'The object "{object_id}" doesn\'t contain any element, move to the next one.')
        return 0

    try:
        summed = aggregate(ctx.working_set, order=ctx.order, session=ctx.session)
        if not summed.ok:
            _report_failure(ctx, summed)
            return 0
        for text in summed.value.lines:
            out.line(text)
        out.line()
        return summed.value.total
    finally:
        ctx.working_set.clear()


def _ask_ids(out: Reporter) -> List[str]:
    while True:
        raw = typer.prompt("=>", default="", show_default=False).strip()
        out.line()
        if not raw:
            out.line("Assessment error. Please enter an identifier.", style="red")
            continue
        ids = extract_ids(raw)
        if ids:
            return ids
        out.line("Assessment error. Please enter a valid identifier.", style="red")


def _ask_order() -> SortOrder:
    while True:
        raw = typer.prompt("Sort items by size? [ASC/DESC, blank for none]", default="", show_default=False)
        try:
            return SortOrder.parse(raw)
        except ValueError:
            typer.echo("Please answer ASC, DESC or leave it blank.")


@app.command()
def run(
    ids: Optional[str] = typer.Option(None, help='Workshop ids or URLs, separated by ";"'),
    sort: Optional[str] = typer.Option(None, help="Sort items by size: ASC|DESC (default: API order)"),
    save: Optional[bool] = typer.Option(None, "--save/--no-save", help=f"Mirror the output into {OUTPUT_FILE}"),
    once: bool = typer.Option(False, help="Do not offer to run again"),
):
    """Compute the download size of Steam Workshop collections and items."""
    out = Reporter()
    out.line("-----------------------------------------")
    out.line("Steam Collection Download Size Calculator")
    out.line("-----------------------------------------")
    out.line()

    try:
        order = SortOrder.parse(sort) if sort is not None else None
    except ValueError:
        out.error(f"Unknown sort order: {sort}")
        return

    ctx = RunContext(reporter=out)
    pending = ids
    try:
        while True:
            if pending is not None:
                object_ids = extract_ids(pending)
                pending = None
                if not object_ids:
                    out.error(f"No identifier found in: {ids}")
                    return
            else:
                out.line(
                    'Please provide a Workshop object identifier (you can also put several in a row '
                    'by putting ";" between each).'
                )
                out.line(
                    'Example: "https://steamcommunity.com/sharedfiles/filedetails/?id=1448345830" '
                    'or "1448345830;947461782".'
                )
                object_ids = _ask_ids(out)

            # asked once, after the first identifiers
            if save is None:
                save = typer.confirm("Do you want to save the console output in a text file?")
            if save and not out.saving:
                out.open_mirror(OUTPUT_FILE)
                out.line(f'The console output will be saved into the file "{OUTPUT_FILE}" in the application folder.')
                out.line()

            ctx.order = order if order is not None else _ask_order()
            out.line()
            for object_id in object_ids:
                process_object(ctx, object_id)

            if once or not typer.confirm("Do you want to run the program again?"):
                break
            out.line()

        out.line("Program terminated. Thanks for using it :D", style="green")
        if out.saving:
            out.line("Note: The output file will be automatically overwritten the next time you launch the application.")
    finally:
        out.close()


if __name__ == "__main__":
    app()
