"""CLI entry point for the before/after screenshot tool."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from before_after.errors import BeforeAfterError, InvalidInputError
from before_after.models.capture import CaptureRequest, ViewportConfig, ViewportSize
from before_after.models.config import ToolConfig
from before_after.orchestrator import BeforeAndAfter
from before_after.url_utils import is_image_file, normalize_url
from before_after.viewport import parse_viewport_size

console = Console(soft_wrap=True)

EPILOG = """\b
Arguments can be URLs or image files (auto-detected).
Selectors are optional: one applies to both pages, two apply per page.

\b
Examples:
  before-and-after google.com facebook.com
  before-and-after url1 url2 ".hero-section"
  before-and-after url1 url2 ".old-hero" ".new-hero" --mobile
  before-and-after url1 url2 --size 1920x1080 --full
  before-and-after before.png after.png --markdown
"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _parse_size(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[ViewportSize]:
    if value is None:
        return None
    try:
        return parse_viewport_size(value)
    except InvalidInputError as e:
        raise click.BadParameter(str(e)) from e


def _pick_viewport(
    mobile: bool, tablet: bool, size: Optional[ViewportSize], default: ViewportConfig
) -> ViewportConfig:
    if mobile:
        return "mobile"
    if tablet:
        return "tablet"
    if size is not None:
        return size
    return default


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.argument("inputs", nargs=-1, metavar="BEFORE AFTER [SELECTOR [SELECTOR2]]")
@click.option("--mobile", "-m", is_flag=True, help="Mobile viewport (375x812)")
@click.option("--tablet", "-t", is_flag=True, help="Tablet viewport (768x1024)")
@click.option("--size", callback=_parse_size, metavar="WxH", help="Custom viewport (e.g. 1920x1080)")
@click.option("--full", "-f", is_flag=True, help="Capture full scrollable page")
@click.option("--selector", "-s", metavar="CSS", help="Scroll element into view before capture")
@click.option("--output", "-o", metavar="DIR", help="Output directory (default: ~/Downloads)")
@click.option("--markdown", is_flag=True, help="Upload images & output markdown table")
@click.option("--upload-url", metavar="URL", help="Upload endpoint (default: 0x0.st; also blob.vercel, generic PUT)")
@click.option("--config", "-c", "config_path", metavar="FILE", help="JSON config file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    inputs: tuple[str, ...],
    mobile: bool,
    tablet: bool,
    size: Optional[ViewportSize],
    full: bool,
    selector: Optional[str],
    output: Optional[str],
    markdown: bool,
    upload_url: Optional[str],
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """before-and-after — Screenshot comparison tool"""
    setup_logging(verbose)

    if len(inputs) < 2:
        raise click.UsageError("Two arguments required (URLs or image paths). Run with --help for usage.")
    if len(inputs) > 4:
        raise click.UsageError("At most two selectors may follow the two inputs.")

    try:
        cfg = ToolConfig.load(config_path) if config_path else ToolConfig.from_env()
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {escape(config_path)}[/red]")
        sys.exit(1)

    viewport = _pick_viewport(mobile, tablet, size, cfg.viewport)
    ba = BeforeAndAfter(cfg.model_copy(update={"viewport": viewport}))
    first, second, *rest = inputs

    try:
        if is_image_file(first) and is_image_file(second):
            result = ba.from_images(first, second)
            if markdown:
                console.print(result.markdown, markup=False, highlight=False)
            else:
                console.print(f"Before: {first}", markup=False)
                console.print(f"After:  {second}", markup=False)
            return

        before_url = normalize_url(first)
        after_url = normalize_url(second)

        # Positional selectors override -s
        before_selector = after_selector = selector
        if rest:
            before_selector = after_selector = rest[0]
        if len(rest) > 1:
            after_selector = rest[1]

        console.print(f"Capturing before: {before_url}{f' ({before_selector})' if before_selector else ''}", markup=False)
        console.print(f"Capturing after:  {after_url}{f' ({after_selector})' if after_selector else ''}", markup=False)

        outcome = ba.run_compare(
            CaptureRequest(url=before_url, selector=before_selector, full_page=full),
            CaptureRequest(url=after_url, selector=after_selector, full_page=full),
            output_dir=output,
            markdown=markdown,
            upload_url=upload_url,
        )
    except (BeforeAfterError, FileNotFoundError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"\nSaved: [blue]{escape(outcome['before_path'])}[/blue]")
    console.print(f"Saved: [blue]{escape(outcome['after_path'])}[/blue]")

    if markdown:
        console.print(f"\nBefore: {outcome['before_url']}", markup=False)
        console.print(f"After:  {outcome['after_url']}", markup=False)
        console.print(f"\n{outcome['markdown']}", markup=False, highlight=False)
        if outcome["copied"]:
            console.print("\n[green]✓ Markdown copied to clipboard[/green]")


if __name__ == "__main__":
    main()
