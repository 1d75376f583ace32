"""
Command-line interface for PDF stitcher.
"""

import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from pdf_stitcher import __version__
from pdf_stitcher.config import DEFAULT_FORMAT, DEFAULT_QUALITY, DEFAULT_WIDTH, StitchSettings
from pdf_stitcher.converter import convert_pdf_to_image
from pdf_stitcher.exceptions import PDFStitcherException
from pdf_stitcher.types import ConversionRequest
from pdf_stitcher.utils import configure_logging, format_file_size

console = Console()


@click.command(name="pdf2img")
@click.version_option(version=__version__)
@click.argument('input_pdf', type=click.Path())
@click.option(
    '--output', '-o',
    default=None,
    help='Output image path (default: next to the PDF)',
    type=click.Path()
)
@click.option(
    '--width', '-w',
    default=str(DEFAULT_WIDTH),
    show_default=True,
    help='Image width in pixels',
    type=str
)
@click.option(
    '--quality', '-q',
    default=str(DEFAULT_QUALITY),
    show_default=True,
    help='Image quality (1-100)',
    type=str
)
@click.option(
    '--format', '-f', 'output_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Output format (jpg|png|webp)',
    type=str
)
@click.option(
    '--timeout',
    default=60.0,
    show_default=True,
    help='Seconds allowed per page',
    type=float
)
@click.option(
    '--temp-dir',
    default=None,
    help='Parent directory for intermediate page images',
    type=click.Path(file_okay=False)
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(input_pdf, output, width, quality, output_format, timeout, temp_dir, verbose):
    """
    Convert a PDF into a single stitched image.

    Examples:

        pdf2img input.pdf

        pdf2img input.pdf -o preview.webp -f webp -q 80

        pdf2img poster.pdf --width 2400 --format png
    """
    configure_logging(verbose)

    try:
        request = ConversionRequest.from_options(
            input_pdf,
            output=output,
            width=width,
            quality=quality,
            format=output_format,
        )
    except PDFStitcherException as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    try:
        settings = StitchSettings(
            page_timeout=timeout,
            temp_dir=Path(temp_dir) if temp_dir else None,
        )

        info_table = Table(title="PDF to Image", show_header=False)
        info_table.add_column("Property", style="cyan")
        info_table.add_column("Value", style="green")

        info_table.add_row("Input", str(request.document_path))
        info_table.add_row("Output", str(request.output_path))
        info_table.add_row("Width", f"{request.target_width}px")
        info_table.add_row("Quality", f"{request.quality}%")
        info_table.add_row("Format", request.format.value.upper())

        console.print(info_table)
        console.print("\n[bold cyan]Rendering pages...[/bold cyan]")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task("Rendering pages", total=None)

            def update_progress(page_index, page_count, outcome):
                progress.update(
                    task,
                    total=page_count,
                    completed=page_index,
                    description=f"Page {page_index}/{page_count}",
                )
                if not outcome.ok:
                    progress.console.print(f"  [yellow]✗ {outcome.message or outcome.reason}[/yellow]")

            result = convert_pdf_to_image(
                request,
                settings=settings,
                progress_callback=update_progress,
            )

        console.print(
            f"\n[bold green]✓ Stitched {len(result.composed_pages)} of {result.page_count} page(s)[/bold green]"
        )
        console.print(f"[dim]DPI: {result.dpi}, size: {result.width}x{result.height}px[/dim]")

        if result.failures:
            console.print("\n[bold yellow]Skipped pages:[/bold yellow]")
            for failure in result.failures:
                console.print(f"  • page {failure.page_index}: {failure.message or failure.reason}")

        console.print(f"\n[bold green]✓ Output:[/bold green] {os.path.abspath(result.output_path)}")
        console.print(f"[dim]Output size: {format_file_size(result.file_size)}[/dim]")
        console.print()

    except PDFStitcherException as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
