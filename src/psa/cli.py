"""Typer CLI — ``psa analyze``, ``psa render``, ``psa validate`` and ``psa check-url`` commands."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from psa.config import load_config
from psa.errors import AnalyzerError
from psa.schemas.config import AnalyzerConfig
from psa.schemas.report import AnalysisResult

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="psa",
    help="PageSpeed Analyzer — run a Lighthouse analysis and export the report.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # one INFO line per request otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_or_exit(config: Path | None, **overrides: object) -> AnalyzerConfig:
    """Load the config, apply CLI overrides, and exit with code 1 on failure."""
    try:
        cfg = load_config(config)
        updates = {k: v for k, v in overrides.items() if v is not None}
        if updates:
            cfg = AnalyzerConfig(**{**cfg.model_dump(), **updates})
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)
    return cfg


@app.command()
def analyze(
    url: str = typer.Argument(..., help="URL to analyze (https:// is added when no scheme is given)."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to psa-config.yml"),
    strategy: str = typer.Option(None, "--strategy", "-s", help="mobile or desktop (overrides config)."),
    normalizer: str = typer.Option(None, "--normalizer", help="direct-scan or category-driven (overrides config)."),
    output: Path = typer.Option(None, "--output", "-o", help="Output directory (overrides config)."),
    pdf: bool = typer.Option(True, "--pdf/--no-pdf", help="Write the PDF report."),
    markdown: bool = typer.Option(False, "--markdown", help="Also write a Markdown report."),
    html: bool = typer.Option(False, "--html", help="Also write an HTML dashboard."),
    json_output: bool = typer.Option(False, "--json", help="Print the result as JSON instead of the summary view."),
    limit: int = typer.Option(10, "--limit", help="Recommendations shown in the terminal (0 = all)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze a URL with PageSpeed Insights and export the report.

    Examples:

        psa analyze example.com

        psa analyze https://example.com --strategy desktop --markdown --html
    """
    _setup_logging(verbose)
    cfg = _load_or_exit(config, strategy=strategy, normalizer=normalizer)

    try:
        result = asyncio.run(_run_analysis(url, cfg, quiet=json_output))
    except AnalyzerError as exc:
        console.print(f"[red]{exc.kind.value}:[/] {escape(exc.message)}")
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
    else:
        from psa.output.console import print_result

        print_result(result, console, scale=cfg.ui_scale, limit=limit or None)

    out_dir = output or Path(cfg.output_directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    report_path = out_dir / "report.json"
    report_path.write_text(result.model_dump_json(indent=2))
    if not json_output:
        console.print(f"[green]Report data written to:[/] {report_path}")

    _write_documents(result, out_dir, cfg, pdf=pdf, markdown=markdown, html=html, quiet=json_output)


async def _run_analysis(url: str, cfg: AnalyzerConfig, *, quiet: bool = False) -> AnalysisResult:
    """Run the analysis behind a spinner."""
    from psa.analyzer import analyze_url
    from psa.shared.progress import AnalysisProgress

    if quiet:
        return await analyze_url(url, cfg)

    stage = f"Analyzing {escape(url)} ({cfg.strategy})"
    with AnalysisProgress(console) as progress:
        progress.start_stage(stage)
        try:
            result = await analyze_url(url, cfg)
        except AnalyzerError as exc:
            progress.fail_stage(stage, exc.kind.value)
            raise
        progress.finish_stage(stage, f"{len(result.recommendations)} recommendations")
    return result


def _write_documents(
    result: AnalysisResult,
    out_dir: Path,
    cfg: AnalyzerConfig,
    *,
    pdf: bool,
    markdown: bool,
    html: bool,
    quiet: bool = False,
) -> list[Path]:
    """Write the requested documents into ``out_dir``."""
    from psa.output.dashboard import render_dashboard
    from psa.output.markdown import render_markdown_report
    from psa.output.pdf import generate_pdf_report

    generated_at = datetime.now().isoformat(timespec="seconds")
    written: list[Path] = []

    if pdf:
        written.append(generate_pdf_report(result, out_dir, scale=cfg.export_scale))

    if markdown:
        md_path = out_dir / "analysis-report.md"
        md_path.write_text(render_markdown_report(result, generated_at=generated_at, scale=cfg.ui_scale))
        written.append(md_path)

    if html:
        html_path = out_dir / "analysis-dashboard.html"
        html_path.write_text(render_dashboard(result, generated_at=generated_at, scale=cfg.ui_scale))
        written.append(html_path)

    if not quiet:
        for path in written:
            console.print(f"[green]Written:[/] {path}")
    return written


@app.command()
def render(
    output: Path = typer.Option(..., "--output", "-o", help="Output directory from a previous run (must contain report.json)."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to psa-config.yml (colour scales)."),
    pdf: bool = typer.Option(True, "--pdf/--no-pdf"),
    markdown: bool = typer.Option(True, "--markdown/--no-markdown"),
    html: bool = typer.Option(True, "--html/--no-html"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Re-render the documents from a saved report.json — no API calls required.

    Example:

        psa render --output ./output
    """
    _setup_logging(verbose)

    report_path = output / "report.json"
    if not report_path.exists():
        console.print(f"[red]No report.json found in {output}[/]")
        console.print("Run [bold]psa analyze[/] first — it saves report.json at the end.")
        raise typer.Exit(code=1)

    cfg = _load_or_exit(config)
    console.print(f"[bold]Loading report from:[/] {report_path}")
    result = AnalysisResult.model_validate_json(report_path.read_text())
    _write_documents(result, output, cfg, pdf=pdf, markdown=markdown, html=html)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to psa-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without running an analysis."""
    _setup_logging(verbose)
    cfg = _load_or_exit(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Backend:     {cfg.backend}")
    if cfg.backend == "proxy":
        console.print(f"  Proxy URL:   {cfg.proxy_url}")
    else:
        console.print(f"  API URL:     {cfg.api_url}")
        console.print(f"  API key:     {'set' if cfg.api_key else '[yellow]missing[/]'}")
    console.print(f"  Strategy:    {cfg.strategy}")
    console.print(f"  Locale:      {cfg.locale}")
    console.print(f"  Categories:  {', '.join(cfg.categories)}")
    console.print(f"  Normalizer:  {cfg.normalizer}")
    console.print(f"  UI scale:    {cfg.ui_scale.good}/{cfg.ui_scale.medium}")
    console.print(f"  PDF scale:   {cfg.export_scale.good}/{cfg.export_scale.medium}")
    console.print(f"  Output dir:  {cfg.output_directory}")


@app.command("check-url")
def check_url(url: str = typer.Argument(..., help="URL to check.")) -> None:
    """Show how a URL will be normalized and whether it is accepted."""
    from psa.shared.urls import normalize_url, validate_url

    normalized = normalize_url(url)
    if validate_url(normalized):
        console.print(f"[green]Valid:[/] {escape(normalized)}")
    else:
        console.print(f"[red]Invalid URL format:[/] {escape(normalized)}")
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
