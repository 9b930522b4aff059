"""Command-line interface for the impactmap tool."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from .analyzers import DependencyTracker, ImpactAnalyzer, ImportGraphBuilder, KeyFileRanker
from .analyzers.impact_analyzer import ImpactAnalysisResult
from .analyzers.impact_propagator import ChangeImpact
from .core import AnalysisConfiguration, FileContentLoader, RepoFile, RepositoryScanner
from .reporting import render_impact_report

# Set up rich error handling
install()
console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _scan(root: str, max_files: int) -> List[RepoFile]:
    try:
        return RepositoryScanner(root, max_files=max_files).scan()
    except OSError as e:
        console.print(f"[red]❌ Error:[/red] Cannot scan {root}: {e}")
        raise click.Abort()


def _normalize_target(root: str, target: str) -> str:
    """Accept targets relative to the repository root or to the working directory.

    A relative target is taken from the repository root unless only the
    working directory holds it.
    """
    path = Path(target)
    if not path.is_absolute():
        if (Path(root) / path).exists() or not path.exists():
            return path.as_posix()
    try:
        return path.resolve().relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return path.as_posix()


@click.group()
@click.version_option(package_name="impactmap")
def cli():
    """impactmap - Change impact analysis for repositories

    Builds a file-level import graph (JavaScript/TypeScript, Python, Go, Rust)
    and reports which files, tests and documents a change would affect.

    USAGE:
        impactmap analyze .                          # Impact of the key entry points
        impactmap analyze . -f src/utils.ts          # Impact of a specific file
        impactmap analyze . --format markdown -o IMPACT.md
        impactmap key-files .                        # Ranked entry point candidates
        impactmap graph .                            # Import graph summary
    """


@cli.command()
@click.argument('root', type=click.Path(exists=True, file_okay=False))
@click.option('--file', '-f', 'targets', multiple=True, help='File to analyze (repeatable, default: key files)')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json', 'markdown']), default='text',
              help='Output format')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write the report to a file')
@click.option('--project-name', help='Project name for the markdown report (default: root directory name)')
@click.option('--max-workers', type=click.IntRange(min=1), help='Worker threads (default: CPU count)')
@click.option('--max-file-size', type=click.IntRange(min=1), default=100_000, show_default=True,
              help='Largest source file parsed for imports, in bytes')
@click.option('--max-files', type=click.IntRange(min=1), default=10000, show_default=True,
              help='Maximum number of scanned entries')
@click.option('--cache/--no-cache', default=True, help='Cache file contents')
@click.option('--cache-size', type=click.IntRange(min=0), default=512, show_default=True,
              help='Maximum number of cached files')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def analyze(root, targets, output_format, output, project_name, max_workers, max_file_size, max_files,
            cache, cache_size, verbose):
    """Analyze which files would be affected by changes in ROOT."""
    _configure_logging(verbose)

    config = AnalysisConfiguration(
        max_file_size=max_file_size,
        max_workers=max_workers,
        enable_caching=cache,
        cache_size=cache_size,
    )

    try:
        files = _scan(root, max_files)
        loader = FileContentLoader(root, cache_enabled=config.enable_caching, cache_size=config.cache_size)
        analyzer = ImpactAnalyzer(config)
        selected = [_normalize_target(root, target) for target in targets]

        if output_format == 'text':
            with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                          console=console, transient=True) as progress:
                progress.add_task(f"🔬 Analyzing {len(files)} entries...", total=None)
                result = analyzer.analyze(files, loader, selected or None)
        else:
            result = analyzer.analyze(files, loader, selected or None)

        name = project_name or Path(root).resolve().name
        _output_results(result, output_format, output, name, config)

    except click.Abort:
        raise
    except Exception as e:
        logger.debug("Analysis failed", exc_info=True)
        console.print(f"[red]❌ Error:[/red] {str(e)}")
        raise click.Abort()


@cli.command('key-files')
@click.argument('root', type=click.Path(exists=True, file_okay=False))
@click.option('--limit', type=click.IntRange(min=1, max=10), default=10, show_default=True,
              help='Number of files to list')
@click.option('--max-files', type=click.IntRange(min=1), default=10000, show_default=True,
              help='Maximum number of scanned entries')
def key_files(root, limit, max_files):
    """List the likely entry points of ROOT in rank order."""
    _configure_logging(False)
    files = _scan(root, max_files)
    ranker = KeyFileRanker(limit=limit)

    table = Table(title="🎯 Key Files")
    table.add_column("#", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Score", justify="right")
    for position, path in enumerate(ranker.rank(files), start=1):
        table.add_row(str(position), path, f"{ranker.score(path):.2f}")
    console.print(table)


@cli.command()
@click.argument('root', type=click.Path(exists=True, file_okay=False))
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--max-files', type=click.IntRange(min=1), default=10000, show_default=True,
              help='Maximum number of scanned entries')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def graph(root, output_format, max_files, verbose):
    """Summarize the import graph of ROOT."""
    _configure_logging(verbose)
    files = _scan(root, max_files)
    import_graph = ImportGraphBuilder().build_graph(files, FileContentLoader(root))
    summary = DependencyTracker().summarize(import_graph)

    if output_format == 'json':
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    console.print("📊 [bold]Import Graph Summary[/bold]")
    console.print(f"   Files: {summary.total_files}")
    console.print(f"   Files with imports: {summary.importing_files}")
    console.print(f"   Imports: {summary.total_imports}")
    console.print(f"   Import cycles: {len(summary.import_cycles)}")

    if summary.most_imported:
        table = Table(title="🎯 Most Imported")
        table.add_column("File", style="cyan")
        table.add_column("Imported by", justify="right")
        for path, count in summary.most_imported:
            table.add_row(path, str(count))
        console.print(table)

    for group in summary.import_cycles[:5]:
        console.print(f"   🔄 {' → '.join(group)}")


@cli.command()
@click.argument('root', type=click.Path(exists=True, file_okay=False))
@click.argument('dependent')
@click.argument('dependency')
def explain(root, dependent, dependency):
    """Show the import chain through which DEPENDENT depends on DEPENDENCY."""
    _configure_logging(False)
    files = _scan(root, 10000)
    import_graph = ImportGraphBuilder().build_graph(files, FileContentLoader(root))
    chain = DependencyTracker().dependency_path(
        import_graph, _normalize_target(root, dependent), _normalize_target(root, dependency))

    if not chain:
        console.print(f"[yellow]⚠️  {dependent} does not depend on {dependency}[/yellow]")
        return

    console.print(" → ".join(f"[cyan]{path}[/cyan]" for path in chain))


def _output_results(result: ImpactAnalysisResult, output_format: str, output: Optional[str],
                    project_name: str, config: AnalysisConfiguration):
    """Output analysis results in the requested format."""
    if output_format == 'json':
        content = json.dumps(result.to_dict(), indent=2)
    elif output_format == 'markdown':
        content = render_impact_report(result.impacts, project_name, config.render_limit)
    else:
        if output:
            content = render_impact_report(result.impacts, project_name, config.render_limit)
        else:
            _display_text_results(result, config.render_limit)
            return

    if output:
        Path(output).write_text(content, encoding='utf-8')
        console.print(f"✅ Report written to {output}")
    else:
        click.echo(content)


def _display_text_results(result: ImpactAnalysisResult, limit: int):
    """Display impact records as rich tables."""
    summary = result.summary
    console.print(f"📁 {summary.total_files} files, {summary.total_imports} imports")

    if not result.impacts:
        console.print("[yellow]⚠️  No files selected for impact analysis[/yellow]")
        return

    for impact in result.impacts:
        console.print(_impact_table(impact, limit))

    total = result.performance_metrics.get('total_analysis_time', 0.0)
    console.print(f"⏱️  Completed in {total:.2f}s")


def _impact_table(impact: ChangeImpact, limit: int) -> Table:
    table = Table(title=f"🎯 {impact.file}", show_lines=True)
    table.add_column("Relation", style="bold")
    table.add_column("Files", style="cyan")

    rows = (
        ("Imports", impact.imports),
        ("Imported by", impact.imported_by),
        ("Affected files", impact.affected_files),
        ("Tests to run", impact.affected_tests),
        ("Related docs", impact.affected_docs),
    )
    for title, items in rows:
        shown = "\n".join(items[:limit]) or "-"
        if len(items) > limit:
            shown += f"\n... and {len(items) - limit} more"
        table.add_row(title, shown)
    return table


if __name__ == '__main__':
    cli()
