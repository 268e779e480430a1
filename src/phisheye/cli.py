"""
PhishEye CLI - Command Line Interface

Entry point for checking URLs from the terminal: feature extraction,
ensemble classification, and JSON export.
"""

import logging
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from phisheye import __version__
from phisheye.core.config import load_detector_config
from phisheye.core.constants import FEATURE_ORDER, Verdict, VerdictPolicy
from phisheye.core.exceptions import PhishEyeError
from phisheye.core.models import UrlFeatures
from phisheye.detector.ensemble import EnsembleScorer
from phisheye.detector.features import UrlFeatureExtractor
from phisheye.detector.normalizer import FeatureNormalizer
from phisheye.reporting.json import dumps, export_results


# Create CLI app
app = typer.Typer(
    name="phisheye",
    help="PhishEye - Heuristic phishing URL classifier",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for output
console = Console()

VERDICT_STYLES = {
    Verdict.SAFE: "green",
    Verdict.SUSPICIOUS: "yellow",
    Verdict.DANGEROUS: "red",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _features_table(url: str, features: UrlFeatures, normalized: list[float]) -> Table:
    table = Table(title=f"Features: {escape(url)}")
    table.add_column("Feature", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Normalized", style="blue")

    raw = features.to_dict()
    for name, value in zip(FEATURE_ORDER, normalized):
        shown = raw[name]
        if isinstance(shown, float):
            shown = f"{shown:.4f}"
        table.add_row(name, str(shown), f"{value:.4f}")
    return table


# ============================================================================
# Commands
# ============================================================================

@app.command()
def check(
    urls: List[str] = typer.Argument(..., help="URL(s) to classify"),
    policy: Optional[VerdictPolicy] = typer.Option(
        None,
        "--policy",
        "-p",
        help="Verdict policy (defaults to the config value)",
        case_sensitive=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file overriding weights, thresholds and lists",
        exists=True,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed the score perturbation for reproducible output",
    ),
    show_features: bool = typer.Option(
        False,
        "--features",
        "-f",
        help="Show the extracted feature vector for each URL",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results as JSON to this file",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON instead of a table",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
) -> None:
    """
    Classify one or more URLs as safe, suspicious or dangerous.
    """
    _configure_logging(verbose)

    try:
        detector_config = load_detector_config(config)
        scorer = EnsembleScorer(config=detector_config, seed=seed, policy=policy)
        scorer.initialize()

        results = scorer.classify_batch(urls)

        if output:
            export_results(results, output)

        if as_json:
            typer.echo(dumps(results))
            return

        table = Table(title="PhishEye Results")
        table.add_column("URL", style="cyan", overflow="fold")
        table.add_column("Verdict")
        table.add_column("Confidence", justify="right")
        table.add_column("XGBoost", justify="right", style="dim")
        table.add_column("Logistic", justify="right", style="dim")
        table.add_column("Gaussian", justify="right", style="dim")

        for result in results:
            color = VERDICT_STYLES[result.verdict]
            table.add_row(
                escape(result.url),
                f"[{color}]{result.verdict.value}[/{color}]",
                f"{result.confidence:.1%}",
                f"{result.scores.xgboost:.3f}",
                f"{result.scores.logistic:.3f}",
                f"{result.scores.gaussian:.3f}",
            )

        console.print(table)

        if show_features:
            for result in results:
                normalized = scorer.normalizer.normalize(result.features)
                console.print(_features_table(result.url, result.features, normalized))

        if output:
            console.print(f"[green]✓[/green] Results exported to: {output}")

    except PhishEyeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.command()
def features(
    url: str = typer.Argument(..., help="URL to analyze"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file overriding the TLD and shortener lists",
        exists=True,
    ),
) -> None:
    """Show the extracted and normalized feature vector of a URL."""
    try:
        detector_config = load_detector_config(config)
    except PhishEyeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    extracted = UrlFeatureExtractor(config=detector_config).extract(url)
    normalized = FeatureNormalizer().normalize(extracted)
    console.print(_features_table(url, extracted, normalized))


@app.command()
def version() -> None:
    """Show PhishEye version."""
    console.print(f"[bold cyan]PhishEye[/bold cyan] version [yellow]{__version__}[/yellow]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
