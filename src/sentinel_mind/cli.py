"""
SentinelMind CLI — Command-line interface.

Usage:
    sentinel-mind analyze "You will feel very relaxed now..."
    sentinel-mind analyze "Sleep now... drop deep" --mode aggressive --json
    sentinel-mind emergency
    sentinel-mind simulate --archetype resistant --difficulty hard --technique overload
    sentinel-mind init --output sentinel.yml
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sentinel_mind import __version__
from sentinel_mind.config import Archetype, DefenseMode, Difficulty, SentinelConfig
from sentinel_mind.engine import AgentNotFoundError, DefenseEngine

console = Console()

LEVEL_STYLE = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
    "none": "green",
}


def _load_config(config: str | None, verbose: bool) -> SentinelConfig:
    cfg = SentinelConfig.from_file(Path(config)) if config else SentinelConfig()
    cfg.verbose = cfg.verbose or verbose
    if cfg.verbose or cfg.debug:
        logging.basicConfig(
            level=logging.DEBUG if cfg.debug else logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    return cfg


@click.group()
@click.version_option(version=__version__, prog_name="sentinel-mind")
def main() -> None:
    """SentinelMind: rule-based cognitive defense and adaptive practice agents."""


@main.command()
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in DefenseMode], case_sensitive=False),
    default=None,
    help="Defense posture (defaults to the configured mode).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the raw analysis as JSON.")
@click.option("--report", type=click.Path(), default=None, help="Write a Markdown report.")
@click.option("--config", type=click.Path(exists=True), default=None, help="YAML config file.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def analyze(
    text: str,
    mode: str | None,
    as_json: bool,
    report: str | None,
    config: str | None,
    verbose: bool,
) -> None:
    """Analyze TEXT for manipulation patterns."""
    cfg = _load_config(config, verbose)
    engine = DefenseEngine(cfg)
    analysis = engine.analyze_threat(text, mode)

    if report:
        from sentinel_mind.reporting.markdown import MarkdownReporter

        MarkdownReporter().analysis_report(text, analysis, output_path=Path(report))

    if as_json:
        click.echo(analysis.model_dump_json(indent=2))
        return

    level = analysis.threat_level.value
    console.print(
        Panel.fit(
            f"Threat level: [{LEVEL_STYLE[level]}]{level.upper()}[/{LEVEL_STYLE[level]}]\n"
            f"Strategy: [bold]{analysis.defense_strategy}[/bold]\n"
            f"Confidence: {analysis.confidence}%",
            title="🛡️ Defense Analysis",
            border_style=LEVEL_STYLE[level],
        )
    )

    if analysis.detections:
        table = Table(title="Detections", border_style="red")
        table.add_column("Category", style="bold")
        table.add_column("Score", justify="right")
        table.add_column("Keywords")
        table.add_column("Indicators")
        for threat in analysis.detections:
            table.add_row(
                threat.category,
                str(threat.score),
                ", ".join(threat.matched_keywords),
                ", ".join(threat.matched_indicators),
            )
        console.print(table)

    for title, items in (
        ("Counter-Measures", analysis.counter_measures),
        ("Recommendations", analysis.recommendations),
    ):
        if items:
            console.print(f"\n[bold]{title}[/bold]")
            for item in items:
                console.print(f"  • {item}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the protocol as JSON.")
def emergency(as_json: bool) -> None:
    """Activate the emergency extraction protocol."""
    protocol = DefenseEngine().activate_emergency_protocol()

    if as_json:
        click.echo(protocol.model_dump_json(indent=2))
        return

    console.print(
        Panel.fit(
            "\n".join(protocol.extraction_steps),
            title="🚨 Emergency Protocol",
            border_style="red",
        )
    )
    grounding = protocol.grounding_sequence
    console.print(f"\n[bold]{grounding.affirmation}[/bold]")
    console.print(f"[dim]{grounding.breathing_pattern}[/dim]\n")

    table = Table(border_style="cyan")
    table.add_column("Anchor Points")
    table.add_column("Reality Checks")
    table.add_column("Physical Actions")
    for row in zip(
        grounding.anchor_points, grounding.reality_checks, grounding.physical_actions
    ):
        table.add_row(*row)
    console.print(table)
    console.print(f"\nSafe word: [bold green]{protocol.safe_word}[/bold green]")


@main.command()
@click.option(
    "--archetype",
    type=click.Choice([a.value for a in Archetype], case_sensitive=False),
    default=Archetype.SUSCEPTIBLE.value,
)
@click.option(
    "--difficulty",
    type=click.Choice([d.value for d in Difficulty], case_sensitive=False),
    default=Difficulty.EASY.value,
)
@click.option("--technique", "-t", multiple=True, required=True, help="Technique(s) to apply.")
@click.option("--rounds", type=click.IntRange(0, 1000), default=5, help="Exposures per technique.")
@click.option("--seed", type=int, default=None, help="Random seed for response phrasing.")
@click.option("--no-learning", is_flag=True, help="Disable adaptive learning.")
@click.option("--report", type=click.Path(), default=None, help="Write a Markdown session report.")
@click.option("--config", type=click.Path(exists=True), default=None, help="YAML config file.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
def simulate(
    archetype: str,
    difficulty: str,
    technique: tuple[str, ...],
    rounds: int,
    seed: int | None,
    no_learning: bool,
    report: str | None,
    config: str | None,
    verbose: bool,
) -> None:
    """Run a practice session against a fresh agent."""
    cfg = _load_config(config, verbose)
    if seed is not None:
        cfg.simulation.seed = seed

    engine = DefenseEngine(cfg)
    agent = engine.create_agent(archetype, difficulty, adaptive_learning=not no_learning)

    console.print(Panel(engine.agent_briefing(agent.id), title=agent.name, border_style="cyan"))

    table = Table(title="Session", border_style="magenta")
    table.add_column("#", justify="right")
    table.add_column("Technique")
    table.add_column("Effectiveness", justify="right")
    table.add_column("Response")
    table.add_column("Resistance", justify="right")

    try:
        step = 0
        for _ in range(rounds):
            for name in technique:
                step += 1
                response = engine.respond_to_technique(agent.id, name, "")
                table.add_row(
                    str(step),
                    name,
                    f"{response.effectiveness:.1f}",
                    response.verbal,
                    f"{engine.get_agent(agent.id).state.resistance:.0f}",
                )
        agent = engine.get_agent(agent.id)
        learning = engine.learning_profile(agent.id)
    except AgentNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    console.print(table)

    state = agent.state
    console.print(
        f"\nFinal state: trance={state.trance_depth:.1f} resistance={state.resistance:.1f} "
        f"suggestibility={state.suggestibility:.1f} awareness={state.awareness:.1f} "
        f"({state.emotional})"
    )
    console.print(
        f"Adaptation level: {learning.adaptation_level}  "
        f"Learned resistances: {', '.join(sorted(agent.resistance_patterns)) or 'none'}"
    )

    if report:
        from sentinel_mind.reporting.markdown import MarkdownReporter

        MarkdownReporter().session_report(agent, learning, output_path=Path(report))
        console.print(f"[green]✓[/green] Report written to [bold]{report}[/bold]")


@main.command()
@click.option("--output", type=click.Path(), default="sentinel.yml", help="Output YAML file path.")
def init(output: str) -> None:
    """Generate a default configuration file."""
    output_path = Path(output)
    SentinelConfig().to_file(output_path)

    console.print(f"[green]✓[/green] Config written to [bold]{output_path}[/bold]")
    console.print("[dim]Edit this file to customize detection and learning settings.[/dim]")


if __name__ == "__main__":
    main()
