import os
import time
from typing import Dict, List

import plotille
import pyfiglet
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from plume_cli.detectors.scoring import ScoreAggregator
from plume_cli.models import AnalysisResult, SuspicionLevel

console = Console()

LEVEL_STYLES = {
    SuspicionLevel.HIGH: "black on red",
    SuspicionLevel.MEDIUM: "black on dark_orange",
    SuspicionLevel.LOW: "black on yellow",
}

LEVEL_LABELS = {
    SuspicionLevel.HIGH: "Élevé",
    SuspicionLevel.MEDIUM: "Moyen",
    SuspicionLevel.LOW: "Faible",
}


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def print_welcome():
    clear_screen()
    ascii_banner = pyfiglet.figlet_format("PLUME", font="slant")
    console.print(f"[bold magenta]{ascii_banner}[/bold magenta]")
    console.print("[dim]Détection heuristique de textes français générés par IA[/dim]")
    console.print("[dim]" + "─" * 80 + "[/dim]\n")


def _score_color(score: float) -> str:
    if score >= 70:
        return "red bold"
    if score >= 40:
        return "yellow"
    return "green"


def format_score(score: float) -> str:
    color = _score_color(score)
    return f"[{color}]{score:.2f}[/{color}]"


def build_indicator_table(result: AnalysisResult) -> Table:
    table = Table(title="Indicateurs détaillés", show_header=True, header_style="bold magenta")
    table.add_column("Indicateur", width=28)
    table.add_column("Score", justify="center", width=8)
    table.add_column("Poids", justify="center", width=6)
    table.add_column("Description")
    for ind in result.indicators:
        table.add_row(escape(ind.name), format_score(ind.score), f"{ind.weight:.1f}", escape(ind.description))
    return table


def build_sections_table(result: AnalysisResult) -> Table:
    table = Table(title="Sections suspectes", show_header=True, header_style="bold cyan")
    table.add_column("Position", style="dim", width=13)
    table.add_column("Niveau", width=8)
    table.add_column("IA %", justify="center", width=6)
    table.add_column("Passage")
    table.add_column("Raisons", width=30)
    for s in result.sections:
        style = LEVEL_STYLES[s.suspicion_level]
        excerpt = s.text if len(s.text) <= 120 else s.text[:117] + "..."
        table.add_row(
            f"{s.start_position}-{s.end_position}",
            f"[{style}]{LEVEL_LABELS[s.suspicion_level]}[/{style}]",
            str(s.ai_probability),
            escape(excerpt),
            escape(s.reasoning),
        )
    return table


def build_history_table(rows: List[Dict]) -> Table:
    table = Table(title="Historique des analyses", show_header=True, header_style="bold cyan")
    table.add_column("Id", style="dim", width=34)
    table.add_column("Date", width=20)
    table.add_column("Type", width=9)
    table.add_column("Probabilité IA", justify="center")
    table.add_column("Agent suspecté")
    table.add_column("Source")
    for r in rows:
        source = escape(r["fileName"]) if r.get("fileName") else f"texte ({r['characters']} car.)"
        table.add_row(
            r["id"],
            r["createdAt"][:19].replace("T", " "),
            r["analysisType"],
            format_score(r["aiProbability"]),
            escape(r["suspectedAgent"] or "-"),
            source,
        )
    return table


def highlighted_text(result: AnalysisResult) -> Text:
    """The original text with each section styled by its suspicion level."""
    text = Text(result.original_text)
    for s in result.sections:
        text.stylize(LEVEL_STYLES[s.suspicion_level], s.start_position, s.end_position)
    return text


def render_highlighted_text(result: AnalysisResult):
    if not result.sections:
        console.print("[dim]Aucun passage suspect localisé.[/dim]")
        return
    legend = " ".join(
        f"[{LEVEL_STYLES[level]}] {LEVEL_LABELS[level]} [/{LEVEL_STYLES[level]}]"
        for level in (SuspicionLevel.HIGH, SuspicionLevel.MEDIUM, SuspicionLevel.LOW)
    )
    console.print(Panel(highlighted_text(result), title="Texte analysé", subtitle=legend,
                        border_style="cyan"))


def render_verdict(result: AnalysisResult):
    """Final summary panel: probability, band, suspected agent and its evidence."""
    probability = result.ai_probability
    band = ScoreAggregator.band(probability)

    if probability >= 70:
        verdict_icon, verdict_color = "🔴", "bold red"
        risk_msg = "Forte probabilité de génération automatique. Relecture humaine recommandée."
    elif probability >= 40:
        verdict_icon, verdict_color = "🟡", "bold yellow"
        risk_msg = "Signaux mitigés. Certains passages méritent une relecture attentive."
    else:
        verdict_icon, verdict_color = "🟢", "bold green"
        risk_msg = "Peu de signaux caractéristiques d'un texte généré."

    kind = "Avancée" if result.analysis_type.value == "advanced" else "Rapide"
    agent_line = "Non déterminé"
    if result.attribution:
        agent_line = (f"[bold]{escape(result.attribution.label)}[/bold] "
                      f"[dim]({escape(result.attribution.explanation)})[/dim]")

    summary_text = (
        f"[{verdict_color}]{verdict_icon}  VERDICT : {band.upper()}[/{verdict_color}]\n\n"
        f"  Probabilité d'IA     : [{verdict_color}]{probability:.2f}%[/{verdict_color}]\n"
        f"  Agent suspecté       : {agent_line}\n"
        f"  Type d'analyse       : {kind} ({len(result.indicators)} indicateurs)\n"
        f"  Sections suspectes   : {len(result.sections)}\n"
    )
    if result.id:
        summary_text += f"  Identifiant          : [dim]{result.id}[/dim]\n"
    summary_text += f"\n  [dim]{risk_msg}[/dim]"

    console.print()
    console.print(Panel(
        summary_text,
        title="[bold]Analyse terminée[/bold]",
        border_style=verdict_color.replace("bold ", ""),
        expand=False,
        padding=(1, 4)
    ))
    console.print()


def display_analysis_progress(analysis_type: str):
    steps = 15 if analysis_type == "advanced" else 8
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Calcul des indicateurs...", total=steps)
        for _ in range(steps):
            time.sleep(0.01)
            progress.advance(task)


def render_indicator_chart(result: AnalysisResult):
    """Indicator profile: one point per indicator, in display order."""
    if len(result.indicators) < 3:
        return

    console.print("\n[bold cyan]Profil des indicateurs (haut = IA, bas = humain)[/bold cyan]")
    scores = [ind.score for ind in result.indicators]
    x_data = list(range(1, len(scores) + 1))

    fig = plotille.Figure()
    fig.width = 60
    fig.height = 15
    fig.set_x_limits(min_=1, max_=len(scores))
    fig.set_y_limits(min_=0.0, max_=100.0)
    fig.y_label = "Score"
    fig.x_label = "Indicateur"
    plot_color = 'green' if result.ai_probability < 40 else 'yellow' if result.ai_probability < 70 else 'red'
    fig.plot(x_data, scores, lc=plot_color)
    print(fig.show())

    for i, ind in enumerate(result.indicators, start=1):
        console.print(f"  [dim]{i:>2}[/dim] {escape(ind.name)}")


def render_result(result: AnalysisResult, show_chart: bool = True):
    console.print(build_indicator_table(result))
    if result.sections:
        console.print(build_sections_table(result))
    render_highlighted_text(result)
    if show_chart:
        render_indicator_chart(result)
    render_verdict(result)
