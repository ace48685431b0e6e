import json
import sys
from pathlib import Path
from typing import Optional

import questionary
import typer
from rich.panel import Panel

from plume_cli.config import get_settings
from plume_cli.errors import ConfigError, ExtractionError, PlumeError, StorageError, ValidationError
from plume_cli.extraction import extract_txt, guess_mime_type
from plume_cli.highlight import render_report
from plume_cli.log import configure_logging, get_logger
from plume_cli.models import AnalysisResult
from plume_cli.service import PROCESSING_FAILURE, DetectionService
from plume_cli.storage import DetectionStore
from plume_cli.ui import (
    build_history_table,
    console,
    display_analysis_progress,
    print_welcome,
    render_result,
)

logger = get_logger(__name__)
app = typer.Typer(help="Plume: détection heuristique de textes français générés par IA", add_completion=False)

EXIT_INVALID = 2
EXIT_FAILURE = 1


@app.callback()
def _configure():
    try:
        configure_logging(get_settings())
    except ConfigError as exc:
        console.print(f"[bold red]Configuration invalide[/bold red] : {exc}")
        raise typer.Exit(code=EXIT_INVALID)


def _open_store() -> Optional[DetectionStore]:
    store = DetectionStore(get_settings().db_path)
    try:
        store.init_tables()
    except StorageError as exc:
        logger.warning("storage_unavailable", error=str(exc))
        return None
    return store


def _build_service(save: bool = True) -> DetectionService:
    return DetectionService(store=_open_store() if save else None)


def _history_store() -> DetectionStore:
    store = DetectionStore(get_settings().db_path)
    store.init_tables()
    return store


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ValidationError(f"Impossible de lire le fichier {path} : {exc.strerror or exc}") from exc


def _read_text_file(path: Path) -> str:
    return extract_txt(_read_bytes(path))


def _fail(message: str, code: int, export_json: bool):
    if export_json:
        print(json.dumps({"error": message}, ensure_ascii=False))
    else:
        console.print(f"[bold red]Erreur[/bold red] : {message}")
    raise typer.Exit(code=code)


def _run(fn, export_json: bool):
    """Call `fn`, mapping plume errors to user messages and exit codes."""
    try:
        return fn()
    except (ValidationError, ExtractionError) as exc:
        _fail(str(exc), EXIT_INVALID, export_json)
    except PlumeError as exc:
        logger.error("analysis_failed", error_type=type(exc).__name__, error=str(exc))
        _fail(PROCESSING_FAILURE, EXIT_FAILURE, export_json)


def _emit(result: AnalysisResult, body: dict, export_json: bool, html: Optional[Path], title: Optional[str] = None):
    if html is not None:
        html.write_text(render_report(result, title=title), encoding="utf-8")
    if export_json:
        print(json.dumps(body, indent=2, ensure_ascii=False))
        return
    render_result(result)
    if html is not None:
        console.print(f"[green]✔ Rapport HTML écrit :[/green] {html}")


@app.command(name="analyze")
def analyze_cmd(
    text: Optional[str] = typer.Argument(None, help="Texte à analyser (sinon --file-text ou l'entrée standard)"),
    file_text: Optional[Path] = typer.Option(None, "--file-text", help="Lire le texte depuis un fichier UTF-8"),
    analysis_type: str = typer.Option("quick", "--type", help="quick (8 indicateurs) ou advanced (15)"),
    export_json: bool = typer.Option(False, "--json", help="Exporter le résultat en JSON"),
    html: Optional[Path] = typer.Option(None, "--html", help="Écrire un rapport HTML surligné"),
    no_save: bool = typer.Option(False, "--no-save", help="Ne pas enregistrer l'analyse"),
):
    """Analyze a French text and estimate the probability that it was AI-generated."""
    if text is None and file_text is not None:
        text = _run(lambda: _read_text_file(file_text), export_json)
    elif text is None and not sys.stdin.isatty():
        text = sys.stdin.read()

    if not export_json:
        display_analysis_progress(analysis_type)

    service = _build_service(save=not no_save)
    result = _run(lambda: service.analyze_text(text, analysis_type), export_json)
    _emit(result, result.to_dict(), export_json, html)


@app.command(name="file")
def file_cmd(
    path: Path = typer.Argument(..., help="Document à analyser (.pdf, .docx, .doc, .txt)"),
    analysis_type: str = typer.Option("quick", "--type", help="quick (8 indicateurs) ou advanced (15)"),
    export_json: bool = typer.Option(False, "--json", help="Exporter le résultat en JSON"),
    html: Optional[Path] = typer.Option(None, "--html", help="Écrire un rapport HTML surligné"),
    no_save: bool = typer.Option(False, "--no-save", help="Ne pas enregistrer l'analyse"),
):
    """Extract the text of a document and analyze it."""
    if not path.is_file():
        _fail(f"Fichier introuvable : {path}", EXIT_INVALID, export_json)

    if not export_json:
        display_analysis_progress(analysis_type)

    service = _build_service(save=not no_save)
    analysis = _run(
        lambda: service.analyze_file(path.name, _read_bytes(path), guess_mime_type(path.name), analysis_type),
        export_json,
    )
    _emit(analysis.result, analysis.to_dict(), export_json, html, title=f"Rapport d'analyse : {path.name}")


@app.command(name="history")
def history_cmd(
    limit: int = typer.Option(20, help="Nombre d'analyses à afficher"),
    export_json: bool = typer.Option(False, "--json", help="Exporter en JSON"),
):
    """List the most recent stored analyses."""
    rows = _run(lambda: _history_store().list_detections(limit), export_json)

    if export_json:
        print(json.dumps({"detections": rows}, indent=2, ensure_ascii=False))
        return
    if not rows:
        console.print("[dim]Aucune analyse enregistrée.[/dim]")
        return
    console.print(build_history_table(rows))


@app.command(name="show")
def show_cmd(
    detection_id: str = typer.Argument(..., help="Identifiant d'une analyse enregistrée"),
    export_json: bool = typer.Option(False, "--json", help="Exporter en JSON"),
    html: Optional[Path] = typer.Option(None, "--html", help="Écrire un rapport HTML surligné"),
):
    """Display a stored analysis."""
    result = _run(lambda: _history_store().get_detection(detection_id), export_json)
    if result is None:
        _fail(f"Analyse introuvable : {detection_id}", EXIT_INVALID, export_json)
    _emit(result, result.to_dict(), export_json, html)


def _read_paragraph() -> str:
    console.print("[dim]Collez le texte, puis validez une ligne vide pour lancer l'analyse.[/dim]")
    lines = []
    while True:
        try:
            line = input()
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines)


@app.command(name="interactive")
def interactive_cmd():
    """Start an interactive analysis session."""
    print_welcome()
    analysis_type = questionary.select(
        "Type d'analyse :",
        choices=[
            questionary.Choice("Rapide (8 indicateurs)", value="quick"),
            questionary.Choice("Avancée (15 indicateurs)", value="advanced"),
        ],
        qmark=">",
    ).ask() or "quick"
    console.print("[dim]Tapez 'analyse' pour coller un texte, 'fichier <chemin>' pour un document, "
                  "ou 'aide' pour la liste des commandes.[/dim]\n")

    while True:
        try:
            try:
                raw_input = input(f"[{analysis_type}] plume> ")
            except EOFError:
                console.print("\n[dim]Session terminée.[/dim]")
                break

            command = raw_input.strip()
            lowered = command.lower()
            if not command:
                continue

            if lowered in ["exit", "quit", "q", "quitter"]:
                console.print("[dim]Au revoir ![/dim]")
                break

            elif lowered in ["help", "aide", "?"]:
                console.print(Panel(
                    "[bold cyan]Commandes disponibles :[/bold cyan]\n"
                    "  [bold]analyse[/bold]            - Coller un texte et l'analyser\n"
                    "  [bold]fichier <chemin>[/bold]   - Analyser un document (.pdf, .docx, .txt)\n"
                    "  [bold]type[/bold]               - Choisir analyse rapide ou avancée\n"
                    "  [bold]historique [n][/bold]     - Afficher les dernières analyses\n"
                    "  [bold]clear[/bold]              - Effacer l'écran\n"
                    "  [bold]exit[/bold]               - Quitter",
                    title="Aide Plume",
                    border_style="cyan",
                    expand=False
                ))

            elif lowered == "clear":
                print_welcome()

            elif lowered == "type":
                analysis_type = questionary.select(
                    "Type d'analyse :", choices=["quick", "advanced"], default=analysis_type,
                ).ask() or analysis_type
                console.print(f"[green]✔ Type d'analyse :[/green] {analysis_type}")

            elif lowered in ["analyse", "analyze"]:
                text = _read_paragraph()
                analyze_cmd(text=text, file_text=None, analysis_type=analysis_type,
                            export_json=False, html=None, no_save=False)

            elif lowered.startswith(("fichier ", "file ")):
                path = Path(command.split(maxsplit=1)[1].strip())
                file_cmd(path=path, analysis_type=analysis_type, export_json=False, html=None, no_save=False)

            elif lowered.startswith(("historique", "history")):
                parts = lowered.split()
                limit = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 20
                history_cmd(limit=limit, export_json=False)

            else:
                console.print(f"[yellow]Commande inconnue :[/yellow] '{command}'. Tapez 'aide'.")

        except typer.Exit:
            # Error already reported; stay in the session
            continue
        except KeyboardInterrupt:
            console.print("\n[dim]Session terminée.[/dim]")
            break


def main():
    if len(sys.argv) == 1:
        try:
            _configure()
        except typer.Exit as exc:
            sys.exit(exc.exit_code)
        interactive_cmd()
    else:
        app()


if __name__ == "__main__":
    main()
