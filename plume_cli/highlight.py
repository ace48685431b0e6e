"""
Highlight Renderer
──────────────────
Sections are first turned into `Annotation` records (span + level + tooltip),
then rendered in one pass over the *original* text, right to left:

  text:   A. B. C.
  spans:        [3,4)
  pieces: ". C."  <mark …>B</mark>  "A. "   (collected from the right)

Each piece is sliced from the untouched original, so offsets never drift and
every run of user text goes through the same `html.escape` call. The only
markup that can appear is `<mark class="…" title="…">`; the class comes from
the closed SuspicionLevel enum and the title is escaped with quotes.

Overlapping spans are not checked here. The section scorer produces disjoint,
forward-only spans and this renderer depends on that.
"""

import html
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from plume_cli.models import AnalysisResult, Section, SuspicionLevel

ALLOWED_TAG = "mark"
ALLOWED_ATTRIBUTES = ("class", "title")

LEVEL_CLASSES = {
    SuspicionLevel.HIGH: "suspicion-high",
    SuspicionLevel.MEDIUM: "suspicion-medium",
    SuspicionLevel.LOW: "suspicion-low",
}


@dataclass(frozen=True)
class Annotation:
    start: int
    end: int
    level: SuspicionLevel
    tooltip: str


def _escape(value: str) -> str:
    return html.escape(value, quote=True)


def build_annotations(sections: Iterable[Section]) -> List[Annotation]:
    """Annotation records ordered by descending start (render order)."""
    annotations = [
        Annotation(s.start_position, s.end_position, s.suspicion_level, s.reasoning)
        for s in sections
    ]
    annotations.sort(key=lambda a: a.start, reverse=True)
    return annotations


def _open_tag(annotation: Annotation) -> str:
    return f'<{ALLOWED_TAG} class="{LEVEL_CLASSES[annotation.level]}" title="{_escape(annotation.tooltip)}">'


def render_highlighted(original_text: str, sections: Sequence[Section]) -> str:
    """Escaped HTML of `original_text` with each section wrapped in a <mark>."""
    pieces = []
    cursor = len(original_text)
    for annotation in build_annotations(sections):
        pieces.append(_escape(original_text[annotation.end:cursor]))
        pieces.append(_open_tag(annotation)
                      + _escape(original_text[annotation.start:annotation.end])
                      + f"</{ALLOWED_TAG}>")
        cursor = annotation.start
    pieces.append(_escape(original_text[:cursor]))
    return "".join(reversed(pieces))


# ─── Standalone report ──────────────────────────────────────────────────────

_REPORT_STYLE = """
body { font-family: system-ui, sans-serif; max-width: 52rem; margin: 2rem auto; color: #222; }
.suspicion-high { background: #fecaca; }
.suspicion-medium { background: #fed7aa; }
.suspicion-low { background: #fef08a; }
.text { white-space: pre-wrap; line-height: 1.6; border: 1px solid #ddd; padding: 1rem; }
table { border-collapse: collapse; width: 100%; }
td, th { border-bottom: 1px solid #eee; padding: .3rem .5rem; text-align: left; }
"""


def render_report(result: AnalysisResult, title: Optional[str] = None) -> str:
    """A self-contained HTML page: verdict, indicator table, highlighted text."""
    title = title or "Rapport d'analyse"
    agent = result.suspected_agent or "Non déterminé"
    kind = "Analyse avancée" if result.analysis_type.value == "advanced" else "Analyse rapide"

    rows = "\n".join(
        f"<tr><td>{_escape(i.name)}</td><td>{i.score:.2f}</td>"
        f"<td>{i.weight:.1f}</td><td>{_escape(i.description)}</td></tr>"
        for i in result.indicators
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="fr"><head><meta charset="utf-8">'
        f"<title>{_escape(title)}</title><style>{_REPORT_STYLE}</style></head><body>\n"
        f"<h1>{_escape(title)}</h1>\n"
        f"<p><strong>Probabilité d'IA :</strong> {result.ai_probability:.2f}%"
        f" &middot; <strong>Agent suspecté :</strong> {_escape(agent)}"
        f" &middot; {_escape(kind)}</p>\n"
        "<h2>Indicateurs</h2>\n"
        "<table><tr><th>Indicateur</th><th>Score</th><th>Poids</th><th>Description</th></tr>\n"
        f"{rows}\n</table>\n"
        "<h2>Texte analysé</h2>\n"
        '<p><mark class="suspicion-high">Suspicion élevée</mark> '
        '<mark class="suspicion-medium">Suspicion moyenne</mark> '
        '<mark class="suspicion-low">Suspicion faible</mark></p>\n'
        f'<div class="text">{render_highlighted(result.original_text, result.sections)}</div>\n'
        "</body></html>\n"
    )
