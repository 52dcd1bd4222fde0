"""
Output formats for the season standings: embeddable HTML widget, raw JSON,
widget JSON and a console summary.
"""

import html
import json
import logging
from pathlib import Path
from typing import Dict, List

from tornelo_ranking.pipeline import SeasonStandings

logger = logging.getLogger(__name__)

DUTCH_MONTHS = [
    "januari", "februari", "maart", "april", "mei", "juni",
    "juli", "augustus", "september", "oktober", "november", "december",
]

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}

WIDGET_CSS = """
.tornelo-standings {
    margin: 20px auto;
    max-width: 1200px;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
}
.standings-table {
    width: 100%;
    border-collapse: collapse;
    margin: 20px 0;
    box-shadow: 0 2px 8px rgba(0,0,0,0.1);
    background: white;
}
.standings-table th {
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    color: white;
    padding: 16px 12px;
    text-align: left;
    font-weight: 600;
    text-transform: uppercase;
    font-size: 0.85em;
    letter-spacing: 0.5px;
}
.standings-table td {
    padding: 14px 12px;
    border-bottom: 1px solid #e2e8f0;
}
.standings-table tbody tr:hover {
    background-color: #f7fafc;
}
.standings-table tbody tr:nth-child(even) {
    background-color: #f9fafb;
}
.standings-table td:first-child {
    font-weight: 700;
    color: #4a5568;
    width: 60px;
    text-align: center;
}
.standings-table td:nth-child(2) {
    font-weight: 500;
    color: #2d3748;
}
.standings-table td:not(:first-child):not(:nth-child(2)) {
    text-align: center;
    color: #4a5568;
}
.standings-table td:last-child {
    font-weight: 700;
    color: #38a169;
    font-size: 1.1em;
}
"""


def dutch_date(value) -> str:
    """e.g. '19 oktober 2026'."""
    return f"{value.day} {DUTCH_MONTHS[value.month - 1]} {value.year}"


def rank_display(rank: int) -> str:
    return MEDALS.get(rank, str(rank))


def section_cell(points) -> str:
    # Zero and absent are both shown as a dash
    return f"{points:.1f}" if points else "-"


def render_html(standings: SeasonStandings) -> str:
    """
    Render the season ranking as a self-contained HTML fragment for a WordPress page.
    """
    section_headers = "\n            ".join(
        f"<th>{html.escape(s.label)}</th>" for s in standings.sections
    )

    rows = []
    for player in standings.players:
        cells = "\n            ".join(
            f"<td>{section_cell(player.sections.get(s.id))}</td>" for s in standings.sections
        )
        rows.append(
            "        <tr>\n"
            f"            <td>{rank_display(player.rank)}</td>\n"
            f"            <td>{html.escape(player.name)}</td>\n"
            f"            {cells}\n"
            f"            <td><strong>{player.total_points:.1f}</strong></td>\n"
            "        </tr>"
        )

    return f"""<div class="tornelo-standings">
<style>{WIDGET_CSS}</style>
<h2 style="text-align: center; color: #2d3748;">🏆 Seizoenstand</h2>
<p style="text-align: center; color: #718096; margin-bottom: 30px;">Gecombineerde resultaten van alle blokken</p>
<table class="standings-table">
    <thead>
        <tr>
            <th>Rang</th>
            <th>Speler</th>
            {section_headers}
            <th>Totaal</th>
        </tr>
    </thead>
    <tbody>
{chr(10).join(rows)}
    </tbody>
</table>
<p style="text-align: center; color: #a0aec0; font-size: 0.9em; margin-top: 20px;">
    Laatst bijgewerkt: {dutch_date(standings.updated_at)}
</p>
</div>"""


def standings_json(standings: SeasonStandings) -> List[Dict]:
    """Raw ranking, section points keyed by section id."""
    return [player.to_dict() for player in standings.players]


def widget_json(standings: SeasonStandings) -> Dict:
    """Data file consumed by the live widget, section points keyed by label."""
    labels = standings.labels
    return {
        "standings": [
            {
                "name": player.name,
                "rating": player.rating,
                "total": player.total_points,
                "sections": {labels.get(sid, sid): points for sid, points in player.sections.items()},
                "rank": player.rank,
            }
            for player in standings.players
        ],
        "sections": [s.label for s in standings.sections],
        "updatedAt": standings.updated_at.isoformat(),
    }


def write_outputs(standings: SeasonStandings, output_dir: str) -> Dict[str, Path]:
    """
    Write standings.html, standings.json and tornelo-data.json.

    Returns:
        Dict[str, Path]: Written file per output kind ('html', 'json', 'widget').
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths = {
        "html": out / "standings.html",
        "json": out / "standings.json",
        "widget": out / "tornelo-data.json",
    }
    paths["html"].write_text(render_html(standings), encoding="utf-8")
    with open(paths["json"], "w", encoding="utf-8") as f:
        json.dump(standings_json(standings), f, indent=2, ensure_ascii=False)
    with open(paths["widget"], "w", encoding="utf-8") as f:
        json.dump(widget_json(standings), f, indent=2, ensure_ascii=False)

    for path in paths.values():
        logger.info(f"Wrote {path}")
    return paths


def format_top(standings: SeasonStandings, n: int = 10) -> str:
    """Plain-text table of the top n players."""
    lines = [
        f"{'Rang':<6} {'Speler':<30} {'Totaal':>8}",
        "-" * 46,
    ]
    for player in standings.players[:n]:
        lines.append(f"{player.rank:<6} {player.name:<30} {player.total_points:>8.1f}")
    return "\n".join(lines)
