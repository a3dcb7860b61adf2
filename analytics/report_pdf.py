from __future__ import annotations

import argparse
import json
import os
import tempfile
from typing import Any, Dict, List, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from reportlab.lib import colors  # noqa: E402
from reportlab.lib.pagesizes import letter  # noqa: E402
from reportlab.lib.styles import getSampleStyleSheet  # noqa: E402
from reportlab.lib.units import inch  # noqa: E402
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle  # noqa: E402

from .config import METRICS  # noqa: E402


def _load_report(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_plot(fig, path: str) -> str:
    fig.tight_layout()
    fig.savefig(path, dpi=160)
    plt.close(fig)
    return path


def _plot_performance_history(report: Dict[str, Any], out_path: str) -> Optional[str]:
    history = report.get("performance", {}).get("performance_history") or []
    if not history:
        return None
    weeks = [h.get("week") for h in history]
    ratings = [float(h.get("rating") or 0.0) for h in history]
    fig, ax = plt.subplots(figsize=(6.5, 3.2))
    ax.plot(weeks, ratings, color="#2a6fdb", marker="o", linewidth=1.5)
    ax.set_ylim(0, 10)
    ax.set_title("Team Form (Average Weekly Rating)")
    ax.set_ylabel("Rating")
    ax.tick_params(axis="x", labelrotation=45, labelsize=7)
    return _save_plot(fig, out_path)


def _plot_objectives(report: Dict[str, Any], out_path: str) -> Optional[str]:
    objectives = report.get("performance", {}).get("objectives") or []
    if not objectives:
        return None
    labels = [o.get("name") for o in objectives]
    values = [float(o.get("rate") or 0) for o in objectives]
    fig, ax = plt.subplots(figsize=(6.5, 3.0))
    ax.barh(labels[::-1], values[::-1], color="#2f9e8f")
    ax.set_xlim(0, 100)
    ax.set_title("Objective Control (% of games)")
    return _save_plot(fig, out_path)


def _plot_boxplots(report: Dict[str, Any], out_path: str) -> Optional[str]:
    boxplots = report.get("advanced", {}).get("boxplots") or {}
    metrics = [m for m in METRICS if m in boxplots]
    if not metrics:
        return None

    fig, axes = plt.subplots(1, len(metrics), figsize=(2.2 * len(metrics), 3.4))
    if len(metrics) == 1:
        axes = [axes]
    for ax, metric in zip(axes, metrics):
        stats = []
        for label in ("wins", "losses"):
            s = boxplots[metric].get(label) or {}
            stats.append(
                {
                    "label": "W" if label == "wins" else "L",
                    "whislo": s.get("min", 0),
                    "q1": s.get("q1", 0),
                    "med": s.get("median", 0),
                    "q3": s.get("q3", 0),
                    "whishi": s.get("max", 0),
                    "fliers": [],
                }
            )
        ax.bxp(stats, showfliers=False)
        ax.set_title(metric, fontsize=8)
        ax.tick_params(labelsize=7)
    return _save_plot(fig, out_path)


def _plot_correlation_matrix(report: Dict[str, Any], out_path: str) -> Optional[str]:
    matrix = report.get("advanced", {}).get("correlation_matrix") or {}
    metrics = [m for m in METRICS if m in matrix]
    if not metrics:
        return None
    values = [[float(matrix[r].get(c, 0.0)) for c in metrics] for r in metrics]
    fig, ax = plt.subplots(figsize=(5.5, 4.5))
    im = ax.imshow(values, vmin=-1, vmax=1, cmap="RdBu")
    ax.set_xticks(range(len(metrics)))
    ax.set_xticklabels(metrics, rotation=45, ha="right", fontsize=7)
    ax.set_yticks(range(len(metrics)))
    ax.set_yticklabels(metrics, fontsize=7)
    for i, row in enumerate(values):
        for j, v in enumerate(row):
            ax.text(j, i, f"{v:.2f}", ha="center", va="center", fontsize=6)
    ax.set_title("Metric Correlation Matrix")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    return _save_plot(fig, out_path)


def _build_synergy_table(report: Dict[str, Any]) -> Table:
    synergy = report.get("advanced", {}).get("synergy") or []
    rows: List[List[str]] = [["Duo", "Games", "Win rate"]]
    for s in synergy:
        rows.append(
            [
                f"{s.get('player_a')} + {s.get('player_b')}",
                str(s.get("games") or 0),
                f"{float(s.get('win_rate') or 0):.1f}%",
            ]
        )
    if len(rows) == 1:
        rows.append(["-", "-", "-"])
    table = Table(rows, colWidths=[3.6 * inch, 0.8 * inch, 1.0 * inch])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONT", (0, 0), (-1, -1), "Helvetica", 8),
            ]
        )
    )
    return table


def _build_players_table(report: Dict[str, Any]) -> Table:
    rows: List[List[str]] = [["Player", "Position", "KDA", "CS", "DMG", "WR"]]
    for p in report.get("players") or []:
        rows.append(
            [
                p.get("name") or p.get("player_id") or "-",
                p.get("position") or "Flex",
                p.get("kda") or "0.0",
                p.get("cs") or "0.0",
                p.get("damage_share") or "0%",
                f"{p.get('win_rate') or 0}%",
            ]
        )
    table = Table(rows)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("FONT", (0, 0), (-1, -1), "Helvetica", 8),
            ]
        )
    )
    return table


def build_pdf(report: Dict[str, Any], output_path: str) -> None:
    styles = getSampleStyleSheet()
    story: List[Any] = []
    meta = report.get("meta") or {}
    perf = report.get("performance") or {}
    advanced = report.get("advanced") or {}

    story.append(Paragraph("Team Analytics", styles["Title"]))
    story.append(Paragraph(f"Team {meta.get('team_id')}", styles["Heading2"]))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Snapshot", styles["Heading3"]))
    story.append(
        Paragraph(
            f"Games: <b>{perf.get('total_games', 0)}</b> • Wins: <b>{perf.get('wins', 0)}</b> "
            f"• Win rate: <b>{perf.get('win_rate', 0)}%</b> "
            f"• Avg duration: <b>{perf.get('average_duration', '00:00')}</b>",
            styles["BodyText"],
        )
    )
    story.append(
        Paragraph(
            f"Gold efficiency (gold vs damage correlation): <b>{advanced.get('efficiency', 0):.2f}</b>",
            styles["BodyText"],
        )
    )
    for key, m in (advanced.get("momentum") or {}).items():
        story.append(
            Paragraph(
                f"Win rate after {key}: <b>{float(m.get('win_rate') or 0):.1f}%</b> "
                f"({m.get('games', 0)} games)",
                styles["BodyText"],
            )
        )
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Top Duos", styles["Heading3"]))
    story.append(_build_synergy_table(report))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Players (Recent Form)", styles["Heading3"]))
    story.append(_build_players_table(report))
    story.append(Spacer(1, 0.2 * inch))

    with tempfile.TemporaryDirectory() as tmp:
        plots = [
            ("history.png", _plot_performance_history, "Average weekly rating across the roster."),
            ("objectives.png", _plot_objectives, "Share of games where each objective was secured."),
            ("boxplots.png", _plot_boxplots, "Per-game metric distribution in wins (W) and losses (L)."),
            ("matrix.png", _plot_correlation_matrix, "Pearson correlation between per-game metrics."),
        ]
        for name, fn, caption in plots:
            path = os.path.join(tmp, name)
            img = fn(report, path)
            if img and os.path.exists(img):
                story.append(Paragraph(caption, styles["BodyText"]))
                story.append(Image(img, width=6.5 * inch, height=3.5 * inch))
                story.append(Spacer(1, 0.2 * inch))

        doc = SimpleDocTemplate(output_path, pagesize=letter)
        doc.build(story)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render team analytics JSON to PDF.")
    parser.add_argument("--input", required=True, help="Path to report.json")
    parser.add_argument("--output", required=True, help="Path to output PDF")
    args = parser.parse_args()
    build_pdf(_load_report(args.input), args.output)


if __name__ == "__main__":
    main()
