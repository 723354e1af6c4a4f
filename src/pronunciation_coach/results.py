"""JSON result persistence and comparison."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import CoachConfig
from .drill import DrillResult
from .metrics import confidence_interval_95

console = Console()


def save_drill_result(result: DrillResult, config: CoachConfig) -> Path:
    """Save a drill result to a timestamped JSON file."""
    output_dir = Path(config.drill.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    filename = f"{result.scenario}_{config.transcription.provider}_{timestamp}.json"
    filename = filename.replace("/", "_").replace("\\", "_")
    filepath = output_dir / filename

    data = {
        "provider": config.transcription.provider,
        "language": config.transcription.language,
        "timestamp": timestamp,
        "config": {
            "great_threshold": config.match.great_threshold,
            "close_threshold": config.match.close_threshold,
            "word_points": config.drill.word_points,
            "phrase_points": config.drill.phrase_points,
        },
        **result.to_dict(),
    }

    filepath.write_text(json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    console.print(f"  Results saved to [cyan]{filepath}[/]")
    return filepath


def load_result(filepath: Path) -> dict:
    """Load a result JSON file."""
    return json.loads(filepath.read_text(encoding="utf-8"))


def compare_results(filepaths: list[Path]) -> None:
    """Display a side-by-side comparison table of multiple drill result files."""
    results = []
    for fp in filepaths:
        try:
            results.append(load_result(fp))
        except (OSError, ValueError) as e:
            console.print(f"[red]Error loading {escape(str(fp))}:[/] {escape(str(e))}")

    if not results:
        console.print("[red]No valid result files to compare.[/]")
        return

    table = Table(title="Drill Comparison", show_lines=True)
    table.add_column("Metric", style="bold")

    for r in results:
        label = f"{r.get('scenario', '?')}\n{r.get('provider', '?')}\n{r.get('timestamp', '')}"
        table.add_column(label, justify="right")

    table.add_row("Accuracy", *[f"{r.get('accuracy', 0):.2f}" for r in results])
    table.add_row("Attempts", *[str(r.get("num_attempts", 0)) for r in results])
    table.add_row("Points", *[str(r.get("points", 0)) for r in results])

    for r in results:
        attempts = r.get("attempts", [])
        if attempts:
            scores = [1.0 if a.get("correct") else 0.0 for a in attempts]
            ci_lo, ci_hi = confidence_interval_95(scores)
            r["_ci"] = f"[{ci_lo:.2f}, {ci_hi:.2f}]"
        else:
            r["_ci"] = "N/A"
    table.add_row("95% CI", *[r["_ci"] for r in results])

    metric_keys = [
        ("score_mean", "Score Mean"),
        ("score_p50", "Score P50"),
        ("latency_mean", "Latency Mean (s)"),
        ("latency_p95", "Latency P95 (s)"),
        ("failed_transcriptions", "Failed Transcriptions"),
    ]

    for key, label in metric_keys:
        values = []
        for r in results:
            v = r.get("aggregated_metrics", {}).get(key)
            values.append(f"{v:.2f}" if isinstance(v, float) else str(v) if v is not None else "N/A")
        table.add_row(label, *values)

    console.print(table)
