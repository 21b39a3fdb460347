# ABOUTME: Provides a CLI that estimates C2 scores and reports student and cohort progress.
# ABOUTME: Reads raw score logs, enriches them, and prints Rich tables for teachers.

from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import List, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from src.common.config import load_config
from src.common.schemas import COMPONENT_KEYS, EnrichedScore, RawScoreEntry
from src.common.score_log import read_score_log
from src.progress.attention import REASON_LABELS, evaluate_student
from src.progress.cohort import cohort_most_recent_date, flag_students, summarize_cohort
from src.progress.trends import summarize_student
from src.scoring.components import C2_COMPONENTS
from src.scoring.enrichment import enrich_history, enrich_score
from src.scoring.validation import InvalidRawMarkError, validate_raw_marks

console = Console()
app = typer.Typer(help="Estimate Cambridge C2 Proficiency scores and track student progress.")

REASON_COLORS = {"regressing": "red", "below_pass": "grey62", "inactive": "dark_orange", "incomplete": "magenta"}
SHORT_LABELS = {"reading": "R", "useOfEnglish": "UoE", "writing": "W", "listening": "L", "speaking": "S"}


def _default_config_path() -> Path:
    return Path("configs/c2_scoring.yaml")


def _load_scores(scores_path: Path) -> List[EnrichedScore]:
    if not scores_path.exists():
        console.print(f"[red]Missing score log at {scores_path}[/red]")
        raise typer.Exit(code=1)
    try:
        entries = read_score_log(scores_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--scores") from exc
    return enrich_history(entries)


def _load_config(config_path: Path):
    if config_path == _default_config_path() and not config_path.exists():
        return load_config(None)
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _fmt_delta(delta: Optional[int]) -> str:
    if delta is None:
        return "-"
    color = "green" if delta >= 0 else "red"
    return f"[{color}]{delta:+d}[/{color}]"


@app.command()
def estimate(
    reading: Optional[float] = typer.Option(None, "--reading", help="Reading raw mark (0-44)."),
    use_of_english: Optional[float] = typer.Option(None, "--use-of-english", help="Use of English raw mark (0-28)."),
    writing: Optional[float] = typer.Option(None, "--writing", help="Writing raw mark (0-40)."),
    listening: Optional[float] = typer.Option(None, "--listening", help="Listening raw mark (0-30)."),
    speaking: Optional[float] = typer.Option(None, "--speaking", help="Speaking raw mark (0-75, half marks)."),
) -> None:
    """
    Convert raw paper marks into scale scores, an overall score, and a band.
    """
    marks = {
        "reading": reading,
        "useOfEnglish": use_of_english,
        "writing": writing,
        "listening": listening,
        "speaking": speaking,
    }
    try:
        raw_marks = validate_raw_marks(marks)
    except InvalidRawMarkError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not raw_marks:
        console.print("[yellow]No raw marks given; pass at least one paper.[/yellow]")
        raise typer.Exit(code=1)

    score = enrich_score(RawScoreEntry(user_id="-", exam_date=date.today(), raw_marks=raw_marks))

    console.rule("[bold blue]C2 Proficiency Estimate[/bold blue]")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Paper")
    table.add_column("Raw")
    table.add_column("Scale")
    for key in COMPONENT_KEYS:
        if key not in score.scale_scores:
            continue
        table.add_row(C2_COMPONENTS[key].label, f"{score.raw_marks[key]:g}", str(score.scale_scores[key]))
    console.print(table)

    console.print(f"[bold]Overall:[/] {score.overall} ({score.included_count} of {len(COMPONENT_KEYS)} papers)")
    console.print(f"[bold]Band:[/] {score.band.label} ({score.band.cefr})")
    if not score.is_complete:
        console.print("[yellow]Estimate is incomplete; missing papers are left out of the average.[/yellow]")


@app.command()
def student(
    student_id: str = typer.Option(..., "--student-id", help="Student identifier in the score log."),
    scores: Path = typer.Option(Path("data/sample_scores.csv"), "--scores", help="Score log (CSV or parquet)."),
    config: Path = typer.Option(_default_config_path(), "--config", help="Scoring config YAML."),
) -> None:
    """
    Show one student's exam history, progress since last exam, and attention flag.
    """
    cfg = _load_config(config)
    enriched = _load_scores(scores)
    progress = summarize_student(student_id, enriched)
    if progress.latest is None:
        console.print(f"[yellow]No scores for {student_id}[/yellow]")
        raise typer.Exit(code=1)

    console.rule(f"[bold blue]Progress for {student_id}[/bold blue]")
    history_table = Table(show_header=True, header_style="bold magenta")
    history_table.add_column("Exam date", no_wrap=True, min_width=10)
    for key in COMPONENT_KEYS:
        history_table.add_column(SHORT_LABELS[key], justify="right")
    history_table.add_column("Overall", justify="right")
    history_table.add_column("Band", no_wrap=True)
    for score in progress.history:
        history_table.add_row(
            score.exam_date.isoformat(),
            *[str(score.scale_scores.get(key, "-")) for key in COMPONENT_KEYS],
            str(score.overall),
            score.band.label,
        )
    console.print(history_table)

    console.print()
    console.print(f"[bold]Latest overall:[/] {progress.latest.overall} {_fmt_delta(progress.overall_delta)}")
    if progress.skill_deltas:
        deltas = ", ".join(
            f"{C2_COMPONENTS[key].label} {_fmt_delta(delta)}" for key, delta in progress.skill_deltas.items()
        )
        console.print(f"[bold]Since last exam:[/] {deltas}")
    if progress.spotlight is not None:
        spot = progress.spotlight
        console.print(f"[bold]Strongest skill:[/] {C2_COMPONENTS[spot.strongest].label} ({spot.strongest_score})")
        if spot.weakest_score != spot.strongest_score:
            console.print(f"[bold]Focus area:[/] {C2_COMPONENTS[spot.weakest].label} ({spot.weakest_score})")

    flag = evaluate_student(progress.history, cohort_most_recent_date(enriched), cfg.attention)
    if flag is None:
        console.print("[green]On track[/green]")
    else:
        color = REASON_COLORS.get(flag.reason, "white")
        console.print(f"[{color}]{REASON_LABELS[flag.reason]}: {flag.detail}[/{color}]")


@app.command()
def attention(
    scores: Path = typer.Option(Path("data/sample_scores.csv"), "--scores", help="Score log (CSV or parquet)."),
    config: Path = typer.Option(_default_config_path(), "--config", help="Scoring config YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional CSV or parquet for flagged students."),
) -> None:
    """
    List students who need attention, most severe first.
    """
    cfg = _load_config(config)
    enriched = _load_scores(scores)
    flagged = flag_students(enriched, cfg.attention)

    if not flagged:
        console.print(f"[green]✅ All {len({s.user_id for s in enriched})} students on track[/green]")
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Student")
        table.add_column("Reason")
        table.add_column("Overall")
        table.add_column("Detail")
        for item in flagged:
            color = REASON_COLORS.get(item.reason, "white")
            table.add_row(item.user_id, f"[{color}]{item.label}[/{color}]", str(item.overall), item.detail)
        console.print(table)

    if output is not None:
        flagged_df = pd.DataFrame(
            [asdict(item) for item in flagged], columns=["user_id", "reason", "label", "detail", "overall"]
        )
        output.parent.mkdir(parents=True, exist_ok=True)
        if output.suffix.lower() == ".parquet":
            flagged_df.to_parquet(output, index=False)
        else:
            flagged_df.to_csv(output, index=False)
        console.print(f"[bold]{len(flagged)} flagged students saved to {output}[/bold]")


@app.command()
def dashboard(
    scores: Path = typer.Option(Path("data/sample_scores.csv"), "--scores", help="Score log (CSV or parquet)."),
    config: Path = typer.Option(_default_config_path(), "--config", help="Scoring config YAML."),
) -> None:
    """
    Print a class overview: averages, pass rate, bands, skills, and progress.
    """
    cfg = _load_config(config)
    summary = summarize_cohort(_load_scores(scores), cfg)

    console.rule("[bold blue]Class Overview[/bold blue]")
    console.print(f"[bold]Total students:[/] {summary.total_students}")
    console.print(f"[bold]Class average:[/] {summary.class_average}")
    console.print(f"[bold]Pass rate (C1+):[/] {summary.pass_rate}% ({summary.passing} of {summary.total_students})")
    console.print(f"[bold]Avg completion:[/] {summary.avg_completion} skills per exam")

    console.print()
    band_table = Table(title="Band distribution", show_header=True, header_style="bold magenta")
    band_table.add_column("Band")
    band_table.add_column("Students")
    for key, count in summary.band_distribution.items():
        band_table.add_row(key, str(count))
    console.print(band_table)

    skill_table = Table(title="Skill averages", show_header=True, header_style="bold magenta")
    skill_table.add_column("Skill")
    skill_table.add_column("Average")
    for key, value in summary.skill_averages.items():
        skill_table.add_row(C2_COMPONENTS[key].label, "-" if value is None else str(value))
    console.print(skill_table)

    progress_table = Table(title="Class progress", show_header=True, header_style="bold magenta")
    progress_table.add_column("Month")
    progress_table.add_column("Average")
    progress_table.add_column("Exams")
    for _, row in summary.class_progress.iterrows():
        progress_table.add_row(str(row["month"]), str(row["average"]), str(row["exams"]))
    console.print(progress_table)

    ranking_table = Table(title="Top performers", show_header=True, header_style="bold magenta")
    ranking_table.add_column("Student")
    ranking_table.add_column("Overall")
    ranking_table.add_column("Band")
    for ranked in summary.top_performers:
        ranking_table.add_row(ranked.user_id, str(ranked.overall), ranked.band.label)
    console.print(ranking_table)

    if summary.most_improved:
        console.print("[bold green]Most improved[/bold green]")
        for ranked in summary.most_improved:
            console.print(f"  {ranked.user_id}: {ranked.overall} {_fmt_delta(ranked.delta)}")

    console.print()
    if summary.attention:
        console.print(f"[bold red]{len(summary.attention)} student(s) need attention[/bold red]")
        for item in summary.attention:
            console.print(f"  {item.user_id}: {item.label} ({item.detail})")
    else:
        console.print("[green]No students need attention[/green]")


if __name__ == "__main__":
    app()
