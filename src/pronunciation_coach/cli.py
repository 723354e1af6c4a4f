"""Click CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import CoachConfig, DrillConfig, TranscriptionConfig

console = Console()

FEEDBACK_STYLES = {
    "perfect": "bold green",
    "great": "green",
    "close": "yellow",
    "retry": "red",
}


def _verdict_table(title: str, expected: str, verdict) -> Table:
    table = Table(title=title)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    style = FEEDBACK_STYLES[verdict.tier.name.lower()]
    table.add_row("Expected", escape(expected))
    table.add_row("Heard", escape(verdict.transcribed))
    table.add_row("Score", str(verdict.score))
    table.add_row("Correct", "yes" if verdict.is_correct else "no")
    table.add_row("Feedback", f"[{style}]{verdict.feedback}[/]")
    return table


@click.group()
@click.option(
    "--provider",
    type=click.Choice(["openai", "proxy", "static"]),
    default="openai",
    help="Transcription provider.",
)
@click.option("--api-key", envvar="OPENAI_API_KEY", default=None, help="Provider API key (env: OPENAI_API_KEY).")
@click.option("--base-url", default=None, help="OpenAI-compatible API base URL.")
@click.option("--proxy-url", envvar="TRANSCRIBE_PROXY_URL", default=None, help="Backend transcription function URL.")
@click.option("--model", default="whisper-1", help="Transcription model name.")
@click.option("--language", default="es", help="Language hint for transcription.")
@click.option("--static-text", default=None, help="Fixed transcript for the static provider.")
@click.option("--output-dir", default="results", help="Directory for result files.")
@click.pass_context
def cli(
    ctx: click.Context,
    provider: str,
    api_key: str | None,
    base_url: str | None,
    proxy_url: str | None,
    model: str,
    language: str,
    static_text: str | None,
    output_dir: str,
) -> None:
    """Grade spoken attempts against target phrases."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = CoachConfig(
        transcription=TranscriptionConfig(
            provider=provider,
            api_key=api_key,
            base_url=base_url,
            proxy_url=proxy_url,
            model=model,
            language=language,
            static_text=static_text,
        ),
        drill=DrillConfig(output_dir=Path(output_dir)),
    )


def _make_provider(config: CoachConfig):
    from .providers import provider_from_config
    from .providers.base import TranscriptionError

    try:
        return provider_from_config(config.transcription)
    except TranscriptionError as e:
        raise click.UsageError(str(e))


@cli.command("match")
@click.argument("transcribed")
@click.argument("expected")
@click.option("--great-threshold", default=80, type=int, help="Minimum score counted correct.")
@click.option("--close-threshold", default=60, type=int, help="Minimum score for 'close' feedback.")
def match_cmd(transcribed: str, expected: str, great_threshold: int, close_threshold: int) -> None:
    """Grade TRANSCRIBED text against EXPECTED text."""
    from pydantic import ValidationError

    from .config import MatchConfig
    from .matcher import match

    try:
        match_config = MatchConfig(great_threshold=great_threshold, close_threshold=close_threshold)
    except ValidationError as e:
        raise click.UsageError(str(e))

    verdict = match(transcribed, expected, match_config)
    console.print(_verdict_table("Match", expected, verdict))


@cli.command("list")
def list_scenarios_cmd() -> None:
    """List bundled scenarios."""
    from .scenarios import load_scenarios

    table = Table(title="Scenarios")
    table.add_column("ID", justify="right")
    table.add_column("Slug", style="bold cyan")
    table.add_column("Title")
    table.add_column("Items", justify="right")
    table.add_column("Goals", justify="right")

    for s in load_scenarios():
        table.add_row(str(s.id), s.slug, s.title, str(len(s.learning_items())), str(len(s.goals)))

    console.print(table)


@cli.command("providers")
def list_providers_cmd() -> None:
    """List available transcription providers."""
    from .providers import list_providers

    table = Table(title="Transcription Providers")
    table.add_column("Name", style="bold cyan")
    table.add_column("Description")
    for p in list_providers():
        table.add_row(p["name"], p["description"])
    console.print(table)


@cli.command()
@click.argument("audio", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--expected", default=None, help="Target phrase to grade the transcript against.")
@click.pass_context
def transcribe(ctx: click.Context, audio: Path, expected: str | None) -> None:
    """Transcribe AUDIO and optionally grade it."""
    from .matcher import Matcher
    from .providers.base import TranscriptionError

    config: CoachConfig = ctx.obj["config"]
    provider = _make_provider(config)

    async def _transcribe() -> str:
        try:
            return await provider.transcribe(audio, config.transcription.language)
        finally:
            await provider.aclose()

    try:
        text = asyncio.run(_transcribe())
    except TranscriptionError as e:
        console.print(f"[red]Transcription failed:[/] {escape(str(e))}")
        raise SystemExit(1)

    if expected is None:
        console.print(escape(text))
        return

    verdict = Matcher(config.match).match(text, expected)
    console.print(_verdict_table(audio.name, expected, verdict))


@cli.command()
@click.argument("scenario")
@click.argument("recordings", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--concurrency", default=4, type=click.IntRange(min=1), help="Max concurrent transcriptions.")
@click.option("--no-save", is_flag=True, help="Do not write a result file.")
@click.pass_context
def drill(
    ctx: click.Context,
    scenario: str,
    recordings: tuple[Path, ...],
    concurrency: int,
    no_save: bool,
) -> None:
    """Grade RECORDINGS against SCENARIO's words and phrases, in order."""
    from .drill import VocabularyDrill, pair_recordings
    from .results import save_drill_result
    from .scenarios import get_scenario

    config: CoachConfig = ctx.obj["config"]
    config.drill.concurrency = concurrency

    try:
        scen = get_scenario(scenario)
        pairs = pair_recordings(scen, list(recordings))
    except (KeyError, ValueError) as e:
        raise click.UsageError(str(e).strip("'\""))

    provider = _make_provider(config)

    async def _run():
        try:
            return await VocabularyDrill(provider, config).run(scen, pairs)
        finally:
            await provider.aclose()

    result = asyncio.run(_run())

    table = Table(title=scen.title)
    table.add_column("Expected", style="bold")
    table.add_column("Heard")
    table.add_column("Score", justify="right")
    table.add_column("Feedback")
    table.add_column("Points", justify="right")
    for a in result.attempts:
        if a.verdict is None:
            table.add_row(escape(a.item.text), "", "", f"[red]{escape(a.error or '')}[/]", "0")
            continue
        style = FEEDBACK_STYLES[a.verdict.tier.name.lower()]
        table.add_row(escape(a.item.text), escape(a.verdict.transcribed), str(a.verdict.score),
                      f"[{style}]{a.verdict.feedback}[/]", str(a.points))
    console.print(table)

    if not no_save:
        save_drill_result(result, config)


@cli.command()
@click.argument("scenario")
@click.argument("recordings", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def roleplay(ctx: click.Context, scenario: str, recordings: tuple[Path, ...]) -> None:
    """Play SCENARIO's conversation with RECORDINGS as the learner's turns."""
    from .matcher import Matcher
    from .providers.base import TranscriptionError
    from .roleplay import RolePlaySession
    from .scenarios import get_scenario

    config: CoachConfig = ctx.obj["config"]
    try:
        scen = get_scenario(scenario)
    except KeyError as e:
        raise click.UsageError(str(e).strip("'\""))

    provider = _make_provider(config)
    session = RolePlaySession(scen, Matcher(config.match))

    async def _play() -> None:
        try:
            session.opening_line()
            for audio in recordings:
                try:
                    text = await provider.transcribe(audio, config.transcription.language)
                except TranscriptionError as e:
                    console.print(f"[red]Failed to transcribe {escape(audio.name)}:[/] {escape(str(e))}")
                    session.record_failed_turn()
                    continue
                turn = session.respond(text)
                for goal in turn.newly_completed:
                    console.print(f"  [green]Goal completed:[/] {escape(goal.content)}")
        finally:
            await provider.aclose()

    asyncio.run(_play())

    for line in session.transcript:
        console.print(f"[bold]{escape(line.speaker)}:[/] {escape(line.message)}")

    summary = session.summary()
    console.print(
        f"\n[bold blue]{summary.title}[/] {summary.completed_goals}/{summary.total_goals} goals "
        f"({summary.percentage}%)"
    )


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True))
def compare(files: tuple[str, ...]) -> None:
    """Compare results from multiple drill runs."""
    from .results import compare_results

    compare_results([Path(f) for f in files])
