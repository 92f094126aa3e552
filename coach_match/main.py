from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import MatchSettings
from .errors import MatchValidationError, RepositoryError
from .ingest import FileCandidateRepository
from .matcher import CoachMatcher, suggest_specialties
from .prompts import compile_prompt
from .ranker import GenerativeRankingClient
from .summarizer import summarize
from .validator import validate


app = typer.Typer(help="Coach Match CLI")


def _configure_logging(verbose: bool) -> None:
	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.INFO,
		format="%(message)s",
		datefmt="[%X]",
		handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
		force=True,
	)


def _resolve_catalog(catalog: Optional[Path], settings: MatchSettings) -> Path:
	path = catalog or settings.catalog_path
	if path is None:
		print("[red]No catalog given.[/red] Pass --catalog or set COACH_MATCH_CATALOG.")
		raise typer.Exit(code=2)
	return path


def _repository(path: Path, settings: MatchSettings) -> FileCandidateRepository:
	return FileCandidateRepository(path, approved_only=settings.approved_only, limit=settings.catalog_limit)


@app.command()
def match(
	need: str = typer.Argument(..., help="What the user is looking for in a coach"),
	catalog: Optional[Path] = typer.Option(None, help="Coach catalog (CSV or JSON records)"),
	model: Optional[str] = typer.Option(None, help="OpenAI model (defaults to OPENAI_MODEL)"),
	timeout: Optional[float] = typer.Option(None, help="LLM request timeout in seconds"),
	attempts: Optional[int] = typer.Option(None, help="LLM attempts; retries only when the backend is unavailable"),
	as_json: bool = typer.Option(False, "--json/--table", help="Print raw JSON instead of a table"),
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
	"""Rank catalog coaches against a need statement."""
	_configure_logging(verbose)
	settings = MatchSettings.from_env()
	path = _resolve_catalog(catalog, settings)
	try:
		client = GenerativeRankingClient(
			model=model or settings.model,
			timeout=timeout if timeout is not None else settings.timeout,
			max_attempts=attempts if attempts is not None else settings.max_attempts,
		)
	except ValueError as e:
		print(f"[red]Invalid option:[/red] {e}")
		raise typer.Exit(code=2)
	matcher = CoachMatcher(_repository(path, settings), ranking_client=client, settings=settings)
	try:
		matches = matcher.match(need)
	except MatchValidationError as e:
		print(f"[red]Rejected:[/red] {e}")
		raise typer.Exit(code=2)

	if as_json:
		typer.echo(json.dumps([m.model_dump() for m in matches], indent=2))
		return
	if not matches:
		print("[yellow]No matching coaches found.[/yellow]")
		return
	table = Table("rank", "coach_id", "name", "score", "relevant_specialties")
	for i, m in enumerate(matches, start=1):
		table.add_row(str(i), m.candidate_id, m.candidate_name, str(m.match_score), ", ".join(m.relevant_specialties))
	print(table)


@app.command()
def summaries(
	catalog: Optional[Path] = typer.Option(None, help="Coach catalog (CSV or JSON records)"),
):
	"""Show the per-coach summaries that would be sent to the LLM."""
	settings = MatchSettings.from_env()
	path = _resolve_catalog(catalog, settings)
	try:
		candidates = _repository(path, settings).list_candidates()
	except RepositoryError as e:
		print(f"[red]Could not load catalog:[/red] {e}")
		raise typer.Exit(code=1)
	table = Table("id", "name", "specialties", "keywords", "bio_summary")
	for s in summarize(candidates):
		table.add_row(s.id, s.name, s.specialties_text, s.keywords_text, s.bio_summary)
	print(table)
	print(f"[bold]{len(candidates)} coaches[/bold]")


@app.command()
def prompt(
	need: str = typer.Argument(..., help="What the user is looking for in a coach"),
	catalog: Optional[Path] = typer.Option(None, help="Coach catalog (CSV or JSON records)"),
):
	"""Print the compiled ranking prompt without calling the LLM."""
	settings = MatchSettings.from_env()
	path = _resolve_catalog(catalog, settings)
	try:
		request = validate(need)
	except MatchValidationError as e:
		print(f"[red]Rejected:[/red] {e}")
		raise typer.Exit(code=2)
	try:
		candidates = _repository(path, settings).list_candidates()
	except RepositoryError as e:
		print(f"[red]Could not load catalog:[/red] {e}")
		raise typer.Exit(code=1)
	if not candidates:
		print("[yellow]Catalog is empty; no prompt would be sent.[/yellow]")
		return
	artifact = compile_prompt(request, summarize(candidates))
	typer.echo(artifact.system)
	typer.echo("")
	typer.echo(artifact.user)


@app.command()
def suggest(
	bio: str = typer.Argument(..., help="Coach biography text"),
	model: Optional[str] = typer.Option(None, help="OpenAI model (defaults to OPENAI_MODEL)"),
	verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
	"""Suggest keywords and specialties for a coach bio."""
	_configure_logging(verbose)
	settings = MatchSettings.from_env()
	client = GenerativeRankingClient(
		model=model or settings.model,
		timeout=settings.timeout,
		max_attempts=settings.max_attempts,
	)
	result = suggest_specialties(bio, ranking_client=client)
	print(f"[bold]Keywords:[/bold] {', '.join(result.keywords) or '-'}")
	print(f"[bold]Specialties:[/bold] {', '.join(result.specialties) or '-'}")


if __name__ == "__main__":
	app()
