# -*- coding: utf-8 -*-
"""
Greendex CLI
============

Run the emissions engine over JSON files:

    greendex calculate answers.json --activities activities.json
    greendex activities activities.json
    greendex trees 47.3
    greendex stats project.json
    greendex factors --model erasmus-2025
    greendex models
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from greendex import __version__
from greendex.calculation import (
    EmissionModel,
    calculate_activities_co2,
    calculate_emissions,
    compute_project_stats,
    evaluate_participant,
    get_project_statistics,
    ingest_activities,
    rank_participants,
    trees_needed,
)
from greendex.config import (
    LOG_LEVELS,
    available_emission_models,
    get_config,
    get_emission_model,
    load_emission_model,
    resolve_emission_model,
)
from greendex.exceptions import ConfigurationError, GreendexException, IngestError, format_exception_chain

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="greendex",
    help="Greendex: carbon-footprint calculations for projects and participants",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()

MODEL_OPTION = typer.Option(None, "--model", "-m", help="Emission model version")
MODEL_FILE_OPTION = typer.Option(None, "--model-file", help="Path to a YAML emission model")
JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of a table")


def configure_logging(level: str) -> None:
    """Configure root logging for CLI runs"""
    name = level.strip().upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level: {level}", context={"allowed": list(LOG_LEVELS)})
    logging.basicConfig(
        level=name,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def _root(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to GREENDEX_LOG_LEVEL)"
    ),
):
    """
    Greendex - carbon-footprint calculations
    """
    try:
        configure_logging(log_level or get_config().log_level)
    except GreendexException as e:
        _fail(e)


def _fail(exc: GreendexException) -> None:
    logger.debug(format_exception_chain(exc))
    console.print(f"[red]Error:[/red] {exc.message}")
    raise typer.Exit(1)


def _read_json(path: Path) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise IngestError(f"File not found: {path}", source=str(path)) from e
    except json.JSONDecodeError as e:
        raise IngestError(f"Invalid JSON in {path}: {e.msg}", source=str(path)) from e


def _select_model(version: Optional[str], model_file: Optional[Path]) -> EmissionModel:
    if model_file is not None:
        return load_emission_model(model_file)
    if version:
        return get_emission_model(version)
    return resolve_emission_model()


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _kg(value: float) -> str:
    return f"{value:,.2f}"


@app.command()
def calculate(
    answers_file: Path = typer.Argument(..., help="JSON file with questionnaire answers"),
    activities_file: Optional[Path] = typer.Option(
        None, "--activities", "-a", help="JSON file with project activities"
    ),
    model: Optional[str] = MODEL_OPTION,
    model_file: Optional[Path] = MODEL_FILE_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Calculate a participant's emissions breakdown"""
    try:
        emission_model = _select_model(model, model_file)
        answers = _read_json(answers_file)
        activities = _read_json(activities_file) if activities_file else None
        result = calculate_emissions(answers, activities, emission_model)
    except GreendexException as e:
        _fail(e)
        return

    if as_json:
        _echo_json(result.to_dict())
        return

    table = Table(title=f"Emissions ({emission_model.version})", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("kg CO2", justify="right", style="green")
    table.add_row("Transport (round trip)", _kg(result.transport_co2))
    table.add_row("Accommodation", _kg(result.accommodation_co2))
    table.add_row("Food", _kg(result.food_co2))
    table.add_row("Project activities", _kg(result.project_activities_co2))
    table.add_row("[bold]Total[/bold]", f"[bold]{_kg(result.total_co2)}[/bold]")
    console.print(table)
    console.print(f"Trees needed to offset: [bold green]{result.trees_needed}[/bold green]")


@app.command()
def activities(
    activities_file: Path = typer.Argument(..., help="JSON file with a list of activities"),
    model: Optional[str] = MODEL_OPTION,
    model_file: Optional[Path] = MODEL_FILE_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Total CO2 of a list of project activities"""
    try:
        emission_model = _select_model(model, model_file)
        rows = _read_json(activities_file)
        if not isinstance(rows, list):
            raise IngestError("Activities file must contain a JSON list", source=str(activities_file))
        total = calculate_activities_co2(rows, emission_model)
    except GreendexException as e:
        _fail(e)
        return

    if as_json:
        _echo_json({
            "activities_co2": total,
            "trees_needed": trees_needed(total, emission_model),
            "model": emission_model.version,
        })
        return

    console.print(f"Activities CO2: [bold]{_kg(total)}[/bold] kg ({emission_model.version})")


@app.command()
def trees(
    total_co2_kg: float = typer.Argument(..., help="Total emissions in kg CO2"),
    model: Optional[str] = MODEL_OPTION,
    model_file: Optional[Path] = MODEL_FILE_OPTION,
):
    """Trees needed to offset a CO2 total"""
    try:
        emission_model = _select_model(model, model_file)
    except GreendexException as e:
        _fail(e)
        return
    typer.echo(trees_needed(total_co2_kg, emission_model))


@app.command()
def stats(
    project_file: Path = typer.Argument(
        ..., help="JSON document with 'project', 'activities' and 'participants'"
    ),
    model: Optional[str] = MODEL_OPTION,
    model_file: Optional[Path] = MODEL_FILE_OPTION,
    as_json: bool = JSON_OPTION,
):
    """Project statistics, participant totals and leaderboard"""
    try:
        emission_model = _select_model(model, model_file)
        document = _read_json(project_file)
        if not isinstance(document, dict):
            raise IngestError("Project file must contain a JSON object", source=str(project_file))

        project_activities = ingest_activities(document.get("activities") or [])
        entries = document.get("participants") or []

        participants = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise IngestError(f"Participant #{index} must be a JSON object", source=str(project_file))
            answers = entry.get("answers", entry)
            participant_id = entry.get("id")
            participants.append(evaluate_participant(
                answers,
                project_activities,
                participant_id=str(participant_id) if participant_id is not None else None,
                model=emission_model,
            ))

        summary = get_project_statistics(
            document.get("project"), entries, project_activities, emission_model
        )
        participant_stats = compute_project_stats(participants, emission_model)
        leaderboard = rank_participants(participants)
    except GreendexException as e:
        _fail(e)
        return

    if as_json:
        _echo_json({
            "model": emission_model.version,
            "project": summary.to_dict(),
            "stats": participant_stats.to_dict(),
            "leaderboard": [
                {"rank": p.rank, "participant_id": p.participant_id, "name": p.name, "total_co2": p.total_co2}
                for p in leaderboard
            ],
        })
        return

    console.print(f"[bold]Project[/bold] ({emission_model.version})")
    console.print(f"  Duration: {summary.duration_days} days")
    console.print(f"  Participants: {summary.participants_count}")
    console.print(f"  Activities: {summary.activities_count} ({_kg(summary.total_distance_km)} km, "
                  f"{_kg(summary.activities_co2_kg)} kg CO2)")
    console.print(f"  Total CO2: {_kg(participant_stats.total_co2)} kg, "
                  f"average {_kg(participant_stats.average_co2)} kg per participant")
    console.print(f"  Trees needed: {participant_stats.trees_needed}")

    breakdown = Table(title="Transport breakdown", show_header=True, header_style="bold magenta")
    breakdown.add_column("Mode", style="cyan")
    breakdown.add_column("Segments", justify="right")
    breakdown.add_column("km", justify="right")
    breakdown.add_column("kg CO2", justify="right", style="green")
    for activity_type, data in participant_stats.breakdown_by_type.items():
        breakdown.add_row(activity_type, str(data.count), _kg(data.distance), _kg(data.co2))
    console.print(breakdown)

    board = Table(title="Leaderboard", show_header=True, header_style="bold magenta")
    board.add_column("Rank", justify="right")
    board.add_column("Participant", style="cyan")
    board.add_column("kg CO2", justify="right", style="green")
    for participant in leaderboard:
        board.add_row(
            str(participant.rank),
            participant.name or participant.participant_id or "-",
            _kg(participant.total_co2),
        )
    console.print(board)


@app.command()
def factors(
    model: Optional[str] = MODEL_OPTION,
    model_file: Optional[Path] = MODEL_FILE_OPTION,
):
    """Show the factor tables of an emission model"""
    try:
        emission_model = _select_model(model, model_file)
    except GreendexException as e:
        _fail(e)
        return

    console.print(f"[bold]Emission model {emission_model.version}[/bold]")
    if emission_model.source:
        console.print(f"Source: {emission_model.source}")

    tables = (
        ("Transport", "kg CO2 / km", emission_model.transport_factors),
        ("Accommodation", "kg CO2 / night", emission_model.accommodation_factors),
        ("Food", "kg CO2 / day", emission_model.food_factors),
        ("Room occupancy", "factor", emission_model.room_occupancy_factors),
    )
    for title, unit, values in tables:
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Key", style="cyan")
        table.add_column(unit, justify="right", style="green")
        for key, value in values.items():
            table.add_row(key, f"{value:g}")
        console.print(table)

    console.print(f"Green energy factor: {emission_model.green_energy_factor:g}")
    console.print(f"Conventional energy factor: {emission_model.conventional_energy_factor:g}")
    console.print(f"Round trip multiplier: {emission_model.round_trip_multiplier:g}")
    console.print(f"Default car passengers: {emission_model.default_car_passengers}")
    console.print(f"CO2 per tree per year: {emission_model.co2_per_tree_per_year:g} kg")


@app.command()
def models():
    """List the available emission model versions"""
    for version in available_emission_models():
        typer.echo(version)


@app.command()
def version():
    """Show Greendex version"""
    console.print(f"[bold green]Greendex v{__version__}[/bold green]")


def main():
    app()


if __name__ == "__main__":
    main()
