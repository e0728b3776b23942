# cli.py
"""
Flask CLI commands for the check-in system.
"""

import json
import os

import click
from flask.cli import with_appcontext
from flask import current_app

from checkin.errors import CheckInError
from checkin.extensions import get_state


@click.command("import-people")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@with_appcontext
def import_people(file_path):
    """Import attendees from a CSV or Excel file."""
    from checkin.services.importer import import_spreadsheet

    try:
        result = import_spreadsheet(file_path, get_state().directory)
    except CheckInError as e:
        click.echo(f"Import aborted: {e.message}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(f"Imported {result.count} people, skipped {result.skipped} rows without a name.")
    for error in result.errors:
        click.echo(f"- {error}", err=True)


@click.command("export-data")
@click.option("--format", "export_format", type=click.Choice(['json', 'xlsx']), default='json',
              help="Export format")
@click.option("--output", type=click.Path(dir_okay=False), default=None,
              help="Target file (defaults to the generated filename)")
@with_appcontext
def export_data(export_format, output):
    """Export people and the access log."""
    from checkin.utils.export_data import export_to_excel, export_to_json

    state = get_state()
    people = state.directory.all()
    entries = state.access_log.all()

    if export_format == 'xlsx':
        data, filename = export_to_excel(people, entries)
        target = output or filename
        with open(target, 'wb') as handle:
            handle.write(data)
    else:
        data, filename = export_to_json(people, entries)
        target = output or filename
        with open(target, 'w', encoding='utf-8') as handle:
            json.dump(data, handle, ensure_ascii=False, indent=2)

    click.echo(f"Exported {len(people)} people and {len(entries)} log entries to {os.path.abspath(target)}")


@click.command("scan")
@click.argument("code")
@with_appcontext
def scan(code):
    """Evaluate a code and record the decision."""
    result = get_state().check_in_service.scan(code, method='manual')

    if result.success:
        click.echo(f"GRANTED  {result.person_name}  {result.time}")
    else:
        click.echo(f"DENIED   {code}  {result.time}")


@click.command("simulate-scans")
@click.option("--limit", type=int, default=None, help="Number of simulated scans")
@with_appcontext
def simulate_scans(limit):
    """Scan the codes of the first active people through a simulated camera."""
    from checkin.services.scanner import NullCamera, ScanLoop, SimulatedScanner

    state = get_state()
    scanner = SimulatedScanner(state.directory, limit=current_app.config.get('SIMULATE_SCAN_LIMIT', 4))
    loop = ScanLoop(state.check_in_service, NullCamera())

    try:
        results = loop.run(scanner, limit=limit, method='simulated')
    except CheckInError as e:
        click.echo(f"Scanning failed: {e.message}", err=True)
        raise click.exceptions.Exit(1)

    for result in results:
        status = 'GRANTED' if result.success else 'DENIED '
        click.echo(f"{status}  {result.person_name or result.entry.presented_code}  {result.time}")

    click.echo(f"{len(results)} simulated scans recorded.")


@click.command("seed-demo")
@click.option("--yes", is_flag=True, help="Replace the current directory without asking")
@with_appcontext
def seed_demo(yes):
    """Replace the directory with the demo people."""
    directory = get_state().directory

    if len(directory) and not yes:
        if not click.confirm(f"Replace {len(directory)} registered people with the demo people?"):
            click.echo("Operation cancelled.")
            return

    people = directory.seed_demo()
    for person in people:
        click.echo(f"{person.name:<30} {person.code}")


@click.command("clear-log")
@click.option("--yes", is_flag=True, help="Clear without asking")
@with_appcontext
def clear_log(yes):
    """Delete every access log entry."""
    access_log = get_state().access_log

    if not yes and not click.confirm(f"Delete {len(access_log)} access log entries?"):
        click.echo("Operation cancelled.")
        return

    access_log.clear()
    click.echo("Access log cleared.")


def register_cli_commands(app):
    """Register all CLI commands with the app."""
    app.cli.add_command(import_people)
    app.cli.add_command(export_data)
    app.cli.add_command(scan)
    app.cli.add_command(simulate_scans)
    app.cli.add_command(seed_demo)
    app.cli.add_command(clear_log)
