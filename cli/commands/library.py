import click
from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.sa.database import Database
from core.services.bulk_merge import BulkMergeCoordinator
from core.services.library_service import LibraryService
from ..utils import handle_library_errors

@click.group()
def library():
    """Library maintenance commands"""
    pass

@library.command()
def integrity():
    """Scan the library for records that break the ownership rules

    Exits with status 1 when any violation is found.
    """
    db = Database()
    session = db.get_session()
    try:
        result = ImpactAnalyzer(session).integrity_check()
    finally:
        session.close()

    if result.is_valid:
        click.echo(click.style("Library is consistent", fg='green'))
        return

    click.echo(click.style(f"Found {len(result.violations)} violation(s):", fg='red'))
    for violation in result.violations:
        click.echo(click.style(f"  - [{violation.type.value}] {violation.message}", fg='red'))
    click.echo("\n" + click.style("Summary:", fg='blue'))
    for name, count in result.summary.model_dump().items():
        if count:
            click.echo(click.style(f"  {name.replace('_', ' ')}: ", fg='blue') + click.style(str(count), fg='cyan'))
    click.get_current_context().exit(1)

@library.command()
@click.option('--force/--no-force', default=False, help='Skip confirmation prompt')
@handle_library_errors
def cleanup(force: bool):
    """Delete every author, publisher and series that has no books

    Example:
        home-library library cleanup  # Will prompt for confirmation
        home-library library cleanup --force  # No confirmation prompt
    """
    db = Database()
    session = db.get_session()
    try:
        orphans = ImpactAnalyzer(session).find_orphans()
        total = sum(len(entities) for entities in orphans.values())
        if total == 0:
            click.echo("No orphans found.")
            return

        click.echo("\nOrphans found:")
        for kind, entities in orphans.items():
            for entity in entities:
                click.echo(f"  - {kind.value.capitalize()}: {entity.name}")

        if not force:
            click.confirm(f"\nDelete these {total} orphan record(s)? Authors still credited on a series with books are kept.", abort=True)

        result = LifecycleEnforcer(session).cleanup_orphans()
        click.echo(click.style(f"\nDeleted {result.total} orphan record(s)", fg='green'))
    finally:
        session.close()

@library.command('import')
@click.argument('file', type=click.Path(dir_okay=False))
@handle_library_errors
def import_batch(file: str):
    """Merge a JSON export into the library

    Records whose id already exists are skipped, so importing the same file
    twice is harmless.
    """
    batch = BulkMergeCoordinator.load_batch(file)

    db = Database()
    session = db.get_session()
    try:
        result = BulkMergeCoordinator(session).import_batch(batch)
    finally:
        session.close()

    click.echo("\n" + click.style("Imported:", fg='blue'))
    for group, count in result.imported.items():
        click.echo(click.style(f"  {group}: ", fg='blue') + click.style(str(count), fg='green'))
    if result.errors:
        click.echo("\n" + click.style(f"{len(result.errors)} problem(s):", fg='yellow'))
        for error in result.errors:
            click.echo(click.style(f"  - {error}", fg='yellow'))

@library.command('export')
@click.argument('file', type=click.Path(dir_okay=False, writable=True))
@handle_library_errors
def export_batch(file: str):
    """Write the whole library to a JSON file that `library import` can read"""
    db = Database()
    session = db.get_session()
    try:
        batch = BulkMergeCoordinator(session).export_batch()
    finally:
        session.close()

    with open(file, 'w', encoding='utf-8') as f:
        f.write(batch.model_dump_json(indent=2))
    click.echo(click.style(f"Exported {len(batch.books)} book(s) to ", fg='green') + click.style(file, fg='cyan'))

@library.command()
def stats():
    """Show library statistics"""
    db = Database()
    session = db.get_session()
    try:
        result = LibraryService(session).get_stats()
    finally:
        session.close()

    click.echo(click.style("Totals:", fg='blue'))
    for name, count in result.totals.model_dump().items():
        click.echo(click.style(f"  {name}: ", fg='blue') + click.style(str(count), fg='cyan'))
    click.echo(click.style("Reading status:", fg='blue'))
    for status, count in result.reading_status.items():
        click.echo(click.style(f"  {status}: ", fg='blue') + click.style(str(count), fg='cyan'))
    for title, entries in (("Top genres:", result.top_genres), ("Top authors:", result.top_authors)):
        if entries:
            click.echo(click.style(title, fg='blue'))
            for entry in entries:
                click.echo(f"  {entry.name} ({entry.book_count})")
    if result.recent_books:
        click.echo(click.style("Recently added:", fg='blue'))
        for b in result.recent_books:
            click.echo(f"  {b.name}")
