import click
from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.models.integrity import BookImpact
from core.sa.database import Database
from core.sa.models import ReadingStatus
from core.sa.repositories.book import BookRepository
from ..utils import handle_library_errors, print_deleted

def print_impact(impact: BookImpact) -> None:
    """Print what a book deletion would leave without books"""
    if not impact.has_impact:
        click.echo(click.style("No other records depend on this book alone.", fg='green'))
        return
    click.echo(click.style("Deleting this book would orphan:", fg='yellow'))
    for author in impact.orphaned_authors:
        click.echo(click.style(f"  - Author: {author.name}", fg='yellow'))
    if impact.orphaned_publisher:
        click.echo(click.style(f"  - Publisher: {impact.orphaned_publisher.name}", fg='yellow'))
    if impact.orphaned_series:
        click.echo(click.style(f"  - Series: {impact.orphaned_series.name}", fg='yellow'))
    for series in impact.series_without_authors:
        click.echo(click.style(f"  - Series without authors: {series.name} (blocks --cascade)", fg='red'))

@click.group()
def book():
    """Book management commands"""
    pass

@book.command('list')
@click.option('--query', default=None, help='Only list books whose title or ISBN matches')
@click.option('--status', type=click.Choice([status.value for status in ReadingStatus]), default=None,
              help='Only list books with this reading status')
@click.option('--limit', default=50, help='Maximum number of books to list')
def list_books(query: str, status: str, limit: int):
    """List books in the library"""
    db = Database()
    session = db.get_session()
    try:
        books = BookRepository(session).search_books(query=query, reading_status=status, limit=limit)
        if not books:
            click.echo(click.style("No books found", fg='yellow'))
            return
        for b in books:
            authors = ', '.join(author.name for author in b.authors) or 'Unknown author'
            click.echo(click.style(b.title, fg='cyan') + f" by {authors} " +
                       click.style(f"[{b.reading_status}]", fg='blue') + f" ({b.id})")
    finally:
        session.close()

@book.command()
@click.argument('book_id')
@handle_library_errors
def impact(book_id: str):
    """Show which authors, publisher and series only this book keeps alive

    Example:
        home-library book impact 3f2c...
    """
    db = Database()
    session = db.get_session()
    try:
        print_impact(ImpactAnalyzer(session).check_delete_impact(book_id))
    finally:
        session.close()

@book.command()
@click.argument('book_id')
@click.option('--cascade', is_flag=True, default=False,
              help='Also delete the authors, publisher and series left without books')
@handle_library_errors
def delete(book_id: str, cascade: bool):
    """Delete a book

    Without --cascade the deletion is refused when it would leave an author,
    publisher or series without any book.

    Example:
        home-library book delete 3f2c...
        home-library book delete 3f2c... --cascade
    """
    db = Database()
    session = db.get_session()
    try:
        deleted = LifecycleEnforcer(session).delete_book(book_id, cascade_orphans=cascade)
        print_deleted(deleted)
    finally:
        session.close()
