import click
from core.integrity.enforcer import LifecycleEnforcer
from core.integrity.impact import ImpactAnalyzer
from core.sa.database import Database
from core.sa.repositories.author import AuthorRepository
from ..utils import handle_library_errors, print_deleted

@click.group()
def author():
    """Author management commands"""
    pass

@author.command('list')
def list_authors():
    """List authors with their number of books"""
    db = Database()
    session = db.get_session()
    try:
        for a, book_count in AuthorRepository(session).list_with_book_counts():
            color = 'cyan' if book_count else 'red'
            click.echo(click.style(a.name, fg=color) + f" ({book_count} book(s)) {a.id}")
    finally:
        session.close()

@author.command()
@click.argument('author_id')
@handle_library_errors
def impact(author_id: str):
    """Show the series that would be left without any author"""
    db = Database()
    session = db.get_session()
    try:
        result = ImpactAnalyzer(session).check_author_delete_impact(author_id)
        if not result.has_impact:
            click.echo(click.style("No series depends on this author alone.", fg='green'))
            return
        click.echo(click.style("This author is the only author of:", fg='yellow'))
        for s in result.series_with_no_authors:
            click.echo(click.style(f"  - Series: {s.name}", fg='yellow'))
    finally:
        session.close()

@author.command()
@click.argument('author_id')
@handle_library_errors
def delete(author_id: str):
    """Delete an author that has no books and is not the only author of a series"""
    db = Database()
    session = db.get_session()
    try:
        print_deleted([LifecycleEnforcer(session).delete_author(author_id)])
    finally:
        session.close()
