# cli/main.py
import click
from core.sa.database import Database
from .commands.book import book
from .commands.author import author
from .commands.publisher import publisher
from .commands.series import series
from .commands.library import library
from .utils import configure_logging

@click.group()
@click.option('--verbose/--no-verbose', default=False, help='Log engine activity at INFO level')
def cli(verbose: bool):
    """Home Library CLI"""
    configure_logging(verbose)

@cli.command('init-db')
@click.option('--seed/--no-seed', default=True, help='Insert the default category and genres')
def init_db(seed: bool):
    """Create the library tables

    Example:
        home-library init-db
        DATABASE_URL=sqlite:///other.db home-library init-db --no-seed
    """
    db = Database()
    db.init_db(seed=seed)
    click.echo(click.style("Database initialized: ", fg='green') +
               click.style(db.connection_string, fg='cyan'))

cli.add_command(book)
cli.add_command(author)
cli.add_command(publisher)
cli.add_command(series)
cli.add_command(library)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
