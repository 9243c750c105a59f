import click
import functools
import logging
import os
from typing import Iterable, List
from core.exceptions import BlockedByInvariant, NotFoundError, ValidationError, StorageError
from core.models.integrity import DeletedEntity, InvariantViolation

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(verbose: bool = False) -> None:
    """Set up logging for a CLI run; --verbose wins over LOG_LEVEL"""
    level = logging.INFO if verbose else os.getenv('LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def print_violations(violations: Iterable[InvariantViolation]) -> None:
    """Print one red line per entity that blocks an operation"""
    for violation in violations:
        click.echo(click.style(f"  - [{violation.rule.value}] {violation.message}", fg='red'), err=True)


def print_deleted(deleted: List[DeletedEntity]) -> None:
    click.echo(click.style("Successfully deleted:", fg='green'))
    for entity in deleted:
        click.echo(click.style(f"  - {entity}", fg='cyan'))


def handle_library_errors(f):
    """Report engine errors in red and exit with status 1"""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except BlockedByInvariant as e:
            click.echo(click.style(e.message, fg='red'), err=True)
            print_violations(e.violations)
        except ValidationError as e:
            click.echo(click.style(e.message, fg='red'), err=True)
            for error in e.errors:
                click.echo(click.style(f"  - {error}", fg='red'), err=True)
        except (NotFoundError, StorageError) as e:
            click.echo(click.style(str(e), fg='red'), err=True)
        click.get_current_context().exit(1)
    return wrapper
