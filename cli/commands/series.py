import click
from core.integrity.enforcer import LifecycleEnforcer
from core.sa.database import Database
from ..utils import handle_library_errors, print_deleted

@click.group()
def series():
    """Series management commands"""
    pass

@series.command()
@click.argument('series_id')
@handle_library_errors
def delete(series_id: str):
    """Delete a series that no book belongs to"""
    db = Database()
    session = db.get_session()
    try:
        print_deleted([LifecycleEnforcer(session).delete_series(series_id)])
    finally:
        session.close()
