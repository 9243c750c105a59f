import click
from core.integrity.enforcer import LifecycleEnforcer
from core.sa.database import Database
from ..utils import handle_library_errors, print_deleted

@click.group()
def publisher():
    """Publisher management commands"""
    pass

@publisher.command()
@click.argument('publisher_id')
@handle_library_errors
def delete(publisher_id: str):
    """Delete a publisher that no book refers to"""
    db = Database()
    session = db.get_session()
    try:
        print_deleted([LifecycleEnforcer(session).delete_publisher(publisher_id)])
    finally:
        session.close()
