import click
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from core.host import Host
from core.plugin import BookPlugin, bootstrap
from core.sa.database import Database
from core.sa.repositories import SQLBookRepository, SQLSettingsStore
from core.security import Identity

CLI_USER_ID = 1

def cli_identity(user_id: int = CLI_USER_ID, role: str = "administrator") -> Identity:
    """The user command line operations act as"""
    return Identity.for_role(user_id, role)

@contextmanager
def open_plugin(database_url: Optional[str] = None, admin: bool = True) -> Iterator[BookPlugin]:
    """Bootstrap the plugin over one database session.

    The session is committed when the block finishes and rolled back if it raises.
    """
    db = Database(database_url)
    with db.get_db() as session:
        host = Host(books=SQLBookRepository(session), settings_store=SQLSettingsStore(session))
        yield bootstrap(host, admin=admin)

def print_table(headers: Sequence[str], rows: List[Sequence[object]]) -> None:
    """Print rows in aligned columns"""
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(str(cell))) for w, cell in zip(widths, row)]
    click.echo(click.style("  ".join(h.ljust(w) for h, w in zip(headers, widths)), fg='blue'))
    for row in rows:
        click.echo("  ".join(str(cell).ljust(w) for cell, w in zip(row, widths)))
