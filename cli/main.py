# cli/main.py
import click
from core.config import configure_logging
from .commands.book import book
from .commands.settings import settings
from .commands.site import activate, dashboard, hooks

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None, help='Database connection string')
@click.option('--log-level', default=None, help='Logging level (DEBUG, INFO, ...)')
@click.pass_context
def cli(ctx, database_url, log_level):
    """Book Manager CLI"""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj['database_url'] = database_url

cli.add_command(activate)
cli.add_command(book)
cli.add_command(settings)
cli.add_command(dashboard)
cli.add_command(hooks)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
