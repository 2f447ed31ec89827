import click
from bs4 import BeautifulSoup

from core.activation import activate as activate_schema
from core.sa.database import Database
from ..utils import open_plugin, print_table

@click.command()
@click.pass_context
def activate(ctx):
    """Create the database tables"""
    if activate_schema(Database(ctx.obj.get('database_url'))):
        click.echo(click.style("Activation complete", fg='green'))
    else:
        click.echo(click.style("Activation failed, see the log for details", fg='red'), err=True)
        ctx.exit(1)

@click.command()
@click.pass_context
def dashboard(ctx):
    """Print the dashboard widgets"""
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        for widget in plugin.host.setup_dashboard().all():
            click.echo(click.style(widget.title, fg='blue'))
            soup = BeautifulSoup(widget.render(), "html.parser")
            items = soup.find_all("li")
            if items:
                for item in items:
                    click.echo(f"  - {item.get_text(strip=True)}")
            else:
                click.echo(f"  {soup.get_text(strip=True)}")

@click.command()
@click.pass_context
def hooks(ctx):
    """Show the plugin's event subscriptions"""
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        rows = [
            (sub.kind, sub.hook, sub.callback_name, sub.priority, sub.accepted_args)
            for sub in plugin.get_loader().subscriptions
        ]
        click.echo(click.style(f"{plugin.get_plugin_name()} {plugin.get_version()}", fg='cyan'))
    print_table(('Kind', 'Hook', 'Callback', 'Priority', 'Args'), rows)
