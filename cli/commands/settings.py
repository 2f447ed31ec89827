import click

from core.admin import SETTINGS_GROUP
from ..utils import open_plugin, print_table

@click.group()
def settings():
    """Plugin settings"""
    pass

@settings.command(name="list")
@click.pass_context
def list_settings(ctx):
    """Show every setting with its current value"""
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        registry = plugin.host.settings
        rows = [(s.name, s.type, registry.get(s.name), s.default) for s in registry.group(SETTINGS_GROUP)]
    print_table(('Name', 'Type', 'Value', 'Default'), rows)

@settings.command()
@click.argument('name')
@click.pass_context
def get(ctx, name: str):
    """Print a setting's value"""
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        if name not in plugin.host.settings.settings:
            click.echo(click.style(f"Unknown setting: {name}", fg='red'), err=True)
            ctx.exit(1)
        click.echo(plugin.host.settings.get(name))

@settings.command(name="set")
@click.argument('name')
@click.argument('value')
@click.pass_context
def set_setting(ctx, name: str, value: str):
    """Sanitize and store a setting"""
    with open_plugin(ctx.obj.get('database_url')) as plugin:
        try:
            stored = plugin.host.settings.update(name, value)
        except KeyError:
            click.echo(click.style(f"Unknown setting: {name}", fg='red'), err=True)
            ctx.exit(1)
    click.echo(click.style(f"{name} = ", fg='blue') + click.style(str(stored), fg='cyan'))
