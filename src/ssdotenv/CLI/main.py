"""
Command Line Interface for ssdotenv.
"""
import click
import json
import logging
import os
import subprocess
import yaml
from ..MODELS.errors import SimpleEnvError
from ..MODELS.load_options import DEFAULT_ENV_FILE
from ..PARSERS.env_parser import EnvParser
from ..MANAGERS.environment_manager import EnvironmentManager

@click.group()
@click.option('--file', '-f', default=DEFAULT_ENV_FILE, envvar='SSDOTENV_FILE',
              show_default=True, help='.env file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, file, verbose):
    """
    ssdotenv - read KEY=VALUE pairs from a .env file.

    Lists, checks and looks up entries, or runs a command with them set.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    ctx.ensure_object(dict)
    ctx.obj['file'] = file
    if os.path.exists(file):
        try:
            ctx.obj['result'] = EnvParser().parse_file(file)
        except (OSError, UnicodeDecodeError) as e:
            raise click.ClickException(f"Cannot read {file}: {e}")

def _require_result(ctx):
    result = ctx.obj.get('result')
    if result is None:
        click.echo(f"Error: {ctx.obj['file']} not found.", err=True)
        ctx.exit(1)
    return result

@cli.command(name='list')
@click.option('--format', '-o', 'fmt', type=click.Choice(['text', 'json', 'yaml']),
              default='text', help='Output format')
@click.pass_context
def list_entries(ctx, fmt):
    """List entries in file order."""
    result = _require_result(ctx)
    if fmt == 'json':
        click.echo(json.dumps([entry.model_dump() for entry in result.entries], indent=2))
    elif fmt == 'yaml':
        click.echo(yaml.safe_dump(
            [entry.model_dump() for entry in result.entries],
            sort_keys=False, allow_unicode=True
        ), nl=False)
    else:
        for entry in result.entries:
            click.echo(f"{entry.key}={entry.value}")

@cli.command()
@click.argument('key')
@click.option('--default', '-d', 'default', default=None, help='Value if KEY is not set')
@click.pass_context
def get(ctx, key, default):
    """Print the value of KEY.

    The .env file is consulted first, then the process environment.
    """
    manager = EnvironmentManager(dict(os.environ))
    result = ctx.obj.get('result')
    if result is not None:
        manager.override(result.entries)
    if default is None and key not in manager.environ:
        click.echo(f"Error: {key} is not set.", err=True)
        ctx.exit(1)
    click.echo(manager.get_or(key, default))

@cli.command()
@click.pass_context
def check(ctx):
    """Report lines that are not KEY=VALUE pairs."""
    result = _require_result(ctx)
    if not result.skipped:
        click.echo(f"{ctx.obj['file']}: {len(result.entries)} entries, no errors.")
        return
    error = SimpleEnvError.from_skipped_lines(result.skipped, result.entries)
    click.echo(error.message, err=True)
    ctx.exit(1)

@cli.command(context_settings={'ignore_unknown_options': True, 'allow_interspersed_args': False})
@click.option('--no-override', is_flag=True, help='Keep variables that are already set')
@click.argument('command', nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx, no_override, command):
    """Run COMMAND with the .env entries in its environment."""
    result = _require_result(ctx)
    manager = EnvironmentManager(dict(os.environ))
    manager.apply(result.entries, override=not no_override)
    try:
        completed = subprocess.run(list(command), env=dict(manager.environ))
    except OSError as e:
        raise click.ClickException(f"Cannot run {command[0]}: {e}")
    ctx.exit(completed.returncode)

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()
