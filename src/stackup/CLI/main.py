"""
Command Line Interface for stackup.
"""
import json
import click
from ..MANAGERS.compose_orchestrator import ComposeOrchestrator
from ..MODELS.settings import load_settings
from ..UTILS.logging_setup import configure_logging
from ..exceptions import StackupError

@click.group()
@click.option('--file', '-f', default='docker-compose.yml', help='Compose file path, relative to the working directory')
@click.option('--work-dir', '-w', default=None, help='Working directory (default: current directory)')
@click.option('--timeout', type=float, default=None, help='Seconds to wait for each docker command')
@click.option('--log-level', default=None, help='DEBUG, INFO, WARNING or ERROR')
@click.pass_context
def cli(ctx, file, work_dir, timeout, log_level):
    """
    stackup - rebuild and start a docker compose stack.

    Clears stale containers, runs compose up, and reports the host ports
    the services were published on.
    """
    settings = load_settings()
    if timeout is not None:
        settings.command_timeout = timeout
    if log_level:
        settings.log_level = log_level.upper()

    ctx.ensure_object(dict)
    ctx.obj['orchestrator'] = ComposeOrchestrator(
        file,
        work_dir=work_dir,
        settings=settings,
        logger=configure_logging(settings.log_level)
    )

@cli.command()
@click.pass_context
def up(ctx):
    """Clean up, rebuild and start services, then print their ports."""
    try:
        result = ctx.obj['orchestrator'].run()
    except StackupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(json.dumps(result.to_output(), indent=2))

@cli.command()
@click.pass_context
def ports(ctx):
    """Print the published ports of a running stack."""
    try:
        result = ctx.obj['orchestrator'].ports()
    except StackupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(json.dumps(result.to_output(), indent=2))

@cli.command()
@click.pass_context
def services(ctx):
    """List the services declared in the compose file."""
    try:
        names = ctx.obj['orchestrator'].services()
    except StackupError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    for name in names:
        click.echo(name)

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()
