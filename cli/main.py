#!/usr/bin/env python3
"""
ERP Fixtures - Command Line Interface

Generates batches of Enhanced Retirement Process redeem scripts for parser
regression suites and disassembles individual scripts for inspection.
"""

import sys
import logging
import functools
import traceback
from typing import Optional, Dict, Any

import click

from cli import __version__
from cli.config import ConfigurationManager, ConfigurationError
from cli.output import OutputFormatter
from corpus.generator import CorpusGenerator, GenerationMode
from corpus.writer import write_batch
from scripts.encoding import parse_script, script_from_hex
from scripts.erp import EmergencyThresholdPolicy
from scripts.exceptions import ScriptParseError

LOG_HANDLER_NAME = 'erp-fixtures'


class CLIContext:
    """Global CLI context for sharing state across commands."""

    def __init__(self):
        self.config_file: Optional[str] = None
        self.verbose: int = 0
        self.config: Optional[ConfigurationManager] = None
        self.logger: logging.Logger = logging.getLogger('erp-fixtures')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }

        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(LOG_HANDLER_NAME)
        handler.setFormatter(formatter)

        # Library modules log under their own names, so configure the root
        root = logging.getLogger()
        for existing in list(root.handlers):
            if existing.get_name() == LOG_HANDLER_NAME:
                root.removeHandler(existing)
        root.addHandler(handler)
        root.setLevel(level)

    def load_config(self):
        """Load and validate configuration."""
        self.config = ConfigurationManager(self.config_file)
        try:
            errors = self.config.validate()
        except ConfigurationError as e:
            raise click.ClickException(str(e))

        if errors:
            raise click.ClickException("Invalid configuration: " + "; ".join(errors))

        self.logger.debug(f"Configuration sources: {', '.join(self.config.get_sources())}")

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value with fallback to default."""
        return self.config.get(key, default)


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_cli_error(func):
    """Decorator to handle CLI errors gracefully."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            click.echo("\nOperation cancelled by user.", err=True)
            sys.exit(130)
        except Exception as e:
            ctx = click.get_current_context(silent=True)
            cli_ctx = ctx.find_object(CLIContext) if ctx else None

            click.echo(f"Error: {e}", err=True)
            if cli_ctx and cli_ctx.verbose >= 2:
                click.echo(traceback.format_exc(), err=True)
            else:
                click.echo("Use -vv for detailed error information.", err=True)

            sys.exit(1)

    return wrapper


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--config-file', '-c',
              type=click.Path(dir_okay=False),
              help='Path to configuration file')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.version_option(__version__, '--version', prog_name='erp-fixtures')
@pass_context
def cli(ctx: CLIContext, config_file: Optional[str], verbose: int):
    """
    ERP redeem script fixture generator.

    Compiles RSKIP201 Enhanced Retirement Process redeem scripts and writes
    batches of them for testing script parsers.

    Examples:
        erp-fixtures generate -n 500 -o scripts.json
        erp-fixtures generate --invalid --seed 7
        erp-fixtures inspect 6452...ae --format json
    """
    ctx.config_file = config_file
    ctx.verbose = verbose

    ctx.setup_logging()
    ctx.load_config()

    ctx.logger.debug("CLI initialized with context")


@cli.command()
@click.option('--count', '-n', type=click.IntRange(min=0), default=None,
              help='Number of random redeem scripts [default: 1000]')
@click.option('--output', '-o', 'output_file', type=click.Path(dir_okay=False), default=None,
              help='Output file path [default: scripts.json]')
@click.option('--mode', type=click.Choice(['valid', 'invalid']), default=None,
              help='Kind of fixtures to generate [default: valid]')
@click.option('--invalid', is_flag=True,
              help='Shortcut for --mode invalid')
@click.option('--seed', type=int, default=None,
              help='Seed for reproducible batches')
@click.option('--emergency-policy', type=click.Choice(['computed', 'fixed']), default=None,
              help='Emergency federation threshold interpretation [default: computed]')
@click.option('--indent', type=click.IntRange(min=0), default=None,
              help='Indent the JSON output')
@pass_context
@handle_cli_error
def generate(ctx: CLIContext, count: Optional[int], output_file: Optional[str],
             mode: Optional[str], invalid: bool, seed: Optional[int],
             emergency_policy: Optional[str], indent: Optional[int]):
    """
    Generate a batch of redeem script fixtures.
    """
    if count is None:
        count = ctx.get_config('generator.count')
        ctx.logger.info(f"No number of iterations given. Default: {count}.")

    if output_file is None:
        output_file = ctx.get_config('generator.output')
        ctx.logger.info(f"No output file given. Default: {output_file}")

    if invalid:
        if mode == 'valid':
            raise click.UsageError("--invalid conflicts with --mode valid")
        mode = 'invalid'
    elif mode is None:
        mode = ctx.get_config('generator.mode')

    if seed is None:
        seed = ctx.get_config('generator.seed')
    if emergency_policy is None:
        emergency_policy = ctx.get_config('policy.emergency')
    if indent is None:
        indent = ctx.get_config('json.indent')

    generation_mode = GenerationMode(mode)
    ctx.logger.info(f"Create invalid: {generation_mode is GenerationMode.INVALID}")

    generator = CorpusGenerator(
        seed=seed,
        policy=EmergencyThresholdPolicy(emergency_policy),
        progress_interval=ctx.get_config('progress.interval')
    )
    scripts = generator.generate(generation_mode, count)

    path = write_batch(scripts, output_file, indent=indent)
    click.echo(f"Done! Wrote to: {path}")


@cli.command()
@click.argument('script_hex')
@click.option('--format', '-f', 'format_type',
              type=click.Choice(['asm', 'table', 'json', 'yaml']), default='asm',
              help='Output format')
@pass_context
@handle_cli_error
def inspect(ctx: CLIContext, script_hex: str, format_type: str):
    """
    Disassemble a redeem script given as hex.
    """
    try:
        script = script_from_hex(script_hex)
    except ScriptParseError as e:
        raise click.BadParameter(str(e), param_hint='SCRIPT_HEX')

    parsed = parse_script(script)

    if format_type == 'asm':
        click.echo(parsed.to_asm())
    else:
        data: Dict[str, Any] = parsed.to_dict()
        if format_type == 'table':
            data = data['elements']
        click.echo(OutputFormatter(format_type).format(data))

    for error in parsed.parse_errors:
        click.echo(f"Parse error: {error}", err=True)
    if parsed.has_errors():
        sys.exit(1)


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
