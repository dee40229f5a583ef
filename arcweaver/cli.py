#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ArcWeaver.

This module provides the main CLI entry point and all subcommands for
converting BCALM2 node-centric graphs into arc-centric edge lists.
"""

import logging
import sys
import click
from pathlib import Path
import yaml

from .version import __version__
from .errors import ArcWeaverError
from .config.schema import (
    ConfigValidationError,
    VALID_LOG_LEVELS,
    VALID_WEIGHT_MODES,
    apply_overrides,
    load_config,
    save_config_template,
    validate_config,
)


def setup_logging(level: str, log_file=None):
    """Configure root logging for a CLI run (stderr plus optional file)."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ArcWeaver: node-centric to arc-centric de Bruijn graph converter

    Reads unitigs written by BCALM2 and writes the doubled arc-centric graph
    as a plain edge list.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Conversion
# ============================================================================

@main.command()
@click.option('--input', '-i', 'input_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='BCALM2 unitig file (FASTA, optionally gzipped)')
@click.option('--output', '-o', 'output_path', default='-', type=click.Path(dir_okay=False, allow_dash=True),
              help='Output edge list (default: stdout)')
@click.option('-k', '--kmer-size', type=int, default=None,
              help='K-mer size BCALM2 was run with')
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file (YAML)')
@click.option('--weight', type=click.Choice(VALID_WEIGHT_MODES), default=None,
              help='Arc weight source: km:f: abundance or KC:i: average k-mer count')
@click.option('--check-overlaps/--no-check-overlaps', default=None,
              help='Verify each (k-1)-overlap against the target unitig')
@click.option('--id-bits', type=int, default=None,
              help='Width of doubled node ids (default: 64)')
@click.option('--log-level', type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False), default=None,
              help='Logging level')
@click.pass_context
def convert(ctx, input_path, output_path, kmer_size, config_file, weight,
            check_overlaps, id_bits, log_level):
    """
    Convert a node-centric de Bruijn graph into an arc-centric edge list.

    Every unitig becomes a forward/reverse-complement node pair; every
    adjacency becomes an arc plus its mirror arc.

    Examples:
        arcweaver convert -i unitigs.fa -k 31 -o graph.edgelist

        arcweaver convert -i unitigs.fa.gz -c arcweaver.yaml -o graph.edgelist.gz
    """
    verbose = ctx.obj.get('VERBOSE', False)
    quiet = ctx.obj.get('QUIET', False)

    try:
        config = load_config(Path(config_file) if config_file else None)
        config = apply_overrides(config, {
            'conversion.kmer_size': kmer_size,
            'conversion.weight': weight,
            'conversion.check_overlaps': check_overlaps,
            'conversion.id_bits': id_bits,
            'output.logging.level': log_level,
        })

        errors = validate_config(config, require_kmer_size=True)
        if errors:
            raise ConfigValidationError("; ".join(errors))
    except (ConfigValidationError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    level = config['output']['logging']['level']
    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'
    setup_logging(level, config['output']['logging']['log_file'])

    from .pipeline import convert_file

    try:
        result = convert_file(input_path, output_path, config)
    except (ArcWeaverError, OSError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        ctx.exit(1)

    logging.getLogger(__name__).info(
        f"Success! {result.unitigs} unitigs -> {result.doubled_nodes} nodes, "
        f"{result.arcs} arcs ({result.elapsed_seconds:.2f}s)"
    )


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='arcweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(['default', 'strict']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except OSError as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")
    click.echo("Set conversion.kmer_size to the k used for BCALM2 before converting.")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo(f"  K-mer size: {config['conversion']['kmer_size'] or 'not set (pass -k)'}")
    click.echo(f"  Weight: {config['conversion']['weight']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ConfigValidationError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    conversion = config['conversion']
    output = config['output']
    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    click.echo("\nConversion:")
    click.echo(f"  K-mer size: {conversion['kmer_size']}")
    click.echo(f"  Weight: {conversion['weight']}")
    click.echo(f"  Check overlaps: {conversion['check_overlaps']}")
    click.echo(f"  Id bits: {conversion['id_bits']}")
    click.echo("\nOutput:")
    click.echo(f"  Compression: {output['compression']}")
    click.echo(f"  Log level: {output['logging']['level']}")
    click.echo(f"  Log file: {output['logging']['log_file'] or '-'}")


if __name__ == '__main__':
    sys.exit(main())
