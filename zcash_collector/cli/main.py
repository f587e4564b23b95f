"""Command-line interface for zcash block payloads."""

import sys
from typing import Optional
import click

from zcash_collector.core.block_processor import BlockProcessor
from zcash_collector.models.config import CollectorConfig
from zcash_collector.models.errors import ChainDataError
from zcash_collector.utils.logging import setup_logging
from zcash_collector.utils.time import format_block_time


def _fail(message: str) -> None:
    click.echo(f"❌ {message}", err=True)
    sys.exit(1)


@click.group()
@click.option('--config-file', '-c', type=click.Path(exists=True),
              help='Path to configuration file')
@click.option('--log-level', '-l', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Logging level')
@click.pass_context
def cli(ctx, config_file: Optional[str], log_level: str):
    """Zcash block payload tools.

    Payloads are JSON files saved from zcashd's `getblock <hash> 2` and
    `getblockchaininfo` RPC calls.
    """
    ctx.ensure_object(dict)

    try:
        if config_file:
            config = CollectorConfig(_env_file=config_file)
        else:
            config = CollectorConfig()

        config.log_level = log_level
        setup_logging(config)

        ctx.obj['config'] = config
        ctx.obj['processor'] = BlockProcessor(config)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('block_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def classify(ctx, block_file: str):
    """Classify every transaction of a block by shielding type."""
    processor: BlockProcessor = ctx.obj['processor']

    try:
        block = processor.load_block(block_file)
    except (ChainDataError, OSError) as e:
        _fail(f"Failed to load block: {e}")

    try:
        block_time = format_block_time(block.time)
    except (OverflowError, ValueError, OSError) as e:
        _fail(f"Invalid block time {block.time}: {e}")

    click.echo(f"Block {block.height} ({block.hash})")
    click.echo(f"Time: {block_time.isoformat()}")
    click.echo("=" * 40)
    for tx in block.tx:
        click.echo(f"{tx.txid} {tx.shielding_type().value}")

    with_shielded, without_shielded = block.transaction_types()
    click.echo("=" * 40)
    click.echo(f"Transactions: {block.number_of_transactions()}")
    click.echo(f"With shielded data: {with_shielded}")
    click.echo(f"Without shielded data: {without_shielded}")


@cli.command()
@click.argument('block_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None,
              help='Write the metric to this file instead of stdout')
@click.pass_context
def metrics(ctx, block_file: str, output: Optional[str]):
    """Compute the summary metric of a block."""
    processor: BlockProcessor = ctx.obj['processor']
    config: CollectorConfig = ctx.obj['config']

    try:
        block = processor.load_block(block_file)
        metric = processor.process_block(block)

        if output:
            processor.export_metric(metric, output)
            click.echo(f"✅ Metric for block {metric.height} written to {output}")
        else:
            click.echo(metric.to_json(config.json_indent))

    except (ChainDataError, OSError) as e:
        _fail(f"Metric computation failed: {e}")


@cli.command()
@click.argument('block_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def pools(ctx, block_file: str):
    """Show the shielded value pools recorded in a block."""
    processor: BlockProcessor = ctx.obj['processor']

    try:
        block = processor.load_block(block_file)
    except (ChainDataError, OSError) as e:
        _fail(f"Failed to load block: {e}")

    click.echo(f"Sapling: {block.sapling_value_pool()}")
    click.echo(f"Sprout: {block.sprout_value_pool()}")


@cli.command()
@click.argument('info_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def info(ctx, info_file: str):
    """Summarize a getblockchaininfo payload."""
    processor: BlockProcessor = ctx.obj['processor']

    try:
        chain_info = processor.load_blockchain_info(info_file)
    except (ChainDataError, OSError) as e:
        _fail(f"Failed to load blockchain info: {e}")

    click.echo("📊 Zcash Chain Status")
    click.echo("=" * 40)
    click.echo(f"Chain: {chain_info.chain}")
    click.echo(f"Blocks: {chain_info.blocks:,}")
    click.echo(f"Headers: {chain_info.headers:,}")
    click.echo(f"Best Block: {chain_info.best_block_hash}")
    click.echo(f"Difficulty: {chain_info.difficulty}")
    click.echo(f"Verification Progress: {chain_info.verification_progress * 100:.2f}%")
    click.echo(f"Size on Disk: {chain_info.size_on_disk:,.0f} bytes")

    if chain_info.soft_forks:
        click.echo("\nSoft Forks")
        click.echo("=" * 40)
        for fork in chain_info.soft_forks:
            click.echo(f"{fork.id} v{fork.version}")


@cli.command()
@click.argument('block_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('output', type=click.Path(dir_okay=False), required=False)
@click.pass_context
def export(ctx, block_file: str, output: Optional[str]):
    """Decode a block and write it back in normalized form.

    OUTPUT defaults to block_<height>.json in the configured output directory.
    """
    processor: BlockProcessor = ctx.obj['processor']

    try:
        block = processor.load_block(block_file)
        target = processor.export_block(block, output)
    except (ChainDataError, OSError) as e:
        _fail(f"Block export failed: {e}")

    click.echo(f"✅ Block {block.height} exported to {target}")


@cli.command()
def version():
    """Show version information."""
    from zcash_collector import __version__, __description__

    click.echo(f"Zcash Chain Data Model v{__version__}")
    click.echo(__description__)


if __name__ == '__main__':
    cli()
