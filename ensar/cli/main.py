"""
ENSAR CLI - offline helpers for the auction registrar.

None of these commands talk to a ledger: they compute identifiers, sealed
bids and auction modes locally, with the same code the Registrar uses.
"""

import json
import logging
import time
from dataclasses import asdict

import click

from ensar import __version__
from ensar.core.config import load_config
from ensar.core.registrar import (
    Bid,
    NameTooShort,
    RegistrarError,
    Status,
    compute_mode,
    normalise,
    seal_bid,
)
from ensar.crypto import namehash, sha3
from ensar.utils.logger import get_logger, setup_logging

logger = get_logger("cli")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", default=None, help="dotenv file with ENSAR_* settings")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, debug, config_path):
    """Sealed-bid name auction registrar tools"""
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    level = logging.DEBUG if debug else getattr(logging, config.log_level.upper(), logging.INFO)
    setup_logging(level=level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# =============================================================================
# Hashing Commands
# =============================================================================


@cli.command("hash")
@click.argument("name")
def hash_name(name):
    """Print the registrar identifier of NAME"""
    try:
        click.echo(sha3(normalise(name)))
    except RegistrarError as e:
        raise click.ClickException(str(e))


@cli.command("namehash")
@click.argument("name")
def namehash_cmd(name):
    """Print the registry node of a dotted NAME (e.g. foobarbaz.eth)"""
    click.echo(namehash(name))


@cli.command("seal")
@click.argument("name")
@click.argument("owner")
@click.argument("value", type=int)
@click.argument("secret")
@click.pass_context
def seal(ctx, name, owner, value, secret):
    """
    Build a sealed bid locally and print it as JSON.

    Store the output: the secret and value are needed to reveal the bid.
    """
    config = ctx.obj["config"]
    try:
        normalised = normalise(name)
        if len(normalised) < config.min_length:
            raise NameTooShort(normalised, config.min_length)
        hash_ = sha3(normalised)
        hex_secret = sha3(secret)
        bid = Bid(
            name=normalised,
            hash=hash_,
            value=value,
            owner=owner,
            secret=secret,
            hex_secret=hex_secret,
            sha_bid=seal_bid(hash_, owner, value, hex_secret),
        )
    except (RegistrarError, ValueError) as e:
        raise click.ClickException(str(e))

    logger.debug(f"Sealed bid {bid.sha_bid} for {normalised!r}")
    click.echo(json.dumps(bid.to_dict(), indent=2))


# =============================================================================
# State Commands
# =============================================================================


@cli.command("mode")
@click.argument("name")
@click.option(
    "--status",
    type=click.Choice([s.name.lower() for s in Status]),
    required=True,
    help="Registrar status of the entry",
)
@click.option("--registration-date", type=int, default=0, help="Auction deadline (unix seconds)")
@click.option("--now", type=int, default=None, help="Evaluate at this unix time instead of now")
@click.pass_context
def mode(ctx, name, status, registration_date, now):
    """Print the auction mode of NAME for a given entry state"""
    config = ctx.obj["config"]
    try:
        name = normalise(name)
    except RegistrarError as e:
        raise click.ClickException(str(e))

    result = compute_mode(
        name,
        Status[status.upper()],
        registration_date,
        time.time() if now is None else now,
        min_length=config.min_length,
        window=config.reveal_window,
    )
    click.echo(result.value)


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Print the effective configuration"""
    click.echo(json.dumps(asdict(ctx.obj["config"]), indent=2))


if __name__ == "__main__":
    cli()
