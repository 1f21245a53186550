"""
ChainNode CLI
Creates a node repo on disk and bootstraps it with genesis state and keys.
"""

import json
import os

import click

from chainnode_core import __version__
from chainnode_core.context import Context
from chainnode_core.crypto import KeyInfo, PeerKeypair
from chainnode_core.errors import BootstrapError, InvalidKeyError, RepoError
from chainnode_core.genesis import make_genesis_func
from chainnode_core.node import default_key_opt, import_key_opt, init, peer_key_opt
from chainnode_core.repo import init_fs_repo, open_fs_repo


def _load_key_infos(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    return [KeyInfo.from_dict(d) for d in data]


def _load_genesis(path):
    if not path:
        return make_genesis_func()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return make_genesis_func(
        allocations={k: int(v) for k, v in data.get("allocations", {}).items()},
        timestamp=int(data.get("timestamp", 0)),
    )


@click.group()
@click.version_option(version=__version__)
def cli():
    """ChainNode CLI - initialize node repositories."""
    pass


@cli.command("init")
@click.option(
    "--repodir",
    default=lambda: os.getenv("CHAINNODE_PATH", os.path.expanduser("~/.chainnode")),
    show_default="$CHAINNODE_PATH or ~/.chainnode",
    help="Directory to create the repo in (must be empty or absent)",
)
@click.option("--genesis-file", type=click.Path(exists=True, dir_okay=False), help="Genesis allocations JSON")
@click.option("--peer-key-file", type=click.Path(exists=True, dir_okay=False), help="DER-encoded RSA peer key")
@click.option("--wallet-file", type=click.Path(exists=True, dir_okay=False), help="Default wallet key info JSON")
@click.option(
    "--import-key-file",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Key info JSON (object or list) to import; repeatable",
)
@click.option("--timeout", type=float, default=None, help="Abort genesis installation after N seconds")
def init_cmd(repodir, genesis_file, peer_key_file, wallet_file, import_key_file, timeout):
    """Initialize a new node repo."""
    opts = []
    try:
        if peer_key_file:
            with open(peer_key_file, "rb") as f:
                opts.append(peer_key_opt(PeerKeypair.from_bytes(f.read())))
        if wallet_file:
            keys = _load_key_infos(wallet_file)
            if len(keys) != 1:
                raise click.UsageError("--wallet-file must hold exactly one key")
            opts.append(default_key_opt(keys[0]))
        for path in import_key_file:
            opts.extend(import_key_opt(ki) for ki in _load_key_infos(path))
        gen = _load_genesis(genesis_file)
    except (InvalidKeyError, ValueError, OSError) as e:
        raise click.BadParameter(str(e))

    click.echo(f"initializing repo at {repodir}")
    ctx = Context.background()
    if timeout is not None:
        ctx = ctx.with_timeout(timeout)

    try:
        init_fs_repo(repodir)
        repo = open_fs_repo(repodir)
    except RepoError as e:
        raise click.ClickException(str(e))

    try:
        init(ctx, repo, gen, *opts)
        click.echo(f"default wallet address: {repo.config().wallet.default_address}")
    except BootstrapError as e:
        raise click.ClickException(f"{e.stage}: {e}")
    finally:
        repo.close()


def main():
    """Main entry point for the chainnode CLI."""
    cli()


if __name__ == "__main__":
    main()
