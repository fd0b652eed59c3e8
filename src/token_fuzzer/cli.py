"""
Token fuzz fixture inspector.

Prints the signers and ledger entries a fuzz input would produce, so a
failing fuzz case can be reproduced and examined outside the fuzzer.
"""

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from .addrgen import AddressGenerator, max_seed
from .config import MAX_ADDRESS_SLOTS, FixtureConfig
from .env import Env, LedgerStore
from .errors import FixtureError
from .fixtures_io import entries_to_json, generator_to_json, signer_to_json
from .input import address_generator_from_bytes
from .state_digest import compute_signers_digest, compute_state_digest
from .types import AddressType

logger = logging.getLogger(__name__)


def _render(data: Dict[str, Any], fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, width=4096)
    return json.dumps(data, indent=2) + "\n"


def _parse_types(value: str) -> tuple:
    try:
        return tuple(AddressType(t.strip().lower()) for t in value.split(",") if t.strip())
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _generator(seed: int, types_: str) -> AddressGenerator:
    types = _parse_types(types_)
    if not 0 <= seed <= max_seed(len(types)):
        raise click.BadParameter(
            f"seed must be in [0, {max_seed(len(types))}] for {len(types)} slots"
        )
    return AddressGenerator(seed, types)


@contextmanager
def _fixture_errors():
    try:
        yield
    except FixtureError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(ctx: click.Context, name: str, data: Dict[str, Any], fmt: str) -> None:
    config: FixtureConfig = ctx.obj
    if config.output_dir:
        out = Path(config.output_dir)
        out.mkdir(parents=True, exist_ok=True)
        target = out / f"{name}.{fmt}"
        target.write_text(_render(data, fmt))
        logger.info(f"Wrote {target}")
        return
    click.echo(_render(data, fmt), nl=False)


def _checked(ctx: click.Context, generator: AddressGenerator) -> AddressGenerator:
    config: FixtureConfig = ctx.obj
    slots = generator.degenerate_slots()
    if slots:
        logger.warning(f"Contract slots {slots} land on a degenerate sub-seed")
        if config.reject_degenerate:
            generator.check_degenerate()
    return generator


def _signers_payload(generator: AddressGenerator, env: Env) -> Dict[str, Any]:
    signers = generator.derive_signers(env)
    return {
        "generator": generator_to_json(generator),
        "signers": [signer_to_json(s) for s in signers],
        "signers_digest": compute_signers_digest(signers),
    }


format_option = click.option(
    "--format", "fmt", type=click.Choice(["json", "yaml"]), default="json", show_default=True
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--reject-degenerate", is_flag=True, help="Fail on degenerate contract sub-seeds")
@click.option("--output", type=click.Path(file_okay=False), default=None, help="Write files here")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, reject_degenerate: bool, output: Optional[str]) -> None:
    """Inspect deterministic token fuzz fixtures."""
    config = FixtureConfig.from_env()
    config.verbose = config.verbose or verbose
    config.reject_degenerate = config.reject_degenerate or reject_degenerate
    config.output_dir = output or config.output_dir
    ctx.obj = config

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@cli.command()
@click.option("--seed", type=int, required=True)
@click.option("--types", "types_", required=True, help="Comma separated: account,contract")
@format_option
@click.pass_context
def signers(ctx: click.Context, seed: int, types_: str, fmt: str) -> None:
    """Derive signers for a seed and address types."""
    with _fixture_errors():
        generator = _checked(ctx, _generator(seed, types_))
        _emit(ctx, "signers", _signers_payload(generator, Env()), fmt)


@cli.command()
@click.option("--seed", type=int, required=True)
@click.option("--types", "types_", required=True, help="Comma separated: account,contract")
@click.option("--digest-only", is_flag=True, help="Only print the state digest")
@format_option
@click.pass_context
def setup(ctx: click.Context, seed: int, types_: str, digest_only: bool, fmt: str) -> None:
    """Derive signers and install their ledger entries into a fresh store."""
    store = LedgerStore()
    env = Env(store)
    with _fixture_errors():
        generator = _checked(ctx, _generator(seed, types_))
        generator.setup_account_storage(env)
    digest = compute_state_digest(store.items())
    if digest_only:
        click.echo(digest)
        return

    payload = _signers_payload(generator, env)
    payload["entries"] = entries_to_json(store.items())
    payload["state_digest"] = digest
    _emit(ctx, "setup", payload, fmt)


@cli.command()
@click.argument("data_hex")
@click.option("--count", type=int, default=None, help="Number of address slots")
@format_option
@click.pass_context
def decode(ctx: click.Context, data_hex: str, count: Optional[int], fmt: str) -> None:
    """Decode raw fuzzer input bytes into an address generator."""
    try:
        data = bytes.fromhex(data_hex)
    except ValueError as exc:
        raise click.BadParameter(f"not hex: {exc}") from exc
    if count is not None and not 1 <= count <= MAX_ADDRESS_SLOTS:
        raise click.BadParameter(f"count must be in [1, {MAX_ADDRESS_SLOTS}]")
    with _fixture_errors():
        if count is None:
            generator = address_generator_from_bytes(data)
        else:
            generator = address_generator_from_bytes(data, count)
        generator = _checked(ctx, generator)
        _emit(ctx, "decoded", _signers_payload(generator, Env()), fmt)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
