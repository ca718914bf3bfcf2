# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""EdgeToken CLI — Generate, verify and inspect tokens from the shell.

The secret comes from ``--secret``, the ``EDGETOKEN_TOKEN_SECRET``
environment variable, or ``edgetoken.token.secret`` in the config file.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import click
from rich.markup import escape

from edgetoken.cli.console import console
from edgetoken.core.config import Config
from edgetoken.kernel.exceptions import EdgeTokenException
from edgetoken.logging.structlog_adapter import StructlogAdapter
from edgetoken.security.edge_token import EdgeToken


@dataclass
class _CliState:
    config: Config
    secret: str | None
    algorithm: str | None

    def edge_token(self) -> EdgeToken:
        try:
            return EdgeToken.from_config(self.config, secret=self.secret, algorithm=self.algorithm)
        except EdgeTokenException as exc:
            console.print(f"[error]{escape(str(exc))}[/error]")
            raise SystemExit(2) from None


def _parse_data(raw: str | None) -> Any:
    """Interpret ``--data`` as JSON when possible, otherwise as plain text."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _mode_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option("--timed", is_flag=True, help="Token carries its issue time.")(func)
    func = click.option("--embed", is_flag=True, help="Token carries the data as its first segment.")(func)
    return click.option("--data", "raw_data", default=None, help="Data bound to the token (JSON or text).")(func)


@click.group()
@click.version_option(package_name="edgetoken")
@click.option(
    "--config",
    "config_path",
    default="edgetoken.yaml",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="YAML or TOML configuration file (skipped if missing).",
)
@click.option("--profile", "profiles", multiple=True, help="Configuration profile overlay to apply.")
@click.option("--secret", default=None, help="HMAC secret (overrides configuration).")
@click.option("--algorithm", default=None, help="HMAC hash algorithm, e.g. SHA-256.")
@click.option("-v", "--verbose", is_flag=True, help="Log verification decisions.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str,
    profiles: tuple[str, ...],
    secret: str | None,
    algorithm: str | None,
    verbose: bool,
) -> None:
    """EdgeToken — signed anti-forgery tokens."""
    config = Config.from_file(config_path, active_profiles=list(profiles))
    adapter = StructlogAdapter()
    adapter.configure(config)
    if verbose:
        adapter.set_level("edgetoken", "DEBUG")
    ctx.obj = _CliState(config=config, secret=secret, algorithm=algorithm)


@cli.command("generate")
@_mode_options
@click.pass_obj
def generate_command(state: _CliState, raw_data: str | None, embed: bool, timed: bool) -> None:
    """Print a new token."""
    tokens = state.edge_token()
    data = _parse_data(raw_data)
    if embed and timed:
        token = tokens.generate_with_data_timed(data)
    elif embed:
        token = tokens.generate_with_data(data)
    elif timed:
        token = tokens.generate_timed(data)
    else:
        token = tokens.generate(data)
    click.echo(token)


@cli.command("verify")
@click.argument("token")
@_mode_options
@click.option("--max-age", "max_age_ms", type=int, default=None, help="Maximum token age in milliseconds.")
@click.pass_obj
def verify_command(
    state: _CliState,
    token: str,
    raw_data: str | None,
    embed: bool,
    timed: bool,
    max_age_ms: int | None,
) -> None:
    """Verify TOKEN; exit status 0 when valid, 1 otherwise."""
    tokens = state.edge_token()
    data = _parse_data(raw_data)
    if embed and timed:
        valid = tokens.verify_with_data_timed(token, data, max_age_ms)
    elif embed:
        valid = tokens.verify_with_data(token, data)
    elif timed:
        valid = tokens.verify_timed(token, data, max_age_ms)
    else:
        valid = tokens.verify(token, data)

    if not valid:
        console.print("[error]invalid[/error]")
        raise SystemExit(1)
    console.print("[success]valid[/success]")


def _format_millis(millis: int) -> str:
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return "out of range"


@cli.command("read")
@click.argument("token")
@click.option("--timed", is_flag=True, help="Token carries its issue time.")
@click.pass_obj
def read_command(state: _CliState, token: str, timed: bool) -> None:
    """Show the data and issue time embedded in TOKEN without verifying it."""
    tokens = state.edge_token()
    with_data = tokens.has_data_segment(token, timed=timed)
    if with_data:
        data = tokens.read_data(token, timed=timed)
        console.print(f"[info]data:[/info] {escape(json.dumps(data, ensure_ascii=False))}", highlight=False)
    else:
        console.print("[dim]data: none[/dim]")

    if timed:
        issued = tokens.read_timestamp(token, with_data=with_data)
        if issued is None:
            console.print("[warning]issued: unreadable[/warning]")
        else:
            console.print(f"[info]issued:[/info] {issued} ({_format_millis(issued)})", highlight=False)
    console.print("[dim]not verified[/dim]")


if __name__ == "__main__":
    cli()
