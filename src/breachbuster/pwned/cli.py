"""
CLI commands for Pwned Passwords breach checks.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from breachbuster.config import BreachBusterConfig
from breachbuster.exceptions import (
    CorpusUnavailableError,
    EmptyInputError,
    ValidationError,
)
from breachbuster.pwned.client import HashRangeClient, PwnedPasswordsClient
from breachbuster.pwned.digest import digest_from_hash, prepare_query
from breachbuster.pwned.models import (
    BreachVerdict,
    ErrorKind,
    PasswordDigest,
    RiskLevel,
    VerdictStatus,
)

console = Console()


def risk_color(risk: RiskLevel | None) -> str:
    """Get color for risk level."""
    colors = {
        RiskLevel.SAFE: "green",
        RiskLevel.LOW: "yellow",
        RiskLevel.MEDIUM: "orange3",
        RiskLevel.HIGH: "red",
        RiskLevel.CRITICAL: "bold red",
    }
    return colors.get(risk, "white")


async def check_digest(digest: PasswordDigest, config: BreachBusterConfig, service_url: str | None) -> BreachVerdict:
    """Check a digest directly against the corpus or through a Lookup Service.

    Failures come back as an error verdict.
    """
    if service_url:
        client = HashRangeClient(config, service_url=service_url)
        return await client.check_digest(digest)

    async with PwnedPasswordsClient(config) as client:
        try:
            return await client.check_digest(digest)
        except CorpusUnavailableError:
            return BreachVerdict.failed(ErrorKind.CORPUS_UNAVAILABLE, hash_prefix=digest.prefix)


def print_verdict(verdict: BreachVerdict) -> None:
    """Render a verdict as a panel."""
    if verdict.status is VerdictStatus.ERROR:
        console.print(Panel(
            f"[yellow]Scan failed[/yellow] ({verdict.error_kind.value}). "
            f"The result is inconclusive: this does NOT mean the password is safe.",
            title="Password Check Result"
        ))
        return

    color = risk_color(verdict.risk_level)

    if not verdict.is_breached:
        console.print(Panel(
            f"[green]Good news![/green] This password has NOT been found in any known data breaches.\n\n"
            f"Risk Level: [{color}]{verdict.risk_level.value.upper()}[/{color}]",
            title="Password Check Result"
        ))
    else:
        console.print(Panel(
            f"[red]Warning![/red] This password has been seen [bold]{verdict.exposure_count:,}[/bold] times in data breaches!\n\n"
            f"Risk Level: [{color}]{verdict.risk_level.value.upper()}[/{color}]\n\n"
            f"{verdict.message}",
            title="Password Check Result"
        ))


@click.group()
@click.pass_context
def pwned(ctx: click.Context) -> None:
    """Pwned Passwords - breach checking commands.

    Passwords are checked with k-anonymity: only the first 5 characters
    of the SHA-1 hash are sent anywhere.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console


@pwned.command("check")
@click.option("--password", "-p", help="Password to check (or prompts securely)")
@click.option("--hash", "password_hash", help="SHA-1 hash to check instead")
@click.option("--service", "service_url", help="Lookup Service URL (matches locally, default: query corpus directly)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def check_password(
    password: str | None,
    password_hash: str | None,
    service_url: str | None,
    json_output: bool,
) -> None:
    """Check if a password has been exposed in data breaches.

    Example:
        breachbuster pwned check
        breachbuster pwned check --hash CBFDAC6008F9CAB4083784CBD1874F76618D2A97
        breachbuster pwned check --service http://127.0.0.1:8080
    """
    if not password and not password_hash:
        password = click.prompt("Password to check", hide_input=True)

    try:
        digest = digest_from_hash(password_hash) if password_hash else prepare_query(password)
    except (EmptyInputError, ValidationError) as e:
        console.print(f"[red]Error: {e.message}[/red]")
        for error in getattr(e, "errors", []):
            console.print(f"  - {error}")
        raise SystemExit(1)

    password = None
    config = BreachBusterConfig.from_env()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Checking password...", total=None)
        verdict = asyncio.run(check_digest(digest, config, service_url))

    if json_output:
        console.print(json.dumps(verdict.to_dict(), indent=2, default=str))
    else:
        print_verdict(verdict)

    if verdict.status is VerdictStatus.ERROR:
        raise SystemExit(1)


@pwned.command("range")
@click.argument("prefix")
@click.option("--limit", "-n", type=int, default=20, help="Rows to show")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def show_range(prefix: str, limit: int, json_output: bool) -> None:
    """Show every breached suffix sharing a 5 character hash prefix.

    Example:
        breachbuster pwned range CBFDA
    """
    config = BreachBusterConfig.from_env()

    async def _get():
        async with PwnedPasswordsClient(config) as client:
            return await client.fetch_range(prefix)

    try:
        result = asyncio.run(_get())
    except ValidationError as e:
        console.print(f"[red]Error: {'; '.join(e.errors)}[/red]")
        raise SystemExit(1)
    except CorpusUnavailableError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    if json_output:
        console.print(json.dumps(result.to_dict(), indent=2))
        return

    total = sum(e.count for e in result.entries)
    console.print(f"\n[bold]Prefix:[/bold] {result.prefix}")
    console.print(f"[bold]Suffixes:[/bold] {len(result):,}")
    console.print(f"[bold]Total Exposures:[/bold] {total:,}\n")

    table = Table(title="Most Exposed Suffixes")
    table.add_column("Suffix", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Risk")

    for entry in sorted(result.entries, key=lambda e: e.count, reverse=True)[:limit]:
        risk = RiskLevel.from_count(entry.count)
        color = risk_color(risk)
        table.add_row(entry.suffix, f"{entry.count:,}", f"[{color}]{risk.value.upper()}[/{color}]")

    console.print(table)

    if len(result) > limit:
        console.print(f"\n[dim]Showing top {limit} of {len(result):,} suffixes[/dim]")


@pwned.command("config")
def show_config() -> None:
    """Show breach check configuration."""
    config = BreachBusterConfig.from_env()

    table = Table(title="BreachBuster Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for key, value in config.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)

    for error in config.validate():
        console.print(f"[red]{error}[/red]")
