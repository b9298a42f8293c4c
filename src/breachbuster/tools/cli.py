"""
CLI commands for the password generator and strength analyzer.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import asyncio
import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from breachbuster.config import BreachBusterConfig
from breachbuster.exceptions import CorpusUnavailableError, ValidationError
from breachbuster.pwned.client import PwnedPasswordsClient
from breachbuster.pwned.models import BreachVerdict, ErrorKind
from breachbuster.tools.generator import (
    DEFAULT_LENGTH,
    MAX_LENGTH,
    MIN_LENGTH,
    CharacterClass,
    generate_password,
)
from breachbuster.tools.strength import StrengthLabel, analyze_strength

console = Console()

LABEL_COLORS = {
    StrengthLabel.EMPTY: "dim",
    StrengthLabel.VERY_WEAK: "bold red",
    StrengthLabel.WEAK: "red",
    StrengthLabel.FAIR: "yellow",
    StrengthLabel.STRONG: "blue",
    StrengthLabel.VERY_STRONG: "green",
}


def _breach_column(verdict: BreachVerdict | None) -> str:
    if verdict is None:
        return "-"
    if verdict.error_kind:
        return "[yellow]Unknown[/yellow]"
    if verdict.is_breached:
        return f"[red]{verdict.exposure_count:,}[/red]"
    return "[green]Clean[/green]"


@click.command("generate")
@click.option("--length", "-l", type=click.IntRange(MIN_LENGTH, MAX_LENGTH), default=DEFAULT_LENGTH,
              show_default=True, help="Password length")
@click.option("--no-uppercase", is_flag=True, help="Leave out uppercase letters")
@click.option("--no-lowercase", is_flag=True, help="Leave out lowercase letters")
@click.option("--no-digits", is_flag=True, help="Leave out digits")
@click.option("--no-symbols", is_flag=True, help="Leave out symbols")
@click.option("--exclude-ambiguous", is_flag=True, help="Leave out 0 O 1 l I |")
@click.option("--count", "-n", type=click.IntRange(1, 100), default=1, help="How many passwords")
@click.option("--check", is_flag=True, help="Check each password against the breach corpus")
def generate(
    length: int,
    no_uppercase: bool,
    no_lowercase: bool,
    no_digits: bool,
    no_symbols: bool,
    exclude_ambiguous: bool,
    count: int,
    check: bool,
) -> None:
    """Generate random passwords.

    Example:
        breachbuster generate
        breachbuster generate --length 24 --exclude-ambiguous -n 5 --check
    """
    disabled = {
        CharacterClass.UPPERCASE: no_uppercase,
        CharacterClass.LOWERCASE: no_lowercase,
        CharacterClass.DIGITS: no_digits,
        CharacterClass.SYMBOLS: no_symbols,
    }
    classes = [cls for cls, off in disabled.items() if not off]

    try:
        passwords = [
            generate_password(length, classes, exclude_ambiguous=exclude_ambiguous)
            for _ in range(count)
        ]
    except ValidationError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        for error in e.errors:
            console.print(f"  - {error}")
        raise SystemExit(1)

    verdicts: list[BreachVerdict | None] = [None] * len(passwords)
    if check:
        async def _check_all():
            results = []
            async with PwnedPasswordsClient(BreachBusterConfig.from_env()) as client:
                for password in passwords:
                    try:
                        results.append(await client.check_password(password))
                    except CorpusUnavailableError:
                        results.append(BreachVerdict.failed(ErrorKind.CORPUS_UNAVAILABLE))
            return results

        verdicts = asyncio.run(_check_all())

    table = Table(title="Generated Passwords")
    table.add_column("Password", style="cyan")
    table.add_column("Strength")
    if check:
        table.add_column("Breaches", justify="right")

    for password, verdict in zip(passwords, verdicts):
        report = analyze_strength(password)
        color = LABEL_COLORS[report.label]
        row = [password, f"[{color}]{report.label.value}[/{color}]"]
        if check:
            row.append(_breach_column(verdict))
        table.add_row(*row)

    console.print(table)


@click.command("strength")
@click.option("--password", "-p", help="Password to analyze (or prompts securely)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def strength(password: str | None, json_output: bool) -> None:
    """Analyze password strength.

    Example:
        breachbuster strength
    """
    if password is None:
        password = click.prompt("Password to analyze", hide_input=True, default="", show_default=False)

    report = analyze_strength(password)

    if json_output:
        console.print(json.dumps(report.to_dict(), indent=2))
        return

    color = LABEL_COLORS[report.label]
    lines = [
        f"Strength: [{color}]{report.label.value.upper()}[/{color}] ({report.score}/5)",
        f"Length: {len(password)}",
        "",
    ]
    for name, met in report.requirements.items():
        status = "[green]PASS[/green]" if met else "[red]FAIL[/red]"
        lines.append(f"{name.upper()}: {status}")

    if report.feedback:
        lines.append("")
        lines.extend(f"- {hint}" for hint in report.feedback)

    console.print(Panel("\n".join(lines), title="Password Strength"))
