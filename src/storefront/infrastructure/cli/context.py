"""Per-invocation CLI state: who is acting and how to print results."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict, dataclass, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

import click

from storefront.application.auth import Principal
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import resolve_principal


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def to_json(result) -> str:
    if is_dataclass(result) and not isinstance(result, type):
        result = asdict(result)
    elif isinstance(result, list):
        result = [asdict(r) if is_dataclass(r) else r for r in result]
    return json.dumps(result, indent=2, default=_json_default)


@dataclass
class CliContext:
    as_email: str | None = None
    json_output: bool = False

    def principal(self) -> Principal:
        return resolve_principal(self.as_email)

    def error(self, exc: DomainException) -> click.ClickException:
        """Render a domain error as the structured payload or readable lines."""
        if self.json_output:
            return click.ClickException(json.dumps(exc.to_dict()))
        lines = [exc.message]
        for violation in getattr(exc, "violations", []):
            lines.append(f"  {violation.field}: {violation.message}")
        return click.ClickException("\n".join(lines))

    def emit(self, result, render: Callable[[], None]) -> None:
        if self.json_output:
            click.echo(to_json(result))
        else:
            render()
