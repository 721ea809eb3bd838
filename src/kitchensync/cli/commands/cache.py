"""Cache maintenance commands: ``cache info|purge|clear``.

These commands open the configured cache store directly and never need
provider credentials.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

import typer

from kitchensync.cli.context import get_cli_context
from kitchensync.cli.output import console, emit_json, fail, render_details
from kitchensync.config import get_config
from kitchensync.services.broker import CacheStore, build_cache_store
from kitchensync.shared.constants import CacheNamespace

app = typer.Typer(help="Inspect and maintain the lookup cache.", no_args_is_help=True)


def _with_store(command: str, action: Callable[[CacheStore], Any]) -> Any:
    store = None
    try:
        store = build_cache_store(get_config().cache)
        return action(store)
    except Exception as e:  # noqa: BLE001
        raise fail(e, command) from e
    finally:
        if store is not None:
            store.close()


@app.command("info")
def info_command() -> None:
    """Show cache location, entry counts and size."""
    info = _with_store("cache info", lambda store: store.get_cache_info())

    if get_cli_context().is_json_output_enabled():
        emit_json("cache info", info)
        return

    fields = [
        ("Backend", info["backend"]),
        ("Location", info["location"]),
        ("Total entries", info["total_entries"]),
        ("Valid entries", info["valid_entries"]),
        ("Expired entries", info["expired_entries"]),
        ("Size", f"{info['total_size_bytes'] / 1024:.1f} KiB"),
    ]
    fields.extend((f"  {name}", count) for name, count in info["namespaces"].items())
    render_details("Cache", fields)


@app.command("purge")
def purge_command() -> None:
    """Delete expired entries."""
    purged = _with_store("cache purge", lambda store: store.purge_expired())

    if get_cli_context().is_json_output_enabled():
        emit_json("cache purge", {"purged": purged})
    else:
        console.print(f"[green]Purged {purged} expired cache entries[/green]")


@app.command("clear")
def clear_command(
    namespace: Optional[str] = typer.Option(
        None,
        "--namespace",
        help=f"Only clear one namespace ({', '.join(CacheNamespace.ALL)})",
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete cache entries, fresh or not."""
    if namespace is not None and namespace not in CacheNamespace.ALL:
        raise typer.BadParameter(
            f"Unknown namespace '{namespace}'",
            param_hint="--namespace",
        )
    if not yes:
        target = f"namespace '{namespace}'" if namespace else "the whole cache"
        typer.confirm(f"Clear {target}?", abort=True)

    cleared = _with_store("cache clear", lambda store: store.clear(namespace))

    if get_cli_context().is_json_output_enabled():
        emit_json("cache clear", {"cleared": cleared, "namespace": namespace})
    else:
        console.print(f"[green]Cleared {cleared} cache entries[/green]")
