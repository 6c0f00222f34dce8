"""Command-line interface for the NextDNS client using Click."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, NoReturn, Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .analytics import AnalyticsQuery, DestinationType
from .client import NextDNSClient
from .common import validate_domain
from .config import get_config_dir, load_config
from .exceptions import (
    APIError,
    ConfigurationError,
    MissingProfileError,
    NextDNSError,
    TransportError,
)
from .models import ListEntry

# =============================================================================
# LOGGING SETUP
# =============================================================================


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Installs a single console handler on the root logger. Calling it
    again only adjusts the level.

    Args:
        verbose: If True, sets log level to DEBUG; otherwise WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root_logger = logging.getLogger()

    # Avoid adding duplicate handlers
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    root_logger.setLevel(level)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


logger = logging.getLogger(__name__)
console = Console(highlight=False)


# =============================================================================
# HELPERS
# =============================================================================


def _fail(message: str) -> NoReturn:
    console.print(f"\n  [red]Error: {message}[/red]\n", highlight=False)
    sys.exit(1)


def _resolve_profile(config: Dict[str, Any], profile: Optional[str]) -> str:
    profile_id = profile or config.get("profile_id")
    if not profile_id:
        raise MissingProfileError(
            "No profile given. Use --profile or set NEXTDNS_PROFILE_ID."
        )
    return profile_id


def _run(
    config_dir: Optional[Path],
    action: Callable[[NextDNSClient, Dict[str, Any]], None],
) -> None:
    """
    Load the configuration and run a command body with a client.

    The client is closed when the body returns; client errors become a
    red message and exit code 1.
    """
    try:
        config = load_config(config_dir)
        with NextDNSClient.from_config(config) as client:
            action(client, config)
    except ConfigurationError as e:
        console.print(f"\n  [red]Config error: {e}[/red]\n", highlight=False)
        sys.exit(1)
    except MissingProfileError as e:
        _fail(str(e))
    except APIError as e:
        console.print(
            f"\n  [red]API error ({e.error_type.value}): {e}[/red]\n", highlight=False
        )
        sys.exit(1)
    except TransportError as e:
        console.print(f"\n  [red]Connection error: {e}[/red]\n", highlight=False)
        sys.exit(1)


def _flag(value: Optional[bool]) -> str:
    if value is None:
        return "[dim]-[/dim]"
    return "[green]on[/green]" if value else "[red]off[/red]"


config_dir_option = click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Config directory (default: auto-detect)",
)
profile_option = click.option(
    "-p", "--profile", help="Profile ID (default: NEXTDNS_PROFILE_ID)"
)


# =============================================================================
# CLICK CLI
# =============================================================================


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="nextdns-client")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx: click.Context, no_color: bool, verbose: bool) -> None:
    """NextDNS Client - Manage NextDNS profiles from the command line."""
    if no_color:
        console.no_color = True

    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@main.command()
@config_dir_option
def profiles(config_dir: Optional[Path]) -> None:
    """List the profiles available to the API key."""

    def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
        items = client.profiles.list()

        console.print(f"\n  [bold]Profiles ({len(items)}):[/bold]")
        for item in items:
            console.print(f"    {item.id:<10} {item.name or ''}")
        console.print()

    _run(config_dir, action)


@main.command()
@profile_option
@config_dir_option
def show(profile: Optional[str], config_dir: Optional[Path]) -> None:
    """Show a summary of a profile."""

    def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
        profile_id = _resolve_profile(config, profile)
        data = client.profiles.get(profile_id)
        if data is None:
            _fail(f"Profile '{profile_id}' returned no data")

        console.print(f"\n  [bold]Profile {profile_id}[/bold]")
        console.print("  [bold]--------------[/bold]")
        console.print(f"  Name:      {data.name or ''}")
        console.print(f"  Allowlist: {len(data.allowlist or [])} domain(s)")
        console.print(f"  Denylist:  {len(data.denylist or [])} domain(s)")
        console.print(f"  Rewrites:  {len(data.rewrites or [])}")

        if data.privacy is not None:
            blocklists = ", ".join(b.id or "?" for b in data.privacy.blocklists or [])
            console.print(f"  Privacy blocklists: {blocklists or 'none'}")

        if data.security is not None:
            console.print(
                f"  Threat intelligence feeds: {_flag(data.security.threat_intelligence_feeds)}"
            )
            console.print(
                f"  Google Safe Browsing: {_flag(data.security.google_safe_browsing)}"
            )

        if data.parental_control is not None:
            console.print(f"  Safe search: {_flag(data.parental_control.safe_search)}")

        if data.settings is not None and data.settings.logs is not None:
            console.print(f"  Logs: {_flag(data.settings.logs.enabled)}")
        console.print()

    _run(config_dir, action)


# -----------------------------------------------------------------------------
# ALLOWLIST / DENYLIST
# -----------------------------------------------------------------------------


def _make_list_group(name: str) -> click.Group:
    """Build the command group managing the allowlist or the denylist."""

    @click.group(name=name, help=f"Manage the {name} of a profile.")
    def group() -> None:
        pass

    def _service(client: NextDNSClient) -> Any:
        return getattr(client, name)

    def _check_domain(domain: str) -> None:
        if not validate_domain(domain):
            _fail(f"Invalid domain format '{domain}'")

    @group.command("list")
    @profile_option
    @config_dir_option
    def list_cmd(profile: Optional[str], config_dir: Optional[Path]) -> None:
        """List the domains."""

        def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
            profile_id = _resolve_profile(config, profile)
            entries = _service(client).get(profile_id)

            console.print(f"\n  [bold]{name.capitalize()} ({len(entries)}):[/bold]")
            for entry in entries:
                state = "[green]active[/green]" if entry.active else "[yellow]inactive[/yellow]"
                console.print(f"    {entry.id:<30} {state}")
            console.print()

        _run(config_dir, action)

    @group.command("add")
    @click.argument("domain")
    @profile_option
    @config_dir_option
    def add_cmd(domain: str, profile: Optional[str], config_dir: Optional[Path]) -> None:
        """Add DOMAIN."""
        _check_domain(domain)

        def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
            profile_id = _resolve_profile(config, profile)
            _service(client).add(profile_id, ListEntry(id=domain, active=True))
            console.print(f"\n  [green]Added to {name}: {domain}[/green]\n")

        _run(config_dir, action)

    @group.command("remove")
    @click.argument("domain")
    @profile_option
    @config_dir_option
    def remove_cmd(domain: str, profile: Optional[str], config_dir: Optional[Path]) -> None:
        """Remove DOMAIN."""
        _check_domain(domain)

        def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
            profile_id = _resolve_profile(config, profile)
            _service(client).delete(profile_id, domain)
            console.print(f"\n  [green]Removed from {name}: {domain}[/green]\n")

        _run(config_dir, action)

    def _toggle(domain: str, profile: Optional[str], config_dir: Optional[Path], active: bool) -> None:
        _check_domain(domain)

        def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
            profile_id = _resolve_profile(config, profile)
            _service(client).update(profile_id, domain, ListEntry(active=active))
            state = "enabled" if active else "disabled"
            console.print(f"\n  [green]{domain} {state} in {name}[/green]\n")

        _run(config_dir, action)

    @group.command("enable")
    @click.argument("domain")
    @profile_option
    @config_dir_option
    def enable_cmd(domain: str, profile: Optional[str], config_dir: Optional[Path]) -> None:
        """Mark DOMAIN as active."""
        _toggle(domain, profile, config_dir, True)

    @group.command("disable")
    @click.argument("domain")
    @profile_option
    @config_dir_option
    def disable_cmd(domain: str, profile: Optional[str], config_dir: Optional[Path]) -> None:
        """Keep DOMAIN in the list but mark it inactive."""
        _toggle(domain, profile, config_dir, False)

    return group


main.add_command(_make_list_group("allowlist"))
main.add_command(_make_list_group("denylist"))


# -----------------------------------------------------------------------------
# ANALYTICS
# -----------------------------------------------------------------------------

# Command name -> (service method, label of a row)
ANALYTICS_KINDS: Dict[str, Tuple[str, Callable[[Any], str]]] = {
    "status": ("status", lambda r: r.status or ""),
    "domains": ("domains", lambda r: r.domain or ""),
    "reasons": ("reasons", lambda r: r.name or r.id or ""),
    "ips": ("ips", lambda r: r.ip or ""),
    "devices": ("devices", lambda r: r.name or r.id or ""),
    "protocols": ("protocols", lambda r: r.protocol or ""),
    "query-types": ("query_types", lambda r: r.name or str(r.type)),
    "ip-versions": ("ip_versions", lambda r: f"IPv{r.version}"),
    "dnssec": ("dnssec", lambda r: "validated" if r.dnssec else "not validated"),
    "encryption": ("encryption", lambda r: "encrypted" if r.encrypted else "unencrypted"),
    "destinations": ("destinations", lambda r: r.code or r.company or ""),
}


@main.command()
@click.argument("kind", type=click.Choice(sorted(ANALYTICS_KINDS)))
@profile_option
@click.option("--from", "from_", help="Start of the range (e.g. -7d, 2024-01-01)")
@click.option("--to", "to", help="End of the range")
@click.option("--limit", type=click.IntRange(min=1, max=500), help="Maximum number of rows")
@click.option("--device", help="Only count queries of this device ID")
@click.option(
    "--type",
    "destination_type",
    type=click.Choice([t.value for t in DestinationType]),
    default=DestinationType.COUNTRIES.value,
    show_default=True,
    help="Destination grouping (destinations only)",
)
@config_dir_option
def analytics(
    kind: str,
    profile: Optional[str],
    from_: Optional[str],
    to: Optional[str],
    limit: Optional[int],
    device: Optional[str],
    destination_type: str,
    config_dir: Optional[Path],
) -> None:
    """Show analytics of KIND for a profile."""

    def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
        profile_id = _resolve_profile(config, profile)
        query = AnalyticsQuery(from_=from_, to=to, limit=limit, device=device)
        method_name, label = ANALYTICS_KINDS[kind]
        method = getattr(client.analytics, method_name)

        if kind == "destinations":
            rows = method(profile_id, type=destination_type, query=query)
        else:
            rows = method(profile_id, query=query)

        console.print(f"\n  [bold]Analytics: {kind} ({profile_id})[/bold]")
        for row in rows:
            console.print(f"    {label(row):<40} [bold]{row.queries or 0}[/bold]")
        if rows.cursor:
            console.print(f"\n  More results available (cursor: {rows.cursor})")
        console.print()

    _run(config_dir, action)


# -----------------------------------------------------------------------------
# SETUP / HEALTH
# -----------------------------------------------------------------------------


@main.command()
@profile_option
@config_dir_option
def setup(profile: Optional[str], config_dir: Optional[Path]) -> None:
    """Show the DNS endpoints of a profile."""

    def action(client: NextDNSClient, config: Dict[str, Any]) -> None:
        profile_id = _resolve_profile(config, profile)
        data = client.setup.get(profile_id)
        if data is None:
            _fail(f"Profile '{profile_id}' returned no setup data")

        console.print(f"\n  [bold]Setup {profile_id}[/bold]")
        console.print(f"  IPv4:     {', '.join(data.ipv4 or []) or '-'}")
        console.print(f"  IPv6:     {', '.join(data.ipv6 or []) or '-'}")
        console.print(f"  DNSCrypt: {data.dnscrypt or '-'}")
        if data.linked_ip is not None:
            console.print("\n  [bold]Linked IP:[/bold]")
            console.print(f"    Servers: {', '.join(data.linked_ip.servers or []) or '-'}")
            console.print(f"    IP:      {data.linked_ip.ip or '-'}")
            console.print(f"    DDNS:    {data.linked_ip.ddns or '-'}")
        console.print()

    _run(config_dir, action)


@main.command()
@config_dir_option
def health(config_dir: Optional[Path]) -> None:
    """Perform health checks."""
    checks_passed = 0
    checks_total = 0

    console.print("\n  [bold]Health Check[/bold]")
    console.print("  [bold]------------[/bold]")

    # Check config
    checks_total += 1
    try:
        config = load_config(config_dir)
        console.print(f"  [green][✓][/green] Configuration loaded ({get_config_dir(config_dir)})")
        checks_passed += 1
    except ConfigurationError as e:
        console.print(f"  [red][✗][/red] Configuration: {e}")
        sys.exit(1)

    # Check API connectivity
    checks_total += 1
    with NextDNSClient.from_config(config) as client:
        try:
            items = client.profiles.list()
            console.print(f"  [green][✓][/green] API connectivity ({len(items)} profile(s))")
            checks_passed += 1
        except NextDNSError as e:
            console.print(f"  [red][✗][/red] API connectivity failed: {e}")
            items = []

    # Check default profile, if any
    if config.get("profile_id"):
        checks_total += 1
        if any(item.id == config["profile_id"] for item in items):
            console.print(f"  [green][✓][/green] Default profile: {config['profile_id']}")
            checks_passed += 1
        else:
            console.print(f"  [red][✗][/red] Default profile not found: {config['profile_id']}")

    console.print(f"\n  Result: {checks_passed}/{checks_total} checks passed")
    if checks_passed == checks_total:
        console.print("  Status: [green]HEALTHY[/green]\n")
    else:
        console.print("  Status: [red]DEGRADED[/red]\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
