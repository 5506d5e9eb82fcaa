"""Ownership record display for the CLI"""

from typing import Optional

from rich.table import Table

from claims import EntryRepository, SupabaseEntryRepository, extract_handle


def show_entry(entry_id: str, console, repository: Optional[EntryRepository] = None) -> bool:
    """
    Display the ownership record of one entry

    Args:
        entry_id: Catalog entry id
        console: Rich console for output
        repository: Repository to read from (Supabase from settings by default)

    Returns:
        True if the entry was found
    """
    if repository is None:
        repository = SupabaseEntryRepository.from_settings()

    record = repository.get_by_id(entry_id)
    if record is None:
        console.print(f"[red]Entry {entry_id} not found[/red]")
        return False

    declared = extract_handle(record.declared_owner_url)

    table = Table(title=f"Entry {entry_id}")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Slug", record.slug or "[dim]-[/dim]")
    table.add_row("Developer URL", record.declared_owner_url or "[dim]-[/dim]")
    table.add_row("Declared Handle", f"@{declared}" if declared else "[red]unparseable[/red]")
    table.add_row("Claimed", "[green]Yes[/green]" if record.claimed else "No")
    if record.claimed:
        table.add_row("Claimed By", f"@{record.claimed_by_handle or '?'} ({record.claimed_by_external_id or '?'})")

    console.print(table)
    return True
