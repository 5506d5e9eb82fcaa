"""Tests for the command line helpers."""
import pytest
from rich.console import Console

from cli.entry_display import show_entry
from cli.main import main


def _console():
    return Console(record=True, width=120)


class TestExtractHandleCommand:
    def test_prints_handle(self, capsys):
        main(["extract-handle", "https://x.com/@DevX/status/1"])
        assert "@DevX" in capsys.readouterr().out

    def test_unparseable_url_exits_nonzero(self):
        with pytest.raises(SystemExit) as exc:
            main(["extract-handle", "not a url##"])
        assert exc.value.code == 1


class TestShowEntry:
    def test_unclaimed_entry(self, repository):
        console = _console()

        assert show_entry("g1", console, repository=repository)

        text = console.export_text()
        assert "space-explorer" in text
        assert "@devx" in text
        assert "Claimed By" not in text

    def test_claimed_entry(self, repository):
        repository.update_claimed_if_unclaimed("g1", "1001", "devx")
        console = _console()

        show_entry("g1", console, repository=repository)

        assert "@devx (1001)" in console.export_text()

    def test_unparseable_owner_url(self, repository):
        console = _console()
        show_entry("g2", console, repository=repository)
        assert "unparseable" in console.export_text()

    def test_missing_entry(self, repository):
        console = _console()
        assert show_entry("nope", console, repository=repository) is False
        assert "not found" in console.export_text()
