"""Command Palette provider for the tui-listbox demo app."""

from __future__ import annotations

from dataclasses import dataclass

from textual.command import Hit, Hits, Provider

from tui_listbox.matching import fuzzy_match, score


@dataclass(frozen=True)
class CommandDef:
    """A single command entry for the palette."""

    display: str
    action: str
    help: str = ""
    category: str = ""


COMMANDS: list[CommandDef] = [
    # -- List --
    CommandDef("Reset List", "reset_list", "Clear selection of the focused list (Ctrl+R)", "List"),
    CommandDef("Toggle Multiple", "toggle_multiple", "Switch the focused list between single and multiple (Ctrl+T)", "List"),
    CommandDef("Jump to List", "jump_to_list", "Pick a list to focus (Ctrl+O)", "List"),
    # -- View --
    CommandDef("Clear Event Log", "clear_log", "Empty the event log (Ctrl+L)", "View"),
    CommandDef("Help", "help", "Show keybindings (?)", "View"),
    # -- App --
    CommandDef("Quit", "quit_app", "Quit application (q)", "App"),
]


class ListboxCommandProvider(Provider):
    """Textual Command Palette provider for the demo app's actions."""

    async def discover(self) -> Hits:
        """Yield every command."""
        for cmd in COMMANDS:
            yield Hit(
                1.0,
                cmd.display,
                self._make_callback(cmd.action),
                help=cmd.help,
            )

    async def search(self, query: str) -> Hits:
        """Search commands with fuzzy matching."""
        needle = query.lower()
        for cmd in COMMANDS:
            searchable = f"{cmd.display} {cmd.help} {cmd.category}".lower()
            if fuzzy_match(needle, searchable):
                yield Hit(
                    score(needle, cmd.display.lower()),
                    cmd.display,
                    self._make_callback(cmd.action),
                    help=cmd.help,
                )

    def _make_callback(self, action: str):
        """Create a callback that runs the given action on the app."""
        async def callback() -> None:
            await self.app.run_action(action)
        return callback
