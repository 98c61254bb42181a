"""Demo Textual App for tui-listbox."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Footer, Header, RichLog, Static

from tui_listbox.attributes import apply_attributes
from tui_listbox.commands import ListboxCommandProvider
from tui_listbox.config import load_config, load_settings, widget_kwargs
from tui_listbox.models import ListDef, Option, ProjectConfig
from tui_listbox.registry import WidgetRegistry, default_registry
from tui_listbox.screens.help_screen import HelpScreen
from tui_listbox.screens.picker_screen import PickerScreen
from tui_listbox.widgets.combobox import Combobox
from tui_listbox.widgets.listbox import Listbox
from tui_listbox.widgets.option_host import OptionListHost

logger = logging.getLogger(__name__)


def _describe(option: Option | None) -> str:
    if option is None:
        return "-"
    return option.value or option.label


class ListboxApp(App):
    """Shows every configured list and the messages they post."""

    TITLE = "tui-listbox"
    CSS = """
    #lists {
        height: 1fr;
        padding: 0 1;
    }
    #lists > * {
        margin-bottom: 1;
    }
    #event-log {
        height: 10;
        border: round $surface-lighten-2;
        border-title-align: left;
    }
    #status-bar {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $primary-background;
        color: $text;
    }
    """

    COMMANDS = App.COMMANDS | {ListboxCommandProvider}

    BINDINGS = [
        Binding("q", "quit_app", "Quit"),
        Binding("question_mark", "help", "Help"),
        Binding("ctrl+r", "reset_list", "Reset"),
        Binding("ctrl+t", "toggle_multiple", "Single/Multiple"),
        Binding("ctrl+o", "jump_to_list", "Jump"),
        Binding("ctrl+l", "clear_log", "Clear Log", show=False),
    ]

    def __init__(
        self,
        project_dir: Path | None = None,
        *,
        config: ProjectConfig | None = None,
        settings: dict[str, Any] | None = None,
        registry: WidgetRegistry | None = None,
        no_color: bool = False,
        demo_mode: bool = False,
    ) -> None:
        if no_color:
            os.environ["NO_COLOR"] = "1"
        super().__init__()
        self.project_dir = project_dir
        self.demo_mode = demo_mode
        self.registry = registry or default_registry()
        if config is None:
            config = load_config(project_dir) if project_dir is not None else ProjectConfig()
        config.ensure_default_list()
        self.config = config
        self._settings = settings if settings is not None else load_settings(project_dir)
        self.event_log: list[tuple[str, str, Any]] = []
        self._lists = VerticalScroll(id="lists")
        self._log_view = RichLog(id="event-log", markup=False, wrap=True)
        self._status_bar = Static("", id="status-bar")
        self._list_widgets = [self.build_widget(list_def) for list_def in config.lists]

    def compose(self) -> ComposeResult:
        yield Header()
        with self._lists:
            yield from self._list_widgets
        yield self._log_view
        yield self._status_bar
        yield Footer()

    def on_mount(self) -> None:
        project_name = self.config.name or (self.project_dir.name if self.project_dir else "")
        demo = " [DEMO]" if self.demo_mode else ""
        self.title = f"tui-listbox - {project_name}{demo}" if project_name else "tui-listbox"
        self._log_view.border_title = "Events"
        self._update_status_bar()

    def build_widget(self, list_def: ListDef) -> Widget:
        """Create the widget for one configured list through the registry."""
        widget = self.registry.create(
            list_def.kind,
            *list_def.options,
            id=list_def.id,
            **widget_kwargs(self._settings, list_def.kind),
        )
        apply_attributes(widget, widget.ATTRIBUTES, list_def.attributes)
        return widget

    # ── Hosts ──

    def _hosts(self) -> list[OptionListHost]:
        return [w for w in self._lists.children if isinstance(w, OptionListHost)]

    def _focused_host(self) -> OptionListHost | None:
        node = self.focused
        while node is not None:
            if isinstance(node, OptionListHost):
                return node
            node = node.parent
        return None

    # ── Messages ──

    def _record(self, host: OptionListHost, kind: str, detail: Any) -> None:
        if host.parent is not self._lists:
            # lists inside modal screens
            return
        host_id = host.id or ""
        self.event_log.append((host_id, kind, detail))
        logger.debug("%s %s %r", host_id, kind, detail)
        self._log_view.write(Text(f"{host_id}: {kind} {detail}"))
        self._update_status_bar()

    def on_listbox_selected(self, event: Listbox.Selected) -> None:
        self._record(event.listbox, "selected", _describe(event.option))

    def on_listbox_unselected(self, event: Listbox.Unselected) -> None:
        self._record(event.listbox, "unselected", _describe(event.option))

    def on_listbox_changed(self, event: Listbox.Changed) -> None:
        self._record(event.listbox, "change", list(event.selected))

    def on_listbox_focus_changed(self, event: Listbox.FocusChanged) -> None:
        self._record(event.listbox, "focus-change", _describe(event.option))

    def on_combobox_selected(self, event: Combobox.Selected) -> None:
        self._record(event.combobox, "selected", _describe(event.option))

    def on_combobox_unselected(self, event: Combobox.Unselected) -> None:
        self._record(event.combobox, "unselected", _describe(event.option))

    def on_combobox_changed(self, event: Combobox.Changed) -> None:
        self._record(event.combobox, "change", list(event.selected))

    def on_combobox_focus_changed(self, event: Combobox.FocusChanged) -> None:
        self._record(event.combobox, "focus-change", _describe(event.option))

    def _update_status_bar(self) -> None:
        parts = []
        for host in self._hosts():
            value = host.form_value()
            if isinstance(value, list):
                value = ",".join(v for _, v in value)
            parts.append(f"{host.form_name or host.id}={value if value is not None else ''}")
        self._status_bar.update(Text("  ".join(parts)))

    # ── Actions ──

    def action_quit_app(self) -> None:
        self.exit()

    def action_help(self) -> None:
        self.push_screen(HelpScreen(), callback=self._on_help_action)

    def _on_help_action(self, action: str | None) -> None:
        if action:
            self.call_later(self.run_action, action)

    def action_reset_list(self) -> None:
        host = self._focused_host()
        if host is None:
            self.notify("Focus a list first", severity="warning")
            return
        host.reset()
        self._update_status_bar()

    def action_toggle_multiple(self) -> None:
        host = self._focused_host()
        if host is None:
            self.notify("Focus a list first", severity="warning")
            return
        host.set_attribute("multiple", not host.multiple)
        mode = "multiple" if host.multiple else "single"
        self.notify(f"{host.id}: {mode} selection")
        self._update_status_bar()

    def action_jump_to_list(self) -> None:
        choices = [
            (list_def.id, str(list_def.attributes.get("label") or list_def.id))
            for list_def in self.config.lists
        ]
        current = self._focused_host()
        self.push_screen(
            PickerScreen("Jump to list", choices, current.id if current else ""),
            callback=self._on_list_picked,
        )

    def _on_list_picked(self, list_id: str | None) -> None:
        if not list_id:
            return
        for host in self._hosts():
            if host.id == list_id:
                target = host
                if isinstance(host, Combobox):
                    target = host.query_one("#combobox-input")
                self.call_after_refresh(target.focus)
                return

    def action_clear_log(self) -> None:
        self.event_log.clear()
        self._log_view.clear()
