"""CLI entry point using Click."""

from __future__ import annotations

from pathlib import Path

import click

from tui_listbox.logs import configure_logging
from tui_listbox.models import TuiListboxError


class _DefaultGroup(click.Group):
    """Insert 'run' when the first arg is not a registered subcommand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.no_args_is_help = False  # bare `tui-listbox` routes to run

    def invoke(self, ctx):
        if not ctx._protected_args and not ctx.args:
            ctx._protected_args = ["run"]
        return super().invoke(ctx)

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and cmd_name in self.commands:
            return super().resolve_command(ctx, args)
        return super().resolve_command(ctx, ["run"] + list(args))


@click.group(cls=_DefaultGroup)
@click.option("--no-color", is_flag=True, help="Disable color output")
@click.option("--demo", is_flag=True, help="Launch with the bundled demo lists")
@click.option(
    "--log-level",
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ...). Defaults to the settings file.",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Also write log records to this file.",
)
@click.version_option(package_name="tui-listbox")
@click.pass_context
def main(ctx, no_color: bool, demo: bool, log_level: str | None, log_file: str | None) -> None:
    """tui-listbox - Keyboard-driven listbox and combobox widgets for the terminal."""
    ctx.ensure_object(dict)
    ctx.obj["no_color"] = no_color
    ctx.obj["demo"] = demo
    ctx.obj["log_level"] = log_level
    ctx.obj["log_file"] = log_file


@main.command()
@click.argument("path", default=".", type=click.Path())
@click.pass_context
def run(ctx, path: str) -> None:
    """Open the lists configured in PATH/.tui-listbox/config.toml."""
    from tui_listbox.config import load_settings

    no_color = ctx.obj["no_color"]

    if ctx.obj["demo"]:
        from tui_listbox.demo_data import build_demo_config

        settings = load_settings()
        _setup_logging(ctx, settings)
        app = _build_app(config=build_demo_config(), settings=settings, no_color=no_color, demo_mode=True)
    else:
        project_dir = Path(path).resolve()
        if not project_dir.exists():
            click.echo(f"Error: '{project_dir}' does not exist.", err=True)
            raise SystemExit(1)
        if not project_dir.is_dir():
            click.echo(f"Error: '{project_dir}' is not a directory.", err=True)
            raise SystemExit(1)
        settings = load_settings(project_dir)
        _setup_logging(ctx, settings)
        app = _build_app(project_dir=project_dir, settings=settings, no_color=no_color)
    app.run()


def _build_app(**kwargs):
    from tui_listbox.app import ListboxApp

    try:
        return ListboxApp(**kwargs)
    except (TuiListboxError, KeyError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        click.echo(f"Error: {message}", err=True)
        raise SystemExit(1)


def _setup_logging(ctx, settings: dict) -> None:
    configure_logging(
        level=ctx.obj["log_level"] or settings.get("log_level"),
        log_file=ctx.obj["log_file"] or settings.get("log_file"),
    )


@main.command("init")
@click.argument("path", default=".", type=click.Path())
@click.option("--name", prompt="Project name", default="My Lists", help="Project name")
def init_cmd(path: str, name: str) -> None:
    """Initialize a new project with sample lists (.tui-listbox/config.toml)."""
    from tui_listbox.config import CONFIG_DIR, CONFIG_FILE, save_config
    from tui_listbox.demo_data import build_demo_config

    project_dir = Path(path).resolve()
    config_path = project_dir / CONFIG_DIR / CONFIG_FILE
    if config_path.exists():
        click.echo(f"Config already exists: {config_path}", err=True)
        raise SystemExit(1)

    project_dir.mkdir(parents=True, exist_ok=True)
    save_config(project_dir, build_demo_config(name))
    click.echo(f"Created {config_path}")
    click.echo(f"\nProject initialized at {project_dir}")
    click.echo("Run 'tui-listbox' to open the project.")


if __name__ == "__main__":
    main()
