"""Main CLI entry point for Media Grabber."""

import sys
from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from .config import GrabberConfig
from .exceptions import FixtureError
from .grabber import MediaGrabber
from .host import InMemoryHost

console = Console()


@hydra.main(version_base=None, config_path="../../conf", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    console.print("[bold blue]Media Grabber[/bold blue]")
    console.print()

    try:
        host = load_host(cfg)
        config = GrabberConfig(**OmegaConf.to_container(cfg.grabber, resolve=True))
    except FixtureError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid grabber options:[/red] {e}")
        sys.exit(1)

    run(host, config, show_content=cfg.output.show_content)


def load_host(cfg: DictConfig) -> InMemoryHost:
    """Build the host from the fixture, applying site overrides."""
    host = InMemoryHost.from_fixture(Path(to_absolute_path(cfg.input.fixture)))

    if cfg.site.content_width is not None:
        host.content_width = int(cfg.site.content_width)
    if cfg.site.autoembed is not None:
        host.autoembed = bool(cfg.site.autoembed)

    return host


def run(host: InMemoryHost, config: GrabberConfig, show_content: bool = True) -> str:
    """Grab the media for one post and print it."""
    grabber = MediaGrabber(host, config)
    media = grabber.render()
    result = grabber.locate()

    table = Table(title=f"Post {grabber.post_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Type", grabber.config.type.value)
    table.add_row("Width", str(grabber.config.width))
    table.add_row("Strategy", result.strategy or "-")
    table.add_row("Original", result.original or "-")

    console.print(table)
    console.print()

    if media:
        console.print("[bold]Media[/bold]")
        console.print(Syntax(media, "html", word_wrap=True))
    else:
        console.print("[yellow]No media found.[/yellow]")

    if show_content and config.split:
        console.print()
        console.print("[bold]Content[/bold]")
        console.print(Syntax(host.render_content(grabber.post_id), "html", word_wrap=True))

    return media


if __name__ == "__main__":
    main()
