from __future__ import annotations

"""Command-line interface
------------------------
Parse paths, validate page definition files and resolve paths against them,
either as a dry run (selector chain) or in a live browser.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import click

from pagepath.core.errors import PagePathError
from pagepath.core.page import PageObject
from pagepath.core.page_loader import build_page, check_definitions, load_page, load_pages_file
from pagepath.core.resolver import GraphResolver
from pagepath.drivers.chain import ChainDriver
from pagepath.selectors.qualifier import describe_hop, parse_path
from pagepath.utils.config import get_settings
from pagepath.utils.logger import get_logger, bind, unbind, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _find_yaml_files(root: Path, recursive: bool = True) -> list[Path]:
    if recursive:
        return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))
    return sorted(list(root.glob("*.yaml")) + list(root.glob("*.yml")))


async def _resolve_live(page: PageObject, path: str, url: str, strict_scope: Optional[bool]) -> int:
    # Local import keeps the dry-run commands usable without browser binaries.
    from playwright.async_api import async_playwright

    from pagepath.drivers.playwright_driver import PlaywrightDriver, register_js_engine

    settings = get_settings()
    async with async_playwright() as pw:
        await register_js_engine(pw)
        browser = await getattr(pw, settings.BROWSER_TYPE.value).launch(**settings.playwright_launch_kwargs())
        try:
            browser_page = await browser.new_page()
            await browser_page.goto(url, wait_until="domcontentloaded", timeout=settings.PAGE_LOAD_TIMEOUT)
            driver = PlaywrightDriver(browser_page)
            resolver = GraphResolver(driver, strict_collection_scope=strict_scope)
            locator = driver.unwrap(await resolver.resolve_path(page, path))
            return await locator.count()
        finally:
            await browser.close()


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="pagepath")
def cli(log_level: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


@cli.command("parse")
@click.argument("path")
def cmd_parse(path: str):
    """Show how PATH splits into hops."""
    try:
        _echo_json([describe_hop(hop) for hop in parse_path(path)])
    except PagePathError as e:
        click.echo(f"ERR {e}")
        sys.exit(1)


@cli.command("validate")
@click.argument("targets", nargs=-1, required=False)
@click.option("--dir", "pages_dir", type=click.Path(file_okay=False, dir_okay=True, exists=True),
              help="Validate all page definitions under this directory")
@click.option("--recursive/--no-recursive", default=True, show_default=True)
def cmd_validate(targets: List[str], pages_dir: Optional[str], recursive: bool):
    """Validate page definition files, including every selector they declare."""
    paths: list[Path] = []
    if targets:
        for p in (Path(t).resolve() for t in targets):
            if p.is_dir():
                paths.extend(_find_yaml_files(p, recursive=True))
            else:
                paths.append(p)
    elif pages_dir:
        paths.extend(_find_yaml_files(Path(pages_dir), recursive=recursive))
    elif get_settings().PAGES_DIR.is_dir():
        paths.extend(_find_yaml_files(get_settings().PAGES_DIR, recursive=recursive))
    else:
        click.echo("Provide file(s) or --dir to validate.")
        sys.exit(2)

    if not paths:
        click.echo("No page definitions found.")
        sys.exit(1)

    ok = True
    for fp in paths:
        try:
            definitions = load_pages_file(fp)
        except Exception as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")
            continue
        for definition in definitions:
            problems = list(check_definitions(build_page(definition)))
            if problems:
                ok = False
                for node_path, err in problems:
                    click.echo(f"ERR {fp}  ->  [{definition.page}] {node_path}: {err}")
            else:
                click.echo(f"OK  {fp}  ->  [{definition.page}] ({len(definition.nodes)} nodes)")

    sys.exit(0 if ok else 1)


@cli.command("resolve")
@click.argument("definition", type=click.Path(dir_okay=False, exists=True))
@click.argument("path")
@click.option("--page", "page_name", type=str, default=None, help="Page to start from (multi-doc files)")
@click.option("--url", type=str, default=None, help="Resolve in a live browser at URL and count matches")
@click.option("--strict-scope/--no-strict-scope", default=None, help="Override STRICT_COLLECTION_SCOPE")
def cmd_resolve(definition: str, path: str, page_name: Optional[str], url: Optional[str], strict_scope: Optional[bool]):
    """
    Resolve PATH against the page in DEFINITION.

    Examples:
      pagepath resolve pages/shop.yaml "Header > #Home in Links"
      pagepath resolve pages/shop.yaml "#2 of Items" --url https://shop.example
    """
    log = get_logger(__name__)
    try:
        page = load_page(definition, page_name)
    except Exception as e:
        click.echo(f"ERR {definition}  ->  {e}")
        sys.exit(1)

    bind(page=page.alias)
    try:
        if url:
            count = asyncio.run(_resolve_live(page, path, url, strict_scope))
            click.echo(f"OK  {path}  ->  {count} match(es) at {url}")
        else:
            resolver = GraphResolver(ChainDriver(), strict_collection_scope=strict_scope)
            chain = asyncio.run(resolver.resolve_path(page, path))
            click.echo(f"OK  {path}  ->  {chain}")
    except PagePathError as e:
        log.debug(f"Resolution failed: {e!r}")
        click.echo(f"ERR {path}  ->  {type(e).__name__}: {e}")
        sys.exit(1)
    finally:
        unbind("page")


def main() -> None:
    cli(prog_name="pagepath")


if __name__ == "__main__":
    main()
