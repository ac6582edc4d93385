"""Cyclopts CLI entrypoint for compiling forest section manifests.

The ``forest`` console script loads a site configuration and a manifest of
shallow sections, compiles the whole document graph, reports dangling or
cyclic references, and optionally writes the derived relationship indexes
(references, embed parents, backlinks) as JSON.

Examples
--------
Compile the manifest named in the default configuration:

>>> from forest_pages.cli import main
>>> main()  # doctest: +SKIP

Compile an explicit manifest and keep the relationship report:

>>> from forest_pages.cli import app
>>> app.run(
...     ["compile", "--manifest", "sections.yaml", "--relations", "out.json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .compiler import CompileState
from .config import SiteConfig, load_site_config
from .manifest import load_manifest
from .renderer import MarkupRenderer
from .report import build_report, write_report

DEFAULT_CONFIG = Path("config/forest.yaml")

app = App(name="forest", config=cyclopts.config.Env("FOREST_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(config: Path | None) -> SiteConfig:
    """Load ``config``, or the default config file when present, else defaults."""
    if config is not None:
        return load_site_config(config)
    if DEFAULT_CONFIG.exists():
        return load_site_config(DEFAULT_CONFIG)
    return SiteConfig()


@app.command(name="compile", help="Compile a section manifest and report relationships.")
def compile_sections(
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to site config", env_var="FOREST_CONFIG")
    ] = None,
    manifest: typ.Annotated[
        Path | None,
        Parameter(help="Section manifest to compile", env_var="FOREST_MANIFEST"),
    ] = None,
    root: typ.Annotated[
        str | None, Parameter(help="Override the root section slug")
    ] = None,
    relations: typ.Annotated[
        Path | None, Parameter(help="Write the relationship report to this path")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log every compiled section")] = False,
) -> None:
    """Compile every section of a manifest.

    Parameters
    ----------
    config : Path or None, optional
        Site configuration file; defaults to ``config/forest.yaml`` when it
        exists, otherwise built-in defaults apply.
    manifest : Path or None, optional
        Manifest to compile; overrides the manifest named by the config.
    root : str or None, optional
        Root slug compiled first; overrides the config.
    relations : Path or None, optional
        Destination of the JSON relationship report.
    verbose : bool, optional
        Log at ``DEBUG`` instead of ``WARNING``.

    Returns
    -------
    None
        Prints a summary line, one line per diagnostic, and the report path.

    Raises
    ------
    ValueError
        If neither the command line nor the config names a manifest.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    site_config = _load_config(config)
    manifest_path = manifest or site_config.manifest
    if manifest_path is None:
        msg = "No manifest given; pass --manifest or set site.manifest in the config."
        raise ValueError(msg)
    if root:
        site_config.root_slug = root

    sections = load_manifest(
        manifest_path, renderer=MarkupRenderer(site_config.pygments_style)
    )
    state = CompileState.from_config(site_config, sections)
    state.compile_all()

    print(f"compiled {len(state.compiled)} sections")
    for entry in state.missing:
        print(f"missing {entry.target} (from {entry.referrer or '<root>'})")
    if relations:
        written = write_report(build_report(state), relations)
        print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `forest` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
