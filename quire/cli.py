"""quire CLI - generate API documentation for Python packages."""

from typing import Optional

import click

from . import __version__
from .app import Application
from .theme import render_summary


def build_options(
    inputs: tuple[str, ...],
    out: Optional[str],
    name: Optional[str],
    readme: Optional[str],
    plugins: tuple[str, ...],
    ga_id: Optional[str],
    disable_sources: bool,
    verbose: bool,
) -> dict:
    """Collect the options given on the command line. Unset flags are omitted
    so config file values still apply."""
    options = {}
    if inputs:
        options["input_files"] = list(inputs)
    if out:
        options["out"] = out
    if name:
        options["name"] = name
    if readme:
        options["readme"] = readme
    if plugins:
        options["plugins"] = list(plugins)
    if ga_id:
        options["ga_id"] = ga_id
    if disable_sources:
        options["disable_sources"] = True
    if verbose:
        options["log_level"] = "verbose"
    return options


@click.command()
@click.argument("inputs", nargs=-1, type=click.Path(exists=True))
@click.option("--out", "-o", help="Output directory (default: docs)")
@click.option("--name", "-n", help="Project name shown in the page header")
@click.option("--readme", type=click.Path(exists=True, dir_okay=False), help="Markdown file for the index page")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file (default: ./quire.yaml)")
@click.option("--plugin", "-p", "plugins", multiple=True, help="Plugin name or module to load")
@click.option("--ga-id", help="Google Analytics tracking id")
@click.option("--disable-sources", is_flag=True, help="Omit 'Defined in' source references")
@click.option("--verbose", "-v", is_flag=True, help="Show verbose output")
@click.version_option(__version__, prog_name="quire")
def cli(inputs, out, name, readme, config_path, plugins, ga_id, disable_sources, verbose):
    """Generate HTML documentation for the Python sources in INPUTS."""
    app = Application()
    app.bootstrap(
        build_options(inputs, out, name, readme, plugins, ga_id, disable_sources, verbose),
        config_path=config_path,
    )
    if app.logger.has_errors():
        raise click.ClickException("Invalid configuration, see errors above")

    project = app.convert()
    if project is None:
        raise click.ClickException("Conversion failed, see errors above")

    out_dir = app.options.get_value("out")
    app.generate_docs(project, out_dir)
    if app.logger.has_errors():
        raise click.ClickException("Rendering failed, see errors above")

    detail = str(out_dir)
    if app.logger.has_warnings():
        detail += f" . {app.logger.warning_count} warnings"
    render_summary(f"{len(project.modules)} modules documented", detail)

