"""
cartpilot CLI - run the add-to-cart scenarios from the command line.
"""
import logging
import sys
from typing import Optional

import click
from rich.logging import RichHandler
from selenium.common.exceptions import WebDriverException

from . import console, print_results_table, print_settings_table
from ..automation.provisioning import start_session
from ..automation.runner import DEFAULT_SCENARIOS, AddToCartRunner, CartScenario
from ..automation.types import WaitPolicy
from ..config import ConfigError, Settings
from ..reporting import HtmlReporter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger("cartpilot")


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Properties file to read settings from (default: config/config.properties)",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug output",
    show_default=True
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], debug: bool) -> None:
    """cartpilot - storefront add-to-cart UI automation."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled")

    ctx.obj = {"config_path": config_path, "debug": debug}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--browser", type=click.Choice(["chrome", "firefox", "edge"]), default=None, help="Browser to drive")
@click.option("--base-url", default=None, help="Storefront home page URL")
@click.option("--product", default=None, help="Product to search for")
@click.option("--quantity", default=None, help="Quantity to set on the product page")
@click.option("--all-scenarios", is_flag=True, default=False, help="Run the built-in laptop/phone/headphones scenarios")
@click.option("--headless/--headed", default=None, help="Run the browser without a window")
@click.option("--timeout", type=float, default=None, help="Wait timeout in seconds for every interaction")
@click.option("--report-dir", type=click.Path(file_okay=False), default=None, help="Where to write the HTML report")
@click.pass_obj
def run(
    obj: dict,
    browser: Optional[str],
    base_url: Optional[str],
    product: Optional[str],
    quantity: Optional[str],
    all_scenarios: bool,
    headless: Optional[bool],
    timeout: Optional[float],
    report_dir: Optional[str],
) -> None:
    """Search for a product and add it to the cart."""
    try:
        settings = Settings.load(
            obj["config_path"],
            browser=browser,
            base_url=base_url,
            product=product,
            quantity=quantity,
            headless=headless,
            timeout=timeout,
            report_dir=report_dir,
        )
    except ConfigError as e:
        raise click.ClickException(str(e))

    if all_scenarios:
        scenarios = DEFAULT_SCENARIOS
    else:
        scenarios = [
            CartScenario(
                name=f"Add {settings.product} to Cart",
                product=settings.product,
                quantity=settings.quantity,
                description=f"User adds {settings.product} to cart",
            )
        ]

    reporter = HtmlReporter(settings.report_dir)
    reporter.system_info["Browser"] = settings.browser
    try:
        session = start_session(
            settings.browser,
            headless=settings.headless,
            wait_policy=WaitPolicy(timeout=settings.timeout, poll_interval=settings.poll_interval),
        )
    except WebDriverException as e:
        console.print(f"[red]✗[/] Could not start {settings.browser}: {e.msg}")
        sys.exit(1)

    results = []
    try:
        runner = AddToCartRunner(session, settings.base_url, reporter)
        for scenario in scenarios:
            reporter.start_scenario(scenario.name, scenario.description)
            results.append(runner.run(scenario))
    finally:
        try:
            session.release()
        except WebDriverException as e:
            logger.warning(f"Browser did not shut down cleanly: {e.msg}")
        finally:
            report_path = reporter.write_html()

    print_results_table(results)
    console.print(f"Report: {report_path}")
    if any(not r.passed for r in results):
        console.print("[red]✗[/] One or more scenarios failed")
        sys.exit(1)
    console.print("[green]✓[/] All scenarios passed")


@cli.command("config")
@click.pass_obj
def show_config(obj: dict) -> None:
    """Show the settings a run would use."""
    try:
        print_settings_table(Settings.load(obj["config_path"]))
    except ConfigError as e:
        raise click.ClickException(str(e))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
