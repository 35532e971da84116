"""behave hooks: one session, reporter entry and page set per scenario.

Userdata overrides (``behave -D browser=firefox -D headless=true``) take
precedence over config/config.properties and CARTPILOT_* variables.
"""
import logging

from selenium.common.exceptions import WebDriverException

from cartpilot.automation.provisioning import start_session
from cartpilot.automation.selenium_engine import SeleniumEngine
from cartpilot.automation.types import WaitPolicy
from cartpilot.config import Settings
from cartpilot.pages import HomePage, ProductDetailsPage, SearchResultsPage
from cartpilot.reporting import HtmlReporter

logger = logging.getLogger("cartpilot")


def before_all(context):
    userdata = context.config.userdata
    headless = userdata.get("headless")
    context.settings = Settings.load(
        userdata.get("config"),
        browser=userdata.get("browser"),
        base_url=userdata.get("base_url"),
        headless=None if headless is None else headless.lower() in ("1", "true", "yes"),
    )
    context.reporter = HtmlReporter(context.settings.report_dir)
    context.reporter.system_info["Browser"] = context.settings.browser


def before_scenario(context, scenario):
    settings = context.settings
    context.reporter.start_scenario(scenario.name, f"Scenario: {scenario.name}")
    context.session = start_session(
        settings.browser,
        headless=settings.headless,
        wait_policy=WaitPolicy(timeout=settings.timeout, poll_interval=settings.poll_interval),
    )
    context.engine = SeleniumEngine(context.session)
    context.home_page = HomePage(context.session, context.reporter, engine=context.engine)
    context.search_results_page = SearchResultsPage(context.session, context.reporter, engine=context.engine)
    context.product_details_page = ProductDetailsPage(context.session, context.reporter, engine=context.engine)
    context.reporter.info(f"Scenario started, tags: {', '.join(scenario.tags) or '-'}")


def _screenshot(context, name):
    try:
        context.reporter.attach_screenshot(context.engine.take_screenshot(), name)
    except WebDriverException as e:
        logger.warning(f"Could not take screenshot {name}: {e}")


def after_step(context, step):
    if step.status == "failed":
        _screenshot(context, f"Step_Failed_{step.name}")
        context.reporter.fail(f"Step failed: {step.name}: {step.error_message}")


def after_scenario(context, scenario):
    session = getattr(context, "session", None)
    if session is None:
        return
    try:
        if scenario.status == "failed":
            _screenshot(context, f"Scenario_Failed_{scenario.name}")
            context.reporter.fail("Scenario failed")
        else:
            _screenshot(context, f"Scenario_Passed_{scenario.name}")
            context.reporter.pass_("Scenario passed successfully")
        try:
            context.engine.delete_all_cookies()
        except WebDriverException:
            logger.debug("Could not clear cookies")
    finally:
        session.release()


def after_all(context):
    context.reporter.write_html()
