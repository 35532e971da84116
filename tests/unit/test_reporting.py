"""Tests for the HTML reporter."""

from pathlib import Path

from cartpilot.reporting import HtmlReporter, NullReporter, ReportStatus, ScenarioRecord, ReportEvent


class TestScenarioStatus:
    def _record(self, *statuses):
        return ScenarioRecord("s", events=[ReportEvent(status, "m") for status in statuses])

    def test_rollup(self) -> None:
        assert self._record().status is ReportStatus.PASS
        assert self._record(ReportStatus.PASS, ReportStatus.INFO).status is ReportStatus.PASS
        assert self._record(ReportStatus.PASS, ReportStatus.WARNING).status is ReportStatus.WARNING
        assert self._record(ReportStatus.WARNING, ReportStatus.FAIL).status is ReportStatus.FAIL
        assert self._record(ReportStatus.SKIP).status is ReportStatus.SKIP
        assert self._record(ReportStatus.SKIP, ReportStatus.PASS).status is ReportStatus.PASS


class TestHtmlReporter:
    def test_events_go_to_current_scenario(self, tmp_path) -> None:
        reporter = HtmlReporter(tmp_path)
        reporter.start_scenario("first")
        reporter.pass_("one")
        second = reporter.start_scenario("second", "desc")
        reporter.fail("two")

        assert [e.message for e in reporter.scenarios[0].events] == ["one"]
        assert [e.message for e in second.events] == ["two"]
        assert second.status is ReportStatus.FAIL

    def test_events_before_any_scenario_are_only_logged(self, tmp_path, caplog) -> None:
        reporter = HtmlReporter(tmp_path)
        with caplog.at_level("WARNING", logger="cartpilot"):
            reporter.warning("early")
        assert reporter.scenarios == []
        assert "early" in caplog.text

    def test_screenshot_bytes_are_written(self, tmp_path) -> None:
        reporter = HtmlReporter(tmp_path)
        reporter.start_scenario("shots")
        path = reporter.attach_screenshot(b"png-bytes", "Scenario Passed: laptop/1")

        assert path.parent == tmp_path / "screenshots"
        assert path.read_bytes() == b"png-bytes"
        assert path.name.startswith("Scenario_Passed_laptop_1_")
        assert reporter.current.events[-1].screenshot == path

    def test_screenshot_path_is_attached_as_is(self, tmp_path) -> None:
        reporter = HtmlReporter(tmp_path)
        reporter.start_scenario("shots")
        existing = tmp_path / "elsewhere.png"
        assert reporter.attach_screenshot(str(existing), "x") == existing
        assert not (tmp_path / "screenshots").exists()

    def test_write_html(self, tmp_path) -> None:
        """
        Given: A scenario with a warning, an escaped message and a screenshot
        When: The report is written with the default name
        Then: The file exists, escapes markup and links the screenshot relatively
        """
        reporter = HtmlReporter(tmp_path / "reports", title="Cart Report")
        reporter.start_scenario("Add <Laptop>")
        reporter.warning("Cart confirmation popup not found")
        reporter.attach_screenshot(b"png", "shot")

        path = reporter.write_html()
        content = path.read_text(encoding="utf-8")

        assert path.name.startswith("AutomationReport_")
        assert path.suffix == ".html"
        assert "Add &lt;Laptop&gt; (WARNING)" in content
        assert "<title>Cart Report</title>" in content
        assert 'src="screenshots/shot_' in content
        assert "Python" in content

    def test_write_html_named(self, tmp_path) -> None:
        path = HtmlReporter(tmp_path).write_html("report.html")
        assert path == Path(tmp_path) / "report.html"
        assert path.exists()


def test_null_reporter_discards() -> None:
    reporter = NullReporter()
    reporter.pass_("x")
    reporter.fail("x")
    reporter.skip("x")
    reporter.info("x")
    reporter.warning("x")
    assert reporter.attach_screenshot(b"", "x") is None
