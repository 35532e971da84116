"""Reporting sinks for scenario runs.

Page objects and runners only talk to the ``Reporter`` protocol; how events
are stored or rendered is up to the sink.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import html
import logging
import platform
import re
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

logger = logging.getLogger("cartpilot")


class ReportStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    INFO = "info"
    WARNING = "warning"


class Reporter(Protocol):
    def pass_(self, message: str) -> None:
        ...

    def fail(self, message: str) -> None:
        ...

    def skip(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def attach_screenshot(self, data: Union[bytes, str, Path], name: str) -> Optional[Path]:
        ...


class NullReporter:
    """Discards every event."""

    def pass_(self, message: str) -> None:
        pass

    def fail(self, message: str) -> None:
        pass

    def skip(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def attach_screenshot(self, data: Union[bytes, str, Path], name: str) -> Optional[Path]:
        return None


@dataclass
class ReportEvent:
    status: ReportStatus
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    screenshot: Optional[Path] = None


@dataclass
class ScenarioRecord:
    name: str
    description: str = ""
    events: List[ReportEvent] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)

    @property
    def status(self) -> ReportStatus:
        statuses = {e.status for e in self.events}
        if ReportStatus.FAIL in statuses:
            return ReportStatus.FAIL
        if ReportStatus.WARNING in statuses:
            return ReportStatus.WARNING
        if ReportStatus.SKIP in statuses and ReportStatus.PASS not in statuses:
            return ReportStatus.SKIP
        return ReportStatus.PASS


_LOG_LEVELS = {
    ReportStatus.PASS: logging.INFO,
    ReportStatus.INFO: logging.INFO,
    ReportStatus.SKIP: logging.INFO,
    ReportStatus.WARNING: logging.WARNING,
    ReportStatus.FAIL: logging.ERROR,
}


def _safe_name(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]+", "_", name).strip("_") or "screenshot"


class HtmlReporter:
    """Collects events per scenario and renders them as one HTML file."""

    def __init__(self, report_dir: Union[str, Path], title: str = "Add to Cart Automation Report"):
        self.report_dir = Path(report_dir)
        self.screenshot_dir = self.report_dir / "screenshots"
        self.title = title
        self.scenarios: List[ScenarioRecord] = []
        self.system_info: Dict[str, str] = {
            "OS": platform.platform(),
            "Python": platform.python_version(),
            "Execution Date": datetime.now().strftime("%d-%m-%Y %H:%M:%S"),
        }

    @property
    def current(self) -> Optional[ScenarioRecord]:
        return self.scenarios[-1] if self.scenarios else None

    def start_scenario(self, name: str, description: str = "") -> ScenarioRecord:
        record = ScenarioRecord(name=name, description=description)
        self.scenarios.append(record)
        logger.info(f"Scenario started: {name}")
        return record

    def _record(self, status: ReportStatus, message: str, screenshot: Optional[Path] = None) -> None:
        logger.log(_LOG_LEVELS[status], f"[{status.value}] {message}")
        if self.current is None:
            return
        self.current.events.append(ReportEvent(status=status, message=message, screenshot=screenshot))

    def pass_(self, message: str) -> None:
        self._record(ReportStatus.PASS, message)

    def fail(self, message: str) -> None:
        self._record(ReportStatus.FAIL, message)

    def skip(self, message: str) -> None:
        self._record(ReportStatus.SKIP, message)

    def info(self, message: str) -> None:
        self._record(ReportStatus.INFO, message)

    def warning(self, message: str) -> None:
        self._record(ReportStatus.WARNING, message)

    def attach_screenshot(self, data: Union[bytes, str, Path], name: str) -> Optional[Path]:
        """Attach a screenshot to the current scenario.

        Raw PNG bytes are written under ``screenshots/`` with a timestamp
        suffix; a path is attached as-is.
        """
        if isinstance(data, (bytes, bytearray)):
            self.screenshot_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            path = self.screenshot_dir / f"{_safe_name(name)}_{stamp}.png"
            path.write_bytes(bytes(data))
        else:
            path = Path(data)
        self._record(ReportStatus.INFO, f"Screenshot: {name}", screenshot=path)
        return path

    def _relative(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.report_dir.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def render_html(self) -> str:
        rows = []
        for scenario in self.scenarios:
            events = []
            for event in scenario.events:
                shot = ""
                if event.screenshot is not None:
                    src = html.escape(self._relative(event.screenshot))
                    shot = f'<br><a href="{src}"><img src="{src}" width="320"></a>'
                events.append(
                    f'<tr class="{event.status.value}"><td>{event.timestamp:%H:%M:%S}</td>'
                    f"<td>{event.status.value.upper()}</td><td>{html.escape(event.message)}{shot}</td></tr>"
                )
            rows.append(
                f'<section class="{scenario.status.value}"><h2>{html.escape(scenario.name)} '
                f"({scenario.status.value.upper()})</h2><p>{html.escape(scenario.description)}</p>"
                f"<table>{''.join(events)}</table></section>"
            )
        info = "".join(
            f"<li><b>{html.escape(k)}:</b> {html.escape(v)}</li>" for k, v in self.system_info.items()
        )
        return (
            "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
            f"<title>{html.escape(self.title)}</title><style>"
            "body{font-family:sans-serif}td{padding:2px 8px;vertical-align:top}"
            ".pass td,.pass h2{color:#2e7d32}.fail td,.fail h2{color:#c62828}"
            ".warning td,.warning h2{color:#ef6c00}.skip td{color:#757575}"
            f"</style></head><body><h1>{html.escape(self.title)}</h1><ul>{info}</ul>"
            f"{''.join(rows)}</body></html>"
        )

    def write_html(self, filename: Optional[str] = None) -> Path:
        self.report_dir.mkdir(parents=True, exist_ok=True)
        if filename is None:
            filename = f"AutomationReport_{datetime.now():%d_%m_%Y_%H_%M_%S}.html"
        path = self.report_dir / filename
        path.write_text(self.render_html(), encoding="utf-8")
        logger.info(f"Report written to {path}")
        return path
