from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Tuple
from datetime import datetime

from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class Locator:
    """How to find one or more elements on the current page."""
    by: str
    value: str

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(By.ID, value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(By.XPATH, value)

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(By.CSS_SELECTOR, value)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls(By.NAME, value)

    @classmethod
    def link_text(cls, value: str) -> "Locator":
        return cls(By.LINK_TEXT, value)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls(By.CLASS_NAME, value)

    @classmethod
    def tag_name(cls, value: str) -> "Locator":
        return cls(By.TAG_NAME, value)

    def as_tuple(self) -> Tuple[str, str]:
        return (self.by, self.value)

    def __str__(self) -> str:
        return f"{self.by}={self.value}"


@dataclass(frozen=True)
class WaitPolicy:
    """Timeout and poll interval applied to every blocking engine operation."""
    timeout: float = 10.0
    poll_interval: float = 0.5

    def __post_init__(self):
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")

    def with_timeout(self, timeout: float) -> "WaitPolicy":
        return replace(self, timeout=timeout)


class BrowserType(str, Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BrowserType":
        """Resolve a browser name, falling back to chrome for unset or unknown input."""
        if not value:
            return cls.CHROME
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.CHROME


class ScenarioStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ScenarioResult:
    name: str
    status: ScenarioStatus
    message: str = ""
    steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def passed(self) -> bool:
        return self.status == ScenarioStatus.PASSED

    @property
    def duration(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()
