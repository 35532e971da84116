# Avoid importing selenium-heavy submodules at top-level
__version__ = "0.1.0"
__all__ = ["SeleniumEngine", "Session", "start_session"]

def __getattr__(name):
    if name == "SeleniumEngine":
        from .automation.selenium_engine import SeleniumEngine
        return SeleniumEngine
    if name == "Session":
        from .automation.session import Session
        return Session
    if name == "start_session":
        from .automation.provisioning import start_session
        return start_session
    raise AttributeError(name)
