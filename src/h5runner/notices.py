# src/h5runner/notices.py

from dataclasses import dataclass, field

from .errors import DeprecatedOptionWarning
from .logs import getAppLogger


@dataclass
class NoticeTracker:
    """One-time notices for a single build invocation.

    Each key is logged at most once per tracker; a new build gets a new
    tracker, so nothing carries over between invocations.
    """

    emitted: list[DeprecatedOptionWarning] = field(default_factory=list)

    @property
    def keys(self) -> set[str]:
        return {w.key for w in self.emitted}

    def warn_once(self, key: str, message: str) -> bool:
        """Log `message` unless `key` was already noticed. Returns True if logged."""
        if key in self.keys:
            return False
        warning = DeprecatedOptionWarning(key, message)
        self.emitted.append(warning)
        getAppLogger().warning(message)
        return True
