"""
Best-effort side effects.

Secondary writes (ledger sync, audit log) must never fail the primary
operation. Instead of swallowing their exceptions, they report through a
SideEffectResult so callers and tests can see what went wrong.
"""

import logging

logger = logging.getLogger(__name__)


class SideEffectResult:
    """Outcome of a best-effort side effect."""

    def __init__(self, name: str, ok: bool, value=None, error: Exception = None, skipped: bool = False):
        self.name = name
        self.ok = ok
        self.value = value
        self.error = error
        self.skipped = skipped

    @classmethod
    def success(cls, name: str, value=None) -> 'SideEffectResult':
        return cls(name, True, value=value)

    @classmethod
    def failure(cls, name: str, error: Exception) -> 'SideEffectResult':
        return cls(name, False, error=error)

    @classmethod
    def skip(cls, name: str) -> 'SideEffectResult':
        return cls(name, True, skipped=True)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'ok': self.ok,
            'skipped': self.skipped,
            'error': str(self.error) if self.error else None,
        }

    def __bool__(self):
        return self.ok

    def __repr__(self):
        state = 'skipped' if self.skipped else ('ok' if self.ok else f'failed: {self.error!r}')
        return f'<SideEffectResult {self.name} {state}>'


def run_side_effect(name: str, func, *args, **kwargs) -> SideEffectResult:
    """
    Run func and capture any exception as a failed SideEffectResult.

    Args:
        name: Short label used in logs and warnings (e.g. 'ledger', 'audit')
        func: Callable performing the side effect

    Returns:
        SideEffectResult with func's return value or the raised error
    """
    try:
        value = func(*args, **kwargs)
    except Exception as e:
        logger.warning(f"Side effect '{name}' failed: {e}", exc_info=True)
        return SideEffectResult.failure(name, e)
    return SideEffectResult.success(name, value)
