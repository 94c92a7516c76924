from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from refcheck.core.exceptions import ChecksFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    message: str
    passed: bool
    detail: str | None = None

    def __str__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        text = f"[{status}] {self.message}"
        return text if self.detail is None else f"{text} ({self.detail})"


@dataclass(slots=True)
class CheckSuite:
    """
    Collects named verdicts from the refcheck predicates.

    Unlike a bare assert, a failed expectation does not stop the run:
    every check is recorded and logged, and the caller decides at the end
    (raise_on_failure, or inspect `failed`).
    """

    name: str
    results: list[CheckResult] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("CheckSuite.name must be a non-empty string.")

    # ---- recording ----
    def expect(self, verdict: bool, message: str) -> bool:
        """Record `verdict` under `message` and return it."""
        result = CheckResult(message=message, passed=bool(verdict))
        self._record(result)
        return result.passed

    def expect_false(self, verdict: bool, message: str) -> bool:
        return self.expect(not verdict, message)

    def expect_raises(
        self,
        exc_type: type[BaseException] | tuple[type[BaseException], ...],
        fn: Callable[..., Any],
        *args: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> bool:
        """Pass iff `fn(*args, **kwargs)` raises `exc_type`."""
        label = message or f"{getattr(fn, '__name__', 'call')} raises"
        try:
            fn(*args, **kwargs)
        except exc_type as e:
            result = CheckResult(label, True, f"{type(e).__name__}: {e}")
        else:
            result = CheckResult(label, False, "no exception raised")
        self._record(result)
        return result.passed

    def _record(self, result: CheckResult) -> None:
        self.results.append(result)
        if result.passed:
            logger.info("%s: %s", self.name, result)
        else:
            logger.warning("%s: %s", self.name, result)

    # ---- inspection ----
    def __iter__(self) -> Iterator[CheckResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> list[CheckResult]:
        return [r for r in self.results if r.passed]

    @property
    def failed(self) -> list[CheckResult]:
        return [r for r in self.results if not r.passed]

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        return f"{self.name}: {len(self.passed)}/{len(self.results)} checks passed"

    def raise_on_failure(self) -> None:
        failed = self.failed
        if failed:
            lines = "\n".join(f"  {r}" for r in failed)
            raise ChecksFailed(f"{self.summary()}\n{lines}")
