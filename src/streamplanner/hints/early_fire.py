"""Early-fire hint options for interval joins."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import NamedTuple

from ..utils.exceptions import PlanningError
from .join_hints import JoinStrategy, RelHint

logger = logging.getLogger(__name__)

DELAY = "delay"
FREQUENCY = "frequency"

# Values are 64-bit signed milliseconds, written with ASCII digits only.
MAX_MILLIS = 2**63 - 1
_LONG_PATTERN = re.compile(r"-?[0-9]+", re.ASCII)


class EarlyFireParameters(NamedTuple):
    """Delay and frequency of early results, in milliseconds.

    ``(0, 0)`` disables early firing: only the final, watermark-triggered
    result is emitted.
    """

    delay: int = 0
    frequency: int = 0

    @property
    def enabled(self) -> bool:
        return self.delay > 0 or self.frequency > 0


NO_EARLY_FIRE = EarlyFireParameters()


def _parse_option(hint: RelHint, options: dict[str, str], key: str) -> int:
    raw = options.get(key, "0")
    if not isinstance(raw, str) or not _LONG_PATTERN.fullmatch(raw):
        raise PlanningError(
            f"Invalid value {raw!r} for option '{key}' of hint '{hint.hint_name}': "
            "expected an integer number of milliseconds.",
            context={"hint": hint.hint_name, "option": key},
        )
    value = int(raw)
    if value > MAX_MILLIS:
        raise PlanningError(
            f"Invalid value {raw!r} for option '{key}' of hint '{hint.hint_name}': "
            f"must not exceed {MAX_MILLIS}.",
            context={"hint": hint.hint_name, "option": key},
        )
    if value < 0:
        raise PlanningError(
            f"Invalid value {raw!r} for option '{key}' of hint '{hint.hint_name}': "
            "must not be negative.",
            context={"hint": hint.hint_name, "option": key},
        )
    return value


def parse_early_fire_hint(hints: Iterable[RelHint]) -> EarlyFireParameters:
    """Read early-fire parameters from the first ``EARLY_FIRE`` hint.

    Option keys are matched case-insensitively; missing options default to
    ``0``. Without an early-fire hint both values are ``0``.

    Raises:
        PlanningError: If an option is present but is not a non-negative
            64-bit integer written with ASCII digits
    """
    hint = next((h for h in hints if JoinStrategy.is_early_fire_hint(h.hint_name)), None)
    if hint is None:
        return NO_EARLY_FIRE
    options = {k.lower(): v for k, v in hint.kv_options.items()}
    params = EarlyFireParameters(
        delay=_parse_option(hint, options, DELAY),
        frequency=_parse_option(hint, options, FREQUENCY),
    )
    logger.debug("Parsed early-fire hint %s: %s", hint.hint_name, params)
    return params
