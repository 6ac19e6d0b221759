from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union
import logging
import math

from .core import JobLedger

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "process_data.txt"


@dataclass
class LoadResult:
    ledger: JobLedger
    skipped_tokens: int = 0
    bad_token: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.skipped_tokens > 0


def _as_number(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    # inf/nan spell like numbers to float() but are not valid times
    return value if math.isfinite(value) else None


def parse_records(text: str) -> LoadResult:
    """Read whitespace-separated numbers pairwise as (arrival, burst).

    Reading stops at the first token that is not a number; every job parsed
    before it is kept. A trailing arrival time without a burst is dropped.
    """
    tokens = text.split()
    records: List[Tuple[float, float]] = []
    pair: List[float] = []
    consumed = 0
    bad_token = None

    for token in tokens:
        value = _as_number(token)
        if value is None:
            bad_token = token
            break
        pair.append(value)
        if len(pair) == 2:
            records.append((pair[0], pair[1]))
            consumed += 2
            pair = []

    skipped = len(tokens) - consumed
    if skipped:
        logger.debug("input truncated after %d jobs: %d token(s) skipped (first bad token %r)", len(records), skipped, bad_token)
    return LoadResult(ledger=JobLedger.from_records(records), skipped_tokens=skipped, bad_token=bad_token)


def load_jobs(path: Union[str, Path] = DEFAULT_INPUT) -> LoadResult:
    text = Path(path).read_text(encoding="utf-8")
    result = parse_records(text)
    logger.debug("loaded %d jobs from %s", len(result.ledger), path)
    return result
