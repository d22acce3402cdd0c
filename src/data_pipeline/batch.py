"""
Batch runner - Apply a per-item processor to a pre-fetched list of items.

A failing item is recorded and skipped; the rest of the batch still runs.
Pacing between external calls is the caller's choice via `delay`.
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple, Any


@dataclass
class BatchResult:
    """Per-item outcome counts for one batch run."""
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.skipped


def run_batch(
    items: Iterable[Any],
    processor: Callable[[Any], Any],
    label: Optional[Callable[[Any], str]] = None,
    delay: float = 0.0,
    verbose: bool = False
) -> BatchResult:
    """
    Run processor over items, isolating failures per item.

    Args:
        items: Items to process
        processor: Called once per item. Returning False counts the item as
            skipped; raising counts it as failed; anything else is success.
        label: Item -> name used in error records and log lines
        delay: Seconds to sleep between items (rate limiting)
        verbose: Print progress

    Returns:
        BatchResult with counts and (label, error message) pairs
    """
    result = BatchResult()
    label = label or str

    for index, item in enumerate(items):
        if index > 0 and delay > 0:
            time.sleep(delay)
        try:
            outcome = processor(item)
        except Exception as e:
            result.failed += 1
            result.errors.append((label(item), str(e)))
            if verbose:
                print(f"[-] Failed {label(item)}: {e}")
            continue

        if outcome is False:
            result.skipped += 1
        else:
            result.succeeded += 1
            if verbose and result.succeeded % 10 == 0:
                print(f"[*] Processed {result.succeeded} items so far...")

    return result
