"""Status values and the rules for rolling child statuses up into a parent."""

from collections import Counter

from plugin_results.models.item import Item

STATUS_FAILED = "failed"
STATUS_PASSED = "passed"
STATUS_SKIPPED = "skipped"
# Fallback when no other status can be determined.
STATUS_UNKNOWN = "unknown"
# The plugin did not report results in time; treated as a failure by parents.
STATUS_TIMEOUT = "timeout"


def is_failure_status(status: str) -> bool:
    """Return True for any of the failure modes (failed or timeout)."""
    return status in (STATUS_FAILED, STATUS_TIMEOUT)


def aggregate_status(*items: Item) -> str:
    """Roll up the statuses of ``items`` into a single parent status.

    Failures bubble up, then unknowns; otherwise the parent passes. Branches
    are resolved first and their status is written back onto them, so after
    this call every branch below the given items carries its final status.
    Zero items produce ``unknown`` so an aborted run never reads as a pass.
    """
    if not items:
        return STATUS_UNKNOWN

    failed_found, unknown_found = False, False
    for item in items:
        if item.items:
            item.status = aggregate_status(*item.items)

        if not item.status:
            item.status = STATUS_UNKNOWN

        if is_failure_status(item.status):
            failed_found = True
        elif item.status == STATUS_UNKNOWN:
            unknown_found = True

    # Only decide after the loop; every sibling must be resolved.
    if failed_found:
        return STATUS_FAILED
    if unknown_found:
        return STATUS_UNKNOWN
    return STATUS_PASSED


def manual_results_aggregation(*items: Item) -> str:
    """Summarize user-provided statuses without interpreting them.

    A single distinct status is returned verbatim, which keeps custom status
    strings intact. Mixed statuses produce a digest such as
    ``"custom msg: 1, failed: 2, passed: 3"`` with labels sorted.
    """
    if not items:
        return STATUS_UNKNOWN

    counts = Counter(item.status or STATUS_UNKNOWN for item in items)
    if len(counts) == 1:
        return next(iter(counts))

    return ", ".join(f"{status}: {counts[status]}" for status in sorted(counts))
