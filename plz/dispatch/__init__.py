"""Concurrent dispatch engine.

Fans one operation out across many repositories on a bounded worker pool
and streams per-repository results back through an MPSC channel.

Usage:
    from plz.dispatch import dispatch, status_operation

    for result in dispatch(repos, status_operation, workers=8):
        match result:
            case Succeeded(path, entries):
                ...
"""

from plz.dispatch.channel import ChannelClosed, Receiver, Sender, channel
from plz.dispatch.operations import checkout_operation, reset_operation, status_operation
from plz.dispatch.pool import WorkerPool, default_workers, dispatch, run_isolated
from plz.dispatch.results import DispatchResult, Failed, Operation, Skipped, Succeeded

__all__ = [
    # channel
    "ChannelClosed",
    "Receiver",
    "Sender",
    "channel",
    # operations
    "checkout_operation",
    "reset_operation",
    "status_operation",
    # pool
    "WorkerPool",
    "default_workers",
    "dispatch",
    "run_isolated",
    # results
    "DispatchResult",
    "Failed",
    "Operation",
    "Skipped",
    "Succeeded",
]
