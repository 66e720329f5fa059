"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.

    invocation_deadline(context) -> float | None:
        Monotonic deadline for external calls made during this invocation.

Example:
    >>> from linkvault.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os
import time
from collections.abc import Callable

from linkvault.constants import Defaults, ENV
from linkvault.types import LambdaContext


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def invocation_deadline(
    context: LambdaContext,
    margin: float = Defaults.DEADLINE_SAFETY_MARGIN,
    clock: Callable[[], float] = time.monotonic,
) -> float | None:
    """Compute the deadline for external calls made during a Lambda invocation

    The deadline is expressed on the `clock` timeline (time.monotonic() by
    default) and keeps `margin` seconds in reserve so the handler can still
    respond before Lambda kills the invocation.

    Args:
        context (LambdaContext):
            AWS Lambda context object.
        margin (float):
            Seconds to keep in reserve.
        clock (Callable[[], float]):
            Monotonic clock the deadline is measured against.

    Returns:
        float | None:
            Deadline on the `clock` timeline, None if the context
            doesn't expose the remaining invocation time (e.g. in tests).

    Example:
        >>> context.get_remaining_time_in_millis()
        3000
        >>> invocation_deadline(context) - time.monotonic()
        2.5
    """
    get_remaining_time = getattr(context, 'get_remaining_time_in_millis', None)
    if not callable(get_remaining_time):
        return None
    remaining = get_remaining_time() / 1000
    return clock() + max(remaining - margin, 0.0)
