from contextlib import contextmanager
from typing import Iterator

from kvbench.context import PhaseContext
from kvbench.errors import KVBenchException, BackendOperationError, DeadlineExceeded


@contextmanager
def guarded_call(ctx: PhaseContext, backend: str, operation: str, key: str = None) -> Iterator[None]:
    """Wrap one backend call with the phase deadline.

    Refuses to start once ``ctx`` is done. A client exception raised after the
    deadline is reported as DeadlineExceeded, anything else as
    BackendOperationError.
    """
    ctx.raise_if_done()
    try:
        yield
    except KVBenchException:
        raise
    except Exception as e:
        if ctx.done():
            raise DeadlineExceeded(f"{backend} {operation} interrupted by phase deadline: {e}") from e
        raise BackendOperationError(
            f"{backend} {operation} failed: {e}",
            backend=backend,
            operation=operation,
            key=key,
        ) from e
