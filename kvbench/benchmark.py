import time

from typing import Any, Dict, List, Optional, TextIO

from kvbench.config import DATETIME_STR, EXIT_CODE, RunConfig
from kvbench.context import PhaseContext
from kvbench.errors import ConfigurationError, DeadlineExceeded, KVBenchException, StoreSetupError
from kvbench.interfaces.store import KeyValueStore, StoreOptions
from kvbench.kvb_logging import setup_logging
from kvbench.progress import phase_progress
from kvbench.registry import StoreRegistry
from kvbench.reporting import format_backend_line, format_phase_header, format_phase_summary, print_lines
from kvbench.runner import PhaseResult, run_phase
from kvbench.utils import write_json
from kvbench.workloads import WORKLOADS


class KVBenchmark:
    """Runs the configured phases back to back against one store.

    The store is prepared once with ``setup``; a failure there aborts the run
    before any worker starts. Each phase then gets a fresh deadline and a fresh
    Stats, and its summary is printed as soon as it ends.
    """

    def __init__(self, config: RunConfig, logger=None, run_datetime=None,
                 store: Optional[KeyValueStore] = None,
                 ctx: Optional[PhaseContext] = None, out: Optional[TextIO] = None) -> None:
        self.config = config
        if logger:
            self.logger = logger
        else:
            self.logger = setup_logging(name="kvbench_benchmark")
            self.logger.warning('Benchmark did not get a logger passed. Using default logger.')

        self.run_datetime = run_datetime if run_datetime else DATETIME_STR
        self.ctx = ctx if ctx is not None else PhaseContext.background()
        self.out = out
        self.runtime = 0
        self.results: List[PhaseResult] = []

        self.store = store if store is not None else self._create_store()
        self.logger.status(f'Instantiated benchmark for backend {self.store.name} '
                           f'({self.config.worker_count} workers, {self.config.phase_duration:g}s per phase)')

    def _create_store(self) -> KeyValueStore:
        options = StoreOptions(
            target=self.config.target,
            idle_pool_size=self.config.idle_pool_size,
            max_connections=self.config.worker_count,
        )
        try:
            return StoreRegistry.create(self.config.backend, options)
        except ValueError as e:
            raise ConfigurationError(
                str(e),
                parameter="backend",
                expected=StoreRegistry.get_all_names(),
                actual=self.config.backend,
            ) from e

    def setup_store(self) -> None:
        self.logger.verbose(f'Setting up backend {self.store.name}')
        try:
            self.store.setup(self.ctx)
        except (StoreSetupError, DeadlineExceeded):
            raise
        except Exception as e:
            raise StoreSetupError(
                f"Setup of backend {self.store.name} failed: {e}",
                backend=self.store.name,
            ) from e

    def run_phase(self, phase: str) -> PhaseResult:
        workload = WORKLOADS[phase]
        with phase_progress(f"{phase} phase", self.config.phase_duration, logger=self.logger) as update:
            result = run_phase(
                self.ctx,
                phase,
                workload,
                self.store,
                worker_count=self.config.worker_count,
                duration=self.config.phase_duration,
                logger=self.logger,
                progress=update,
            )
        self.logger.verboser(f'Phase {phase} finished: {result}')
        return result

    def _run(self) -> EXIT_CODE:
        try:
            self.setup_store()
        except DeadlineExceeded:
            self.logger.warning('Run cancelled during backend setup')
            return EXIT_CODE.INTERRUPTED
        print_lines([format_backend_line(self.store.name)], self.out)

        for phase in self.config.phases:
            if self.ctx.done():
                self.logger.warning(f'Run cancelled before the {phase} phase')
                return EXIT_CODE.INTERRUPTED

            print_lines([format_phase_header(phase)], self.out)
            result = self.run_phase(phase)
            self.results.append(result)
            print_lines(format_phase_summary(result), self.out)

            if result.err:
                self.logger.result(f'{phase}: {result.err} error(s) out of {result.total} attempts')
            else:
                self.logger.result(f'{phase}: {result.total} attempts without errors')

            # The root context only ends by cancellation
            if self.ctx.done():
                self.logger.warning(f'Run cancelled during the {phase} phase')
                return EXIT_CODE.INTERRUPTED

        return EXIT_CODE.SUCCESS

    def run(self) -> EXIT_CODE:
        start_time = time.time()
        try:
            return self._run()
        finally:
            self.runtime = time.time() - start_time
            try:
                self.store.close()
            except Exception as e:
                self.logger.warning(f'Failed to close backend {self.store.name}: {e}')

    @property
    def metadata(self) -> Dict[str, Any]:
        return {
            'run_datetime': self.run_datetime,
            'backend': self.store.name,
            'config': self.config.as_dict(),
            'runtime': self.runtime,
            'phases': [result.as_dict() for result in self.results],
        }

    def write_results(self, path: Optional[str] = None) -> Optional[str]:
        path = path or self.config.output
        if not path:
            return None
        try:
            write_json(path, self.metadata)
        except OSError as e:
            raise KVBenchException(f"Failed to write results to {path}: {e}") from e
        self.logger.status(f'Results written to: {path}')
        return path
