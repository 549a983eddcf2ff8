import logging
import queue
import threading

logger = logging.getLogger(__name__)


class MirrorWorker:
    """
    Runs remote attendance writes on a background thread.

    `submit` returns immediately; jobs are handled one at a time in submission
    order. The thread is started on first use and is a daemon, so a station
    that never talks to the remote store never starts one.

    Attributes:
        handler: Callable invoked with each submitted job's arguments.
        jobs (queue.Queue): Pending argument tuples.
    """

    def __init__(self, handler, name: str = "walkathon-mirror"):
        self.handler = handler
        self.name = name
        self.jobs: queue.Queue[tuple] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def __repr__(self):
        return f"MirrorWorker({self.jobs.qsize()} pending)"

    @property
    def pending(self) -> int:
        return self.jobs.qsize()

    def submit(self, *args) -> None:
        """Queue a job without waiting for it to run."""
        self._ensure_started()
        self.jobs.put(args)

    def flush(self) -> None:
        """Block until every submitted job has been handled."""
        if self._thread is not None:
            self.jobs.join()

    def _ensure_started(self) -> None:
        with self._lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._run, name=self.name, daemon=True
                )
                self._thread.start()

    def _run(self) -> None:
        while True:
            args = self.jobs.get()
            try:
                self.handler(*args)
            except Exception:
                # keep the worker alive for the jobs behind this one
                logger.exception("Mirror job %r failed", args)
            finally:
                self.jobs.task_done()
