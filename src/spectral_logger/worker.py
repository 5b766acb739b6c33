"""Background consumer that moves lines from the channel to the outputs.

State machine::

    STARTING --open ok--> RUNNING --channel closed--> DRAINING --> STOPPED
        |                    |                           |
        +--open failed-------+------- cancel() ----------+-----> STOPPED

The worker thread is the only code touching the sink and the console.
Lines are processed one at a time in channel order.
"""

import threading
from enum import Enum

from spectral_logger.channel import LogChannel
from spectral_logger.console import ConsoleRenderer
from spectral_logger.diagnostics import get_logger
from spectral_logger.exceptions import LoggerInitializationError, SinkError
from spectral_logger.sink import SinkWriter

logger = get_logger(__name__)


class WorkerState(Enum):
    """Lifecycle states of a WorkerLoop."""

    STARTING = "starting"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class WorkerLoop:
    """Single consumer of a LogChannel feeding the console and the sink.

    Attributes:
        channel: Source of formatted lines
        sink: File writer owned by this worker
        console: Optional console echo
        state: Current lifecycle state

    """

    def __init__(
        self,
        channel: LogChannel,
        sink: SinkWriter,
        console: ConsoleRenderer | None = None,
        name: str = "spectral-logger-worker",
    ) -> None:
        """Initialize a worker in the STARTING state; call start() to run."""
        self.channel = channel
        self.sink = sink
        self.console = console
        self.name = name
        self.state = WorkerState.STARTING
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been requested."""
        return self._cancel.is_set()

    def is_alive(self) -> bool:
        """Whether the worker thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Open the sink and start the worker thread.

        Raises:
            LoggerInitializationError: If the sink cannot be opened. The
                worker is STOPPED and the channel closed.

        """
        try:
            self.sink.open()
        except SinkError as e:
            self._set_state(WorkerState.STOPPED)
            self.channel.close()
            self.channel.resolve_drain(False)
            raise LoggerInitializationError(e.message, e.target) from e

        self._set_state(WorkerState.RUNNING)
        self._thread = threading.Thread(
            target=self._run, name=self.name, daemon=True
        )
        self._thread.start()

    def _set_state(self, state: WorkerState) -> None:
        logger.debug(
            "Worker %s: %s -> %s", self.name, self.state.value, state.value
        )
        self.state = state

    def _process(self, line: str) -> None:
        if self.console is not None:
            try:
                self.console.render(line)
            except Exception:
                logger.debug("Console render failed", exc_info=True)
        self.sink.write(line)

    def _run(self) -> None:
        logger.debug("Log processor started for %s", self.sink.path)
        try:
            while True:
                if self.channel.closed and self.state is WorkerState.RUNNING:
                    self._set_state(WorkerState.DRAINING)
                line = self.channel.receive(self._cancel)
                if line is None:
                    if (
                        not self._cancel.is_set()
                        and self.state is WorkerState.RUNNING
                    ):
                        self._set_state(WorkerState.DRAINING)
                    break
                try:
                    self._process(line)
                except Exception:
                    logger.exception("Error processing log entry")
        finally:
            if self._cancel.is_set():
                logger.debug("Log processing canceled")
                self.sink.close()
                self.channel.resolve_drain(False)
            else:
                self.sink.flush()
                self.sink.close()
                self.channel.resolve_drain(True)
            self._set_state(WorkerState.STOPPED)

    def cancel(self, wait: bool = True) -> None:  # noqa: FBT001, FBT002
        """Stop the worker without draining queued lines.

        Args:
            wait: Join the worker thread before returning

        """
        self._cancel.set()
        self.channel.interrupt()
        if wait:
            self.join()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit.

        No-op when called from the worker thread itself or before start().
        """
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout)
