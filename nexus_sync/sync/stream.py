"""
Streamed copy of one artifact from the source to the destination.

The download runs on a producer thread and feeds a bounded in-memory pipe; the
upload request reads its body from the same pipe. Bytes are forwarded as they
arrive, and at most ``buffer_chunks`` chunks are held in memory per transfer.
"""

import logging
import threading
from collections import deque
from typing import Deque, Iterator, Optional

from ..api.nexus_client import NexusClient
from ..exceptions import CancellationError, NexusSyncError, PipeClosedError, TransferError
from ..models.results import TransferTask
from ..utils.constants import DEFAULT_CHUNK_SIZE, DEFAULT_PIPE_CHUNKS
from .cancel import CancelSignal


class BytePipe:
    """
    Bounded single-producer/single-consumer byte channel.

    ``write`` blocks while the buffer is full and ``read`` blocks while it is
    empty. The writer ends the stream with ``close_writer()``; passing an error
    makes the reader raise it instead of seeing end-of-input. The reader gives
    up with ``close_reader()``, after which writes raise PipeClosedError.
    """

    def __init__(self, max_chunks: int = DEFAULT_PIPE_CHUNKS) -> None:
        if max_chunks < 1:
            raise ValueError(f"Pipe buffer must hold at least one chunk, got {max_chunks}")
        self.max_chunks = max_chunks
        self._chunks: Deque[bytes] = deque()
        self._cond = threading.Condition()
        self._writer_closed = False
        self._reader_closed = False
        self._error: Optional[BaseException] = None

    def write(self, data: bytes) -> None:
        """
        Append a chunk, blocking while the buffer is full.

        Raises:
            PipeClosedError: If either end of the pipe has been closed
        """
        if not data:
            return
        with self._cond:
            while len(self._chunks) >= self.max_chunks and not self._reader_closed:
                self._cond.wait()
            if self._reader_closed:
                raise PipeClosedError("read end of the pipe is closed")
            if self._writer_closed:
                raise PipeClosedError("write end of the pipe is closed")
            self._chunks.append(data)
            self._cond.notify_all()

    def close_writer(self, error: Optional[BaseException] = None) -> None:
        """
        End the stream, optionally with an error for the reader.

        Only the first call has an effect.
        """
        with self._cond:
            if self._writer_closed:
                return
            self._writer_closed = True
            self._error = error
            self._cond.notify_all()

    def read(self) -> bytes:
        """
        Take the next chunk, blocking while the buffer is empty.

        Returns:
            The next chunk, or ``b""`` at end of input

        Raises:
            PipeClosedError: If the read end has been closed
            BaseException: The error the writer closed the pipe with, once buffered chunks are drained
        """
        with self._cond:
            while not self._chunks and not self._writer_closed and not self._reader_closed:
                self._cond.wait()
            if self._reader_closed:
                raise PipeClosedError("read end of the pipe is closed")
            if self._chunks:
                chunk = self._chunks.popleft()
                self._cond.notify_all()
                return chunk
            if self._error is not None:
                raise self._error
            return b""

    def close_reader(self) -> None:
        """Stop reading; a blocked or later ``write`` raises PipeClosedError."""
        with self._cond:
            self._reader_closed = True
            self._chunks.clear()
            self._cond.notify_all()

    @property
    def error(self) -> Optional[BaseException]:
        """Error the writer closed the pipe with, if any."""
        with self._cond:
            return self._error

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read()
            if not chunk:
                return
            yield chunk


class StreamCopier:
    """Copies one artifact from its download URL to its upload URL."""

    def __init__(
        self,
        source_client: NexusClient,
        destination_client: NexusClient,
        logger: logging.Logger,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        buffer_chunks: int = DEFAULT_PIPE_CHUNKS,
    ) -> None:
        """
        Initialize the copier.

        Args:
            source_client: Client used to download (source credentials)
            destination_client: Client used to upload (destination credentials)
            logger: Logger for per-attempt diagnostics
            chunk_size: Size of chunks read from the download response
            buffer_chunks: Number of chunks buffered between download and upload
        """
        self.source_client = source_client
        self.destination_client = destination_client
        self.logger = logger
        self.chunk_size = chunk_size
        self.buffer_chunks = buffer_chunks

    def transfer(self, task: TransferTask, cancel: Optional[CancelSignal] = None) -> None:
        """
        Perform one transfer attempt.

        Every call uses a fresh pipe, a fresh download and a fresh upload.

        Args:
            task: Item and destination locator to copy
            cancel: Optional signal observed before starting and between chunks

        Raises:
            CancellationError: If the signal was cancelled
            TransferError: If the download or the upload failed
        """
        cancel = cancel if cancel is not None else CancelSignal()
        cancel.raise_if_cancelled(f"transfer of {task.path}")

        pipe = BytePipe(self.buffer_chunks)
        producer = threading.Thread(
            target=self._produce,
            args=(task.download_url, pipe, cancel),
            name=f"download:{task.path}",
            daemon=True,
        )
        producer.start()

        try:
            self.destination_client.upload(task.destination_url, iter(pipe))
        except (CancellationError, TransferError):
            # Raised by the pipe: the download side failed or was cancelled
            raise
        except NexusSyncError as e:
            raise TransferError(f"Upload of {task.path} to {task.destination_url} failed: {e}") from e
        finally:
            pipe.close_reader()
            producer.join()

        self.logger.debug("Copied %s to %s", task.path, task.destination_url)

    def _produce(self, url: str, pipe: BytePipe, cancel: CancelSignal) -> None:
        """Download ``url`` into ``pipe`` and close the write end."""
        error: Optional[BaseException] = None
        try:
            with self.source_client.stream_download(url) as response:
                for chunk in response.iter_bytes(chunk_size=self.chunk_size):
                    cancel.raise_if_cancelled(f"download of {url}")
                    pipe.write(chunk)
        except PipeClosedError:
            self.logger.debug("Upload stopped reading, abandoning download of %s", url)
            return
        except CancellationError as e:
            error = e
        except NexusSyncError as e:
            error = TransferError(f"Download of {url} failed: {e}")
            error.__cause__ = e
        except Exception as e:  # surfaced to the uploading thread through the pipe
            error = e

        if error is not None:
            self.logger.debug("Download of %s failed: %s", url, error)
        pipe.close_writer(error)


__all__ = ["BytePipe", "StreamCopier"]
