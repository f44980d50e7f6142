"""Async ffmpeg process runner with streamed stderr and a deadline."""

import asyncio
import codecs
import logging
import shlex
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.config import ProcessConfig
from ..core.exceptions import ExternalProcessError, ProcessTimeoutError

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str], None]


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and full diagnostic text of one invocation."""

    command: List[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class FFmpegRunner:
    """Spawns ffmpeg and collects its stderr."""

    def __init__(
        self,
        binary: Optional[str] = None,
        timeout: Optional[float] = ProcessConfig.DEFAULT_TIMEOUT_SECONDS,
    ):
        self.binary = ProcessConfig.ffmpeg_binary(binary)
        self.timeout = timeout

    async def run(
        self, args: List[str], on_chunk: Optional[ChunkCallback] = None
    ) -> ProcessResult:
        """Run ffmpeg with ``args`` and wait for it to exit.

        ``on_chunk`` receives each decoded stderr chunk as it arrives.

        Raises:
            ExternalProcessError: the binary could not be started.
            ProcessTimeoutError: the deadline passed; the process was killed.
        """
        command = [self.binary, *args]
        logger.debug("Running: %s", " ".join(shlex.quote(part) for part in command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExternalProcessError(
                f"Failed to start {self.binary}", command=command, details=str(e)
            )

        chunks: List[str] = []
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        async def pump() -> int:
            while True:
                data = await process.stderr.read(ProcessConfig.STDERR_CHUNK_SIZE)
                if not data:
                    break
                text = decoder.decode(data)
                if text:
                    chunks.append(text)
                    if on_chunk is not None:
                        on_chunk(text)
            tail = decoder.decode(b"", final=True)
            if tail:
                chunks.append(tail)
            return await process.wait()

        try:
            returncode = await asyncio.wait_for(pump(), timeout=self.timeout)
        except asyncio.TimeoutError:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            raise ProcessTimeoutError(
                f"{self.binary} did not finish within {self.timeout:g}s",
                timeout=self.timeout,
                command=command,
                output="".join(chunks),
            )

        return ProcessResult(command=command, returncode=returncode, output="".join(chunks))
