from __future__ import annotations

import subprocess
import tempfile
from typing import Sequence

from songtag import logger as log
from songtag.errors import ToolError


def _stderr_text(stderr) -> str:
    if not stderr:
        return ""
    if isinstance(stderr, bytes):
        return stderr.decode("utf-8", errors="replace")
    return str(stderr)


def run(argv: Sequence[str]) -> bytes:
    """Run one command and return its raw stdout.

    Raises ToolError if the command cannot be started or exits non-zero.
    """
    argv = [str(a) for a in argv]
    log.debug(f"[RUN] {argv!r}")
    try:
        p = subprocess.run(argv, check=False, capture_output=True)
    except OSError as e:
        raise ToolError(argv, None, repr(e)) from e

    if p.returncode != 0:
        raise ToolError(argv, p.returncode, _stderr_text(p.stderr))
    return p.stdout or b""


def run_piped(first: Sequence[str], second: Sequence[str]) -> bytes:
    """Run `first | second` without a shell and return the stdout of `second`.

    Both commands must exit zero.
    """
    first = [str(a) for a in first]
    second = [str(a) for a in second]
    log.debug(f"[RUN] {first!r} | {second!r}")

    # The producer's stderr goes to a file so it can never fill a pipe and stall
    # the producer while we wait on the consumer.
    with tempfile.TemporaryFile() as producer_errfile:
        try:
            producer = subprocess.Popen(
                first, stdout=subprocess.PIPE, stderr=producer_errfile
            )
        except OSError as e:
            raise ToolError(first, None, repr(e)) from e

        out, consumer_err, consumer = _feed(producer, second)

        producer_errfile.seek(0)
        producer_err = producer_errfile.read()

    if producer.returncode != 0:
        raise ToolError(first, producer.returncode, _stderr_text(producer_err))
    if consumer.returncode != 0:
        raise ToolError(second, consumer.returncode, _stderr_text(consumer_err))
    return out or b""


def _feed(producer, second):
    """Start `second` reading from the producer's stdout and wait for both."""
    try:
        consumer = subprocess.Popen(
            second,
            stdin=producer.stdout,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        producer.kill()
        producer.wait()
        raise ToolError(second, None, repr(e)) from e

    # Let the producer see SIGPIPE if the consumer exits early.
    if producer.stdout is not None:
        producer.stdout.close()

    out, consumer_err = consumer.communicate()
    producer.wait()
    return out, consumer_err, consumer
