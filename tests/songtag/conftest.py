import base64
import json
import os
from typing import List, Optional

import pytest

from songtag.config import ProcessorConfig
from songtag.io import _run


class _Completed:
    def __init__(self, returncode=0, stdout=b"", stderr=b""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class _Stream:
    """Just enough of a pipe for _run.run_piped."""

    def __init__(self, data: bytes = b""):
        self.data = data
        self.closed = False

    def read(self):
        return self.data

    def close(self):
        self.closed = True


class FakeTools:
    """Pretends to be ffmpeg, ffprobe, songrec, base64 and kid3-cli.

    Every argv that reaches subprocess is recorded in `calls`.
    """

    def __init__(self):
        self.calls: List[list] = []
        self.fail = set()
        self.create_clip = True
        self.clip_duration: Optional[str] = "45.000000"
        self.songrec_output = json.dumps(
            {"track": {"title": "Imagine", "subtitle": "John Lennon"}}
        ).encode("utf-8")

    def tool_names(self):
        return [os.path.basename(c[0]) for c in self.calls]

    def set_response(self, response):
        self.songrec_output = json.dumps(response, ensure_ascii=False).encode("utf-8")

    # subprocess.run replacement
    def run(self, argv, check=False, capture_output=False, **_kw):
        argv = list(argv)
        self.calls.append(argv)
        name = os.path.basename(argv[0])
        if name in self.fail:
            return _Completed(1, b"", f"{name}: something broke".encode())

        if name == "ffmpeg":
            if self.create_clip:
                with open(argv[-1], "wb") as fh:
                    fh.write(b"ID3" + b"\0" * 64)
            return _Completed()
        if name == "ffprobe":
            out = b"" if self.clip_duration is None else self.clip_duration.encode()
            return _Completed(0, out + b"\n")
        if name == "songrec":
            return _Completed(0, self.songrec_output)
        if name == "kid3-cli":
            return _Completed()
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    # subprocess.Popen replacement
    def popen(self, argv, stdin=None, stdout=None, stderr=None, **_kw):
        argv = list(argv)
        self.calls.append(argv)
        return _FakeProcess(self, argv, stdin)


class _FakeProcess:
    def __init__(self, tools: FakeTools, argv, stdin):
        self.args = argv
        self.returncode = None
        name = os.path.basename(argv[0])
        self._failed = name in tools.fail
        err = f"{name}: something broke".encode() if self._failed else b""
        self.stderr = _Stream(err)

        if name == "songrec":
            self.stdout = _Stream(b"" if self._failed else tools.songrec_output)
        elif name == "base64":
            data = stdin.data if stdin is not None else b""
            self.stdout = _Stream(base64.b64encode(data))
        else:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

    def communicate(self):
        self.returncode = 1 if self._failed else 0
        return self.stdout.data, self.stderr.data

    def wait(self):
        if self.returncode is None:
            self.returncode = 1 if self._failed else 0
        return self.returncode

    def kill(self):
        self.returncode = -9


@pytest.fixture
def fake_tools(monkeypatch):
    tools = FakeTools()
    monkeypatch.setattr(_run.subprocess, "run", tools.run)
    monkeypatch.setattr(_run.subprocess, "Popen", tools.popen)
    return tools


@pytest.fixture
def scratch_dir(tmp_path):
    return tmp_path / "scratch"


@pytest.fixture
def config(scratch_dir):
    return ProcessorConfig(temp_dir=str(scratch_dir), trim_offset=55, trim_length=45)


@pytest.fixture
def song(tmp_path):
    f = tmp_path / "song.mp3"
    f.write_bytes(b"ID3" + b"0" * 128)
    return f


@pytest.fixture
def scratch_files(scratch_dir):
    def _list():
        if not scratch_dir.exists():
            return []
        return sorted(p.name for p in scratch_dir.iterdir())

    return _list
