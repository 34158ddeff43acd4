"""Tests for the external loader runner."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, patch

import anyio
import pytest

from diavgeia.exceptions import LoaderError
from diavgeia.output.loader import run_loader

DATASET = "http://localhost:3030/diavgeia"
PATH = Path("/tmp/ABC123_1.n3")


def _completed(returncode: int, stdout: bytes = b"", stderr: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["s-post"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRunLoader:
    @pytest.mark.anyio
    async def test_returns_stdout(self) -> None:
        mock_run = AsyncMock(return_value=_completed(0, stdout=b"200 OK\n"))
        with patch("diavgeia.output.loader.anyio.run_process", mock_run):
            output = await run_loader("s-post", DATASET, "default", PATH, timeout=5)

        assert output == "200 OK\n"
        mock_run.assert_awaited_once_with(["s-post", DATASET, "default", str(PATH)], check=False)

    @pytest.mark.anyio
    async def test_nonzero_exit_is_retryable(self) -> None:
        mock_run = AsyncMock(return_value=_completed(1, stderr=b"503 Service Unavailable"))
        with (
            patch("diavgeia.output.loader.anyio.run_process", mock_run),
            pytest.raises(LoaderError) as exc_info,
        ):
            await run_loader("s-post", DATASET, "default", PATH, timeout=5)

        assert exc_info.value.retryable is True
        assert "503" in str(exc_info.value)

    @pytest.mark.anyio
    async def test_missing_executable_is_fatal(self) -> None:
        mock_run = AsyncMock(side_effect=FileNotFoundError("s-post"))
        with (
            patch("diavgeia.output.loader.anyio.run_process", mock_run),
            pytest.raises(LoaderError) as exc_info,
        ):
            await run_loader("s-post", DATASET, "default", PATH, timeout=5)

        assert exc_info.value.retryable is False

    @pytest.mark.anyio
    async def test_timeout_is_retryable(self) -> None:
        async def hang(*args, **kwargs) -> subprocess.CompletedProcess:
            await anyio.sleep(10)
            return _completed(0)

        with (
            patch("diavgeia.output.loader.anyio.run_process", hang),
            pytest.raises(LoaderError) as exc_info,
        ):
            await run_loader("s-post", DATASET, "default", PATH, timeout=0.05)

        assert exc_info.value.retryable is True
        assert "timed out" in str(exc_info.value)

    @pytest.mark.anyio
    @pytest.mark.skipif(shutil.which("echo") is None, reason="echo not available")
    async def test_real_process(self, tmp_path: Path) -> None:
        path = tmp_path / "ABC123_1.n3"
        output = await run_loader(shutil.which("echo"), DATASET, "default", path, timeout=10)
        assert output.strip() == f"{DATASET} default {path}"

    @pytest.mark.anyio
    async def test_real_missing_executable(self, tmp_path: Path) -> None:
        with pytest.raises(LoaderError) as exc_info:
            await run_loader(str(tmp_path / "no-such-loader"), DATASET, "default", tmp_path / "x.n3", timeout=10)
        assert exc_info.value.retryable is False
