import subprocess
from unittest.mock import Mock

import pytest

from qemu_runner import process


@pytest.fixture
def fake_popen(monkeypatch):
    """Replaces subprocess.Popen with a mock whose process exits with status 0."""
    popen = Mock()
    popen.return_value.returncode = 0
    monkeypatch.setattr(process.subprocess, "Popen", popen)
    return popen


def test_convert_to_binary_runs_objcopy(monkeypatch):
    run = Mock()
    monkeypatch.setattr(process.subprocess, "run", run)

    process.convert_to_binary("kernel.elf", "kernel.bin", objcopy="llvm-objcopy")

    run.assert_called_once_with(["llvm-objcopy", "-O", "binary", "kernel.elf", "kernel.bin"], check=True)


def test_convert_to_binary_propagates_failure(monkeypatch):
    run = Mock(side_effect=subprocess.CalledProcessError(1, ["objcopy"]))
    monkeypatch.setattr(process.subprocess, "run", run)

    with pytest.raises(subprocess.CalledProcessError):
        process.convert_to_binary("kernel.elf", "kernel.bin")


def test_run_qemu_passes_args_unchanged(fake_popen):
    args = ["qemu-system-aarch64", "-append", "a b", "-S"]
    assert process.run_qemu(args) == 0
    fake_popen.assert_called_once_with(args)
    fake_popen.return_value.wait.assert_called_once_with()


def test_run_qemu_returns_exit_status(fake_popen):
    fake_popen.return_value.returncode = 3
    assert process.run_qemu(["qemu-system-aarch64"]) == 3


def test_run_qemu_prints_command(fake_popen, capsys):
    process.run_qemu(["qemu-system-aarch64", "-m", "2G", "-append", "--init=/bin/bash --rootfs=ext4fs"])
    out = capsys.readouterr().out
    assert "--- Starting QEMU with the following command ---" in out
    assert "qemu-system-aarch64 \\\n" in out
    assert '    "--init=/bin/bash --rootfs=ext4fs"' in out


def test_run_qemu_missing_executable(monkeypatch, capsys):
    monkeypatch.setattr(process.subprocess, "Popen", Mock(side_effect=FileNotFoundError))
    assert process.run_qemu(["no-such-qemu"]) == 1
    assert "Error: QEMU executable 'no-such-qemu' not found." in capsys.readouterr().err


def test_run_qemu_interrupted(fake_popen):
    fake_popen.return_value.wait.side_effect = KeyboardInterrupt
    assert process.run_qemu(["qemu-system-aarch64"]) == 130
