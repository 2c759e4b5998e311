import logging
import subprocess
import sys

from . import config as app_config

logger = logging.getLogger(__name__)


def convert_to_binary(elf_path, bin_path, objcopy=app_config.OBJCOPY_EXECUTABLE):
    """
    Flattens the ELF image into a raw binary QEMU can load with -kernel.

    Raises:
        subprocess.CalledProcessError: If objcopy exits with a nonzero status.
        FileNotFoundError: If objcopy is not installed.
    """
    cmd = [objcopy, "-O", "binary", elf_path, bin_path]
    logger.debug("Running %s", subprocess.list2cmdline(cmd))
    subprocess.run(cmd, check=True)


def run_qemu(args):
    """Executes the QEMU command with inherited stdio and returns its exit status."""
    print("--- Starting QEMU with the following command ---", flush=True)
    formatted_command = f"{args[0]} \\\n"
    formatted_command += " \\\n".join([f"    {subprocess.list2cmdline([arg])}" for arg in args[1:]])
    print(formatted_command, flush=True)
    print("-" * 50, flush=True)

    try:
        process = subprocess.Popen(args)
        process.wait()
    except FileNotFoundError:
        print(f"Error: QEMU executable '{args[0]}' not found.", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    logger.debug("QEMU exited with status %d", process.returncode)
    return process.returncode
