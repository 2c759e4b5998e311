import argparse
import logging
import os
import subprocess
import sys

from . import command, config as app_config, logging_utils, process
from .merge import UsageError, merge
from .options import BootCommandLine, MachineConfig

EPILOG = """\
Recognized overrides (everything else is passed to QEMU unchanged):
  -M, -initrd, -cpu, -m, -smp VALUE   replace a machine setting (also -X=VALUE)
  -nographic / -display...            toggle the graphical display
  -s                                  open a GDB server on tcp::1234
  -append TEXT                        replace the whole kernel command line
  --init=, --init-arg=, --rootfs=, --automount=VALUE
                                      set a single kernel argument

Environment:
  QEMU_RUNNER_QEMU        QEMU executable (default: qemu-system-aarch64)
  QEMU_RUNNER_OBJCOPY     objcopy executable (default: aarch64-none-elf-objcopy)
  QEMU_RUNNER_DEBUG_FILE  write debug logging to this file
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="qemu-runner",
        usage="%(prog)s [-h] elf [qemu or kernel command line overrides ...]",
        description="Convert a kernel ELF image to a flat binary and boot it under QEMU.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("elf", help="Path to the compiled kernel ELF image to run.")
    return parser


def run(args, overrides, qemu_executable, objcopy_executable, parser):
    """Merges the overrides, converts the image and launches QEMU. Returns QEMU's exit status."""
    try:
        config, boot, forward = merge(MachineConfig.defaults(), BootCommandLine.defaults(), overrides)
    except UsageError as e:
        parser.error(str(e))

    bin_path = command.binary_path_for(args.elf)
    print(f"Info: Converting '{args.elf}' to flat binary '{bin_path}'.", flush=True)
    try:
        process.convert_to_binary(args.elf, bin_path, objcopy=objcopy_executable)
    except subprocess.CalledProcessError as e:
        print(f"Error: Failed to convert '{args.elf}' to '{bin_path}' (objcopy exited with status {e.returncode}).", file=sys.stderr)
        sys.exit(e.returncode or 1)
    except FileNotFoundError:
        print(f"Error: objcopy executable '{objcopy_executable}' not found.", file=sys.stderr)
        sys.exit(1)

    qemu_args = command.build_qemu_args(config, boot, forward, bin_path, qemu_executable=qemu_executable)
    return process.run_qemu(qemu_args)


def main(argv=None):
    """Parses command-line arguments and launches the VM."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    # Only the image path is ours; everything after it, "--" included, belongs to QEMU.
    args = parser.parse_args(argv[:1])

    qemu_executable = os.environ.get(app_config.QEMU_EXECUTABLE_ENV) or app_config.QEMU_EXECUTABLE
    objcopy_executable = os.environ.get(app_config.OBJCOPY_EXECUTABLE_ENV) or app_config.OBJCOPY_EXECUTABLE

    debug_handler = None
    if debug_file := os.environ.get(app_config.DEBUG_FILE_ENV):
        debug_handler = logging_utils.configure_debug_log(debug_file)

    try:
        sys.exit(run(args, argv[1:], qemu_executable, objcopy_executable, parser))
    finally:
        if debug_handler:
            logging.getLogger(logging_utils.PACKAGE_LOGGER_NAME).removeHandler(debug_handler)
            debug_handler.close()
