# --- Executable Paths ---

# The QEMU system emulator used to boot the kernel.
QEMU_EXECUTABLE = "qemu-system-aarch64"
# The objcopy from the bare-metal AArch64 toolchain, used to flatten the ELF image.
OBJCOPY_EXECUTABLE = "aarch64-none-elf-objcopy"

# Environment variables that override the executables above and enable debug logging.
# Every unrecognized command-line token is handed to QEMU, so these cannot be flags.
QEMU_EXECUTABLE_ENV = "QEMU_RUNNER_QEMU"
OBJCOPY_EXECUTABLE_ENV = "QEMU_RUNNER_OBJCOPY"
DEBUG_FILE_ENV = "QEMU_RUNNER_DEBUG_FILE"

# Suffix stripped from the input image and suffix of the flat binary written next to it.
ELF_SUFFIX = ".elf"
BIN_SUFFIX = ".bin"

# --- Machine Defaults ---

# The machine QEMU emulates; GICv3 is required by the kernel's interrupt driver.
MACHINE_TYPE = "virt,gic-version=3"
# The root filesystem image handed to the guest as an initial ramdisk.
INITRD = "moss.img"
# The CPU model to emulate.
CPU_MODEL = "cortex-a72"
# The default amount of RAM to allocate to the guest.
MEMORY = "2G"
# The default number of virtual CPU cores, kept as a string since it goes straight to argv.
SMP_CORES = "4"
# Run without a graphical window; the serial console is multiplexed onto stdio.
NOGRAPHIC = True
# Open a GDB server on tcp::1234 (QEMU's -s).
GDB_STUB = True

# --- Kernel Command Line ---

# Passed to the kernel via -append, in this order, unless overridden.
BOOT_ARGS = [
    "--init=/bin/bash",
    "--init-arg=-i",
    "--rootfs=ext4fs",
    "--automount=/dev,devfs",
    "--automount=/tmp,tmpfs",
    "--automount=/proc,procfs",
]

# --- Recognized Options ---

# Options that overwrite a machine setting. Each accepts "-X value" and "-X=value".
MACHINE_OPTIONS = {
    "-M": "machine",
    "-initrd": "initrd",
    "-cpu": "cpu",
    "-m": "memory",
    "-smp": "smp",
}

# Options that replace or update the kernel command line.
APPEND_OPTION = "-append"
BOOT_KEYS = ("--init", "--init-arg", "--rootfs", "--automount")

# Flags that toggle machine settings.
NOGRAPHIC_OPTION = "-nographic"
GDB_STUB_OPTION = "-s"
# -display is incompatible with -nographic; any spelling starting with these clears it.
DISPLAY_PREFIXES = ("-display", "--display")
