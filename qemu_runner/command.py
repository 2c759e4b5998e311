from . import config as app_config


def binary_path_for(elf_path):
    """Returns the path of the flat binary written next to the ELF image."""
    if elf_path.endswith(app_config.ELF_SUFFIX):
        elf_path = elf_path[:-len(app_config.ELF_SUFFIX)]
    return elf_path + app_config.BIN_SUFFIX


def build_qemu_args(config, boot, forward, kernel, qemu_executable=app_config.QEMU_EXECUTABLE):
    """
    Constructs the list of arguments for the QEMU command.

    Machine settings come first in a fixed order, then the optional flags, the
    kernel and its command line, and finally the forwarded arguments exactly as
    they were given. Every value is a single argument; nothing is split or quoted.
    """
    args = [
        qemu_executable, "-M", config.machine, "-initrd", config.initrd,
        "-cpu", config.cpu, "-m", config.memory, "-smp", config.smp,
    ]
    if config.nographic:
        args.append(app_config.NOGRAPHIC_OPTION)
    if config.gdb_stub:
        args.append(app_config.GDB_STUB_OPTION)
    args.extend(["-kernel", kernel, "-append", boot.render()])
    args.extend(forward)
    return args
