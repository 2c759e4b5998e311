"""
Machine settings and kernel command line state built up by the merge engine.
"""

from dataclasses import dataclass

from . import config as app_config


@dataclass
class MachineConfig:
    """The QEMU machine parameters that can be overridden from the command line."""
    machine: str
    initrd: str
    cpu: str
    memory: str
    smp: str
    nographic: bool
    gdb_stub: bool

    @classmethod
    def defaults(cls):
        """Returns a fresh configuration holding the built-in defaults."""
        return cls(
            machine=app_config.MACHINE_TYPE,
            initrd=app_config.INITRD,
            cpu=app_config.CPU_MODEL,
            memory=app_config.MEMORY,
            smp=app_config.SMP_CORES,
            nographic=app_config.NOGRAPHIC,
            gdb_stub=app_config.GDB_STUB,
        )


@dataclass(frozen=True)
class KeyValue:
    """A named kernel argument such as ``--rootfs=ext4fs``."""
    key: str
    value: str

    @classmethod
    def parse(cls, token):
        key, _, value = token.partition("=")
        return cls(key, value)

    def render(self):
        # An empty value leaves the bare key, e.g. "--init=" becomes "--init".
        return f"{self.key}={self.value}" if self.value else self.key


@dataclass(frozen=True)
class Literal:
    """An opaque command line installed by -append. It never matches a key."""
    text: str

    def render(self):
        return self.text


class BootCommandLine:
    """
    The ordered list of arguments handed to the kernel via -append.

    Entries are either KeyValue pairs, which can be updated individually, or a
    single Literal left behind by a wholesale replacement. Keyed updates keep
    working after a replacement and are appended behind the literal.

    Attributes:
        entries (list): The KeyValue and Literal entries in command line order.
    """

    def __init__(self, entries=None):
        self.entries = list(entries or [])

    @classmethod
    def defaults(cls):
        """Returns a command line holding the default boot arguments."""
        return cls(KeyValue.parse(token) for token in app_config.BOOT_ARGS)

    def upsert(self, key, value):
        """
        Replaces the first entry with the given key in place, or appends a new one.

        Only the first match is replaced, so when several entries share a key
        (the default --automount entries do) the later ones are left untouched.
        """
        new_entry = KeyValue(key, value)
        for i, entry in enumerate(self.entries):
            if isinstance(entry, KeyValue) and entry.key == key:
                self.entries[i] = new_entry
                return
        self.entries.append(new_entry)

    def replace_all(self, text):
        """Discards every entry and installs the given text as a single literal."""
        self.entries = [Literal(text)]

    def render(self):
        """Renders the entries into the single string passed to -append."""
        if len(self.entries) == 1:
            return self.entries[0].render()
        return " ".join(entry.render() for entry in self.entries)

    def __repr__(self):
        return f"BootCommandLine({self.entries!r})"
