import logging

from . import config as app_config

# Set up a logger for this module.
logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Raised when the command line cannot be merged, e.g. an option is missing its value."""


class ArgumentCursor:
    """
    Walks the caller's arguments left to right, one option at a time.

    A recognized option consumes one token when its value is inline ("-m=4G")
    and two when the value is the following token ("-m 4G").
    """

    def __init__(self, args):
        self._args = list(args)
        self._pos = 0

    def __bool__(self):
        return self._pos < len(self._args)

    def next(self):
        """Returns the next token and advances past it."""
        token = self._args[self._pos]
        self._pos += 1
        return token

    def take_value(self, option):
        """Consumes the token following an option as its value."""
        if not self:
            raise UsageError(f"option {option} requires a value")
        return self.next()


def _split_inline(token, option):
    """Returns the value of "option=value", or None if the token is not that spelling."""
    prefix = f"{option}="
    if token.startswith(prefix):
        return token[len(prefix):]
    return None


def _match_valued_option(token, option, cursor):
    """Returns the value for either spelling of a value-taking option, or None if unmatched."""
    if token == option:
        return cursor.take_value(option)
    return _split_inline(token, option)


def merge(config, boot, args):
    """
    Merges the caller's arguments into the machine configuration and kernel command line.

    Recognized options update config and boot in place, later occurrences
    winning over earlier ones. Everything else is collected, in order and with
    its original spelling, into the forward list for QEMU.

    Args:
        config: The MachineConfig to update.
        boot: The BootCommandLine to update.
        args: The raw arguments following the ELF image.

    Returns:
        A (config, boot, forward) tuple.

    Raises:
        UsageError: If a value-taking option is the last argument.
    """
    forward = []
    cursor = ArgumentCursor(args)

    while cursor:
        token = cursor.next()

        if _apply_machine_option(config, token, cursor):
            continue

        if token == app_config.NOGRAPHIC_OPTION:
            config.nographic = True
            logger.debug("Enabled -nographic.")
        elif token.startswith(app_config.DISPLAY_PREFIXES):
            config.nographic = False
            forward.append(token)
            logger.debug("Display option %s disables -nographic.", token)
        elif token == app_config.GDB_STUB_OPTION:
            config.gdb_stub = True
            logger.debug("Enabled GDB stub.")
        elif (literal := _match_valued_option(token, app_config.APPEND_OPTION, cursor)) is not None:
            boot.replace_all(literal)
            logger.debug("Replaced kernel command line with %r.", literal)
        elif not _apply_boot_key(boot, token):
            # -S lands here too: it pauses the CPU at startup and coexists with -s.
            forward.append(token)

    return config, boot, forward


def _apply_machine_option(config, token, cursor):
    for option, field in app_config.MACHINE_OPTIONS.items():
        value = _match_valued_option(token, option, cursor)
        if value is not None:
            setattr(config, field, value)
            logger.debug("Set %s to %r via %s.", field, value, option)
            return True
    return False


def _apply_boot_key(boot, token):
    # Only the inline spelling is recognized for kernel arguments.
    for key in app_config.BOOT_KEYS:
        value = _split_inline(token, key)
        if value is not None:
            boot.upsert(key, value)
            logger.debug("Set kernel argument %s to %r.", key, value)
            return True
    return False
