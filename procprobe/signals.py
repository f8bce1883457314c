"""
Signal name/number resolution.

The table is built from the host's signal module, so it only contains the
signals this platform actually has.
"""

import signal

from .exceptions import InvalidArgumentError, UnknownSignalError

NULL_SIGNAL = 0
DEFAULT_SIGNAL = "SIGTERM"


def _build_table() -> dict[str, int]:
    """Collect SIG* names exposed by the signal module, ordered by number."""
    table = {}
    for name in dir(signal):
        if not name.startswith("SIG") or name.startswith("SIG_"):
            continue
        value = getattr(signal, name)
        if not isinstance(value, signal.Signals):
            continue
        table[name] = int(value)
    return dict(sorted(table.items(), key=lambda item: (item[1], item[0])))


SIGNALS: dict[str, int] = _build_table()


def resolve_signal(sig: int | str) -> int:
    """
    Resolve a signal given by name or number.

    Args:
        sig: Signal number (0 is the null signal) or exact name such as "SIGKILL"

    Returns:
        Signal number

    Raises:
        UnknownSignalError: If the name is not known or the number is negative
        InvalidArgumentError: If sig is neither int nor str
    """
    if isinstance(sig, bool):
        raise InvalidArgumentError(
            "signal must be an int or str", argument="signal", type="bool"
        )
    if isinstance(sig, int):
        if sig < 0:
            raise UnknownSignalError("unknown signal", signal=sig)
        return sig
    if isinstance(sig, str):
        try:
            return SIGNALS[sig]
        except KeyError:
            raise UnknownSignalError("unknown signal", signal=sig) from None
    raise InvalidArgumentError(
        "signal must be an int or str", argument="signal", type=type(sig).__name__
    )


def signal_name(signum: int) -> str | None:
    """Return the canonical name for a signal number, or None for 0/unknown."""
    if signum == NULL_SIGNAL:
        return None
    try:
        return signal.Signals(signum).name
    except ValueError:
        return None
