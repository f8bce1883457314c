"""
Configuration defaults and limits.
"""

# Upper bound on config file size
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

ENV_PREFIX = "PROCPROBE_"

DEFAULTS: dict = {
    "logging": {
        "level": "info",
        "colors": None,  # None: auto-detect from the terminal
        "micros": False,
    },
    "check": {
        "payload": "test",
        "kill_signal": "SIGKILL",
        "timeout": 5.0,
        "argv": None,  # None: passthrough child
    },
    "kill": {
        "default_signal": "SIGTERM",
    },
}
