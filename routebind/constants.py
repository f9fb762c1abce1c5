"""Constants for the routebind package.

Centralizes the metadata namespace, environment variable names and the
composite key separator shared by the writer and the binder.
"""

# Metadata namespace under which method binding maps are stored
ROUTE_ARGS_METADATA = "__routeArguments__"

# Separator between the source kind name and the parameter index
KEY_SEPARATOR = ":"


class EnvVars:
    """Environment variable names read by BindingConfig.from_env()."""

    METADATA_KEY = "ROUTEBIND_METADATA_KEY"
    LOG_LEVEL = "ROUTEBIND_LOG_LEVEL"


class LogIcons:
    """Emoji icons for consistent logging."""

    REGISTERED = "📝"
    CONFIG = "🔧"
    DISCOVERY = "🔍"
