"""Constants for docsyncer."""

# Default config file looked up in the working directory
CONFIG_FILENAME = "docsyncer.toml"

# Retry interval used when a step retries without an explicit interval
DEFAULT_RETRY_INTERVAL = "2s"

# Auto-generated step names are cut to this many characters
MAX_STEP_NAME_LENGTH = 50

# Timeout literals that mean "no deadline"
ZERO_TIMEOUTS = frozenset({"", "0", "0s"})

# Command verbs whose auto-generated step name keeps the first argument
KNOWN_COMMAND_VERBS = frozenset({"kubectl", "helm", "docker", "curl"})

# Built-in and user templates are looked up as <name><suffix>
TEMPLATE_SUFFIX = ".py.j2"

# pytest's own marks; a label with one of these names gets MARKER_PREFIX
BUILTIN_MARKERS = frozenset(
    {"skip", "skipif", "xfail", "parametrize", "usefixtures", "filterwarnings"}
)
MARKER_PREFIX = "doc_"
