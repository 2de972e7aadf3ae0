"""Constants for the XTF8 codec."""

DOMAIN = "xtf8"

# CSUR registered Private Use Area block reserved for encoding hacks
# (registered by MirBSD for the OPTU encoding). A raw byte 0x80..0xFF is
# carried as U+EF80 | (byte & 0x7F).
PUA_START = 0xEF80
PUA_END = 0xEFFF

REPLACEMENT_CHAR = 0xFFFD
REPLACEMENT_UTF8 = b"\xef\xbf\xbd"

# Distinguished result of the sizing/fill functions when a call aborted.
# Python integers are unbounded, so it never collides with a real length.
ABORTED = -1

# Configuration keys
CONF_MODE = "mode"
CONF_POLICY = "policy"
CONF_JSON = "json"
CONF_HEXDUMP = "hexdump"
CONF_DEBUG = "debug"
CONF_INPUT = "input"
CONF_OUTPUT = "output"

MODE_ENCODE = "encode"
MODE_DECODE = "decode"
MODES = (MODE_ENCODE, MODE_DECODE)

POLICY_REPLACE = "replace"
POLICY_ABORT = "abort"

# Environment variable consulted for the default CLI policy
ENV_POLICY = "XTF8_POLICY"

# Default values
DEFAULT_MODE = MODE_ENCODE
DEFAULT_POLICY = POLICY_REPLACE
DEFAULT_JSON = False
DEFAULT_HEXDUMP = False
DEFAULT_DEBUG = False

# hexdump -C layout
HEXDUMP_WIDTH = 16
