"""Python ports of classic UNIX text and filesystem tools."""

__version__ = "1.0.0"

TOOLS = (
    'cal', 'cat', 'comm', 'cut', 'echo', 'find',
    'fortune', 'grep', 'head', 'ls', 'uniq',
)
