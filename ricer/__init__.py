"""Ricer - template-driven dotfile materializer.

Renders every ``*.tmpl`` file in ``~/.config/ricer/templates`` into the
output path named by its section in the ricer config file.
"""

try:
    from importlib.metadata import version

    __version__ = version("ricer")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
