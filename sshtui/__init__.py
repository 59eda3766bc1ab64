"""Terminal host picker for ssh and a two-pane scp file manager."""

__version__ = "0.1.0"
__all__ = ["__version__"]