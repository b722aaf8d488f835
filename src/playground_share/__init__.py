"""Share playground projects through URL fragments and GitHub gists."""

__version__ = "0.3.0"
