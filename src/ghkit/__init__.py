"""ghkit - create, publish, clone and fork GitHub repositories from the command line."""

__version__ = "0.3.0"
