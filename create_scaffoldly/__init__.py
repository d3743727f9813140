"""create-scaffoldly -- scaffold a new project from a remote Scaffoldly template."""

__version__ = "0.1.0"
