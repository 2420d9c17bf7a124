from cssgsub.cli.main import cli

__all__ = ["cli"]
