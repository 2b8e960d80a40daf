"""Version information for microbench."""

from microbench.version.microbench_version import MICROBENCH_VERSION, Version

__all__ = ["MICROBENCH_VERSION", "Version"]
