from dataclasses import dataclass
from datetime import datetime
import hashlib
import os


@dataclass(frozen=True)
class Version:
    """
    Semantic version information for microbench.

    Includes major, minor, and patch version numbers following semver,
    plus a hash of the package sources and the release date.
    """
    major: int
    minor: int
    patch: int
    hash: str
    date: datetime

    def __str__(self) -> str:
        """Return the semantic version string (e.g., '0.1.0')."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def full_version(self) -> str:
        """Return full version info including hash and date."""
        return (
            f"{self} (hash: {self.hash_short()}, "
            f"date: {self.date.strftime('%Y-%m-%d')})"
        )

    def hash_short(self, length: int = 8) -> str:
        """Return shortened hash (default 8 characters)."""
        return self.hash[:length]


def _compute_package_hash() -> str:
    """
    Compute a SHA256 hash over the Python sources of the microbench package.

    Files are visited in sorted order so the hash is stable across runs.
    """
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    hasher = hashlib.sha256()

    for root, dirs, files in os.walk(package_dir):
        dirs[:] = sorted(d for d in dirs if d != '__pycache__')

        for file in sorted(files):
            if not file.endswith('.py'):
                continue
            filepath = os.path.join(root, file)
            hasher.update(os.path.relpath(filepath, package_dir).encode())
            try:
                with open(filepath, 'rb') as f:
                    hasher.update(f.read())
            except OSError:
                pass

    return hasher.hexdigest()


# Current version instance
MICROBENCH_VERSION = Version(
    major=0,
    minor=1,
    patch=0,
    hash=_compute_package_hash(),
    date=datetime(2026, 10, 19),
)
