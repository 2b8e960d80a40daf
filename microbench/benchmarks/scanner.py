"""Scanner for automatic discovery of callables marked with ``@benchmark``.

Usage:
    from microbench.benchmarks.scanner import BenchmarkScanner

    # Discover from the current working directory
    scanner = BenchmarkScanner()

    # Get all discovered candidates
    candidates = scanner.get_all_candidates()

    # Get a specific candidate by qualified name
    candidate = scanner.get_candidate("demo_benchmarks.sum_first_10_positive_integers")
"""

import ast
import importlib
import importlib.util
import inspect
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType
from typing import Any, ClassVar

from microbench.benchmarks.candidate import BenchmarkCandidate
from microbench.benchmarks.errors import CandidateNotFoundError
from microbench.utils.logger import Logger


def _dotted_name(node: ast.AST) -> str | None:
    """Resolve the dotted name of a decorator target, e.g. mb.benchmark."""
    if isinstance(node, ast.Attribute):
        base = _dotted_name(node.value)
        if base is None:
            return node.attr
        return base + "." + node.attr
    if isinstance(node, ast.Name):
        return node.id
    return None


def _declarations(
    statements: list[ast.AST],
) -> Iterator[ast.FunctionDef | ast.AsyncFunctionDef]:
    """Yield functions defined at module level or in class bodies.

    Compound statements (``if``, ``try``, ``with``...) are entered, function
    bodies are not: a function defined inside another one is never collected.
    """
    for node in statements:
        if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
            yield node
        elif isinstance(node, ast.ClassDef):
            yield from _declarations(node.body)
        else:
            children = [
                child
                for child in ast.iter_child_nodes(node)
                if isinstance(child, ast.stmt | ast.excepthandler)
            ]
            yield from _declarations(children)


def declares_benchmarks(source: str, filename: str = "<unknown>") -> bool:
    """Check whether source applies the benchmark decorator to a declaration.

    Only the syntax is inspected; the code is not executed. Aliased imports
    (``from microbench import benchmark as bench``) are recognised. Functions
    defined inside other functions are ignored.

    Raises:
        SyntaxError: If source cannot be parsed.
    """
    tree = ast.parse(source, filename=filename)
    names = {"benchmark"}
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and (node.module or "").startswith(
            "microbench"
        ):
            for alias in node.names:
                if alias.name == "benchmark" and alias.asname:
                    names.add(alias.asname)

    for node in _declarations(tree.body):
        for decorator in node.decorator_list:
            target = decorator.func if isinstance(decorator, ast.Call) else decorator
            dotted = _dotted_name(target)
            if dotted and dotted.rsplit(".", 1)[-1] in names:
                return True
    return False


class BenchmarkScanner:
    """Discovers benchmark candidates in the program's own source tree.

    Walks ``*.py`` files below the search paths, derives each module's dotted
    name from its path relative to ``root``, imports only the modules that
    syntactically use ``@benchmark``, and collects every marked callable
    declared directly in them (including classes and nested classes).

    Shape is not checked here: a marked instance method is still a candidate,
    so the measurement step can report it by name.

    Files that cannot be parsed or imported are skipped and logged at DEBUG.

    Example:
        >>> scanner = BenchmarkScanner(root="src")
        >>> for candidate in scanner.get_all_candidates():
        ...     print(candidate)
    """

    # Leading path segments of common source layouts, stripped from module names
    SOURCE_PREFIXES: ClassVar[tuple[str, ...]] = ("src", "lib")

    # Entry-point modules are never imported
    SKIPPED_FILES: ClassVar[frozenset[str]] = frozenset({"__main__.py"})

    SKIPPED_DIRECTORIES: ClassVar[frozenset[str]] = frozenset(
        {
            "__pycache__",
            "build",
            "dist",
            "env",
            "node_modules",
            "site-packages",
            "venv",
        }
    )

    def __init__(
        self,
        root: str | Path | None = None,
        search_paths: list[str | Path] | None = None,
        include_defaults: bool = True,
        lazy: bool = True,
    ) -> None:
        """Initialize the scanner.

        Args:
            root: Directory module names are derived from. Defaults to the
                current working directory.
            search_paths: Additional directories or files to scan.
            include_defaults: If True, scan the whole root.
            lazy: If True, defer discovery until first access.
        """
        self._root = Path(root if root is not None else Path.cwd()).resolve()
        self._paths: list[Path] = []
        self._candidates: dict[str, BenchmarkCandidate] = {}
        self._discovered: bool = False
        self._log = Logger.for_component("benchmarks.scanner")

        if include_defaults:
            self._paths.append(self._root)

        if search_paths:
            self._paths.extend(Path(p).resolve() for p in search_paths)

        if not lazy:
            self._ensure_discovered()

    @property
    def root(self) -> Path:
        """Directory module names are derived from."""
        return self._root

    def _ensure_discovered(self) -> None:
        """Ensure candidates have been discovered."""
        if not self._discovered:
            self._discover_candidates()
            self._discovered = True

    def _discover_candidates(self) -> None:
        """Discover all marked callables in registered paths."""
        for path in self._paths:
            if not path.exists():
                self._log.debug(f"Search path does not exist: {path}")
                continue

            if path.is_file() and path.suffix == ".py":
                self._load_candidates_from_file(path)
            elif path.is_dir():
                for py_file in self._iter_source_files(path):
                    self._load_candidates_from_file(py_file)

    def _iter_source_files(self, directory: Path) -> list[Path]:
        """List Python files below directory, skipping non-project folders."""
        files: list[Path] = []
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                if (
                    entry.name.startswith(".")
                    or entry.name in self.SKIPPED_DIRECTORIES
                    or entry.name.endswith(".egg-info")
                ):
                    continue
                files.extend(self._iter_source_files(entry))
            elif entry.suffix == ".py" and entry.name not in self.SKIPPED_FILES:
                files.append(entry)
        return files

    def module_name_for(self, filepath: Path) -> str:
        """Derive the dotted module name of a file from its path.

        ``src/pkg/sub/mod.py`` becomes ``pkg.sub.mod`` and
        ``pkg/__init__.py`` becomes ``pkg``. Files outside the root are named
        after their stem.
        """
        try:
            parts = list(filepath.resolve().relative_to(self._root).with_suffix("").parts)
        except ValueError:
            return filepath.stem

        if len(parts) > 1 and parts[0] in self.SOURCE_PREFIXES:
            parts = parts[1:]
        if len(parts) > 1 and parts[-1] == "__init__":
            parts = parts[:-1]
        return ".".join(parts)

    def _load_candidates_from_file(self, filepath: Path) -> None:
        """Load all marked callables declared in a Python file."""
        try:
            source = filepath.read_text(encoding="utf-8")
            if not declares_benchmarks(source, str(filepath)):
                return
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
            self._log.debug(f"Skipping unreadable file {filepath}: {e}")
            return

        module_name = self.module_name_for(filepath)
        module = self._import_module(module_name, filepath)
        if module is None:
            return

        for candidate in self._collect_from_namespace(module, module.__name__):
            self._register_candidate(candidate)

    def _import_module(self, module_name: str, filepath: Path) -> ModuleType | None:
        """Import a module by name, falling back to loading it from its file."""
        if module_name in sys.modules:
            return sys.modules[module_name]

        try:
            spec = importlib.util.find_spec(module_name)
        except (ImportError, ValueError):
            spec = None

        try:
            if (
                spec is not None
                and spec.origin
                and Path(spec.origin).resolve() == filepath.resolve()
            ):
                return importlib.import_module(module_name)

            spec = importlib.util.spec_from_file_location(module_name, filepath)
            if spec is None or spec.loader is None:
                self._log.debug(f"No loader for {filepath}")
                return None
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except BaseException:
                sys.modules.pop(module_name, None)
                raise
            return module
        except (Exception, SystemExit) as e:
            self._log.debug(f"Cannot import {module_name} from {filepath}: {e!r}")
            return None

    def _collect_from_namespace(
        self, owner: Any, module_name: str, in_class: bool = False
    ) -> list[BenchmarkCandidate]:
        """Collect marked callables declared directly in a module or class."""
        found: list[BenchmarkCandidate] = []
        for raw in list(vars(owner).values()):
            if inspect.isclass(raw):
                if raw.__module__ == module_name and raw.__qualname__.startswith(
                    owner.__qualname__ + "." if in_class else ""
                ):
                    found.extend(self._collect_from_namespace(raw, module_name, True))
                continue

            candidate = BenchmarkCandidate.from_declaration(raw, module_name, in_class)
            if candidate is None:
                continue
            # Skip functions imported from elsewhere into this namespace
            if getattr(candidate.function, "__module__", None) != module_name:
                continue
            found.append(candidate)
        return found

    def _register_candidate(self, candidate: BenchmarkCandidate) -> None:
        """Register a candidate, ignoring repeats of the same declaration."""
        key = candidate.identity
        if key not in self._candidates:
            self._candidates[key] = candidate
            self._log.debug(f"Discovered {key}")

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def get_all_candidates(self) -> list[BenchmarkCandidate]:
        """Get all discovered candidates, in discovery order."""
        self._ensure_discovered()
        return list(self._candidates.values())

    def get_candidate(self, name: str) -> BenchmarkCandidate:
        """Get a candidate by identity or by ``module.qualname``.

        Raises:
            CandidateNotFoundError: If no candidate matches.
        """
        self._ensure_discovered()
        if name in self._candidates:
            return self._candidates[name]
        for candidate in self._candidates.values():
            if f"{candidate.module}.{candidate.qualname}" == name:
                return candidate
        raise CandidateNotFoundError(name)

    def __len__(self) -> int:
        """Return number of discovered candidates."""
        self._ensure_discovered()
        return len(self._candidates)

    def __contains__(self, name: str) -> bool:
        """Check if a candidate is discovered."""
        try:
            self.get_candidate(name)
        except CandidateNotFoundError:
            return False
        return True
