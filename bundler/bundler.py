"""
Bundler core.

Concatenates source files from a directory tree into a single text bundle.
The run is a fixed sequence of stages, each raising its own typed error:

    discover -> filter by language -> order -> assemble

Known limitation: if an I/O error happens while the bundle is being written,
the output file is left on disk holding whatever was written before the
failure. Nothing is written at all when the language filter matches no files.
"""

import logging
import os
import re
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from bundler.config.schema import ALL_LANGUAGES, DEFAULT_EXCLUDED_DIRS, BundleConfig, SortMode
from bundler.errors import DirectoryNotFoundError, NoMatchError, translate_os_error


logger = logging.getLogger(__name__)

LINE_SEPARATORS = re.compile(r"[\r\n]")


@dataclass
class BundleResult:
    """Result of a bundle run.

    Attributes:
        output_path: Absolute path of the written bundle
        files: Source files in the order they were written
    """
    output_path: str
    files: List[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.files)


def extension_of(path: str) -> str:
    """Extension of the file name including its leading dot.

    A name without a dot, or ending in one, has no extension.
    """
    name = os.path.basename(path)
    index = name.rfind(".")
    if index == -1 or index == len(name) - 1:
        return ""
    return name[index:]


def discover_files(
    root: str,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    skip: Iterable[str] = (),
) -> List[str]:
    """Recursively list every regular file under root, in traversal order.

    Files below a directory whose name matches one of excluded_dirs
    (case-insensitive) are left out. Only directories inside root are
    checked, so running from e.g. /opt/bin/project still works; names in
    the path above root never exclude anything.

    Raises:
        DirectoryNotFoundError: root does not exist
        AccessDeniedError: a directory could not be listed
        GenericIOError: any other listing failure
    """
    root = os.path.abspath(root)
    excluded = {name.lower() for name in excluded_dirs}
    skipped = {os.path.normcase(os.path.abspath(path)) for path in skip}

    if not os.path.isdir(root):
        raise DirectoryNotFoundError(f"Directory not found: {root}", path=root)

    def on_error(error: OSError) -> None:
        raise translate_os_error(error, error.filename or root, "scan")

    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [d for d in dirnames if d.lower() not in excluded]
        for filename in filenames:
            path = os.path.join(dirpath, filename)
            if not os.path.isfile(path):
                continue
            if os.path.normcase(path) in skipped:
                continue
            files.append(path)

    logger.debug(f"Discovered {len(files)} files under {root}")
    return files


def filter_by_language(files: Sequence[str], languages: Sequence[str]) -> List[str]:
    """Keep files whose extension matches one of the language tokens.

    The ALL_LANGUAGES token ('all') keeps every file.

    Raises:
        NoMatchError: nothing matched
    """
    tokens = {token.lower() for token in languages}
    if ALL_LANGUAGES in tokens:
        selected = list(files)
    else:
        selected = [f for f in files if extension_of(f)[1:].lower() in tokens]

    if not selected:
        raise NoMatchError(
            "No matching files found for the specified languages.",
            languages=list(languages),
        )

    logger.debug(f"{len(selected)} of {len(files)} files match {', '.join(languages)}")
    return selected


def sort_files(files: Sequence[str], sort_mode: SortMode) -> List[str]:
    """Order files; SortMode.NONE keeps discovery order."""
    if sort_mode == SortMode.BY_EXTENSION:
        return sorted(files, key=lambda f: (extension_of(f), f))
    if sort_mode == SortMode.ALPHABETICAL:
        return sorted(files)
    return list(files)


def strip_empty_lines(content: str) -> str:
    """Drop empty and whitespace-only lines; '\\r' and '\\n' both split lines."""
    lines = LINE_SEPARATORS.split(content)
    return "\n".join(line for line in lines if line.strip())


def read_source(path: str, encoding: str = "utf-8") -> str:
    """Read one source file in full and close it."""
    try:
        with open(path, "r", encoding=encoding, errors="replace", newline="") as f:
            return f.read()
    except OSError as e:
        raise translate_os_error(e, path, "read") from e


def assemble(files: Iterable[str], config: BundleConfig, encoding: str = "utf-8") -> str:
    """Write the bundle and return its absolute path.

    Raises:
        AccessDeniedError: a source or the output could not be opened
        GenericIOError: any other I/O failure, message preserved
    """
    output_path = config.resolved_output_path
    try:
        with open(output_path, "w", encoding=encoding, newline="") as writer:
            if config.author:
                writer.write(f"// Author: {config.author}\n")

            for path in files:
                if config.include_source_note:
                    writer.write(f"// Source: {os.path.abspath(path)}\n")

                content = read_source(path, encoding)
                if config.remove_empty_lines:
                    content = strip_empty_lines(content)
                writer.write(content)
                writer.write("\n")
    except OSError as e:
        raise translate_os_error(e, output_path, "write") from e

    return output_path


class Bundler:
    """Runs the bundling stages against a root directory.

    Example:
        >>> config = BundleConfig(output_path="bundle.txt", languages=["py"])
        >>> result = Bundler().run(config)
        >>> result.output_path
        '/current/dir/bundle.txt'
    """

    def __init__(
        self,
        root: Optional[str] = None,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        encoding: str = "utf-8",
    ):
        self.root = os.path.abspath(root if root is not None else os.getcwd())
        self.excluded_dirs = list(excluded_dirs)
        self.encoding = encoding

    def run(self, config: BundleConfig, progress=None) -> BundleResult:
        """Discover, filter, order and assemble.

        Args:
            config: Validated bundle configuration
            progress: Optional ProgressIndicator-like object; its total_steps
                is set to the file count and update(message=...) is called
                once per file written

        Returns:
            BundleResult with the output path and the ordered file list
        """
        start = time.time()
        output_path = config.resolved_output_path

        discovered = discover_files(self.root, self.excluded_dirs, skip=[output_path])
        selected = filter_by_language(discovered, config.languages)
        ordered = sort_files(selected, config.sort_mode)
        logger.info(f"Bundling {len(ordered)} files into {output_path}")
        if config.all_languages:
            logger.debug("Language filter off: every discovered file is bundled")

        if progress is not None:
            progress.total_steps = len(ordered)
            ordered_for_write = _reporting(ordered, progress)
        else:
            ordered_for_write = ordered
        assemble(ordered_for_write, config, self.encoding)

        logger.debug(f"Bundle completed in {time.time() - start:.3f}s")
        return BundleResult(output_path=output_path, files=ordered)


def _reporting(files: Sequence[str], progress) -> Iterable[str]:
    for path in files:
        progress.update(message=f"Bundling {os.path.basename(path)}")
        yield path
