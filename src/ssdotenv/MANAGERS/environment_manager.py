"""
Managers for applying parsed .env entries to an environment.
"""
import logging
import os
from typing import Dict, Iterable, List, MutableMapping, Optional
from ..MODELS.entry import Entry
from ..MODELS.errors import SimpleEnvError
from ..MODELS.load_options import DEFAULT_ENCODING, LoadOptions
from ..PARSERS.env_parser import EnvParser

logger = logging.getLogger(__name__)

class EnvironmentManager:
    """
    Applies .env entries to an environment mapping and reads values back.

    The mapping defaults to ``os.environ``; tests and embedding applications
    can pass any mutable mapping instead. Writes to the real process
    environment are not synchronized here.
    """
    def __init__(self,
                 environ: Optional[MutableMapping[str, str]] = None,
                 base_dir: str = "."):
        """
        Initializes the environment manager.

        :param environ: The environment to read and update. Defaults to the process environment.
        :param base_dir: The base directory for resolving relative paths to .env files.
        """
        self.environ = os.environ if environ is None else environ
        self.base_dir = base_dir

    def set_if_absent(self, entries: Iterable[Entry]) -> List[Entry]:
        """
        Sets each variable only when it is not already defined.

        :param entries: Entries in file order.
        :return: The entries that were actually written.
        """
        applied = []
        for entry in entries:
            if entry.key in self.environ:
                logger.debug("Keeping existing value for %s", entry.key)
                continue
            self.environ[entry.key] = entry.value
            applied.append(entry)
        return applied

    def override(self, entries: Iterable[Entry]) -> List[Entry]:
        """
        Sets every variable unconditionally; later duplicates win.

        :param entries: Entries in file order.
        :return: The entries that were written.
        """
        applied = []
        for entry in entries:
            logger.debug("Setting %s", entry.key)
            self.environ[entry.key] = entry.value
            applied.append(entry)
        return applied

    def apply(self, entries: Iterable[Entry], override: bool = True) -> List[Entry]:
        if override:
            return self.override(entries)
        return self.set_if_absent(entries)

    def get_or(self, key: str, default: str) -> str:
        """
        Returns the variable's value, or ``default`` when it is not defined.
        """
        value = self.environ.get(key)
        if value is None:
            return default
        return value

    def load_file(self,
                  path: str,
                  override: bool = True,
                  strict: bool = False,
                  encoding: str = DEFAULT_ENCODING) -> List[Entry]:
        """
        Parses a .env file and applies its entries.

        In strict mode the entries that did parse are applied before the
        error for the skipped lines is raised.

        :param path: Path to the .env file, relative to ``base_dir``.
        :param override: Replace variables that are already defined.
        :param strict: Raise when any line had to be skipped.
        :param encoding: Encoding of the file.
        :return: The entries that were written.
        :raises SimpleEnvError: ``kind="io"`` if the file cannot be read,
            ``kind="lines"`` for skipped lines in strict mode.
        """
        file_path = os.path.join(self.base_dir, path)
        parser = EnvParser(encoding=encoding)
        try:
            result = parser.parse_file(file_path)
        except (OSError, UnicodeDecodeError) as e:
            raise SimpleEnvError.from_os_error(e) from e

        logger.info("Loaded %d entries from %s", len(result.entries), file_path)
        applied = self.apply(result.entries, override=override)
        if strict and result.skipped:
            raise SimpleEnvError.from_skipped_lines(result.skipped, result.entries)
        return applied

    def load(self, options: LoadOptions) -> List[Entry]:
        return self.load_file(
            options.path,
            override=options.override,
            strict=options.strict,
            encoding=options.encoding
        )

    def get_merged_environment(self,
                               explicit_env: Dict[str, str],
                               env_files: List[str],
                               override: bool = True) -> Dict[str, str]:
        """
        Merges the managed environment, .env files and explicit definitions
        into a new dictionary. The managed environment is not modified.

        :param explicit_env: A dictionary of explicitly defined environment variables.
        :param env_files: A list of paths to .env files.
        :param override: Whether file entries replace variables that are already defined.
        :return: A dictionary containing the merged environment variables.
        :raises SimpleEnvError: If one of the files cannot be read.
        """
        merged = EnvironmentManager(dict(self.environ), base_dir=self.base_dir)

        for env_file in env_files:
            merged.load_file(env_file, override=override)

        merged.override(Entry(key=k, value=v) for k, v in explicit_env.items())
        return dict(merged.environ)
