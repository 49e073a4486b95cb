"""Durable fallback storage of the last fetched collection documents"""
import json
import logging
import os
import tempfile
import threading

__all__ = ["BackupCache", "DEFAULT_BACKUP_FILE"]

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_FILE = os.path.join(".", "tmp", ".teamsnap")


class BackupCache(object):
    """A JSON file mapping hrefs to the last successfully fetched
    collection document for each.

    Writing is disabled (with a warning) if the file's directory
    does not exist.

    Parameters
    ----------
    path: str
        location of the cache file
    """

    __slots__ = "path", "_enabled", "_lock"

    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()
        directory = os.path.dirname(os.path.abspath(path))
        self._enabled = os.path.isdir(directory)
        if not self._enabled:
            logger.warning(
                "Directory '%s' does not exist. Backup cache "
                "functionality will not work until this is resolved.",
                directory,
            )

    @classmethod
    def from_option(cls, backup_cache):
        """Create a cache from the ``backup_cache`` client option:
        ``True`` for the default location, a path, or ``False``/``None``
        to disable caching (returns ``None``).
        """
        if not backup_cache:
            return None
        return cls(DEFAULT_BACKUP_FILE if backup_cache is True
                   else os.fspath(backup_cache))

    def _read_all(self):
        try:
            with open(self.path, "r", encoding="utf-8") as rfile:
                return json.load(rfile)
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.warning("Ignoring unreadable backup cache '%s'", self.path)
            return {}

    def read(self, href):
        """The cached document for an href, or ``None``"""
        return self._read_all().get(href)

    def __contains__(self, href):
        return href in self._read_all()

    def write(self, href, document):
        """Store a document for an href.
        The file is replaced atomically.
        A file which cannot be written is skipped with a warning.
        """
        if not self._enabled:
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        with self._lock:
            documents = self._read_all()
            documents[href] = document
            try:
                self._replace(directory, documents)
            except OSError as exc:
                logger.warning("Could not write backup cache '%s': %s",
                               self.path, exc)

    def _replace(self, directory, documents):
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as wfile:
                json.dump(documents, wfile)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def __repr__(self):
        return "BackupCache({!r})".format(self.path)
