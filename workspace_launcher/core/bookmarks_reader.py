"""
Chromium bookmarks reader module.

This module reads the JSON `Bookmarks` file kept by Chromium-family
browsers, resolves a folder path such as "Bookmarks bar/Work/Docs" against
the file's named roots and flattens the folder into Bookmark entries.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from workspace_launcher.utils.console_output import ConsoleReporter
from workspace_launcher.utils.error_handler import (
    BookmarksError,
    BookmarksFileMissingError,
    BookmarksParseError,
    FolderNotFoundError,
    NotAFolderError,
    RootNotFoundError,
)

from .data_models import Bookmark


class ChromeBookmarksReader:
    """
    Reader for Chromium JSON bookmark files.

    The document is never modified; each node is either a folder with a
    `children` list or a url with `name` and `url`.
    """

    # First path segment -> key under "roots"
    ROOT_ALIASES = {
        "Bookmarks bar": "bookmark_bar",
        "bookmark_bar": "bookmark_bar",
        "Other bookmarks": "other",
        "other": "other",
        "Mobile bookmarks": "synced",
        "synced": "synced",
    }

    COMMON_PATHS = [
        ("Chrome", "~/.config/google-chrome/Default/Bookmarks"),
        ("Chromium", "~/.config/chromium/Default/Bookmarks"),
        ("Brave", "~/.config/BraveSoftware/Brave-Browser/Default/Bookmarks"),
    ]

    def __init__(self, reporter: Optional[ConsoleReporter] = None):
        """
        Initialize the reader.

        Args:
            reporter: Where get_bookmarks_from_folder reports failures
        """
        self.reporter = reporter or ConsoleReporter()
        self.logger = logging.getLogger(__name__)

    def load_file(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read and decode a bookmarks file.

        Args:
            file_path: Path to the Bookmarks JSON file

        Returns:
            The decoded bookmarks document

        Raises:
            BookmarksFileMissingError: If the file does not exist
            BookmarksParseError: If the file is not a bookmarks JSON document
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise BookmarksFileMissingError(f"Bookmarks file not found: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BookmarksParseError(f"Failed to parse bookmarks file: {e}") from e
        except OSError as e:
            raise BookmarksParseError(f"Failed to read bookmarks file: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("roots"), dict):
            raise BookmarksParseError(
                f"Failed to parse bookmarks file: no 'roots' object in {file_path}"
            )

        self.logger.debug(f"Loaded bookmarks document from {file_path}")
        return document

    def resolve_folder(self, document: Dict[str, Any], folder_path: str) -> Dict[str, Any]:
        """
        Find a folder node by its slash-separated path.

        The first segment names a root ("Bookmarks bar", "Other bookmarks",
        "Mobile bookmarks" or their keys); every later segment must name a
        child folder of the previous node.

        Args:
            document: Decoded bookmarks document
            folder_path: Path such as "Bookmarks bar/Work/Docs"

        Returns:
            The folder node

        Raises:
            RootNotFoundError: If the first segment is not a known root
            FolderNotFoundError: If a segment has no matching child folder
            NotAFolderError: If a segment names a bookmark rather than a folder
        """
        parts = [part.strip() for part in folder_path.split("/")]
        roots = document.get("roots", {})

        root_key = self.ROOT_ALIASES.get(parts[0])
        current = roots.get(root_key) if root_key else None
        if not isinstance(current, dict):
            raise RootNotFoundError(f"Root folder not found: {parts[0]}")

        traversed = [parts[0]]
        # Empty segments come from doubled or trailing slashes
        for segment in (p for p in parts[1:] if p):
            children = current.get("children")
            if not isinstance(children, list):
                raise NotAFolderError(f'"{traversed[-1]}" is not a folder')

            matches = [
                c for c in children if isinstance(c, dict) and c.get("name") == segment
            ]
            folder = next((c for c in matches if c.get("type") == "folder"), None)
            if folder is None:
                if matches:
                    raise NotAFolderError(f'"{segment}" is not a folder')
                raise FolderNotFoundError(segment, "/".join(traversed))

            current = folder
            traversed.append(segment)

        return current

    def extract_urls(self, folder: Dict[str, Any], recursive: bool = True) -> List[Bookmark]:
        """
        Flatten a folder into its bookmarks, depth-first in document order.

        Args:
            folder: Folder node
            recursive: Descend into subfolders

        Returns:
            List of Bookmark entries
        """
        bookmarks = []

        for item in folder.get("children") or []:
            if not isinstance(item, dict):
                continue
            item_type = item.get("type")
            if item_type == "url":
                bookmarks.append(Bookmark(name=item.get("name", ""), url=item.get("url", "")))
            elif item_type == "folder" and recursive:
                bookmarks.extend(self.extract_urls(item, recursive))

        return bookmarks

    def get_bookmarks_from_folder(
        self, file_path: Union[str, Path], folder_path: str
    ) -> List[Bookmark]:
        """
        Load a bookmarks file and return every bookmark under folder_path.

        Failures are reported through the reporter with a hint and result in
        an empty list.
        """
        try:
            document = self.load_file(file_path)
            folder = self.resolve_folder(document, folder_path)
        except BookmarksError as e:
            self.logger.warning(f"Could not resolve '{folder_path}' in {file_path}: {e}")
            self._report_error(e)
            return []

        bookmarks = self.extract_urls(folder)
        self.logger.info(f"Found {len(bookmarks)} bookmark(s) in '{folder_path}'")
        return bookmarks

    def _report_error(self, error: BookmarksError) -> None:
        self.reporter.error(str(error))
        if error.hint:
            self.reporter.info(f"Tip: {error.hint}")
        if isinstance(error, BookmarksFileMissingError):
            self.reporter.info("Common paths:")
            for browser, path in self.COMMON_PATHS:
                self.reporter.info(f"  {browser + ':':<9} {path}")
