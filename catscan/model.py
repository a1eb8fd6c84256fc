"""Data read from catalog description and translation files."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CatString:
    """One string of a catalog: its identifier, ID number and texts."""

    identifier: str
    id: int = 0
    min_len: int = 0
    max_len: int = -1
    cd_str: str = ""
    ct_str: str | None = None
    not_in_ct: bool = True
    po_format: bool = False
    nr: int = 0
    len_bytes: int = 0


@dataclass
class CatalogChunk:
    """An extra chunk written into the catalog, such as the language."""

    chunk_id: str
    text: str


@dataclass
class ScanOptions:
    """Settings that change how description and translation files are scanned."""

    lang_to_lower: bool = True
    copy_news: bool = False
    old_msg_new: str = "; ***NEW***"
    warn_ct_gaps: bool = False


@dataclass
class Catalog:
    """Everything collected from the description and translation files."""

    strings: list[CatString] = field(default_factory=list)
    cd_lines: list[str] = field(default_factory=list)
    chunks: list[CatalogChunk] = field(default_factory=list)
    language: str | None = None
    version: int = 0
    basename: str | None = None
    header_name: str | None = None
    cat_version_string: str | None = None
    cat_language: str | None = None
    cat_rcs_id: str | None = None
    cat_name: str | None = None
    code_set: int = 0
    ct_scanned: bool = False

    @property
    def num_strings(self) -> int:
        """Number of strings read from the description."""
        return len(self.strings)

    def add_chunk(self, chunk_id: str, text: str) -> str:
        """Append a chunk identified by the first four characters of ``chunk_id``."""
        chunk = CatalogChunk(chunk_id[:4], text)
        self.chunks.append(chunk)
        return chunk.text

    def find_string(self, identifier: str) -> CatString | None:
        """Return the string with this identifier, or None."""
        return next((cs for cs in self.strings if cs.identifier == identifier), None)