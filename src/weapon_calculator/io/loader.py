# weapon_calculator/io/loader.py
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Union, TYPE_CHECKING

from .sources import DictSource, FileSource, UrlSource
from . import parsers
from ..codec import decode_weapons, encode_weapons
from ..defaults import REGULATION_BASE_URL, REGULATION_DATA_DIR
from ..models import Weapon
from ..regulation import Regulation, decode_regulation_data
from ..versions import RegulationVersion, get_regulation_version

if TYPE_CHECKING:
    from logging import Logger

SourceLike = Union[str, Path, FileSource, DictSource, UrlSource]


class Loader:
    """
    Unified loader for regulation datasets and encoded weapon lists.

    - Accepts file paths (CLI), in-memory JSON (tests, API bodies) or URLs.
    - Dataset integrity errors propagate; the caller treats them as a failed load.
    """

    def __init__(self, logger: "Logger | None" = None):
        self.logger = logger

    # ---------- Public API ----------
    def load_json(self, source: SourceLike) -> Any:
        src = self._coerce_source(source)
        try:
            data = src.load_json()
        except FileNotFoundError:
            self._error(f"❌ File not found: {src.describe()}")
            raise
        self._debug(f"📘 Loaded file: {src.describe()}")
        return data

    def load_regulation(
        self,
        source: SourceLike,
        version: RegulationVersion | None = None,
    ) -> Regulation:
        """Load and decode a regulation dataset."""
        data = parsers.parse_regulation_payload(self.load_json(source))
        regulation = decode_regulation_data(
            data,
            max_upgrade_level=version.max_upgrade_level if version else None,
            logger=self.logger,
        )
        label = version.name if version else self._coerce_source(source).describe()
        self._info(f"✅ Loaded {len(regulation.weapons)} weapons for {label}.")
        return regulation

    def load_weapon_list(self, source: SourceLike) -> List[Weapon]:
        """Load weapons from the compact codec wire format."""
        weapons = decode_weapons(self.load_json(source))
        self._info(f"✅ Loaded {len(weapons)} encoded weapons.")
        return weapons

    def dump_weapon_list(self, weapons: List[Weapon]) -> list[Any]:
        payload = encode_weapons(weapons)
        self._debug(f"📦 Encoded {len(weapons)} weapons ({len(payload[0])} strings).")
        return payload

    # ---------- Helpers ----------
    def _coerce_source(self, source: SourceLike) -> Union[FileSource, DictSource, UrlSource]:
        if isinstance(source, (FileSource, DictSource, UrlSource)):
            return source
        if isinstance(source, str) and source.startswith(("http://", "https://")):
            return UrlSource(source)
        if isinstance(source, (str, Path)):
            return FileSource(source)
        # raw dict/list fallback
        return DictSource(source)

    # ---------- Logging wrappers ----------
    def _debug(self, msg: str) -> None:
        if self.logger:
            self.logger.debug(msg)

    def _info(self, msg: str) -> None:
        if self.logger:
            self.logger.info(msg)

    def _error(self, msg: str) -> None:
        if self.logger:
            self.logger.error(msg)


def regulation_source(
    version: RegulationVersion,
    *,
    data_dir: str | Path | None = None,
    base_url: str | None = None,
) -> Union[FileSource, UrlSource]:
    """Where a version's dataset lives: the base URL if configured, else the data dir."""
    base_url = REGULATION_BASE_URL if base_url is None else base_url
    if base_url:
        return UrlSource(f"{base_url.rstrip('/')}/{version.data_file}")
    return FileSource(Path(data_dir or REGULATION_DATA_DIR) / version.data_file)


def load_regulation_data(
    version_key: str,
    *,
    data_dir: str | Path | None = None,
    base_url: str | None = None,
    logger: "Logger | None" = None,
) -> Regulation:
    """Fetch and decode the dataset of a registered regulation version.

    Raises:
        UnknownRegulationVersionError: the key is not registered.
        RegulationDataError: the dataset references missing tables.
        FileNotFoundError / requests.RequestException: the dataset can't be fetched.
    """
    version = get_regulation_version(version_key)
    source = regulation_source(version, data_dir=data_dir, base_url=base_url)
    return Loader(logger).load_regulation(source, version)
