"""Synonym tables that widen tag matching for each funnel domain."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from cachetools import LRUCache, cached

from provider_matching.config import settings
from provider_matching.errors import SynonymConfigError

logger = logging.getLogger(__name__)

DEFAULT_SYNONYMS_PATH = Path(__file__).resolve().parent / "data" / "synonyms.yaml"

_TABLES_CACHE: LRUCache[Path, "SynonymTables"] = LRUCache(maxsize=8)


class SynonymDomain(str, Enum):
    HEALTH_WELLNESS = "health-wellness"
    HOME_SERVICES = "home-services"
    CUISINE = "cuisine"
    PRICE_RANGE = "price-range"
    DIETARY = "dietary"


class SynonymTables:
    """Read-only keyword expansions, one table per domain."""

    def __init__(self, tables: Mapping[str, Mapping[str, Tuple[str, ...]]], version: int = 1) -> None:
        self.version = version
        self._tables: Dict[str, Dict[str, Tuple[str, ...]]] = {
            domain: dict(entries) for domain, entries in tables.items()
        }

    def lookup(self, domain: SynonymDomain | str, keyword: str) -> List[str]:
        """Expand ``keyword``; unknown keywords come back as their own single term."""
        key = (keyword or "").strip().lower()
        domain_key = domain.value if isinstance(domain, SynonymDomain) else str(domain)
        terms = self._tables.get(domain_key, {}).get(key)
        if terms is None:
            return [key]
        return list(terms)

    def keywords(self, domain: SynonymDomain | str) -> List[str]:
        domain_key = domain.value if isinstance(domain, SynonymDomain) else str(domain)
        return sorted(self._tables.get(domain_key, {}))

    def domains(self) -> List[str]:
        return sorted(self._tables)


def _parse_domain(domain: str, raw: Any, path: Path) -> Dict[str, Tuple[str, ...]]:
    if not isinstance(raw, dict):
        raise SynonymConfigError(f"Synonym domain '{domain}' in {path} must be a mapping")
    parsed: Dict[str, Tuple[str, ...]] = {}
    for keyword, terms in raw.items():
        if not isinstance(terms, list) or not terms:
            raise SynonymConfigError(f"Synonyms for '{domain}.{keyword}' in {path} must be a non-empty list")
        parsed[str(keyword).strip().lower()] = tuple(str(term).strip().lower() for term in terms)
    return parsed


@cached(cache=_TABLES_CACHE)
def load_synonym_tables(path: Path = DEFAULT_SYNONYMS_PATH) -> SynonymTables:
    path = Path(path)
    if not path.exists():
        raise SynonymConfigError(f"Synonym table not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SynonymConfigError(f"Synonym table is not valid YAML: {path}") from exc
    if not isinstance(raw, dict):
        raise SynonymConfigError(f"Synonym table must be a mapping: {path}")

    version = raw.pop("version", 1)
    missing = [domain.value for domain in SynonymDomain if domain.value not in raw]
    if missing:
        raise SynonymConfigError(f"Synonym table {path} missing domains: {', '.join(missing)}")

    tables = {str(domain): _parse_domain(str(domain), entries, path) for domain, entries in raw.items()}
    logger.info(
        "synonym_tables_loaded",
        extra={"path": str(path), "version": version, "domains": sorted(tables)},
    )
    return SynonymTables(tables, version=version)


def get_synonym_tables(path: Optional[Path] = None) -> SynonymTables:
    """Tables from ``path``, the configured override, or the packaged default."""
    return load_synonym_tables(Path(path or settings.synonyms_path or DEFAULT_SYNONYMS_PATH))


def clear_synonym_cache() -> None:
    _TABLES_CACHE.clear()
